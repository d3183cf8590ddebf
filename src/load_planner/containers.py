# src/load_planner/containers.py
from __future__ import annotations

from load_planner.config import CM_PER_UNIT
from load_planner.models import ContainerSpec, PalletSpec

# Internal usable dims (cm) and max payload (kg)
CONTAINER_PRESETS_CM: dict[str, dict[str, float]] = {
    "20":   {"length": 589.8,  "width": 235.2, "height": 239.3, "max_weight": 24000.0},
    "40":   {"length": 1203.2, "width": 235.2, "height": 239.3, "max_weight": 29000.0},
    "40HC": {"length": 1203.2, "width": 235.2, "height": 269.8, "max_weight": 29000.0},
}

PALLET_PRESETS_CM: dict[str, dict[str, float]] = {
    "EUR":  {"length": 120.0, "width": 80.0,  "height": 14.4, "max_weight": 1500.0},  # EUR/EPAL
    "NA":   {"length": 121.9, "width": 101.6, "height": 15.2, "max_weight": 1500.0},  # North American
    "ASIA": {"length": 110.0, "width": 110.0, "height": 14.4, "max_weight": 1500.0},
}

_ALIASES = {
    "20FT": "20",
    "20GP": "20",
    "40FT": "40",
    "40GP": "40",
    "EPAL": "EUR",
    "EURO": "EUR",
    "US": "NA",
}


def _lookup(presets: dict[str, dict[str, float]], preset: str, kind: str) -> dict[str, float]:
    key = preset.strip().upper()
    key = _ALIASES.get(key, key)
    if key not in presets:
        raise ValueError(f"Unknown {kind} preset '{preset}'. Valid: {sorted(presets.keys())}")
    return presets[key]


def _scaled(dims: dict[str, float], unit: str) -> dict[str, float]:
    if unit not in CM_PER_UNIT:
        raise ValueError(f"Unknown length unit '{unit}'. Valid: {sorted(CM_PER_UNIT.keys())}")
    factor = 1.0 / CM_PER_UNIT[unit]
    return {
        "length": dims["length"] * factor,
        "width": dims["width"] * factor,
        "height": dims["height"] * factor,
        "max_weight": dims["max_weight"],
    }


def get_container_spec(preset: str, unit: str = "cm") -> ContainerSpec:
    return ContainerSpec(**_scaled(_lookup(CONTAINER_PRESETS_CM, preset, "container"), unit))


def get_pallet_spec(preset: str, unit: str = "cm") -> PalletSpec:
    return PalletSpec(**_scaled(_lookup(PALLET_PRESETS_CM, preset, "pallet"), unit))
