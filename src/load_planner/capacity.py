"""
Capacity advice: clamp geometric pallets-per-container to safe figures.

Unconstrained geometric stacking of loaded pallets is unrealistic (crush
limits, forklift access at the door, carrier rules). The advisor caps the
number of pallet tiers by container size class and then caps the total with
a lookup table keyed by (container size class, pallet footprint class).

Fallback rule: a pallet footprint that matches neither the Euro (120x80 cm)
nor the US (120x100 cm) class, in either facing and within tolerance, uses
the GENERIC column of the table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from load_planner.geometry import fit_count
from load_planner.models import ContainerSpec
from load_planner.packing.layers import LayerFit

logger = logging.getLogger(__name__)


class ContainerSizeClass(str, Enum):
    TWENTY_FOOT = "20ft"
    FORTY_FOOT = "40ft"


class PalletFootprintClass(str, Enum):
    EURO = "euro"
    US = "us"
    GENERIC = "generic"


# 20ft boxes are ~590 cm long inside, 40ft boxes ~1203 cm
FORTY_FOOT_MIN_LENGTH_CM = 900.0

FOOTPRINT_TOLERANCE_CM = 5.0
FOOTPRINT_CLASSES_CM: dict[PalletFootprintClass, tuple[float, float]] = {
    PalletFootprintClass.EURO: (120.0, 80.0),
    PalletFootprintClass.US: (120.0, 100.0),
}

MAX_PALLET_TIERS: dict[ContainerSizeClass, int] = {
    ContainerSizeClass.TWENTY_FOOT: 1,
    ContainerSizeClass.FORTY_FOOT: 2,
}

SAFE_PALLETS_PER_CONTAINER: dict[tuple[ContainerSizeClass, PalletFootprintClass], int] = {
    (ContainerSizeClass.TWENTY_FOOT, PalletFootprintClass.EURO): 11,
    (ContainerSizeClass.TWENTY_FOOT, PalletFootprintClass.US): 10,
    (ContainerSizeClass.TWENTY_FOOT, PalletFootprintClass.GENERIC): 10,
    (ContainerSizeClass.FORTY_FOOT, PalletFootprintClass.EURO): 48,
    (ContainerSizeClass.FORTY_FOOT, PalletFootprintClass.US): 40,
    (ContainerSizeClass.FORTY_FOOT, PalletFootprintClass.GENERIC): 40,
}


def classify_container(length: float, cm_per_unit: float = 1.0) -> ContainerSizeClass:
    if length * cm_per_unit >= FORTY_FOOT_MIN_LENGTH_CM:
        return ContainerSizeClass.FORTY_FOOT
    return ContainerSizeClass.TWENTY_FOOT


def classify_pallet_footprint(length: float, width: float, cm_per_unit: float = 1.0) -> PalletFootprintClass:
    """Match a footprint (either facing) against the named classes."""
    long_side = max(length, width) * cm_per_unit
    short_side = min(length, width) * cm_per_unit
    for footprint_class, (ref_long, ref_short) in FOOTPRINT_CLASSES_CM.items():
        if (
            abs(long_side - ref_long) <= FOOTPRINT_TOLERANCE_CM
            and abs(short_side - ref_short) <= FOOTPRINT_TOLERANCE_CM
        ):
            return footprint_class
    return PalletFootprintClass.GENERIC


@dataclass(frozen=True)
class PalletCapacity:
    """Geometric and advised pallet capacity of one container."""

    size_class: ContainerSizeClass
    footprint_class: PalletFootprintClass
    per_tier: int
    geometric_tiers: int
    tiers: int
    safe_limit: int

    @property
    def geometric_capacity(self) -> int:
        return self.per_tier * self.geometric_tiers

    @property
    def max_pallets(self) -> int:
        return min(self.per_tier * self.tiers, self.safe_limit)


def advise_pallets_per_container(
    container: ContainerSpec,
    floor_fit: LayerFit,
    pallet_length: float,
    pallet_width: float,
    loaded_height: float,
    cm_per_unit: float = 1.0,
) -> PalletCapacity:
    """
    Advised pallet count for one container.

    floor_fit is the pallet layout on the container floor (LayerCalculator),
    loaded_height the deck plus the tallest cargo stack.
    """
    size_class = classify_container(container.length, cm_per_unit)
    footprint_class = classify_pallet_footprint(pallet_length, pallet_width, cm_per_unit)

    geometric_tiers = fit_count(container.height, loaded_height)
    tiers = min(geometric_tiers, MAX_PALLET_TIERS[size_class])

    advice = PalletCapacity(
        size_class=size_class,
        footprint_class=footprint_class,
        per_tier=floor_fit.count,
        geometric_tiers=geometric_tiers,
        tiers=tiers,
        safe_limit=SAFE_PALLETS_PER_CONTAINER[(size_class, footprint_class)],
    )
    logger.debug(
        "pallet capacity: class=%s/%s per_tier=%d tiers=%d/%d geometric=%d advised=%d",
        size_class.value,
        footprint_class.value,
        advice.per_tier,
        advice.tiers,
        advice.geometric_tiers,
        advice.geometric_capacity,
        advice.max_pallets,
    )
    return advice
