from __future__ import annotations

from load_planner.geometry import volume
from load_planner.models import CartonPlacement, ContainerSpec


def placement_volume(p: CartonPlacement) -> float:
    return volume(p.length, p.width, p.height)


def cargo_volume(placements: list[CartonPlacement]) -> float:
    return sum(placement_volume(p) for p in placements)


def space_utilization(container: ContainerSpec, placements: list[CartonPlacement]) -> float:
    """Carton volume as a percentage of container volume, capped at 100."""
    container_volume = volume(container.length, container.width, container.height)
    if container_volume <= 0:
        return 0.0
    return min(100.0, cargo_volume(placements) / container_volume * 100.0)


def weight_utilization(carton_count: int, carton_weight: float, max_weight: float) -> float:
    """Cargo weight as a percentage of capacity; not capped so overloads show."""
    if max_weight <= 0:
        return 0.0
    return carton_count * max(carton_weight, 0.0) / max_weight * 100.0
