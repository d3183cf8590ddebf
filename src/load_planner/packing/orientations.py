"""Carton orientation enumeration and ranking."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from load_planner.geometry import fit_count
from load_planner.models import Constraints, Orientation
from load_planner.packing.layers import LayerFit, calculate_layer, slots_per_layer

logger = logging.getLogger(__name__)

FALLBACK_ORIENTATION = Orientation(length=1.0, width=1.0, height=1.0, label="LWH")


def enumerate_orientations(
    length: float,
    width: float,
    height: float,
    constraints: Constraints,
    this_side_up: bool = False,
) -> list[Orientation]:
    """
    Return the legal orientations of a carton, identity first.

    label meaning (carton axis placed along length, width, height):
      LWH identity, WLH turned on base,
      LHW/HLW on the long side, WHL/HWL on the short side.
    Vertical rotations are dropped when the carton must stay upright.
    Orientations with identical dims are emitted once (first label wins).
    """
    if length <= 0 or width <= 0 or height <= 0:
        return [FALLBACK_ORIENTATION]

    L, W, H = float(length), float(width), float(height)
    base = constraints.allow_rotation_on_base
    upright = this_side_up or constraints.this_side_up

    dims: list[tuple[float, float, float, str]] = [(L, W, H, "LWH")]
    if base:
        dims.append((W, L, H, "WLH"))
    if constraints.allow_vertical_rotation and not upright:
        dims.append((L, H, W, "LHW"))
        if base:
            dims.append((H, L, W, "HLW"))
        dims.append((W, H, L, "WHL"))
        if base:
            dims.append((H, W, L, "HWL"))

    seen = set()
    out: list[Orientation] = []
    for a, b, c, label in dims:
        key = (a, b, c)
        if key not in seen:
            seen.add(key)
            out.append(Orientation(length=a, width=b, height=c, label=label))
    return out


def turn_on_base(orientation: Orientation) -> Orientation:
    """Same carton turned 90 degrees about the vertical axis."""
    label = orientation.label
    return Orientation(
        length=orientation.width,
        width=orientation.length,
        height=orientation.height,
        label=label[1] + label[0] + label[2],
    )


@dataclass(frozen=True)
class OrientationScore:
    """Capacity figures of one orientation on one base."""

    # Orientation as requested by the enumerator
    orientation: Orientation
    # Orientation as it will be placed (turned when the layer fit says so)
    placed: Orientation
    layer: LayerFit
    cartons_per_layer: int
    layers: int
    total_capacity: int
    floor_footprint: float
    units_needed: float

    @property
    def sort_key(self) -> tuple[float, float, int, int]:
        return (self.units_needed, self.floor_footprint, -self.total_capacity, -self.layers)


def score_orientation(
    orientation: Orientation,
    base_length: float,
    base_width: float,
    available_height: float,
    quantity: int,
    allow_rotation: bool = False,
    pattern: str = "column",
) -> OrientationScore:
    fit = calculate_layer(base_length, base_width, orientation.length, orientation.width, allow_rotation)
    placed = turn_on_base(orientation) if fit.swapped else orientation
    per_layer = slots_per_layer(fit, pattern)
    layers = fit_count(available_height, orientation.height)
    capacity = per_layer * layers
    units_needed = math.ceil(max(quantity, 0) / capacity) if capacity > 0 else math.inf

    return OrientationScore(
        orientation=orientation,
        placed=placed,
        layer=fit,
        cartons_per_layer=per_layer,
        layers=layers,
        total_capacity=capacity,
        floor_footprint=per_layer * orientation.length * orientation.width,
        units_needed=units_needed,
    )


def rank_orientations(
    orientations: list[Orientation],
    base_length: float,
    base_width: float,
    available_height: float,
    quantity: int,
    allow_rotation: bool = False,
    pattern: str = "column",
) -> list[OrientationScore]:
    """
    Order orientations by expected packing efficiency on a base.

    Sort key (ascending): units needed, floor footprint, then capacity and
    layer count descending. Orientations whose footprint is larger than the
    base are left out; zero-capacity ones sort last.
    """
    scores: list[OrientationScore] = []
    for o in orientations:
        if o.length > base_length or o.width > base_width:
            logger.debug("orientation %s skipped: footprint exceeds base", o.label)
            continue
        scores.append(
            score_orientation(o, base_length, base_width, available_height, quantity, allow_rotation, pattern)
        )

    scores.sort(key=lambda s: s.sort_key)
    return scores
