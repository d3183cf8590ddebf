"""Cartons-per-layer calculation for a rectangular base."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

from load_planner.geometry import fit_count

# Interlocked layers lose roughly a tenth of the column count; exact so
# very large counts never go through float
INTERLOCK_EFFICIENCY = Fraction(9, 10)


@dataclass(frozen=True)
class LayerFit:
    """Best grid of one footprint on a base."""

    count: int
    # True when the footprint is turned 90 degrees on the base
    swapped: bool
    along_length: int
    along_width: int


def calculate_layer(
    base_length: float,
    base_width: float,
    item_length: float,
    item_width: float,
    allow_rotation: bool,
) -> LayerFit:
    """
    How many items of one footprint fit a single layer of the base.

    Tests the footprint as given and, if allowed, turned 90 degrees, and
    keeps the larger count (ties keep the given layout). A count of 0 means
    the footprint does not fit the base at all.
    """
    if item_length <= 0 or item_width <= 0 or base_length <= 0 or base_width <= 0:
        return LayerFit(count=0, swapped=False, along_length=0, along_width=0)

    nl = fit_count(base_length, item_length)
    nw = fit_count(base_width, item_width)
    best = LayerFit(count=nl * nw, swapped=False, along_length=nl, along_width=nw)

    if allow_rotation:
        rl = fit_count(base_length, item_width)
        rw = fit_count(base_width, item_length)
        if rl * rw > best.count:
            best = LayerFit(count=rl * rw, swapped=True, along_length=rl, along_width=rw)

    return best


def slots_per_layer(fit: LayerFit, pattern: str) -> int:
    """Usable positions per layer for a stacking pattern."""
    if pattern == "interlock":
        return math.floor(fit.count * INTERLOCK_EFFICIENCY)
    return fit.count
