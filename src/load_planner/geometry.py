"""Geometry utilities for load planning."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .models import CartonPlacement

Bounds = tuple[float, float, float, float, float, float]

# Absorbs float drift from index * dimension products
EPSILON = 1e-9

# Per-axis item count ceiling; keeps grid products well inside float range
MAX_AXIS_COUNT = 10**9


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """
    Axis-aligned bounding box (AABB) overlap test.

    a, b are bounds: (x1, y1, z1, x2, y2, z2)

    Overlap exists only if they overlap on ALL 3 axes with positive volume.
    Touching faces/edges (ax2 == bx1) is NOT considered overlap.
    """
    ax1, ay1, az1, ax2, ay2, az2 = a
    bx1, by1, bz1, bx2, by2, bz2 = b

    return (ax1 < bx2 and ax2 > bx1) and (ay1 < by2 and ay2 > by1) and (az1 < bz2 and az2 > bz1)


def box_bounds(
    x: float,
    y: float,
    z: float,
    dims: tuple[float, float, float],
) -> Bounds:
    L, W, H = dims
    return (x, y, z, x + L, y + W, z + H)


def placement_bounds(p: "CartonPlacement") -> Bounds:
    return box_bounds(float(p.x), float(p.y), float(p.z), (p.length, p.width, p.height))


def fits_within(
    position: tuple[float, float, float],
    dims: tuple[float, float, float],
    limits: tuple[float, float, float],
) -> bool:
    """True when position + dims stays inside limits on every axis."""
    return all(
        pos >= 0 and pos + dim <= limit + EPSILON
        for pos, dim, limit in zip(position, dims, limits)
    )


def overlapping_pairs(bounds: list[Bounds]) -> list[tuple[int, int]]:
    """Indices of every overlapping pair (pairwise check)."""
    pairs: list[tuple[int, int]] = []
    for i in range(len(bounds)):
        for j in range(i + 1, len(bounds)):
            if boxes_overlap(bounds[i], bounds[j]):
                pairs.append((i, j))
    return pairs


def all_positive(values: Iterable[float]) -> bool:
    """False when any dimension is zero, negative, infinite or NaN."""
    return all(math.isfinite(v) and v > 0 for v in values)


def fit_count(extent: float, size: float) -> int:
    """
    How many items of one size fit end to end along an extent.

    0 when either value is not positive or is NaN. Quotients at or above
    MAX_AXIS_COUNT, infinite ones included (e.g. 1e300 / 1e-300), are
    clamped to it.
    """
    if not (extent > 0 and size > 0):
        return 0
    quotient = extent / size
    if not quotient < MAX_AXIS_COUNT:
        return MAX_AXIS_COUNT if quotient > 0 else 0
    return math.floor(quotient)


def volume(length: float, width: float, height: float) -> float:
    return float(length) * float(width) * float(height)
