"""
Index-to-position placement strategies.

Both strategies map a zero-based placement index onto a regular grid of
identical items; overlap freedom follows from the index arithmetic alone.

  HEIGHT_FIRST  fill a column bottom to top, then the next column along
                the width, then advance along the length (direct loading)
  FLOOR_FIRST   fill the whole floor plan, then start the next layer
                (cartons on pallets, pallets in containers)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from load_planner.geometry import fit_count, fits_within
from load_planner.packing.layers import LayerFit


class FillOrder(str, Enum):
    HEIGHT_FIRST = "height_first"
    FLOOR_FIRST = "floor_first"


@dataclass(frozen=True)
class Grid:
    """Regular grid of one item size inside an owning volume."""

    item_length: float
    item_width: float
    item_height: float
    along_length: int
    along_width: int
    layers: int
    # Usable positions per layer; below along_length * along_width for interlock
    slots_per_layer: int
    # Owning volume limits; limit_height is absolute (includes base_z)
    limit_length: float
    limit_width: float
    limit_height: float
    base_z: float = 0.0

    @property
    def capacity(self) -> int:
        return self.slots_per_layer * self.layers

    @property
    def item_dims(self) -> tuple[float, float, float]:
        return (self.item_length, self.item_width, self.item_height)

    @property
    def limits(self) -> tuple[float, float, float]:
        return (self.limit_length, self.limit_width, self.limit_height)


def build_grid(
    item_dims: tuple[float, float, float],
    fit: LayerFit,
    slots_per_layer: int,
    limits: tuple[float, float, float],
    base_z: float = 0.0,
    max_layers: int | None = None,
) -> Grid:
    """Grid for items already turned to their placed facing."""
    length, width, height = item_dims
    limit_length, limit_width, limit_height = limits
    available = limit_height - base_z
    layers = fit_count(available, height)
    if max_layers is not None:
        layers = min(layers, max_layers)
    return Grid(
        item_length=length,
        item_width=width,
        item_height=height,
        along_length=fit.along_length,
        along_width=fit.along_width,
        layers=layers,
        slots_per_layer=min(slots_per_layer, fit.along_length * fit.along_width),
        limit_length=limit_length,
        limit_width=limit_width,
        limit_height=limit_height,
        base_z=base_z,
    )


def grid_index(index: int, grid: Grid, order: FillOrder) -> tuple[int, int, int]:
    """(length, width, height) grid indices for a placement index."""
    if order is FillOrder.HEIGHT_FIRST:
        column = index // grid.layers
        height_index = index % grid.layers
        width_index = column % grid.along_width
        length_index = column // grid.along_width
    else:
        height_index = index // grid.slots_per_layer
        in_layer = index % grid.slots_per_layer
        length_index = in_layer // grid.along_width
        width_index = in_layer % grid.along_width
    return length_index, width_index, height_index


def position_for_index(index: int, grid: Grid, order: FillOrder) -> tuple[float, float, float]:
    li, wi, hi = grid_index(index, grid, order)
    return (
        li * grid.item_length,
        wi * grid.item_width,
        grid.base_z + hi * grid.item_height,
    )


def iter_positions(grid: Grid, order: FillOrder, count: int) -> Iterator[tuple[float, float, float]]:
    """
    Yield up to count positions, stopping at the first one that leaves the
    owning volume (partial unit) or once the grid capacity is used.
    """
    if grid.capacity <= 0 or grid.along_width <= 0:
        return
    for index in range(min(count, grid.capacity)):
        position = position_for_index(index, grid, order)
        if not fits_within(position, grid.item_dims, grid.limits):
            return
        yield position
