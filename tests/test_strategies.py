"""Tests for index-to-position placement strategies."""

from __future__ import annotations

import pytest

from load_planner.packing.layers import calculate_layer
from load_planner.packing.strategies import (
    FillOrder,
    Grid,
    build_grid,
    grid_index,
    iter_positions,
    position_for_index,
)


def container_grid() -> Grid:
    """30x20x15 cartons, no rotation, in a 1200x240x260 container."""
    fit = calculate_layer(1200, 240, 30, 20, allow_rotation=False)
    return build_grid((30, 20, 15), fit, fit.count, (1200, 240, 260))


def test_container_grid_dimensions() -> None:
    grid = container_grid()

    assert grid.along_length == 40
    assert grid.along_width == 12
    # floor(260 / 15)
    assert grid.layers == 17
    assert grid.capacity == 40 * 12 * 17


def test_height_first_fills_a_column_before_moving_on() -> None:
    """
    Column of 17, then the next column along the width, then along the length.

    Index 16 tops the first column, index 17 opens the second column at y=20,
    and the first carton at x=30 is index 12 * 17 = 204.
    """
    grid = container_grid()

    assert position_for_index(0, grid, FillOrder.HEIGHT_FIRST) == (0, 0, 0)
    assert position_for_index(16, grid, FillOrder.HEIGHT_FIRST) == (0, 0, 240)
    assert position_for_index(17, grid, FillOrder.HEIGHT_FIRST) == (0, 20, 0)
    assert grid_index(203, grid, FillOrder.HEIGHT_FIRST) == (0, 11, 16)
    assert position_for_index(204, grid, FillOrder.HEIGHT_FIRST) == (30, 0, 0)


def test_floor_first_fills_a_layer_above_the_deck() -> None:
    fit = calculate_layer(120, 80, 30, 20, allow_rotation=False)
    grid = build_grid((30, 20, 15), fit, fit.count, (120, 80, 180), base_z=14.4)

    # floor((180 - 14.4) / 15)
    assert grid.layers == 11
    assert position_for_index(0, grid, FillOrder.FLOOR_FIRST) == (0, 0, 14.4)
    assert position_for_index(3, grid, FillOrder.FLOOR_FIRST) == (0, 60, 14.4)
    assert position_for_index(4, grid, FillOrder.FLOOR_FIRST) == (30, 0, 14.4)
    assert position_for_index(16, grid, FillOrder.FLOOR_FIRST) == pytest.approx((0, 0, 29.4))


def test_build_grid_respects_max_layers() -> None:
    fit = calculate_layer(1200, 240, 120, 80, allow_rotation=False)
    grid = build_grid((120, 80, 100), fit, fit.count, (1200, 240, 260), max_layers=1)

    assert grid.layers == 1
    assert grid.capacity == 30


def test_iter_positions_stops_at_boundary() -> None:
    """A grid wider than its owner yields only the positions that fit."""
    grid = Grid(
        item_length=30,
        item_width=20,
        item_height=15,
        along_length=4,
        along_width=4,
        layers=2,
        slots_per_layer=16,
        limit_length=100,
        limit_width=80,
        limit_height=30,
    )

    positions = list(iter_positions(grid, FillOrder.FLOOR_FIRST, 32))

    # Rows at x = 0, 30, 60 fit; the row at x = 90 would end at 120
    assert len(positions) == 12
    assert max(x for x, _, _ in positions) == 60


def test_iter_positions_never_exceeds_count_or_capacity() -> None:
    grid = container_grid()

    assert len(list(iter_positions(grid, FillOrder.HEIGHT_FIRST, 50))) == 50
    assert len(list(iter_positions(grid, FillOrder.HEIGHT_FIRST, 10**6))) == grid.capacity


def test_empty_grid_yields_nothing() -> None:
    fit = calculate_layer(100, 100, 10, 10, allow_rotation=False)
    grid = build_grid((10, 10, 50), fit, fit.count, (100, 100, 40))

    assert grid.layers == 0
    assert list(iter_positions(grid, FillOrder.HEIGHT_FIRST, 5)) == []
