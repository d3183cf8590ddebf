"""Multi-unit distribution: fill pallets or containers until the quantity is placed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from load_planner.packing.strategies import FillOrder, Grid, iter_positions

logger = logging.getLogger(__name__)

Point = tuple[float, float, float]


class DistributorState(str, Enum):
    FILLING = "filling"
    EXHAUSTED = "exhausted"


class UnitGenerator:
    """Fills one identical unit (pallet or container) per call."""

    def __init__(self, grid: Grid, order: FillOrder, unit_limit: int | None = None):
        self.grid = grid
        self.order = order
        # Per-unit ceiling below the grid capacity (e.g. safe pallet counts)
        self.unit_limit = grid.capacity if unit_limit is None else min(unit_limit, grid.capacity)

    @property
    def theoretical_capacity(self) -> int:
        return max(self.unit_limit, 0)

    def next_unit(self, remaining: int) -> tuple[list[Point], int]:
        """Place up to remaining items in a fresh unit; return positions and count placed."""
        target = min(remaining, self.theoretical_capacity)
        positions = list(iter_positions(self.grid, self.order, target))
        if len(positions) < target:
            logger.debug(
                "unit stopped short at boundary: placed=%d theoretical=%d",
                len(positions),
                target,
            )
        return positions, len(positions)


@dataclass
class Distribution:
    """Outcome of a distribution run; units hold actual positions only."""

    units: list[list[Point]] = field(default_factory=list)
    placed: int = 0
    requested: int = 0
    capped: bool = False
    state: DistributorState = DistributorState.FILLING

    @property
    def remaining(self) -> int:
        return self.requested - self.placed


class MultiUnitDistributor:
    """
    Two-state loop around a UnitGenerator.

    FILLING -> EXHAUSTED when the quantity is placed, when a fresh unit
    takes nothing (nothing fits), or when max_units units were generated.
    """

    def __init__(self, generator: UnitGenerator, max_units: int):
        self.generator = generator
        self.max_units = max_units

    def run(self, quantity: int) -> Distribution:
        result = Distribution(requested=max(quantity, 0))

        while result.state is DistributorState.FILLING:
            if result.remaining <= 0:
                result.state = DistributorState.EXHAUSTED
                break
            if len(result.units) >= self.max_units:
                result.capped = True
                result.state = DistributorState.EXHAUSTED
                logger.debug(
                    "unit cap reached: units=%d placed=%d remaining=%d",
                    len(result.units),
                    result.placed,
                    result.remaining,
                )
                break

            positions, consumed = self.generator.next_unit(result.remaining)
            if consumed == 0:
                result.state = DistributorState.EXHAUSTED
                break

            result.units.append(positions)
            result.placed += consumed

        return result


def distribute(grid: Grid, order: FillOrder, quantity: int, max_units: int, unit_limit: int | None = None) -> Distribution:
    """Shorthand for one MultiUnitDistributor run over a grid."""
    generator = UnitGenerator(grid, order, unit_limit=unit_limit)
    return MultiUnitDistributor(generator, max_units).run(quantity)
