"""
Load optimization: evaluate every orientation/pattern candidate and keep the best plan.

Direct loading fills containers column by column (height-first). Pallet
loading fills pallets layer by layer (floor-first), then places the loaded
pallets in containers layer by layer at the advised pallets-per-container
limit. Candidates are compared on raw positions; only the winner is turned
into result models.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from load_planner.capacity import advise_pallets_per_container
from load_planner.config import Settings, get_settings
from load_planner.geometry import all_positive, volume
from load_planner.metrics import space_utilization, weight_utilization
from load_planner.models import (
    CartonPlacement,
    CartonSpec,
    Constraints,
    ContainerSpec,
    OptimizationResult,
    Orientation,
    PackedContainer,
    PackedPallet,
    PalletSpec,
    Position,
)
from load_planner.packing.distributor import Point, distribute
from load_planner.packing.layers import calculate_layer
from load_planner.packing.orientations import OrientationScore, enumerate_orientations, rank_orientations
from load_planner.packing.strategies import FillOrder, build_grid

logger = logging.getLogger(__name__)

AUTO_PATTERNS = ("column", "interlock")


@dataclass(frozen=True)
class Candidate:
    """One evaluated (pattern, orientation) plan, still as raw positions."""

    pattern: str
    score: OrientationScore
    # Carton positions per pallet (pallet mode) or per container (direct mode)
    carton_units: list[list[Point]]
    # Pallet positions per container; None in direct mode
    pallet_units: Optional[list[list[Point]]]
    # Pallet in its container facing; None in direct mode
    deck: Optional[PalletSpec]
    total_packed: int
    units_used: int
    pallets_used: int
    first_container_cartons: int
    first_pallet_cartons: int
    # True when the unit cap stopped generation before the quantity was placed
    capped: bool = False

    @property
    def placed(self) -> Orientation:
        return self.score.placed

    @property
    def layer_footprint(self) -> float:
        """Floor area of one full layer; the same for every stacking pattern."""
        return self.score.layer.count * self.placed.length * self.placed.width


def find_input_problems(
    carton: CartonSpec,
    container: ContainerSpec,
    pallet: PalletSpec | None,
    pallet_mode: bool,
) -> list[str]:
    """Degenerate inputs that make every plan empty."""
    problems: list[str] = []
    if not all_positive((carton.length, carton.width, carton.height)):
        problems.append("carton dimensions must be positive")
    if carton.quantity <= 0:
        problems.append("carton quantity must be at least 1")
    if not all_positive((container.length, container.width, container.height)):
        problems.append("container dimensions must be positive")
    if pallet_mode and pallet is not None and not all_positive((pallet.length, pallet.width, pallet.height)):
        problems.append("pallet dimensions must be positive")
    return problems


def empty_result(quantity: int, pattern: str = "column") -> OptimizationResult:
    """Structurally valid plan with nothing packed."""
    return OptimizationResult(
        containers=[],
        total_cartons_packed=0,
        remaining_cartons=max(quantity, 0),
        selected_pattern=pattern,
        best_orientation="",
    )


def _direct_candidates(
    carton: CartonSpec,
    constraints: Constraints,
    container: ContainerSpec,
    orientations: list[Orientation],
    pattern: str,
    settings: Settings,
) -> list[Candidate]:
    scores = rank_orientations(
        orientations,
        container.length,
        container.width,
        container.height,
        carton.quantity,
        constraints.allow_rotation_on_base,
        pattern,
    )
    limits = (container.length, container.width, container.height)

    candidates: list[Candidate] = []
    for score in scores:
        if score.total_capacity <= 0:
            continue
        grid = build_grid(score.placed.dims, score.layer, score.cartons_per_layer, limits)
        loads = distribute(grid, FillOrder.HEIGHT_FIRST, carton.quantity, settings.max_generated_units)
        if not loads.units:
            continue
        candidates.append(
            Candidate(
                pattern=pattern,
                score=score,
                carton_units=loads.units,
                pallet_units=None,
                deck=None,
                total_packed=loads.placed,
                units_used=len(loads.units),
                pallets_used=0,
                first_container_cartons=len(loads.units[0]),
                first_pallet_cartons=0,
                capped=loads.capped,
            )
        )
        logger.debug(
            "direct candidate %s/%s: per_container=%d containers=%d packed=%d",
            pattern,
            score.placed.label,
            grid.capacity,
            len(loads.units),
            loads.placed,
        )
    return candidates


def _pallet_candidates(
    carton: CartonSpec,
    constraints: Constraints,
    container: ContainerSpec,
    pallet: PalletSpec,
    orientations: list[Orientation],
    pattern: str,
    settings: Settings,
) -> list[Candidate]:
    facing = calculate_layer(
        container.length,
        container.width,
        pallet.length,
        pallet.width,
        constraints.allow_rotation_on_base,
    )
    if facing.count == 0:
        logger.debug("pallet %sx%s does not fit the container floor", pallet.length, pallet.width)
        return []

    if facing.swapped:
        deck = PalletSpec(length=pallet.width, width=pallet.length, height=pallet.height, max_weight=pallet.max_weight)
    else:
        deck = pallet

    # A loaded pallet must still pass under the container roof
    stack_limit = min(constraints.max_stack_height, container.height)
    available = max(stack_limit - pallet.height, 0.0)

    scores = rank_orientations(
        orientations,
        deck.length,
        deck.width,
        available,
        carton.quantity,
        constraints.allow_rotation_on_base,
        pattern,
    )

    candidates: list[Candidate] = []
    for score in scores:
        if score.total_capacity <= 0:
            continue

        carton_grid = build_grid(
            score.placed.dims,
            score.layer,
            score.cartons_per_layer,
            (deck.length, deck.width, stack_limit),
            base_z=deck.height,
        )
        loads = distribute(carton_grid, FillOrder.FLOOR_FIRST, carton.quantity, settings.max_generated_units)
        if not loads.units:
            continue

        loaded_height = max(max(p[2] for p in unit) for unit in loads.units) + score.placed.height
        advice = advise_pallets_per_container(
            container,
            facing,
            deck.length,
            deck.width,
            loaded_height,
            settings.cm_per_unit,
        )
        if advice.max_pallets <= 0:
            continue

        pallet_grid = build_grid(
            (deck.length, deck.width, loaded_height),
            facing,
            facing.count,
            (container.length, container.width, container.height),
            max_layers=advice.tiers,
        )
        groups = distribute(
            pallet_grid,
            FillOrder.FLOOR_FIRST,
            len(loads.units),
            settings.max_generated_units,
            unit_limit=advice.max_pallets,
        )
        if not groups.units:
            continue

        pallets_used = groups.placed
        first_container_pallets = len(groups.units[0])
        candidates.append(
            Candidate(
                pattern=pattern,
                score=score,
                carton_units=loads.units[:pallets_used],
                pallet_units=groups.units,
                deck=deck,
                total_packed=sum(len(u) for u in loads.units[:pallets_used]),
                units_used=pallets_used,
                pallets_used=pallets_used,
                first_container_cartons=sum(len(u) for u in loads.units[:first_container_pallets]),
                first_pallet_cartons=len(loads.units[0]),
                capped=loads.capped or groups.capped,
            )
        )
        logger.debug(
            "pallet candidate %s/%s: per_pallet=%d pallets=%d per_container=%d containers=%d",
            pattern,
            score.placed.label,
            carton_grid.capacity,
            pallets_used,
            advice.max_pallets,
            len(groups.units),
        )
    return candidates


def evaluate_utilization(candidate: Candidate, carton: CartonSpec, container: ContainerSpec) -> tuple[float, float]:
    """
    Space and weight utilization of the first generated container.

    The first container is the fullest one and stands in for the plan.
    Space is capped at 100, weight is not.
    """
    container_volume = volume(container.length, container.width, container.height)
    carton_volume = volume(*candidate.placed.dims)
    count = candidate.first_container_cartons
    space = min(100.0, count * carton_volume / container_volume * 100.0) if container_volume > 0 else 0.0
    weight = weight_utilization(count, carton.weight, container.max_weight)
    return space, weight


def weight_warning_for(candidate: Candidate, carton: CartonSpec, container: ContainerSpec, weight_pct: float) -> str | None:
    notes: list[str] = []
    if weight_pct > 100.0:
        cargo = candidate.first_container_cartons * carton.weight
        notes.append(
            f"Cargo weight {cargo:.1f} kg exceeds container max weight "
            f"{container.max_weight:.1f} kg ({weight_pct:.1f}% of capacity)"
        )
    deck = candidate.deck
    if deck is not None and deck.max_weight > 0:
        pallet_cargo = candidate.first_pallet_cartons * carton.weight
        if pallet_cargo > deck.max_weight:
            notes.append(
                f"Pallet load {pallet_cargo:.1f} kg exceeds pallet max weight {deck.max_weight:.1f} kg"
            )
    return "; ".join(notes) if notes else None


def select_best(candidates: list[Candidate], utilization: list[float]) -> int | None:
    """
    Index of the best candidate: most cartons packed, then fewer units,
    then smaller floor footprint, then higher space utilization.
    Earlier candidates win full ties.
    """
    best: int | None = None
    best_key: tuple[int, int, float, float] | None = None
    for i, c in enumerate(candidates):
        key = (c.total_packed, -c.units_used, -c.layer_footprint, utilization[i])
        if best_key is None or key > best_key:
            best = i
            best_key = key
    return best


def build_containers(candidate: Candidate, carton: CartonSpec, container: ContainerSpec) -> list[PackedContainer]:
    """Turn the winning candidate's raw positions into result models."""
    placed = candidate.placed

    def carton_at(point: Point) -> CartonPlacement:
        x, y, z = point
        return CartonPlacement(
            x=x,
            y=y,
            z=z,
            rotation=placed.label,
            length=placed.length,
            width=placed.width,
            height=placed.height,
        )

    out: list[PackedContainer] = []
    if candidate.pallet_units is None:
        for i, unit in enumerate(candidate.carton_units):
            cartons = [carton_at(p) for p in unit]
            out.append(
                PackedContainer(
                    container_dimensions=container,
                    position=Position(x=i * container.length),
                    content_type="cartons",
                    contents=cartons,
                    utilization=space_utilization(container, cartons),
                    weight_utilization=weight_utilization(len(cartons), carton.weight, container.max_weight),
                )
            )
        return out

    loads = iter(candidate.carton_units)
    for i, unit in enumerate(candidate.pallet_units):
        pallets: list[PackedPallet] = []
        cartons_here: list[CartonPlacement] = []
        for x, y, z in unit:
            cartons = [carton_at(p) for p in next(loads)]
            cartons_here.extend(cartons)
            pallets.append(
                PackedPallet(
                    pallet_dimensions=candidate.deck,
                    position=Position(x=x, y=y, z=z),
                    cartons=cartons,
                )
            )
        out.append(
            PackedContainer(
                container_dimensions=container,
                position=Position(x=i * container.length),
                content_type="pallets",
                contents=pallets,
                utilization=space_utilization(container, cartons_here),
                weight_utilization=weight_utilization(len(cartons_here), carton.weight, container.max_weight),
            )
        )
    return out


def optimize_load(
    carton: CartonSpec,
    constraints: Constraints,
    use_pallets: bool,
    container: ContainerSpec,
    pallet: PalletSpec | None = None,
    this_side_up: bool = False,
    fragile: bool = False,
    settings: Settings | None = None,
) -> OptimizationResult:
    """
    Compute the loading plan for a quantity of identical cartons.

    Never raises for bad numbers: degenerate input, cartons that fit
    nowhere and unit-cap shortfalls all come back as zero or partial counts.
    `fragile` is accepted for callers but does not change the plan.
    """
    if settings is None:
        settings = get_settings()
    quantity = carton.quantity

    pallet_mode = use_pallets and pallet is not None
    if use_pallets and pallet is None:
        logger.warning("pallet loading requested without a pallet; loading directly")

    default_pattern = "column" if constraints.stacking_pattern == "auto" else constraints.stacking_pattern

    problems = find_input_problems(carton, container, pallet, pallet_mode)
    if problems:
        logger.warning("degenerate input, nothing packed: %s", "; ".join(problems))
        return empty_result(quantity, default_pattern)

    if constraints.stacking_pattern == "auto":
        patterns = AUTO_PATTERNS
    else:
        patterns = (constraints.stacking_pattern,)

    orientations = enumerate_orientations(
        carton.length,
        carton.width,
        carton.height,
        constraints,
        this_side_up=this_side_up,
    )

    candidates: list[Candidate] = []
    for pattern in patterns:
        if pallet_mode:
            candidates.extend(
                _pallet_candidates(carton, constraints, container, pallet, orientations, pattern, settings)
            )
        else:
            candidates.extend(_direct_candidates(carton, constraints, container, orientations, pattern, settings))

    space: list[float] = []
    weight: list[float] = []
    for c in candidates:
        s, w = evaluate_utilization(c, carton, container)
        space.append(s)
        weight.append(w)

    pattern_comparison = {
        pattern: max((space[i] for i, c in enumerate(candidates) if c.pattern == pattern), default=0.0)
        for pattern in patterns
    }

    best_index = select_best(candidates, space)
    if best_index is None:
        logger.info("no orientation fits: quantity=%d packed=0", quantity)
        return empty_result(quantity, default_pattern).model_copy(update={"pattern_comparison": pattern_comparison})

    best = candidates[best_index]
    containers = build_containers(best, carton, container)
    warning = weight_warning_for(best, carton, container, weight[best_index])

    result = OptimizationResult(
        containers=containers,
        total_cartons_packed=best.total_packed,
        remaining_cartons=quantity - best.total_packed,
        total_pallets_used=best.pallets_used,
        total_units_used=best.units_used,
        total_containers_used=len(containers),
        space_utilization=space[best_index],
        weight_utilization=weight[best_index],
        selected_pattern=best.pattern,
        best_orientation=best.placed.label,
        weight_warning=warning,
        pattern_comparison=pattern_comparison,
    )
    logger.info(
        "optimized: mode=%s pattern=%s orientation=%s packed=%d remaining=%d containers=%d pallets=%d",
        "pallets" if pallet_mode else "direct",
        result.selected_pattern,
        result.best_orientation,
        result.total_cartons_packed,
        result.remaining_cartons,
        result.total_containers_used,
        result.total_pallets_used,
    )
    if best.capped:
        logger.warning(
            "unit cap reached: max_units=%d remaining=%d",
            settings.max_generated_units,
            result.remaining_cartons,
        )
    if warning:
        logger.warning("weight warning: %s", warning)
    return result
