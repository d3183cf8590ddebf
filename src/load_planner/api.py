"""FastAPI endpoint for the load planner."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from load_planner.config import get_settings
from load_planner.containers import CONTAINER_PRESETS_CM, PALLET_PRESETS_CM, get_container_spec, get_pallet_spec
from load_planner.io.schemas import MetricsSchema, OptimizeRequest, OptimizeResponse
from load_planner.models import CartonSpec, Constraints, ContainerSpec, OptimizationResult, PalletSpec
from load_planner.optimizer import optimize_load

logger = logging.getLogger(__name__)

MISSING_INFORMATION_SUMMARY = (
    "⚠️ Missing information\nPlease enter the missing details to run the optimization."
)

app = FastAPI(
    title="Load Planner API",
    description="Carton, pallet and container load planning service",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


def validate_input(request: dict[str, Any]) -> tuple[OptimizeRequest | None, list[str]]:
    """
    Validate input and return the parsed request and a list of missing fields.

    Returns:
        (request, missing_fields)
        If missing_fields is non-empty, return friendly error.
    """
    missing_fields: list[str] = []

    if not request.get("carton"):
        missing_fields.append("Carton (length, width, height, weight, quantity)")
    if not request.get("container") and not request.get("container_preset"):
        missing_fields.append("Container size (length, width, height) or container_preset")
    if request.get("use_pallets") and not request.get("pallet") and not request.get("pallet_preset"):
        missing_fields.append("Pallet size (length, width, height) or pallet_preset")
    if missing_fields:
        return None, missing_fields

    try:
        return OptimizeRequest.model_validate(request), []
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            missing_fields.append(f"{field}: {err['msg']}")
        return None, missing_fields


def resolve_inputs(
    request: OptimizeRequest,
    unit: str = "cm",
) -> tuple[CartonSpec, Constraints, ContainerSpec, PalletSpec | None]:
    """
    Resolve presets into specs. Explicit dimensions win over presets.

    Raises ValueError for unknown presets or a missing container.
    """
    if request.container is not None:
        container = request.container
    elif request.container_preset:
        container = get_container_spec(request.container_preset, unit)
    else:
        raise ValueError("request must include either 'container' or 'container_preset'")

    pallet = request.pallet
    if pallet is None and request.pallet_preset:
        pallet = get_pallet_spec(request.pallet_preset, unit)

    return request.carton, request.constraints, container, pallet


def format_output(result: OptimizationResult, requested: int) -> dict[str, Any]:
    """Response with metrics, a readable summary and the full plan."""
    metrics = MetricsSchema(
        cartons_requested=requested,
        cartons_loaded=result.total_cartons_packed,
        cartons_unloaded=result.remaining_cartons,
        containers_used=result.total_containers_used,
        pallets_used=result.total_pallets_used,
        space_utilization=round(result.space_utilization, 2),
        weight_utilization=round(result.weight_utilization, 2),
        orientation=result.best_orientation,
        pattern=result.selected_pattern,
        weight_warning=result.weight_warning,
    )

    lines = [
        "🚢 Optimization Complete",
        f"Loaded: {metrics.cartons_loaded} of {requested} cartons",
        f"Containers: {metrics.containers_used}",
    ]
    if metrics.pallets_used:
        lines.append(f"Pallets: {metrics.pallets_used}")
    lines.append(f"Space utilization: {metrics.space_utilization:.1f}%")
    lines.append(f"Weight utilization: {metrics.weight_utilization:.1f}%")
    if metrics.cartons_unloaded:
        lines.append(f"Not loaded: {metrics.cartons_unloaded} cartons")
    if result.weight_warning:
        lines.append(f"⚠️ {result.weight_warning}")

    response = OptimizeResponse(metrics=metrics, summary="\n".join(lines), plan=result)
    return response.model_dump(mode="json")


def missing_information(details: list[str]) -> Response:
    error_response = {
        "error": "MISSING_INFORMATION",
        "summary": MISSING_INFORMATION_SUMMARY,
        "details": details,
    }
    return Response(
        content=json.dumps(error_response),
        status_code=422,
        media_type="application/json",
    )


@app.post("/optimize")
async def optimize(request: dict[str, Any]) -> Any:
    """
    Optimize a carton load and return the plan.

    Input (request body):
        {
            "carton": {"length": 30, "width": 20, "height": 15, "weight": 5, "quantity": 50},
            "constraints": {"max_stack_height": 180, "allow_vertical_rotation": false},
            "use_pallets": true,
            "container_preset": "40HC",
            "pallet_preset": "EUR"
        }

    Returns:
        Response with metrics, summary, and plan
    """
    try:
        parsed, missing_fields = validate_input(request)
        if missing_fields:
            return missing_information(missing_fields)

        settings = get_settings()
        try:
            carton, constraints, container, pallet = resolve_inputs(parsed, settings.length_unit)
        except ValueError as e:
            return missing_information([str(e)])

        result = optimize_load(
            carton,
            constraints,
            parsed.use_pallets,
            container,
            pallet,
            this_side_up=parsed.this_side_up,
            fragile=parsed.fragile,
            settings=settings,
        )
        response = format_output(result, carton.quantity)

        logger.info(
            f"cartons_loaded={response['metrics']['cartons_loaded']}, "
            f"cartons_unloaded={response['metrics']['cartons_unloaded']}, "
            f"containers_used={response['metrics']['containers_used']}"
        )
        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /optimize endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/presets")
async def presets() -> dict[str, Any]:
    """Container and pallet presets in the configured length unit."""
    unit = get_settings().length_unit
    return {
        "unit": unit,
        "containers": {name: get_container_spec(name, unit).model_dump() for name in CONTAINER_PRESETS_CM},
        "pallets": {name: get_pallet_spec(name, unit).model_dump() for name in PALLET_PRESETS_CM},
    }


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}
