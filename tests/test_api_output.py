"""Tests for API output formatting and input validation."""

from __future__ import annotations

from fastapi.testclient import TestClient

from load_planner.api import app, format_output, resolve_inputs, validate_input
from load_planner.containers import get_container_spec
from load_planner.models import CartonSpec, Constraints
from load_planner.optimizer import optimize_load

client = TestClient(app)

CARTON = {"length": 30, "width": 20, "height": 15, "weight": 5, "quantity": 50}


def test_success_response_has_guaranteed_fields() -> None:
    """Test that success responses always have guaranteed fields."""
    request = {
        "carton": CARTON,
        "constraints": {"max_stack_height": 180},
        "use_pallets": True,
        "container_preset": "40HC",
        "pallet_preset": "EUR",
    }

    response = client.post("/optimize", json=request)

    assert response.status_code == 200
    data = response.json()

    # Check guaranteed fields exist
    assert "metrics" in data
    assert "summary" in data
    assert "plan" in data

    metrics = data["metrics"]
    assert metrics["cartons_requested"] == 50
    assert metrics["cartons_loaded"] == 50
    assert metrics["cartons_unloaded"] == 0
    assert metrics["pallets_used"] == 1
    assert metrics["containers_used"] == 1
    assert isinstance(metrics["space_utilization"], float)
    assert isinstance(metrics["orientation"], str)
    assert metrics["pattern"] in ("column", "interlock")

    assert isinstance(data["summary"], str)
    assert "🚢 Optimization Complete" in data["summary"]

    plan = data["plan"]
    assert plan["total_cartons_packed"] == 50
    assert plan["containers"][0]["content_type"] == "pallets"
    assert len(plan["containers"][0]["contents"][0]["cartons"]) == 50


def test_direct_loading_with_explicit_container() -> None:
    request = {
        "carton": CARTON,
        "container": {"length": 1200, "width": 240, "height": 260, "max_weight": 24000},
    }

    response = client.post("/optimize", json=request)

    assert response.status_code == 200
    data = response.json()
    assert data["metrics"]["pallets_used"] == 0
    packed = data["plan"]["containers"][0]
    assert packed["content_type"] == "cartons"
    first = packed["contents"][0]
    assert (first["x"], first["y"], first["z"]) == (0, 0, 0)
    assert first["rotation"] == data["metrics"]["orientation"]
    assert sorted((first["length"], first["width"], first["height"])) == [15, 20, 30]


def test_missing_input_returns_friendly_422() -> None:
    """Test that missing input returns friendly 422 error."""
    # Missing container
    request = {"carton": CARTON}

    response = client.post("/optimize", json=request)

    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "MISSING_INFORMATION"
    assert "⚠️ Missing information" in data["summary"]
    assert any("Container" in detail for detail in data["details"])


def test_missing_pallet_when_pallets_requested() -> None:
    request = {"carton": CARTON, "container_preset": "20", "use_pallets": True}

    response = client.post("/optimize", json=request)

    assert response.status_code == 422
    assert any("Pallet" in detail for detail in response.json()["details"])


def test_unknown_preset_returns_422() -> None:
    request = {"carton": CARTON, "container_preset": "45HC"}

    response = client.post("/optimize", json=request)

    assert response.status_code == 422
    assert "Unknown container preset" in response.json()["details"][0]


def test_invalid_field_type_is_reported() -> None:
    request = {
        "carton": {**CARTON, "quantity": "many"},
        "container_preset": "20",
    }

    response = client.post("/optimize", json=request)

    assert response.status_code == 422
    details = response.json()["details"]
    assert any(detail.startswith("carton.quantity") for detail in details)


def test_validate_input_accepts_complete_request() -> None:
    parsed, missing = validate_input({"carton": CARTON, "container_preset": "40"})

    assert missing == []
    assert parsed is not None
    assert parsed.constraints == Constraints()
    assert parsed.use_pallets is False


def test_resolve_inputs_prefers_explicit_dimensions() -> None:
    parsed, _ = validate_input(
        {
            "carton": CARTON,
            "container": {"length": 500, "width": 200, "height": 200},
            "container_preset": "40HC",
        }
    )

    _, _, container, pallet = resolve_inputs(parsed)

    assert container.length == 500
    assert pallet is None


def test_format_output_reports_shortfall_and_warning() -> None:
    carton = CartonSpec(length=100, width=100, height=100, weight=1000, quantity=45)
    container = get_container_spec("20")
    result = optimize_load(carton, Constraints(), False, container).model_copy(
        update={"remaining_cartons": 5, "total_cartons_packed": 40}
    )

    output = format_output(result, 45)

    assert output["metrics"]["cartons_unloaded"] == 5
    assert "Not loaded: 5 cartons" in output["summary"]
    # 20 x 1000 kg in a 24000 kg container
    assert output["metrics"]["weight_utilization"] > 80
    assert output["metrics"]["weight_warning"] is None


def test_presets_endpoint() -> None:
    response = client.get("/presets")

    assert response.status_code == 200
    data = response.json()
    assert set(data["containers"]) == {"20", "40", "40HC"}
    assert set(data["pallets"]) == {"EUR", "NA", "ASIA"}
    assert data["pallets"]["EUR"]["length"] > 0


def test_health_endpoint() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_infinite_dimension_returns_empty_plan() -> None:
    """JSON `Infinity` parses to a float; the plan is empty, not a 500."""
    body = (
        '{"carton": {"length": 30, "width": 20, "height": 15, "quantity": 5},'
        ' "container": {"length": Infinity, "width": 240, "height": 260}}'
    )

    response = client.post("/optimize", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    metrics = response.json()["metrics"]
    assert metrics["cartons_loaded"] == 0
    assert metrics["cartons_unloaded"] == 5
    assert response.json()["plan"]["containers"] == []
