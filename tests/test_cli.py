from __future__ import annotations

import json
from pathlib import Path

import pytest

from load_planner.cli import load_input, main, write_plan


def write_request(path: Path, request: dict) -> Path:
    path.write_text(json.dumps(request), encoding="utf-8")
    return path


def test_cli_writes_plan(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("LOAD_PLANNER_LENGTH_UNIT", raising=False)
    request = write_request(
        tmp_path / "request.json",
        {
            "carton": {"length": 30, "width": 20, "height": 15, "weight": 5, "quantity": 120},
            "container_preset": "20",
        },
    )
    output = tmp_path / "out" / "plan.json"

    code = main(["--input", str(request), "--output", str(output), "--log-level", "WARNING"])

    assert code == 0
    plan = json.loads(output.read_text(encoding="utf-8"))
    assert plan["metrics"]["cartons_loaded"] == 120
    assert plan["plan"]["total_containers_used"] == 1
    printed = json.loads(capsys.readouterr().out)
    assert printed == plan["metrics"]


def test_cli_unknown_preset_fails(tmp_path: Path) -> None:
    request = write_request(
        tmp_path / "request.json",
        {"carton": {"length": 30, "width": 20, "height": 15}, "container_preset": "10ft"},
    )

    code = main(["--input", str(request), "--output", str(tmp_path / "plan.json")])

    assert code == 2
    assert not (tmp_path / "plan.json").exists()


def test_load_input_lists_missing_fields(tmp_path: Path) -> None:
    request = write_request(tmp_path / "request.json", {"container_preset": "20"})

    with pytest.raises(ValueError, match="Carton"):
        load_input(request)


def test_write_plan_is_sorted_and_indented(tmp_path: Path) -> None:
    target = tmp_path / "plan.json"

    write_plan({"b": 1, "a": {"c": 2}}, str(target))

    assert target.read_text(encoding="utf-8") == '{\n  "a": {\n    "c": 2\n  },\n  "b": 1\n}'
