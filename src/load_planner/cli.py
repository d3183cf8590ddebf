from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from load_planner.api import format_output, resolve_inputs, validate_input
from load_planner.config import configure_logging, get_settings
from load_planner.io.schemas import OptimizeRequest
from load_planner.optimizer import optimize_load

logger = logging.getLogger(__name__)


def load_input(path: Path) -> OptimizeRequest:
    """
    Read an optimization request from a JSON file.

    Same body as POST /optimize. Raises ValueError listing every missing
    or invalid field.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    request, missing_fields = validate_input(data)
    if missing_fields:
        raise ValueError("Missing information: " + "; ".join(missing_fields))
    return request


def write_plan(plan: dict, path: str = "plan.json") -> None:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("writing plan to %s", output_path)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load Planner CLI")
    parser.add_argument("--input", required=True, help="Input request JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOAD_PLANNER_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        request = load_input(Path(args.input))
        carton, constraints, container, pallet = resolve_inputs(request, settings.length_unit)
    except (OSError, ValueError) as e:
        logger.error("cannot read %s: %s", args.input, e)
        return 2

    result = optimize_load(
        carton,
        constraints,
        request.use_pallets,
        container,
        pallet,
        this_side_up=request.this_side_up,
        fragile=request.fragile,
        settings=settings,
    )
    output = format_output(result, carton.quantity)

    write_plan(output, args.output)
    print(json.dumps(output["metrics"], indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
