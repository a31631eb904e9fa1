"""Command-line runner: feed a JSON job file to a registered solver.

Usage:
    facade-tools --list
    facade-tools create_window job.json
    facade-tools create_louvers job.json --validate

The job file is a JSON object whose keys are the solver inputs. Points
are [x, y] or [x, y, z] lists; curves may also be {"points": [...],
"closed": true}; surfaces may be point lists, {"outer": [...], "holes":
[...]} or {"faces": [...]}.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from facade_tools.components.louver import LouverBox, louver_solid
from facade_tools.diagnostics import CollectingSink
from facade_tools.errors import FacadeToolsError
from facade_tools.geometry.curves import Polyline
from facade_tools.geometry.regions import Brep
from facade_tools.settings import Settings
from facade_tools.solvers import louvers, windows  # noqa: F401
from facade_tools.solvers.base import get_solver, list_solvers
from facade_tools.validation.checks import validate_solid


def _points(arr) -> list[list[float]]:
    return [[round(float(c), 9) for c in p] for p in arr]


def _to_json(value: Any) -> Any:
    """JSON-friendly form of solver outputs."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Polyline):
        return {"points": _points(value.points), "closed": value.is_closed}
    if isinstance(value, Brep):
        return {
            "area": value.area(),
            "faces": [
                {"outer": _points(f.outer), "holes": [_points(h) for h in f.holes]}
                for f in value.faces
            ],
        }
    if isinstance(value, LouverBox):
        return {
            "center": _points([value.center])[0],
            "arc_length": value.arc_length,
            "corners": _points(value.corners()),
        }
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    return repr(value)


def _validate_louvers(boxes: list[LouverBox]) -> dict:
    """Mesh checks on the joined louver solid plus a volume check per box.

    Neighbouring louvers may overlap, so the joined volume is not compared
    against the sum of the box volumes.
    """
    results = validate_solid(louver_solid(boxes))
    per_box = [validate_solid(b.to_manifold(), expected_volume=b.volume)["pass"] for b in boxes]
    results["louvers_checked"] = len(per_box)
    results["louvers_pass"] = all(per_box)
    results["pass"] = results["pass"] and results["louvers_pass"]
    return results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="facade-tools",
        description="Run a facade geometry solver on a JSON job file.",
    )
    parser.add_argument("solver", nargs="?", help="Solver name (see --list)")
    parser.add_argument("job", nargs="?", type=Path, help="JSON file with solver inputs")
    parser.add_argument("--list", action="store_true", help="List available solvers")
    parser.add_argument(
        "--validate", action="store_true",
        help="Run mesh checks on louver solids",
    )
    args = parser.parse_args(argv)

    settings = Settings()
    logging.getLogger("facade_tools").setLevel(settings.log_level)

    if args.list:
        for info in list_solvers():
            print(f"{info['name']:<22} {info['nickname']:<8} {info['description']}")
        return 0
    if not args.solver or not args.job:
        parser.error("solver and job are required unless --list is given")

    try:
        solver = get_solver(args.solver)
    except FacadeToolsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        inputs = json.loads(args.job.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error: could not read job file {args.job}: {exc}", file=sys.stderr)
        return 2
    if not isinstance(inputs, dict):
        print(f"Error: job file {args.job} must hold a JSON object", file=sys.stderr)
        return 2
    sink = CollectingSink()
    outputs = solver.solve(inputs, sink, settings)

    for diagnostic in sink.diagnostics:
        print(f"[{diagnostic.severity.value}] {diagnostic.message}", file=sys.stderr)
    if outputs is None:
        return 1 if sink.errors else 0

    summary = {k: _to_json(v) for k, v in outputs.items() if k != "result"}
    if args.validate and "louvers" in outputs:
        summary["validation"] = _validate_louvers(outputs["louvers"])
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
