# medroute/app/cli.py
import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from medroute.app.build import build, run
from medroute.config.models import ScenarioModel
from medroute.domain.errors import MedRouteError
from medroute.routing.heuristics import format_path


def load_scenario(p: str | Path) -> ScenarioModel:
    return ScenarioModel.model_validate_json(Path(p).read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="medroute", description="Facility routing and dispatch")
    ap.add_argument("scenario", help="Path to scenario JSON")
    ap.add_argument("--dispatch", type=int, default=None, help="Dispatch at most N tasks")
    ap.add_argument("--quiet", action="store_true", help="Disable JSON logs")
    args = ap.parse_args(argv)

    try:
        app = build(load_scenario(args.scenario), use_logging=not args.quiet)
        result = run(app, max_dispatch=args.dispatch)
    except (MedRouteError, ValidationError) as e:
        print(f"medroute: {e}", file=sys.stderr)
        return 2

    for task_id in result.dispatched:
        print(f"Dispatching Task ID: {task_id}")
    for start, goal, route in result.routes:
        if route is None:
            print(f"No path found: {start} -> {goal}")
        else:
            print(f"Optimal path: {format_path(route.nodes)} (cost {route.cost})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
