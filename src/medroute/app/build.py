# medroute/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field

from medroute.config.models import ScenarioModel
from medroute.dispatch.dispatcher import NO_TASK, TaskDispatcher
from medroute.domain.entities.geography import Point, Route
from medroute.domain.graph import WeightedGraph
from medroute.io.kernel_logging import KernelLogging  # JSON logs
from medroute.io.recorder import Recorder
from medroute.routing.astar import PathFinder
from medroute.runtime.registries import make_graph, make_heuristic
from medroute.sim.hooks import KernelHooks, NoopHooks


@dataclass
class App:
    model: ScenarioModel
    graph: WeightedGraph
    points: dict[int, Point]
    pathfinder: PathFinder
    dispatcher: TaskDispatcher
    hooks: KernelHooks


@dataclass
class RunResult:
    dispatched: list[int] = field(default_factory=list)
    routes: list[tuple[int, int, Route | None]] = field(default_factory=list)


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        KernelLogging(
            run_id=model.run_id,
            recorder=recorder,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Facility graph & search
    facility = make_graph(model.graph)
    heuristic = make_heuristic(model.heuristic, deps={"points": facility.points})
    pathfinder = PathFinder(facility.graph, heuristic, hooks=hooks)

    # 3) Dispatcher, seeded with the configured tasks
    dispatcher = TaskDispatcher(model.dispatcher.capacity, hooks=hooks)
    for t in model.tasks:
        dispatcher.add_task(t.task_id, t.priority)

    return App(model, facility.graph, facility.points, pathfinder, dispatcher, hooks)


def run(app: App, *, max_dispatch: int | None = None) -> RunResult:
    """Dispatch queued tasks (all, or up to max_dispatch), then answer route queries."""
    out = RunResult()
    while max_dispatch is None or len(out.dispatched) < max_dispatch:
        task_id = app.dispatcher.dispatch_next_task()
        if task_id is NO_TASK:
            break
        out.dispatched.append(task_id)
    for q in app.model.routes:
        out.routes.append((q.start, q.goal, app.pathfinder.find_route(q.start, q.goal)))
    return out
