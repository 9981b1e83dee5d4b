# tests/app/test_build_and_run.py
import pytest
from pydantic import ValidationError

from medroute.app.build import build, run
from medroute.domain.errors import OutOfRange
from medroute.io.business_events import RouteFoundBiz, TaskDispatchedBiz
from medroute.io.recorder import MemorySink, Recorder


def hospital_cfg(**over):
    cfg = {
        "name": "test",
        "run_id": "t-1",
        "graph": {
            "kind": "edges",
            "node_count": 5,
            "edges": [(0, 1, 1), (1, 2, 1), (0, 3, 2), (3, 4, 1), (2, 4, 3)],
        },
        "dispatcher": {"capacity": 10},
        "tasks": [
            {"task_id": 1, "priority": 5},
            {"task_id": 2, "priority": 1},
            {"task_id": 3, "priority": 3},
        ],
        "routes": [{"start": 0, "goal": 4}],
    }
    cfg.update(over)
    return cfg


def test_build_runs():
    app = build(hospital_cfg(), use_logging=False)
    result = run(app)
    assert result.dispatched == [1, 3, 2]
    (start, goal, route), = result.routes
    assert (start, goal) == (0, 4)
    assert route.nodes == [0, 3, 4]
    assert route.cost == 3
    assert isinstance(route.cost, int)


def test_run_respects_dispatch_limit():
    app = build(hospital_cfg(), use_logging=False)
    assert run(app, max_dispatch=1).dispatched == [1]
    assert len(app.dispatcher) == 2


def test_unreachable_query_yields_none():
    cfg = hospital_cfg(
        graph={"kind": "edges", "node_count": 3, "edges": [(0, 1, 2)]},
        routes=[{"start": 0, "goal": 2}],
    )
    result = run(build(cfg, use_logging=False))
    assert result.routes == [(0, 2, None)]


def test_random_graph_with_its_own_coordinates():
    cfg = hospital_cfg(
        graph={"kind": "random", "node_count": 20, "extra_edges": 10, "seed": 4},
        heuristic={"kind": "euclidean"},
        routes=[{"start": 0, "goal": 19}, {"start": 5, "goal": 11}],
    )
    app = build(cfg, use_logging=False)
    assert app.graph.node_count == 20
    for start, goal, route in run(app).routes:
        assert route.nodes[0] == start and route.nodes[-1] == goal
        assert app.graph.path_cost(route.nodes) == route.cost


def test_explicit_points_for_manhattan_heuristic():
    pts = {i: (float(i), 0.0) for i in range(5)}
    cfg = hospital_cfg(heuristic={"kind": "manhattan", "points": pts, "scale": 10.0})
    (_, _, route), = run(build(cfg, use_logging=False)).routes
    assert route.nodes == [0, 3, 4]


def test_metric_heuristic_without_points_is_rejected():
    with pytest.raises(ValidationError, match="coordinates"):
        build(hospital_cfg(heuristic={"kind": "euclidean"}), use_logging=False)


def test_metric_heuristic_must_cover_every_node():
    pts = {0: (0.0, 0.0), 2: (2.0, 0.0)}
    with pytest.raises(ValidationError, match=r"node\(s\) 1, 3, 4"):
        build(hospital_cfg(heuristic={"kind": "manhattan", "points": pts}), use_logging=False)


def test_config_rejects_bad_graph():
    with pytest.raises(ValidationError):
        build(
            hospital_cfg(graph={"kind": "edges", "node_count": 2, "edges": [(0, 1, -3)]}),
            use_logging=False,
        )
    with pytest.raises(ValidationError):
        build(hospital_cfg(graph={"kind": "edges", "node_count": 2, "edges": [(0, 4, 1)]}))
    with pytest.raises(ValidationError):
        build(hospital_cfg(colour="blue"))


def test_out_of_range_task_surfaces_typed_error():
    with pytest.raises(OutOfRange):
        build(hospital_cfg(tasks=[{"task_id": 11, "priority": 1}]), use_logging=False)


def test_out_of_range_route_query_surfaces_typed_error():
    app = build(hospital_cfg(routes=[{"start": 0, "goal": 9}]), use_logging=False)
    with pytest.raises(OutOfRange):
        run(app)


def test_recorder_receives_business_events():
    sink = MemorySink()
    app = build(hospital_cfg(), recorder=Recorder(sink))
    run(app)
    dispatched = [e.task_id for e in sink.events if isinstance(e, TaskDispatchedBiz)]
    assert dispatched == [1, 3, 2]
    routes = [e for e in sink.events if isinstance(e, RouteFoundBiz)]
    assert len(routes) == 1
    assert routes[0].found and routes[0].cost == 3
    assert all(e.run_id == "t-1" for e in sink.events)
    seqs = [e.seq for e in sink.events]
    assert seqs == sorted(seqs)
