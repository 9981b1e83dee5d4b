# tests/sim/test_synthetic.py
import math

from medroute.sim.rng import RNGRegistry
from medroute.sim.synthetic import random_facility


def _reachable(g, source):
    seen, stack = {source}, [source]
    while stack:
        u = stack.pop()
        for v, _ in g.neighbors(u):
            if v not in seen:
                seen.add(v)
                stack.append(v)
    return seen


def test_random_facility_is_connected_and_sized():
    fac = random_facility(RNGRegistry(5).stream("facility"), 30, extra_edges=10)
    assert fac.graph.node_count == 30
    assert fac.graph.edge_count == 29 + 10
    assert _reachable(fac.graph, 0) == set(range(30))
    assert set(fac.points) == set(range(30))


def test_edge_weights_cover_straight_line_distance():
    fac = random_facility(RNGRegistry(9).stream("facility"), 15, extra_edges=15)
    for u, v, w in fac.graph.edges():
        a, b = fac.points[u], fac.points[v]
        assert isinstance(w, int)
        assert w >= math.hypot(b.x - a.x, b.y - a.y)


def test_same_seed_same_facility():
    a = random_facility(RNGRegistry(3).stream("facility"), 12, extra_edges=4)
    b = random_facility(RNGRegistry(3).stream("facility"), 12, extra_edges=4)
    assert list(a.graph.edges()) == list(b.graph.edges())
    assert a.points == b.points


def test_tiny_facilities():
    rng = RNGRegistry(1).stream("facility")
    assert random_facility(rng, 0).graph.node_count == 0
    one = random_facility(rng, 1, extra_edges=3)
    assert one.graph.edge_count == 0
