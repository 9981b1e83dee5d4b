# sim/synthetic.py
import math
from dataclasses import dataclass

import numpy as np

from medroute.domain.entities.geography import Point
from medroute.domain.graph import WeightedGraph


@dataclass
class Facility:
    graph: WeightedGraph
    points: dict[int, Point]


def random_facility(
    rng: np.random.Generator,
    node_count: int,
    *,
    extra_edges: int = 0,
    max_detour: int = 5,
    extent_m: float = 100.0,
) -> Facility:
    """
    Connected random facility: nodes scattered over a square floor plan, a
    random spanning tree, then extra_edges additional corridors.

    Every edge weight is the ceiling of the straight-line distance between its
    endpoints plus a detour in [0, max_detour], so a euclidean heuristic over
    the returned points is admissible.
    """
    xy = rng.uniform(0.0, extent_m, size=(node_count, 2))
    points = {i: Point(float(x), float(y)) for i, (x, y) in enumerate(xy)}
    g = WeightedGraph(node_count)

    def connect(u: int, v: int) -> None:
        a, b = points[u], points[v]
        d = math.ceil(math.hypot(b.x - a.x, b.y - a.y))
        g.add_edge(u, v, d + int(rng.integers(0, max_detour + 1)))

    order = rng.permutation(node_count)
    for k in range(1, node_count):
        connect(int(order[k]), int(order[rng.integers(0, k)]))
    if node_count > 1:
        for _ in range(extra_edges):
            u, v = rng.choice(node_count, size=2, replace=False)
            connect(int(u), int(v))
    return Facility(graph=g, points=points)
