# medroute/routing/heuristics.py
import math
from collections.abc import Callable, Mapping, Sequence

from medroute.domain.entities.geography import Point

Heuristic = Callable[[int, int], float]


def id_distance(a: int, b: int) -> int:
    """Absolute difference of node ids.

    Placeholder estimate only: it is admissible just when ids happen to be
    laid out along a metric. Supply a spatial heuristic for guaranteed-optimal
    routes.
    """
    return abs(a - b)


def zero(a: int, b: int) -> int:
    # A* with h == 0 is Dijkstra
    return 0


def _lookup(points: Mapping[int, Point], scale: float):
    if scale <= 0:
        raise ValueError(f"scale must be > 0, got {scale}")

    def point(n: int) -> Point:
        try:
            return points[n]
        except KeyError:
            raise KeyError(f"no coordinates for node {n}") from None

    return point


def euclidean(points: Mapping[int, Point], scale: float = 1.0) -> Heuristic:
    """Straight-line distance between node coordinates, divided by scale."""
    point = _lookup(points, scale)

    def h(u: int, goal: int) -> float:
        a, b = point(u), point(goal)
        return math.hypot(b.x - a.x, b.y - a.y) / scale

    return h


def manhattan(points: Mapping[int, Point], scale: float = 1.0) -> Heuristic:
    """Axis-aligned (corridor grid) distance between node coordinates."""
    point = _lookup(points, scale)

    def h(u: int, goal: int) -> float:
        a, b = point(u), point(goal)
        return (abs(b.x - a.x) + abs(b.y - a.y)) / scale

    return h


def format_path(path: Sequence[int]) -> str:
    return " -> ".join(str(n) for n in path)
