# runtime/registries.py
from collections.abc import Callable
from typing import Any

from medroute.config.models import (
    EdgeListGraphModel,
    EuclideanHeuristicModel,
    GraphUnion,
    HeuristicUnion,
    IdDistanceHeuristicModel,
    ManhattanHeuristicModel,
    RandomGraphModel,
    ZeroHeuristicModel,
)
from medroute.domain.entities.geography import Point
from medroute.domain.graph import WeightedGraph
from medroute.routing import heuristics
from medroute.routing.heuristics import Heuristic
from medroute.sim.rng import RNGRegistry
from medroute.sim.synthetic import Facility, random_facility

GraphFactory = Callable[[GraphUnion, dict[str, Any]], Facility]
HeuristicFactory = Callable[[HeuristicUnion, dict[str, Any]], Heuristic]

_graph_registry: dict[str, GraphFactory] = {}
_heuristic_registry: dict[str, HeuristicFactory] = {}


# ------------------- Graph sources ---------------------------


def register_graph(kind: str):
    def deco(fn: GraphFactory):
        _graph_registry[kind] = fn
        return fn

    return deco


def make_graph(cfg: GraphUnion, *, deps: dict | None = None) -> Facility:
    try:
        factory = _graph_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown graph kind {cfg.kind!r}") from None
    return factory(cfg, deps or {})


@register_graph("edges")
def _make_edge_list(cfg: EdgeListGraphModel, deps):
    g = WeightedGraph.from_edges(cfg.node_count, cfg.edges)
    return Facility(graph=g, points={})


@register_graph("random")
def _make_random(cfg: RandomGraphModel, deps):
    rng = deps.get("rng")
    if rng is None:
        rng = RNGRegistry(cfg.seed).stream("facility")
    return random_facility(
        rng,
        cfg.node_count,
        extra_edges=cfg.extra_edges,
        max_detour=cfg.max_detour,
        extent_m=cfg.extent_m,
    )


# ------------------- Heuristics ---------------------------


def register_heuristic(kind: str):
    def deco(fn: HeuristicFactory):
        _heuristic_registry[kind] = fn
        return fn

    return deco


def make_heuristic(cfg: HeuristicUnion, *, deps: dict | None = None) -> Heuristic:
    """
    deps can include:
      - 'points': dict[int, Point]  # coordinates carried by the graph source,
                                    # used when the config gives none
    """
    try:
        factory = _heuristic_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown heuristic kind {cfg.kind!r}") from None
    return factory(cfg, deps or {})


@register_heuristic("id_distance")
def _make_id_distance(cfg: IdDistanceHeuristicModel, deps):
    return heuristics.id_distance


@register_heuristic("zero")
def _make_zero(cfg: ZeroHeuristicModel, deps):
    return heuristics.zero


def _points(cfg: EuclideanHeuristicModel | ManhattanHeuristicModel, deps) -> dict[int, Point]:
    if cfg.points:
        return {n: Point(x, y) for n, (x, y) in cfg.points.items()}
    if deps.get("points"):
        return deps["points"]
    raise ValueError(f"{cfg.kind} heuristic needs node coordinates")


@register_heuristic("euclidean")
def _make_euclidean(cfg: EuclideanHeuristicModel, deps):
    return heuristics.euclidean(_points(cfg, deps), scale=cfg.scale)


@register_heuristic("manhattan")
def _make_manhattan(cfg: ManhattanHeuristicModel, deps):
    return heuristics.manhattan(_points(cfg, deps), scale=cfg.scale)
