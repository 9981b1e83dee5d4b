# medroute/routing/astar.py
"""
Heap-based A* over a WeightedGraph.

Open-set entries are (f_score, seq, node); seq is a push counter, so equal
f_score entries pop in FIFO order and results are deterministic. Superseded
entries stay in the heap and are skipped when popped.
"""

import heapq
import math
import time

from medroute.domain.entities.geography import Route
from medroute.domain.errors import check_index
from medroute.domain.graph import WeightedGraph
from medroute.routing.heuristics import Heuristic, id_distance
from medroute.sim.hooks import KernelHooks, NoopHooks


class PathFinder:
    def __init__(
        self,
        graph: WeightedGraph,
        heuristic: Heuristic = id_distance,
        hooks: KernelHooks | None = None,
    ):
        self.graph = graph
        self.heuristic = heuristic
        self._hooks = hooks or NoopHooks()

    def find_path(self, start: int, goal: int) -> list[int]:
        """Ordered node ids from start to goal, or [] when goal is unreachable."""
        route = self.find_route(start, goal)
        return route.nodes if route else []

    def find_route(self, start: int, goal: int) -> Route | None:
        g, h = self.graph, self.heuristic
        last = g.node_count - 1
        check_index(start, 0, last, "start")
        check_index(goal, 0, last, "goal")

        t0 = time.perf_counter()
        self._hooks.search_start(start=start, goal=goal)

        g_score = [math.inf] * g.node_count
        f_score = [math.inf] * g.node_count
        came_from = [-1] * g.node_count
        g_score[start] = 0
        f_score[start] = h(start, goal)

        seq = 0
        open_set = [(f_score[start], seq, start)]
        expanded = 0
        route = None

        while open_set:
            f, _, current = heapq.heappop(open_set)
            # Skip outdated entries
            if f > f_score[current]:
                continue
            if current == goal:
                route = Route(self._reconstruct(came_from, goal), g_score[goal], expanded)
                break
            expanded += 1

            for neighbor, weight in g.neighbors(current):
                tentative = g_score[current] + weight
                if tentative < g_score[neighbor]:
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative
                    f_score[neighbor] = tentative + h(neighbor, goal)
                    seq += 1
                    heapq.heappush(open_set, (f_score[neighbor], seq, neighbor))

        self._hooks.search_end(
            start=start,
            goal=goal,
            found=route is not None,
            cost=route.cost if route else None,
            expanded=expanded,
            ms=(time.perf_counter() - t0) * 1000,
        )
        return route

    @staticmethod
    def _reconstruct(came_from: list[int], goal: int) -> list[int]:
        path = []
        at = goal
        while at != -1:
            path.append(at)
            at = came_from[at]
        path.reverse()
        return path


def find_path(
    graph: WeightedGraph, start: int, goal: int, heuristic: Heuristic = id_distance
) -> list[int]:
    return PathFinder(graph, heuristic).find_path(start, goal)
