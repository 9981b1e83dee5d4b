# medroute/domain/graph.py
from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence

from medroute.domain.errors import InvalidSize, InvalidWeight, check_index

Weight = int | float
Adjacency = tuple[int, Weight]


class WeightedGraph:
    """
    Undirected, edge-weighted graph over dense node ids [0, node_count).

    Edges are append-only and stored on both endpoints. Parallel edges are
    kept as-is (multigraph), never merged.
    """

    def __init__(self, node_count: int):
        if node_count < 0:
            raise InvalidSize(f"node_count must be >= 0, got {node_count}")
        self._adj: list[list[Adjacency]] = [[] for _ in range(node_count)]
        self._edges: list[tuple[int, int, Weight]] = []

    @classmethod
    def from_edges(
        cls, node_count: int, edges: Iterable[tuple[int, int, Weight]]
    ) -> WeightedGraph:
        g = cls(node_count)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g

    @property
    def node_count(self) -> int:
        return len(self._adj)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._adj)

    def has_node(self, u: int) -> bool:
        return 0 <= u < len(self._adj)

    def _check_node(self, u: int, what: str = "node") -> int:
        return check_index(u, 0, len(self._adj) - 1, what)

    def add_edge(self, u: int, v: int, weight: Weight) -> None:
        self._check_node(u)
        self._check_node(v)
        if not (weight >= 0 and math.isfinite(weight)):
            raise InvalidWeight(f"edge ({u}, {v}) weight must be finite and >= 0, got {weight}")
        self._adj[u].append((v, weight))
        self._adj[v].append((u, weight))
        self._edges.append((u, v, weight))

    def neighbors(self, u: int) -> tuple[Adjacency, ...]:
        return tuple(self._adj[self._check_node(u)])

    def edges(self) -> Iterator[tuple[int, int, Weight]]:
        """Yield (u, v, w) once per add_edge call, in insertion order."""
        yield from self._edges

    def edge_weight(self, u: int, v: int) -> Weight | None:
        """Cheapest parallel edge between u and v, or None if not adjacent."""
        self._check_node(v)
        best = math.inf
        for n, w in self._adj[self._check_node(u)]:
            if n == v and w < best:
                best = w
        return None if best == math.inf else best

    def path_cost(self, path: Sequence[int]) -> Weight:
        total: Weight = 0
        for a, b in zip(path, path[1:]):
            w = self.edge_weight(a, b)
            if w is None:
                raise ValueError(f"nodes {a} and {b} are not adjacent")
            total += w
        return total

    def __repr__(self) -> str:
        return f"WeightedGraph(nodes={self.node_count}, edges={self.edge_count})"
