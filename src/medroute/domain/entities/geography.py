from dataclasses import dataclass


# Coordinates of a facility location, used by metric heuristics
@dataclass(frozen=True)
class Point:
    x: float  # meters in the facility's floor-plan frame
    y: float


@dataclass
class Route:
    nodes: list[int]
    cost: float
    expanded: int = 0  # nodes popped and expanded by the search

    @property
    def start(self) -> int:
        return self.nodes[0]

    @property
    def goal(self) -> int:
        return self.nodes[-1]

    @property
    def hops(self) -> int:
        return len(self.nodes) - 1

    def __len__(self) -> int:
        return len(self.nodes)
