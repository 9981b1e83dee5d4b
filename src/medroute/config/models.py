from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- GRAPH SOURCES ---------------------


class EdgeListGraphModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["edges"] = "edges"
    node_count: int = Field(ge=0)
    edges: list[tuple[int, int, int | float]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_edges(self):
        n = self.node_count
        for u, v, w in self.edges:
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"edge ({u}, {v}) references a node outside [0, {n})")
            if w < 0:
                raise ValueError(f"edge ({u}, {v}) has negative weight {w}")
        return self


class RandomGraphModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["random"] = "random"
    node_count: int = Field(ge=0)
    extra_edges: int = Field(default=0, ge=0)
    max_detour: int = Field(default=5, ge=0)
    extent_m: float = Field(default=100.0, gt=0)
    seed: int = 123


GraphUnion = Annotated[EdgeListGraphModel | RandomGraphModel, Field(discriminator="kind")]

# ----------------- HEURISTICS ---------------------


class IdDistanceHeuristicModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["id_distance"] = "id_distance"


class ZeroHeuristicModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["zero"] = "zero"


class _PointsHeuristicModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # node -> (x, y); may be omitted for random graphs, which carry their own
    points: dict[int, tuple[float, float]] = Field(default_factory=dict)
    scale: float = Field(default=1.0, gt=0)


class EuclideanHeuristicModel(_PointsHeuristicModel):
    kind: Literal["euclidean"] = "euclidean"


class ManhattanHeuristicModel(_PointsHeuristicModel):
    kind: Literal["manhattan"] = "manhattan"


HeuristicUnion = Annotated[
    IdDistanceHeuristicModel
    | ZeroHeuristicModel
    | EuclideanHeuristicModel
    | ManhattanHeuristicModel,
    Field(discriminator="kind"),
]

# ----------------- DISPATCH ---------------------


class DispatcherModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    capacity: int = Field(default=10, ge=0)


class TaskModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    task_id: int
    priority: int


class RouteQueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    start: int
    goal: int


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    log: LogModel = LogModel()
    graph: GraphUnion
    heuristic: HeuristicUnion = Field(default_factory=IdDistanceHeuristicModel)
    dispatcher: DispatcherModel = DispatcherModel()
    tasks: list[TaskModel] = Field(default_factory=list)
    routes: list[RouteQueryModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_heuristic_points(self):
        h = self.heuristic
        if not isinstance(h, _PointsHeuristicModel):
            return self
        # random graphs carry their own coordinates unless the config overrides them
        if isinstance(self.graph, RandomGraphModel) and not h.points:
            return self
        missing = [n for n in range(self.graph.node_count) if n not in h.points]
        if missing:
            shown = ", ".join(str(n) for n in missing[:10])
            raise ValueError(f"{h.kind} heuristic has no coordinates for node(s) {shown}")
        return self
