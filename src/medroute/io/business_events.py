# medroute/io/business_events.py

from dataclasses import dataclass


# Base type for analytics events
@dataclass
class BizEvent:
    run_id: str
    seq: int  # emission order within the run
    name: str  # stable event name


@dataclass
class TaskAddedBiz(BizEvent):
    task_id: int
    priority: int
    qsize: int


@dataclass
class TaskDispatchedBiz(BizEvent):
    task_id: int
    priority: int
    qsize: int


@dataclass
class RouteFoundBiz(BizEvent):
    start: int
    goal: int
    found: bool
    cost: float | None = None
    expanded: int | None = None
