# sim/hooks.py
from typing import Protocol


class KernelHooks(Protocol):
    def search_start(self, *, start, goal): ...
    def search_end(self, *, start, goal, found, cost, expanded, ms): ...
    def task_added(self, *, task_id, priority, qsize): ...
    def task_dispatched(self, *, task_id, priority, qsize): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def task_added(self, **_):
        pass

    def task_dispatched(self, **_):
        pass

    def error(self, **_):
        pass
