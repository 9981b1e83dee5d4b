# medroute/dispatch/dispatcher.py
import heapq
from collections.abc import Iterator

from medroute.dispatch.counter import IndexedCounter
from medroute.domain.errors import InvalidPriority, OutOfRange, check_index, check_integral
from medroute.sim.hooks import KernelHooks, NoopHooks

# Returned by dispatch_next_task when the queue is drained
NO_TASK = None


class TaskDispatcher:
    """
    Max-priority task queue with per-index priority mass kept in an
    IndexedCounter.

    Heap entries are (-priority, seq, task_id): highest priority first, FIFO
    among equal priorities. The counter at task_id always holds the summed
    priority of the entries for that id still waiting in the queue.
    """

    def __init__(self, capacity: int, hooks: KernelHooks | None = None):
        self._counter = IndexedCounter(capacity)
        self._q: list[tuple[int, int, int]] = []
        self._seq = 0
        self._hooks = hooks or NoopHooks()

    @property
    def capacity(self) -> int:
        return self._counter.size

    def __len__(self) -> int:
        return len(self._q)

    def __bool__(self) -> bool:
        return bool(self._q)

    def add_task(self, task_id: int, priority: int) -> None:
        try:
            check_index(task_id, 1, self.capacity, "task_id")
        except OutOfRange:
            self._hooks.error(reason="task_id_out_of_range", task_id=task_id)
            raise
        try:
            priority = int(check_integral(priority, "priority"))
        except InvalidPriority:
            self._hooks.error(reason="priority_not_integer", task_id=task_id)
            raise
        self._seq += 1
        heapq.heappush(self._q, (-priority, self._seq, task_id))
        self._counter.update(task_id, priority)
        self._hooks.task_added(task_id=task_id, priority=priority, qsize=len(self._q))

    def dispatch_next_task(self) -> int | None:
        if not self._q:
            return NO_TASK
        neg, _, task_id = heapq.heappop(self._q)
        # Clear only this entry's own contribution; other ids keep their mass
        self._counter.update(task_id, neg)
        self._hooks.task_dispatched(task_id=task_id, priority=-neg, qsize=len(self._q))
        return task_id

    def peek(self) -> tuple[int, int] | None:
        """(task_id, priority) of the next dispatch, without removing it."""
        if not self._q:
            return None
        neg, _, task_id = self._q[0]
        return task_id, -neg

    def drain(self) -> Iterator[int]:
        while self._q:
            yield self.dispatch_next_task()

    # --------------- Aggregate queries over queued priority mass ---------------

    def pending_priority(self, task_id: int) -> int:
        return self._counter.value(task_id)

    def priority_mass(self, upto: int) -> int:
        """Summed priority of queued entries with task_id <= upto."""
        return self._counter.query(upto)

    def total_pending_priority(self) -> int:
        return self._counter.total()
