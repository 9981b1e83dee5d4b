# tests/dispatch/test_dispatcher.py
import numpy as np
import pytest

from medroute.dispatch.dispatcher import NO_TASK, TaskDispatcher
from medroute.domain.errors import InvalidPriority, InvalidSize, OutOfRange
from medroute.sim.hooks import NoopHooks


@pytest.fixture
def loaded() -> TaskDispatcher:
    d = TaskDispatcher(10)
    d.add_task(1, 5)
    d.add_task(2, 1)
    d.add_task(3, 3)
    return d


def test_dispatches_in_descending_priority(loaded):
    assert loaded.dispatch_next_task() == 1
    assert loaded.dispatch_next_task() == 3
    assert loaded.dispatch_next_task() == 2
    # drained queue is a normal outcome
    assert loaded.dispatch_next_task() is NO_TASK
    assert loaded.dispatch_next_task() is None


def test_equal_priorities_dispatch_fifo():
    d = TaskDispatcher(5)
    for tid in (4, 2, 5):
        d.add_task(tid, 7)
    d.add_task(1, 8)
    assert list(d.drain()) == [1, 4, 2, 5]


def test_counter_tracks_queued_priority_mass(loaded):
    assert loaded.total_pending_priority() == 9
    assert loaded.priority_mass(2) == 6
    assert loaded.pending_priority(3) == 3

    loaded.dispatch_next_task()  # task 1
    assert loaded.pending_priority(1) == 0
    # lower and higher ids keep their own mass
    assert loaded.pending_priority(2) == 1
    assert loaded.pending_priority(3) == 3
    assert loaded.total_pending_priority() == 4


def test_dispatch_clears_only_own_contribution():
    d = TaskDispatcher(4)
    d.add_task(2, 4)
    d.add_task(3, 7)
    assert d.dispatch_next_task() == 3
    # a prefix-sum subtraction at 3 would drive the counter to -4 here
    assert d.pending_priority(3) == 0
    assert d.pending_priority(2) == 4
    assert d.total_pending_priority() == 4
    assert d.dispatch_next_task() == 2
    assert d.total_pending_priority() == 0


def test_duplicate_task_ids_queue_independent_entries():
    d = TaskDispatcher(3)
    d.add_task(1, 5)
    d.add_task(1, 2)
    assert len(d) == 2
    assert d.pending_priority(1) == 7
    assert d.dispatch_next_task() == 1
    assert d.pending_priority(1) == 2
    assert d.dispatch_next_task() == 1
    assert d.pending_priority(1) == 0
    assert not d


def test_peek_does_not_remove(loaded):
    assert loaded.peek() == (1, 5)
    assert len(loaded) == 3
    assert TaskDispatcher(1).peek() is None


@pytest.mark.parametrize("task_id", [0, -2, 11])
def test_task_id_out_of_range(task_id):
    d = TaskDispatcher(10)
    with pytest.raises(OutOfRange):
        d.add_task(task_id, 1)
    assert len(d) == 0
    assert d.total_pending_priority() == 0


def test_negative_capacity_rejected():
    with pytest.raises(InvalidSize):
        TaskDispatcher(-1)


class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []

    def task_added(self, *, task_id, priority, qsize):
        self.trace.append(("added", task_id, priority, qsize))

    def task_dispatched(self, *, task_id, priority, qsize):
        self.trace.append(("dispatched", task_id, priority, qsize))

    def error(self, *, reason, **kw):
        self.trace.append(("error", reason))


def test_hooks_observe_queue_lifecycle():
    hooks = TraceHooks()
    d = TaskDispatcher(2, hooks=hooks)
    d.add_task(2, 9)
    with pytest.raises(OutOfRange):
        d.add_task(3, 1)
    d.dispatch_next_task()
    d.dispatch_next_task()  # empty: no hook call
    assert hooks.trace == [
        ("added", 2, 9, 1),
        ("error", "task_id_out_of_range"),
        ("dispatched", 2, 9, 0),
    ]


@pytest.mark.parametrize("priority", [0.6, 2.0, "5", None, True])
def test_non_integer_priority_rejected(priority):
    hooks = TraceHooks()
    d = TaskDispatcher(3, hooks=hooks)
    with pytest.raises(InvalidPriority):
        d.add_task(1, priority)
    assert len(d) == 0
    assert d.pending_priority(1) == 0
    assert hooks.trace == [("error", "priority_not_integer")]


def test_numpy_integer_priority_is_stored_as_int():
    d = TaskDispatcher(3)
    d.add_task(1, np.int64(4))
    d.add_task(2, np.int32(9))
    assert d.peek() == (2, 9)
    assert type(d.peek()[1]) is int
    assert d.total_pending_priority() == 13


def test_large_priorities_keep_exact_mass():
    d = TaskDispatcher(2)
    d.add_task(1, 2**62)
    d.add_task(1, 2**62)
    assert d.pending_priority(1) == 2**63
    assert d.dispatch_next_task() == 1
    assert d.pending_priority(1) == 2**62
