# medroute/dispatch/slots.py
import heapq
from collections import Counter
from collections.abc import Hashable

from medroute.dispatch.dispatcher import NO_TASK, TaskDispatcher
from medroute.domain.errors import CapacityExceeded, InvalidSize, check_index
from medroute.sim.hooks import KernelHooks


class SlotTable:
    """Binds arbitrary task keys to dense slots 1..capacity, lowest free slot first."""

    def __init__(self, capacity: int):
        if capacity < 0:
            raise InvalidSize(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self._free = list(range(1, capacity + 1))  # sorted, so already a heap
        self._slot: dict[Hashable, int] = {}
        self._key: dict[int, Hashable] = {}

    def __len__(self) -> int:
        return len(self._slot)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._slot

    def allocate(self, key: Hashable) -> int:
        if key in self._slot:
            return self._slot[key]
        if not self._free:
            raise CapacityExceeded(f"all {self.capacity} slots in use")
        slot = heapq.heappop(self._free)
        self._slot[key] = slot
        self._key[slot] = key
        return slot

    def release(self, key: Hashable) -> int:
        slot = self._slot.pop(key)
        del self._key[slot]
        heapq.heappush(self._free, slot)
        return slot

    def slot_of(self, key: Hashable) -> int:
        return self._slot[key]

    def key_of(self, slot: int) -> Hashable:
        check_index(slot, 1, self.capacity, "slot")
        return self._key[slot]


class KeyedDispatcher:
    """TaskDispatcher addressed by task keys instead of dense ids."""

    def __init__(self, capacity: int, hooks: KernelHooks | None = None):
        self.dispatcher = TaskDispatcher(capacity, hooks=hooks)
        self.slots = SlotTable(capacity)
        self._queued: Counter[int] = Counter()

    def __len__(self) -> int:
        return len(self.dispatcher)

    def add_task(self, key: Hashable, priority: int) -> int:
        slot = self.slots.allocate(key)
        self.dispatcher.add_task(slot, priority)
        self._queued[slot] += 1
        return slot

    def dispatch_next_task(self) -> Hashable | None:
        slot = self.dispatcher.dispatch_next_task()
        if slot is NO_TASK:
            return NO_TASK
        key = self.slots.key_of(slot)
        self._queued[slot] -= 1
        if not self._queued[slot]:
            del self._queued[slot]
            self.slots.release(key)
        return key
