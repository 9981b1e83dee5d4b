# medroute/dispatch/counter.py
from __future__ import annotations

from collections.abc import Sequence

from medroute.domain.errors import InvalidSize, check_index, check_integral


class IndexedCounter:
    """
    Fenwick tree over indices 1..size with O(log n) point update and prefix sum.

    Backed by a list of Python ints of length size + 1 (slot 0 unused), so
    sums never wrap.
    """

    def __init__(self, size: int):
        if size < 0:
            raise InvalidSize(f"size must be >= 0, got {size}")
        self._n = size
        self._tree = [0] * (size + 1)

    @classmethod
    def from_values(cls, values: Sequence[int]) -> IndexedCounter:
        """Build in O(n); values[0] is the point value at index 1."""
        c = cls(len(values))
        tree = c._tree
        for i, v in enumerate(values, start=1):
            tree[i] = int(check_integral(v, "value"))
        for i in range(1, c._n + 1):
            parent = i + (i & -i)
            if parent <= c._n:
                tree[parent] += tree[i]
        return c

    @property
    def size(self) -> int:
        return self._n

    def __len__(self) -> int:
        return self._n

    def update(self, index: int, delta: int) -> None:
        i = check_index(index, 1, self._n, "index")
        delta = int(check_integral(delta, "delta"))
        tree, n = self._tree, self._n
        while i <= n:
            tree[i] += delta
            i += i & -i

    def query(self, index: int) -> int:
        """Sum of every delta applied at indices 1..index; query(0) == 0."""
        i = check_index(index, 0, self._n, "index")
        tree = self._tree
        s = 0
        while i > 0:
            s += tree[i]
            i -= i & -i
        return s

    def value(self, index: int) -> int:
        check_index(index, 1, self._n, "index")
        return self.query(index) - self.query(index - 1)

    def range_sum(self, lo: int, hi: int) -> int:
        if lo > hi:
            return 0
        check_index(lo, 1, self._n, "lo")
        return self.query(hi) - self.query(lo - 1)

    def total(self) -> int:
        return self.query(self._n)

    def to_list(self) -> list[int]:
        return [self.value(i) for i in range(1, self._n + 1)]

    def __repr__(self) -> str:
        return f"IndexedCounter(size={self._n}, total={self.total()})"
