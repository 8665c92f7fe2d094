"""Indexed binary-heap priority queue used by the engine."""

from __future__ import annotations

import numbers
from typing import Iterator, List, Optional, Tuple

from .exceptions import QueueError, QueueUnderflow, VertexOutOfRange

Vertex = int
Float = float


class IndexedMinPQ:
    """Min-priority queue over vertex ids ``0`` .. ``capacity-1``.

    Each vertex has at most one live entry. Entries are ordered by key, then
    by vertex id, so extraction order is fully deterministic. A position index
    maps each vertex to its slot in the heap, which gives O(1) membership
    tests and O(log n) ``insert``, ``decrease_key`` and ``extract_min``.

    Args:
        capacity: Number of distinct vertex ids the queue may hold.

    Examples:
        ```python
        >>> pq = IndexedMinPQ(4)
        >>> pq.insert(3, 2.0)
        >>> pq.insert(1, 5.0)
        >>> pq.decrease_key(1, 2.0)
        >>> pq.extract_min()
        1
        ```
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative.")
        self._capacity = int(capacity)
        self._heap: List[Vertex] = []
        self._pos: List[int] = [-1] * self._capacity
        self._keys: List[Optional[Float]] = [None] * self._capacity

    # ---- internals ----------------------------------------------------

    def _check(self, v: Vertex) -> None:
        if not 0 <= v < self._capacity:
            raise VertexOutOfRange(v, self._capacity)

    def _less(self, i: int, j: int) -> bool:
        a = self._heap[i]
        b = self._heap[j]
        ka = self._keys[a]
        kb = self._keys[b]
        return ka < kb or (ka == kb and a < b)

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._pos[heap[i]] = i
        self._pos[heap[j]] = j

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(i, parent):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        n = len(self._heap)
        while True:
            child = 2 * i + 1
            if child >= n:
                break
            if child + 1 < n and self._less(child + 1, child):
                child += 1
            if not self._less(child, i):
                break
            self._swap(i, child)
            i = child

    # ---- public API ---------------------------------------------------

    @property
    def capacity(self) -> int:
        """Largest vertex id plus one that the queue accepts."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, v: object) -> bool:
        if isinstance(v, bool) or not isinstance(v, numbers.Integral):
            return False
        return 0 <= v < self._capacity and self._pos[v] >= 0

    def contains(self, v: Vertex) -> bool:
        """Return ``True`` if ``v`` currently has a live entry."""
        self._check(v)
        return self._pos[v] >= 0

    def key_of(self, v: Vertex) -> Float:
        """Return the current key of ``v``.

        Raises:
            QueueUnderflow: If ``v`` is not in the queue.
        """
        if not self.contains(v):
            raise QueueUnderflow(f"vertex {v} is not in the queue")
        return self._keys[v]  # type: ignore[return-value]

    def insert(self, v: Vertex, key: Float) -> None:
        """Insert ``v`` with priority ``key``.

        Raises:
            QueueError: If ``v`` already has a live entry.
        """
        self._check(v)
        if self._pos[v] >= 0:
            raise QueueError(f"vertex {v} is already in the queue")
        self._keys[v] = key
        self._pos[v] = len(self._heap)
        self._heap.append(v)
        self._sift_up(self._pos[v])

    def decrease_key(self, v: Vertex, key: Float) -> None:
        """Lower the key of ``v`` to ``key`` and restore heap order.

        Raises:
            QueueUnderflow: If ``v`` is not in the queue.
            QueueError: If ``key`` is not strictly smaller than the current key.
        """
        self._check(v)
        if self._pos[v] < 0:
            raise QueueUnderflow(f"vertex {v} is not in the queue")
        if not key < self._keys[v]:  # type: ignore[operator]
            raise QueueError(
                f"decrease_key on vertex {v}: {key} is not smaller than {self._keys[v]}"
            )
        self._keys[v] = key
        self._sift_up(self._pos[v])

    def peek_min(self) -> Tuple[Vertex, Float]:
        """Return ``(vertex, key)`` of the minimum entry without removing it.

        Raises:
            QueueUnderflow: If the queue is empty.
        """
        if not self._heap:
            raise QueueUnderflow("peek on an empty queue")
        v = self._heap[0]
        return v, self._keys[v]  # type: ignore[return-value]

    def extract_min(self) -> Vertex:
        """Remove and return the vertex with the smallest key.

        Ties are broken by the smallest vertex id.

        Raises:
            QueueUnderflow: If the queue is empty.
        """
        if not self._heap:
            raise QueueUnderflow("extract_min on an empty queue")
        top = self._heap[0]
        last = len(self._heap) - 1
        if last > 0:
            self._swap(0, last)
        self._heap.pop()
        self._pos[top] = -1
        self._keys[top] = None
        if self._heap:
            self._sift_down(0)
        return top

    def __iter__(self) -> Iterator[Vertex]:
        """Iterate over queued vertices in heap (not sorted) order."""
        return iter(list(self._heap))


__all__ = ["IndexedMinPQ"]
