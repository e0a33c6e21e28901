"""Indexed binary min-heap over graph vertices keyed by tentative score."""

from __future__ import annotations

import math
from typing import Iterable, List

from .exceptions import HeapInvariantError
from .graph import NOT_IN_HEAP, Float, Vertex


class IndexedMinHeap:
    """Binary min-heap of :class:`~ssspheap.graph.Vertex` ordered by ``score``.

    Each vertex stores its own array index in ``position`` so that
    :meth:`decrease_key` can locate it in O(1) and repair the heap in
    O(log n). The heap never owns vertices; it only holds references to
    vertices owned by a :class:`~ssspheap.graph.Graph`.

    Ordering is a strict less-than on ``score``; ``inf`` is a valid key.
    """

    def __init__(self) -> None:
        self._items: List[Vertex] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, v: object) -> bool:
        if not isinstance(v, Vertex):
            return False
        i = v.position
        return 0 <= i < len(self._items) and self._items[i] is v

    # ---- internals ----------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]
        items[i].position = i
        items[j].position = j

    def _sift_up(self, i: int) -> None:
        items = self._items
        while i > 0:
            parent = (i - 1) >> 1
            if items[i].score < items[parent].score:
                self._swap(i, parent)
                i = parent
            else:
                break

    def _sift_down(self, i: int) -> None:
        items = self._items
        n = len(items)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            smallest = left
            right = left + 1
            if right < n and items[right].score < items[left].score:
                smallest = right
            if items[smallest].score < items[i].score:
                self._swap(i, smallest)
                i = smallest
            else:
                break

    # ---- public API ---------------------------------------------------

    def build(self, vertices: Iterable[Vertex]) -> None:
        """Replace the contents with ``vertices`` and heapify bottom-up.

        Runs in O(n). Every vertex ends with ``position`` equal to its
        final array index.

        Raises:
            HeapInvariantError: If a vertex is given more than once.
        """
        for v in self._items:
            v.position = NOT_IN_HEAP
        items = list(vertices)
        seen = set()
        for i, v in enumerate(items):
            if id(v) in seen:
                raise HeapInvariantError(f"vertex {v.id} given twice to build()")
            seen.add(id(v))
            v.position = i
        self._items = items
        for i in range(len(items) // 2 - 1, -1, -1):
            self._sift_down(i)

    def peek(self) -> Vertex:
        """Return the vertex with the smallest score without removing it."""
        if not self._items:
            raise HeapInvariantError("peek on empty heap")
        return self._items[0]

    def extract_min(self) -> Vertex:
        """Remove and return the vertex with the smallest score.

        The extracted vertex's ``position`` is reset to ``NOT_IN_HEAP``.

        Raises:
            HeapInvariantError: If the heap is empty.
        """
        items = self._items
        if not items:
            raise HeapInvariantError("extract_min on empty heap")
        last = len(items) - 1
        if last > 0:
            self._swap(0, last)
        top = items.pop()
        top.position = NOT_IN_HEAP
        if items:
            self._sift_down(0)
        return top

    def decrease_key(self, v: Vertex, new_score: Float) -> None:
        """Lower ``v.score`` to ``new_score`` and restore heap order.

        Args:
            v: A vertex currently in the heap.
            new_score: New key, not greater than the current one.

        Raises:
            HeapInvariantError: If ``v`` is not in the heap or
                ``new_score`` is greater than ``v.score``.
        """
        if v not in self:
            raise HeapInvariantError(f"decrease_key on vertex {v.id} not in heap")
        if math.isnan(new_score) or new_score > v.score:
            raise HeapInvariantError(
                f"decrease_key would raise score of vertex {v.id} "
                f"from {v.score} to {new_score}"
            )
        v.score = new_score
        self._sift_up(v.position)

    def check(self) -> None:
        """Verify position bookkeeping and heap order over the whole array.

        Raises:
            HeapInvariantError: On the first violated invariant.
        """
        items = self._items
        seen = set()
        for i, v in enumerate(items):
            if id(v) in seen:
                raise HeapInvariantError(f"vertex {v.id} appears twice in heap")
            seen.add(id(v))
            if v.position != i:
                raise HeapInvariantError(
                    f"vertex {v.id} at index {i} records position {v.position}"
                )
            if i > 0:
                parent = items[(i - 1) >> 1]
                if v.score < parent.score:
                    raise HeapInvariantError(
                        f"heap order broken at index {i}: "
                        f"{v.score} < parent {parent.score}"
                    )


__all__ = ["IndexedMinHeap"]
