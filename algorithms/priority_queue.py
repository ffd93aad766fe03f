"""
priority_queue.py — Min-Priority Queue with Lazy Deletion
=========================================================
A binary min-heap (heapq) keyed by a numeric priority.

There is deliberately no decrease-key.  When a node's priority improves
the engine pushes a *new* entry and leaves the old one in the heap.  On
every pop the engine checks its visited set and discards entries for
nodes that are already final ("stale" entries).  A plain heap plus that
check is all Dijkstra and A* need on graphs of this size.

Entries are stored as (priority, insertion_no, item): equal priorities
pop in insertion order and items are never compared with each other.
"""

import heapq
from itertools import count
from typing import Any, Generic, List, NamedTuple, Tuple, TypeVar

T = TypeVar("T")


class QueueEntry(NamedTuple):
    node_id:  Any
    priority: float


class PriorityQueue(Generic[T]):

    def __init__(self):
        self._heap: List[Tuple[float, int, T]] = []
        self._counter = count()

    def enqueue(self, item: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def dequeue(self) -> Tuple[T, float]:
        """Pop the minimum entry as (item, priority). IndexError when empty."""
        if not self._heap:
            raise IndexError("dequeue from an empty priority queue")
        priority, _, item = heapq.heappop(self._heap)
        return item, priority

    def peek(self) -> Tuple[T, float]:
        if not self._heap:
            raise IndexError("peek into an empty priority queue")
        priority, _, item = self._heap[0]
        return item, priority

    def is_empty(self) -> bool:
        return not self._heap

    def snapshot(self) -> Tuple[QueueEntry, ...]:
        """Every entry, stale ones included, in heap order."""
        return tuple(QueueEntry(item, priority) for priority, _, item in self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"PriorityQueue({[(e.node_id, e.priority) for e in self.snapshot()]})"
