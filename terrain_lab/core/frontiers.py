# terrain_lab/core/frontiers.py
from __future__ import annotations
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from .node import Node

T = TypeVar("T")

# precedes(a, b) -> True when a must come out of the heap before b.
Precedes = Callable[[T, T], bool]


def by_f_cost(a: Node, b: Node) -> bool:
    """A* ordering."""
    return a.f_cost < b.f_cost


def by_h_cost(a: Node, b: Node) -> bool:
    """Greedy best-first ordering: ignore the cost so far."""
    return a.h_cost < b.h_cost


def weighted_f_cost(w: float) -> Precedes:
    """f = g + w*h. w > 1 focuses the search; not optimal in general."""
    if w < 0:
        raise ValueError(f"weight must be non-negative, got {w!r}")

    def precedes(a: Node, b: Node) -> bool:
        return a.g_cost + w * a.h_cost < b.g_cost + w * b.h_cost
    return precedes


class MinCostHeap(Generic[T]):
    """Binary min-heap over a plain list, ordered by an injected ``precedes``.

    There is no decrease-key: callers push a fresh item instead and deal with
    the stale copy when it pops. Equal items come out in whatever order the
    heap structure gives (left child first on sift-down), which is not a
    stable or otherwise guaranteed order.
    """
    def __init__(self, precedes: Precedes = by_f_cost):
        self.precedes = precedes
        self.items: List[T] = []

    def push(self, item: T) -> None:
        self.items.append(item)
        self._sift_up(len(self.items) - 1)

    def pop(self) -> Optional[T]:
        """Remove and return the first-ranked item, or None if the heap is empty."""
        if not self.items:
            return None
        top = self.items[0]
        last = self.items.pop()
        if self.items:
            self.items[0] = last
            self._sift_down(0)
        return top

    def peek(self) -> Optional[T]:
        return self.items[0] if self.items else None

    def is_empty(self) -> bool:
        return not self.items

    def snapshot(self) -> Tuple[T, ...]:
        """Current contents in backing (heap) order, not sorted."""
        return tuple(self.items)

    def __len__(self): return len(self.items)
    def __bool__(self): return bool(self.items)

    def _sift_up(self, i: int) -> None:
        items = self.items
        while i > 0:
            parent = (i - 1) // 2
            if not self.precedes(items[i], items[parent]):
                break
            items[i], items[parent] = items[parent], items[i]
            i = parent

    def _sift_down(self, i: int) -> None:
        items = self.items
        n = len(items)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            child = left
            right = left + 1
            if right < n and self.precedes(items[right], items[left]):
                child = right
            if not self.precedes(items[child], items[i]):
                break
            items[i], items[child] = items[child], items[i]
            i = child
