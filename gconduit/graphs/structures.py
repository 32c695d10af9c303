"""
Supporting data structures: union-find and an indexed priority queue.

UnionFind backs Kruskal's MST and connected components. PriorityQueue backs
Dijkstra and Prim and supports decrease-key with lazy deletion.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 6.5 (priority queues), 21.3 (disjoint-set forests).
"""

from __future__ import annotations

import heapq
import itertools
from typing import Dict, Hashable, Iterable, List, Tuple


class UnionFind:
    """
    Union-Find (Disjoint Set) data structure with path compression and union by size.

    Elements may be added lazily with make_set. find() on an element that was
    never added raises KeyError.

    Complexity: near O(1) amortized per operation (inverse Ackermann).
    """

    def __init__(self, elements: Iterable[Hashable] = ()):
        """
        Initialize union-find with given elements, each in its own set.

        Args:
            elements: Iterable of hashable elements.
        """
        self.parent: Dict[Hashable, Hashable] = {}
        self.size: Dict[Hashable, int] = {}
        self._sets = 0

        for element in elements:
            self.make_set(element)

    def __len__(self) -> int:
        return len(self.parent)

    def __contains__(self, element: Hashable) -> bool:
        return element in self.parent

    @property
    def set_count(self) -> int:
        """Number of disjoint sets."""
        return self._sets

    def make_set(self, element: Hashable) -> bool:
        """
        Add element as a singleton set.

        Returns:
            True if the element was new, False if it already existed.
        """
        if element in self.parent:
            return False
        self.parent[element] = element
        self.size[element] = 1
        self._sets += 1
        return True

    def find(self, x: Hashable) -> Hashable:
        """
        Find root of x with path compression.

        Iterative, so long chains cannot exhaust the recursion limit.

        Raises:
            KeyError: If x was never added.
        """
        parent = self.parent
        if x not in parent:
            raise KeyError(x)

        root = x
        while parent[root] != root:
            root = parent[root]

        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(self, x: Hashable, y: Hashable) -> bool:
        """
        Union sets containing x and y using union by size.

        Returns:
            True if union was performed (x and y were in different sets),
            False if they were already in the same set.
        """
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return False

        # Smaller tree goes under the larger; ties keep root_x.
        if self.size[root_x] < self.size[root_y]:
            root_x, root_y = root_y, root_x
        self.parent[root_y] = root_x
        self.size[root_x] += self.size.pop(root_y)
        self._sets -= 1
        return True

    def connected(self, x: Hashable, y: Hashable) -> bool:
        """Return True if x and y are in the same set."""
        return self.find(x) == self.find(y)

    def set_size(self, x: Hashable) -> int:
        """Return size of the set containing x."""
        return self.size[self.find(x)]

    def groups(self) -> List[List[Hashable]]:
        """
        Return all sets as lists.

        Groups are ordered by their first member in insertion order, and members
        keep insertion order.
        """
        by_root: Dict[Hashable, List[Hashable]] = {}
        for element in self.parent:
            by_root.setdefault(self.find(element), []).append(element)
        return list(by_root.values())


_REMOVED = object()


class PriorityQueue:
    """
    Binary min-heap keyed by hashable items, with decrease-key.

    Each live key has exactly one valid heap entry; superseded entries are
    marked removed and skipped on pop. Equal priorities pop in the order the
    live entries were pushed (a decrease_key counts as a new push).

    Complexity:
        - push / decrease_key: O(log n)
        - pop_min: O(log n) amortized
        - peek_min: O(1) amortized
        - priority / __contains__: O(1)

    Example:
        >>> pq = PriorityQueue()
        >>> pq.push('a', 3.0)
        >>> pq.push('b', 1.0)
        >>> pq.decrease_key('a', 0.5)
        >>> pq.pop_min()
        ('a', 0.5)
    """

    def __init__(self):
        self._heap: List[list] = []
        self._entries: Dict[Hashable, list] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __bool__(self) -> bool:
        return bool(self._entries)

    def is_empty(self) -> bool:
        """Return True if no live keys remain."""
        return not self._entries

    def push(self, key: Hashable, priority: float) -> None:
        """
        Insert key with priority.

        Raises:
            ValueError: If key is already queued (use decrease_key instead).
        """
        if key in self._entries:
            raise ValueError(f"Key {key!r} is already in the queue")
        self._insert(key, priority)

    def _insert(self, key: Hashable, priority: float) -> None:
        entry = [priority, next(self._counter), key]
        self._entries[key] = entry
        heapq.heappush(self._heap, entry)

    def priority(self, key: Hashable) -> float:
        """
        Return the current priority of key.

        Raises:
            KeyError: If key is not queued.
        """
        return self._entries[key][0]

    def decrease_key(self, key: Hashable, priority: float) -> None:
        """
        Lower the priority of a queued key.

        Raises:
            KeyError: If key is not queued.
            ValueError: If priority is greater than the current one.
        """
        entry = self._entries[key]
        if priority > entry[0]:
            raise ValueError(
                f"New priority {priority} is greater than current priority {entry[0]}"
            )
        entry[2] = _REMOVED
        self._insert(key, priority)

    def _prune(self) -> None:
        heap = self._heap
        while heap and heap[0][2] is _REMOVED:
            heapq.heappop(heap)

    def peek_min(self) -> Tuple[Hashable, float]:
        """
        Return (key, priority) with the smallest priority without removing it.

        Raises:
            IndexError: If the queue is empty.
        """
        self._prune()
        if not self._heap:
            raise IndexError("peek from an empty priority queue")
        priority, _, key = self._heap[0]
        return key, priority

    def pop_min(self) -> Tuple[Hashable, float]:
        """
        Remove and return (key, priority) with the smallest priority.

        Raises:
            IndexError: If the queue is empty.
        """
        self._prune()
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        priority, _, key = heapq.heappop(self._heap)
        del self._entries[key]
        return key, priority


__all__ = ["PriorityQueue", "UnionFind"]
