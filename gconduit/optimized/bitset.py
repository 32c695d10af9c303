"""
Bit-packed vertex sets and compact per-vertex distance storage.

GraphBitSet and VisitedBitArray pack one bit per vertex into numpy uint64
words, so full scans cost O(n / 64) and bulk updates are vectorized.
CompactDistanceArray stores one unsigned integer per vertex in the narrowest
dtype that fits, widening when a distance would collide with the unset
sentinel.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional, Union

import numpy as np

_WORD_BITS = 64
_BIT_MASKS = np.left_shift(np.uint64(1), np.arange(_WORD_BITS, dtype=np.uint64))

IndexLike = Union[int, Iterable[int], np.ndarray]


def _as_indices(indices: IndexLike, size: int) -> np.ndarray:
    idx = np.asarray(indices, dtype=np.int64).ravel()
    if idx.size and (idx.min() < 0 or idx.max() >= size):
        raise IndexError(f"Bit index out of range [0, {size})")
    return idx


class GraphBitSet:
    """
    Fixed-capacity set of integers in [0, size) backed by uint64 words.

    len() is the number of members; capacity is the fixed size. Iteration
    yields members in ascending order.

    Example:
        >>> bits = GraphBitSet(100)
        >>> bits.set(3)
        >>> bits.set_many([70, 5])
        >>> list(bits)
        [3, 5, 70]
    """

    def __init__(self, size: int):
        size = int(size)
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.capacity = size
        self._words = np.zeros((size + _WORD_BITS - 1) // _WORD_BITS, dtype="<u8")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self.capacity}, count={self.popcount()})"

    def _check(self, i: int) -> int:
        i = int(i)
        if not 0 <= i < self.capacity:
            raise IndexError(f"Bit index {i} out of range [0, {self.capacity})")
        return i

    def set(self, i: int) -> None:
        """Add i to the set."""
        i = self._check(i)
        self._words[i >> 6] |= _BIT_MASKS[i & 63]

    def test(self, i: int) -> bool:
        """Return True if i is in the set."""
        i = self._check(i)
        return bool(self._words[i >> 6] & _BIT_MASKS[i & 63])

    def __contains__(self, i: int) -> bool:
        return 0 <= int(i) < self.capacity and self.test(i)

    def clear(self, i: int) -> None:
        """Remove i from the set."""
        i = self._check(i)
        self._words[i >> 6] &= ~_BIT_MASKS[i & 63]

    def set_many(self, indices: IndexLike) -> None:
        """Add every index in indices (duplicates allowed)."""
        idx = _as_indices(indices, self.capacity)
        np.bitwise_or.at(self._words, idx >> 6, _BIT_MASKS[idx & 63])

    def test_many(self, indices: IndexLike) -> np.ndarray:
        """Return a boolean array: membership of each index in indices."""
        idx = _as_indices(indices, self.capacity)
        return (self._words[idx >> 6] & _BIT_MASKS[idx & 63]) != 0

    def add_range(self, start: int, end: int) -> None:
        """Add every integer in [start, end)."""
        if start >= end:
            return
        self._check(start)
        self._check(end - 1)
        self.set_many(np.arange(start, end, dtype=np.int64))

    def _bits(self) -> np.ndarray:
        bits = np.unpackbits(self._words.view(np.uint8), bitorder="little")
        return bits[: self.capacity]

    def to_indices(self) -> np.ndarray:
        """Return members as an ascending int64 array."""
        return np.flatnonzero(self._bits()).astype(np.int64)

    def popcount(self) -> int:
        """Return the number of members."""
        return int(np.unpackbits(self._words.view(np.uint8)).sum())

    def __len__(self) -> int:
        return self.popcount()

    def is_empty(self) -> bool:
        """Return True if the set has no members."""
        return not self._words.any()

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_indices().tolist())

    def for_each_set(self, fn: Callable[[int], None]) -> None:
        """Call fn(i) for each member in ascending order."""
        for i in self.to_indices().tolist():
            fn(i)

    def reset(self) -> None:
        """Remove every member."""
        self._words.fill(0)

    def _same_capacity(self, other: "GraphBitSet") -> None:
        if other.capacity != self.capacity:
            raise ValueError(
                f"Bitset capacities differ: {self.capacity} != {other.capacity}"
            )

    def union(self, other: "GraphBitSet") -> "GraphBitSet":
        """Add every member of other, in place. Returns self."""
        self._same_capacity(other)
        np.bitwise_or(self._words, other._words, out=self._words)
        return self

    def intersection(self, other: "GraphBitSet") -> "GraphBitSet":
        """Keep only members also in other, in place. Returns self."""
        self._same_capacity(other)
        np.bitwise_and(self._words, other._words, out=self._words)
        return self

    def difference(self, other: "GraphBitSet") -> "GraphBitSet":
        """Remove members of other, in place. Returns self."""
        self._same_capacity(other)
        np.bitwise_and(self._words, ~other._words, out=self._words)
        return self

    def clone(self) -> "GraphBitSet":
        """Return an independent copy."""
        other = type(self)(self.capacity)
        other._words[:] = self._words
        return other

    def swap(self, other: "GraphBitSet") -> None:
        """Exchange contents with other in O(1)."""
        self._same_capacity(other)
        self._words, other._words = other._words, self._words

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphBitSet):
            return NotImplemented
        return self.capacity == other.capacity and bool(
            np.array_equal(self._words, other._words)
        )

    __hash__ = None


class VisitedBitArray(GraphBitSet):
    """One visited bit per vertex, with get/toggle naming for traversal code."""

    def get(self, i: int) -> bool:
        """Return True if vertex i is marked visited."""
        return self.test(i)

    def toggle(self, i: int) -> None:
        """Flip the visited bit of vertex i."""
        i = self._check(i)
        self._words[i >> 6] ^= _BIT_MASKS[i & 63]

    def get_set_indices(self) -> np.ndarray:
        """Return visited vertex indices in ascending order."""
        return self.to_indices()


_DTYPES = (np.uint8, np.uint16, np.uint32, np.uint64)


class CompactDistanceArray:
    """
    One unsigned distance per vertex in the narrowest dtype that fits.

    Storage starts at uint8. The dtype's maximum value marks unset entries;
    storing a distance that reaches it widens the array to the next dtype.

    Example:
        >>> dist = CompactDistanceArray(3)
        >>> dist.set(0, 0)
        >>> dist.set(1, 300)
        >>> dist.dtype
        dtype('uint16')
        >>> dist.get(2) is None
        True
    """

    def __init__(self, size: int):
        size = int(size)
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.size = size
        self._level = 0
        self._data = np.full(size, self._sentinel, dtype=_DTYPES[0])

    def __repr__(self) -> str:
        return f"CompactDistanceArray(size={self.size}, dtype={self.dtype})"

    def __len__(self) -> int:
        return self.size

    @property
    def _sentinel(self) -> int:
        return int(np.iinfo(_DTYPES[self._level]).max)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def _widen_for(self, value: int) -> None:
        while value >= self._sentinel:
            if self._level + 1 == len(_DTYPES):
                raise OverflowError(f"Distance {value} does not fit in uint64 storage")
            unset = self._data == self._sentinel
            self._level += 1
            widened = self._data.astype(_DTYPES[self._level])
            widened[unset] = self._sentinel
            self._data = widened

    def _check(self, i: int) -> int:
        i = int(i)
        if not 0 <= i < self.size:
            raise IndexError(f"Index {i} out of range [0, {self.size})")
        return i

    def set(self, i: int, distance: int) -> None:
        """Store distance for vertex i."""
        i = self._check(i)
        distance = int(distance)
        if distance < 0:
            raise ValueError(f"Distance must be non-negative, got {distance}")
        self._widen_for(distance)
        self._data[i] = distance

    def set_many(self, indices: IndexLike, distance: Union[int, np.ndarray]) -> None:
        """Store distance (scalar or parallel array) for every index in indices."""
        idx = _as_indices(indices, self.size)
        values = np.asarray(distance, dtype=np.int64)
        if values.size == 0 or idx.size == 0:
            return
        if values.min() < 0:
            raise ValueError("Distances must be non-negative")
        self._widen_for(int(values.max()))
        self._data[idx] = values

    def get(self, i: int) -> Optional[int]:
        """Return distance of vertex i, or None if unset."""
        value = int(self._data[self._check(i)])
        return None if value == self._sentinel else value

    def is_visited(self, i: int) -> bool:
        """Return True if vertex i has a distance."""
        return int(self._data[self._check(i)]) != self._sentinel

    def to_array(self) -> np.ndarray:
        """Return distances as int64 with -1 for unset entries."""
        out = self._data.astype(np.int64)
        out[self._data == self._sentinel] = -1
        return out

    def reset(self) -> None:
        """Unset every entry and return to uint8 storage."""
        self._level = 0
        self._data = np.full(self.size, self._sentinel, dtype=_DTYPES[0])


__all__ = ["CompactDistanceArray", "GraphBitSet", "VisitedBitArray"]
