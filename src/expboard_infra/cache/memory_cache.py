"""Bounded in-process LRU cache."""

from __future__ import annotations

from collections import OrderedDict
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")

# Distinguishes "not cached" from a cached None
MISSING: object = object()


class LRUCache(Generic[K, V]):
    """Fixed-capacity mapping that evicts the least recently used entry.

    Values may be None; ``get`` returns ``MISSING`` for absent keys so callers
    can tell a cached "known unresolvable" apart from a miss.
    """

    def __init__(self, capacity: int) -> None:
        """Initialize with a maximum entry count."""
        if capacity < 1:
            msg = f"capacity must be >= 1, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._data: OrderedDict[K, V] = OrderedDict()

    @property
    def capacity(self) -> int:
        """Maximum number of entries held."""
        return self._capacity

    def get(self, key: K) -> V | object:
        """Return the cached value and mark it recently used, or MISSING."""
        if key not in self._data:
            return MISSING
        self._data.move_to_end(key)
        return self._data[key]

    def set(self, key: K, value: V) -> None:
        """Insert or replace a value, evicting the oldest entry when full."""
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        while len(self._data) > self._capacity:
            self._data.popitem(last=False)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Drop all entries."""
        self._data.clear()
