"""Application cache – QueryCache with tag invalidation, freshness and LRU bound."""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ub_dashboard.kernel.time import Clock, SystemClock

__all__ = ["DEFAULT_MAX_ENTRIES", "CacheEntry", "QueryCache"]

T = TypeVar("T")

DEFAULT_MAX_ENTRIES = 100


@dataclass
class CacheEntry(Generic[T]):
    """A stored query result and when it was written (monotonic seconds)."""
    value: T
    updated_at: float
    invalidated: bool = False

    def is_fresh(self, now: float, stale_time: float) -> bool:
        if self.invalidated:
            return False
        return now - self.updated_at < stale_time


class QueryCache:
    """In-memory result store owned by a single table controller.

    Holds at most ``max_entries`` results; writing past that drops the least
    recently used one.  ``invalidate_tag`` marks entries stale so the next
    read refetches while still showing the old value.
    """

    def __init__(self, clock: Clock | None = None, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._clock = clock or SystemClock()
        self._max_entries = max_entries
        self._data: OrderedDict[str, CacheEntry[Any]] = OrderedDict()
        self._tags: dict[str, set[str]] = {}   # tag -> {keys}

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> CacheEntry[Any] | None:
        entry = self._data.get(key)
        if entry is not None:
            # LRU
            self._data.move_to_end(key)
        return entry

    def set(self, key: str, value: Any, tags: list[str] | None = None) -> CacheEntry[Any]:
        entry = CacheEntry(value=value, updated_at=self._clock.monotonic())
        self._data[key] = entry
        self._data.move_to_end(key)
        for tag in (tags or []):
            self._tags.setdefault(tag, set()).add(key)
        while len(self._data) > self._max_entries:
            oldest, _ = self._data.popitem(last=False)
            self._untag(oldest)
        return entry

    def is_fresh(self, key: str, stale_time: float) -> bool:
        entry = self._data.get(key)
        return entry is not None and entry.is_fresh(self._clock.monotonic(), stale_time)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
        self._untag(key)

    def invalidate_tag(self, tag: str) -> int:
        """Mark every entry under *tag* stale; returns how many were marked."""
        count = 0
        for key in self._tags.get(tag, set()):
            entry = self._data.get(key)
            if entry is not None:
                entry.invalidated = True
                count += 1
        return count

    def clear(self) -> None:
        self._data.clear()
        self._tags.clear()

    def _untag(self, key: str) -> None:
        for tag in [tag for tag, keys in self._tags.items() if key in keys]:
            self._tags[tag].discard(key)
            if not self._tags[tag]:
                del self._tags[tag]
