"""In-memory cache implementations."""

import asyncio
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any

from memokit.duration import parse_duration, parse_time_to_live
from memokit.types import CacheResult, Duration


def _now() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class _Entry:
    value: Any
    expires_at: int | None  # None means never


@dataclass(frozen=True, slots=True)
class _StaleEntry:
    value: Any
    expires_at: int
    stale_until: int


class LRUCache:
    """Sync in-memory cache with LRU eviction."""

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._cache: OrderedDict[str, Any] = OrderedDict()
        self._limit = limit

    def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key."""
        if key not in self._cache:
            return CacheResult.miss()
        self._cache.move_to_end(key)  # LRU touch
        return CacheResult.hit(self._cache[key])

    def set(self, key: str, value: Any) -> None:
        """Store a value, evicting the least recently used entry if full."""
        self._cache[key] = value
        self._cache.move_to_end(key)
        if len(self._cache) > self._limit:
            self._cache.popitem(last=False)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


class AsyncMemoryCache:
    """Async in-memory cache with optional LRU eviction and TTL.

    ``time_to_live`` must be positive; leave it unset for entries that never
    expire.
    """

    def __init__(
        self,
        max_items: int | None = None,
        *,
        time_to_live: Duration | None = None,
    ) -> None:
        self._cache: OrderedDict[str, _Entry] = OrderedDict()
        self._max_items = max_items
        self._ttl = parse_time_to_live(time_to_live)
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key. Expired entries read as a miss."""
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return CacheResult.miss()
            if entry.expires_at is not None and _now() > entry.expires_at:
                del self._cache[key]
                return CacheResult.miss()
            self._cache.move_to_end(key)  # LRU touch
            return CacheResult.hit(entry.value)

    async def set(self, key: str, value: Any) -> None:
        """Store a value."""
        expires_at = _now() + self._ttl if self._ttl is not None else None
        async with self._lock:
            self._cache[key] = _Entry(value=value, expires_at=expires_at)
            self._cache.move_to_end(key)
            if self._max_items and len(self._cache) > self._max_items:
                self._cache.popitem(last=False)

    async def clear(self) -> None:
        """Clear all cached entries."""
        async with self._lock:
            self._cache.clear()


class StaleIfErrorMemoryCache:
    """Sync in-memory cache with a stale-if-error window.

    An entry is a HIT for ``time_to_live`` after it was stored, then a
    STALE_IF_ERROR for another ``stale_if_error``, then a MISS.
    """

    def __init__(
        self,
        *,
        time_to_live: Duration,
        stale_if_error: Duration,
        max_items: int | None = None,
    ) -> None:
        self._cache: OrderedDict[str, _StaleEntry] = OrderedDict()
        self._ttl = parse_duration(time_to_live)
        self._stale_if_error = parse_duration(stale_if_error)
        self._max_items = max_items

    def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key, classifying its freshness."""
        entry = self._cache.get(key)
        if entry is None:
            return CacheResult.miss()

        now = _now()
        if now <= entry.expires_at:
            self._cache.move_to_end(key)
            return CacheResult.hit(entry.value)
        if now <= entry.stale_until:
            self._cache.move_to_end(key)
            return CacheResult.stale_if_error(entry.value)

        del self._cache[key]
        return CacheResult.miss()

    def set(self, key: str, value: Any) -> None:
        """Store a value, starting a fresh TTL."""
        now = _now()
        self._cache[key] = _StaleEntry(
            value=value,
            expires_at=now + self._ttl,
            stale_until=now + self._ttl + self._stale_if_error,
        )
        self._cache.move_to_end(key)
        if self._max_items and len(self._cache) > self._max_items:
            self._cache.popitem(last=False)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._cache.clear()
