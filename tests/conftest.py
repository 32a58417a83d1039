"""Shared pytest fixtures."""

from typing import Any

import pytest

from memokit import AsyncMemoryCache, CacheResult, LRUCache, State


class FakeStaleIfErrorCache:
    """Stale-if-error cache whose entries are seeded with an explicit state."""

    def __init__(self) -> None:
        self.entries: dict[str, CacheResult[Any]] = {}
        self.sets: list[tuple[str, Any]] = []

    def seed(self, key: str, value: Any, state: State = State.HIT) -> None:
        self.entries[key] = CacheResult(state, value)

    def get(self, key: str) -> CacheResult[Any]:
        return self.entries.get(key, CacheResult.miss())

    def set(self, key: str, value: Any) -> None:
        self.sets.append((key, value))
        self.entries[key] = CacheResult.hit(value)

    def clear(self) -> None:
        self.entries.clear()


@pytest.fixture
def async_cache() -> AsyncMemoryCache:
    """Create a fresh AsyncMemoryCache for each test."""
    return AsyncMemoryCache()


@pytest.fixture
def lru_cache() -> LRUCache:
    """Create a fresh LRUCache for each test."""
    return LRUCache(100)


@pytest.fixture
def stale_cache() -> FakeStaleIfErrorCache:
    """Create a fresh seeded stale-if-error cache for each test."""
    return FakeStaleIfErrorCache()
