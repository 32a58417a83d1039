"""Tests for in-memory caches."""

import asyncio
import time

import pytest

from memokit import (
    AsyncCache,
    AsyncMemoryCache,
    Cache,
    CacheResult,
    LRUCache,
    State,
    StaleIfErrorCache,
    StaleIfErrorMemoryCache,
)


class TestLRUCache:
    """Tests for LRUCache."""

    def test_get_missing_is_miss(self, lru_cache: LRUCache) -> None:
        """Test that a missing key reads as a miss."""
        assert lru_cache.get("missing") == CacheResult.miss()

    def test_set_and_get(self, lru_cache: LRUCache) -> None:
        """Test setting and getting a value."""
        lru_cache.set("key1", {"id": "123"})
        assert lru_cache.get("key1") == CacheResult(State.HIT, {"id": "123"})

    def test_lru_eviction(self) -> None:
        """Test that the least recently used entry is evicted."""
        cache = LRUCache(2)
        cache.set("key1", 1)
        cache.set("key2", 2)
        cache.get("key1")  # key2 is now least recently used
        cache.set("key3", 3)

        assert cache.get("key1").state is State.HIT
        assert cache.get("key2").state is State.MISS
        assert cache.get("key3").state is State.HIT

    def test_clear(self, lru_cache: LRUCache) -> None:
        """Test clearing all entries."""
        lru_cache.set("key1", 1)
        lru_cache.clear()
        assert len(lru_cache) == 0

    def test_invalid_limit(self) -> None:
        """Test that a limit below 1 is rejected."""
        with pytest.raises(ValueError):
            LRUCache(0)

    def test_satisfies_protocol(self, lru_cache: LRUCache) -> None:
        """Test that LRUCache implements the Cache protocol."""
        assert isinstance(lru_cache, Cache)


class TestAsyncMemoryCache:
    """Tests for AsyncMemoryCache."""

    async def test_get_missing_is_miss(self, async_cache: AsyncMemoryCache) -> None:
        """Test that a missing key reads as a miss."""
        assert (await async_cache.get("missing")).state is State.MISS

    async def test_set_and_get(self, async_cache: AsyncMemoryCache) -> None:
        """Test setting and getting a value."""
        await async_cache.set("key1", "value")
        assert await async_cache.get("key1") == CacheResult.hit("value")

    async def test_clear(self, async_cache: AsyncMemoryCache) -> None:
        """Test clearing all entries."""
        await async_cache.set("key1", 1)
        await async_cache.set("key2", 2)
        await async_cache.clear()
        assert (await async_cache.get("key1")).state is State.MISS
        assert (await async_cache.get("key2")).state is State.MISS

    async def test_lru_eviction(self) -> None:
        """Test LRU eviction when max_items is set."""
        cache = AsyncMemoryCache(max_items=2)
        await cache.set("key1", 1)
        await cache.set("key2", 2)
        await cache.set("key3", 3)  # Should evict key1

        assert (await cache.get("key1")).state is State.MISS
        assert (await cache.get("key2")).state is State.HIT
        assert (await cache.get("key3")).state is State.HIT

    async def test_ttl_expiration(self) -> None:
        """Test that expired entries read as a miss."""
        cache = AsyncMemoryCache(time_to_live="10ms")
        await cache.set("key1", 1)
        await asyncio.sleep(0.05)
        assert (await cache.get("key1")).state is State.MISS

    @pytest.mark.parametrize("time_to_live", [0, "0ms", "0s"])
    def test_zero_ttl_rejected(self, time_to_live: int | str) -> None:
        """Test that a zero TTL raises ValueError."""
        with pytest.raises(ValueError, match="time_to_live must be positive"):
            AsyncMemoryCache(time_to_live=time_to_live)

    async def test_no_ttl_never_expires(self) -> None:
        """Test that entries without a TTL stay cached."""
        cache = AsyncMemoryCache()
        await cache.set("key1", 1)
        await asyncio.sleep(0.02)
        assert await cache.get("key1") == CacheResult.hit(1)

    def test_satisfies_protocol(self, async_cache: AsyncMemoryCache) -> None:
        """Test that AsyncMemoryCache implements the AsyncCache protocol."""
        assert isinstance(async_cache, AsyncCache)


class TestStaleIfErrorMemoryCache:
    """Tests for StaleIfErrorMemoryCache."""

    def test_fresh_entry_is_hit(self) -> None:
        """Test that an entry within its TTL is a hit."""
        cache = StaleIfErrorMemoryCache(time_to_live="1h", stale_if_error="1h")
        cache.set("key1", "value")
        assert cache.get("key1") == CacheResult.hit("value")

    def test_expired_entry_is_stale(self) -> None:
        """Test that an entry past its TTL but within the window is stale."""
        cache = StaleIfErrorMemoryCache(time_to_live="10ms", stale_if_error="1h")
        cache.set("key1", "value")
        time.sleep(0.05)
        assert cache.get("key1") == CacheResult.stale_if_error("value")

    def test_entry_past_window_is_miss(self) -> None:
        """Test that an entry past the stale window is dropped."""
        cache = StaleIfErrorMemoryCache(time_to_live="10ms", stale_if_error="10ms")
        cache.set("key1", "value")
        time.sleep(0.05)
        assert cache.get("key1").state is State.MISS

    def test_set_refreshes_entry(self) -> None:
        """Test that setting a stale key makes it fresh again."""
        cache = StaleIfErrorMemoryCache(time_to_live="10ms", stale_if_error="1h")
        cache.set("key1", "old")
        time.sleep(0.05)
        cache.set("key1", "new")
        assert cache.get("key1") == CacheResult.hit("new")

    def test_max_items(self) -> None:
        """Test LRU eviction when max_items is set."""
        cache = StaleIfErrorMemoryCache(
            time_to_live="1h", stale_if_error="1h", max_items=1
        )
        cache.set("key1", 1)
        cache.set("key2", 2)
        assert cache.get("key1").state is State.MISS
        assert cache.get("key2").state is State.HIT

    def test_satisfies_protocol(self) -> None:
        """Test that StaleIfErrorMemoryCache implements its protocol."""
        cache = StaleIfErrorMemoryCache(time_to_live="1s", stale_if_error="1s")
        assert isinstance(cache, StaleIfErrorCache)
