"""Tests for package exports."""


def test_exports_available() -> None:
    """Test that the public API is importable from the package root."""
    from memokit import (
        AsyncCache,
        AsyncMemoryCache,
        Cache,
        CacheResult,
        LRUCache,
        Memoized,
        StaleIfErrorCache,
        StaleIfErrorMemoryCache,
        State,
        default_create_key,
        memoize,
        memoize_async_stale_if_error,
        memoize_with_async_cache,
        parse_duration,
    )

    # Just verify they're importable
    assert AsyncCache is not None
    assert AsyncMemoryCache is not None
    assert Cache is not None
    assert CacheResult is not None
    assert LRUCache is not None
    assert Memoized is not None
    assert StaleIfErrorCache is not None
    assert StaleIfErrorMemoryCache is not None
    assert State is not None
    assert default_create_key is not None
    assert memoize is not None
    assert memoize_async_stale_if_error is not None
    assert memoize_with_async_cache is not None
    assert parse_duration is not None


def test_optional_caches_available() -> None:
    """Test that the optional caches are exported."""
    from memokit import AsyncHttpCache, AsyncRedisCache, RedisStaleIfErrorCache

    assert AsyncHttpCache is not None
    assert AsyncRedisCache is not None
    assert RedisStaleIfErrorCache is not None


def test_memoized_unpacks() -> None:
    """Test that Memoized unpacks into value and state."""
    from memokit import Memoized, State

    value, state = Memoized("foo", State.REUSE)
    assert value == "foo"
    assert state is State.REUSE
    assert State.STALE_IF_ERROR == "stale-if-error"
