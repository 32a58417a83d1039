"""memokit - Memoization with pluggable caches and stale-if-error fallback."""

from contextlib import suppress

# Caches
from memokit.caches import (
    AsyncCache,
    AsyncMemoryCache,
    Cache,
    LRUCache,
    StaleIfErrorCache,
    StaleIfErrorMemoryCache,
)

# Duration parsing
from memokit.duration import parse_duration

# Key derivation
from memokit.keys import default_create_key

# Memoizers
from memokit.memoizes import (
    AsyncCacheMemoizedFunction,
    MemoizedFunction,
    StaleIfErrorMemoizedFunction,
    memoize,
    memoize_async_stale_if_error,
    memoize_with_async_cache,
)

# Core types
from memokit.types import (
    CacheResult,
    CreateKey,
    Duration,
    Memoized,
    State,
    Threshold,
)

# Optional cache imports - only usable when dependencies are installed
with suppress(ImportError):
    from memokit.caches import AsyncRedisCache, RedisStaleIfErrorCache

with suppress(ImportError):
    from memokit.caches import AsyncHttpCache

__version__ = "0.1.0"

__all__ = [
    "AsyncCache",
    "AsyncCacheMemoizedFunction",
    "AsyncHttpCache",
    "AsyncMemoryCache",
    "AsyncRedisCache",
    "Cache",
    "CacheResult",
    "CreateKey",
    "Duration",
    "LRUCache",
    "Memoized",
    "MemoizedFunction",
    "RedisStaleIfErrorCache",
    "StaleIfErrorCache",
    "StaleIfErrorMemoizedFunction",
    "StaleIfErrorMemoryCache",
    "State",
    "Threshold",
    "default_create_key",
    "memoize",
    "memoize_async_stale_if_error",
    "memoize_with_async_cache",
    "parse_duration",
]
