"""Cache implementations for memokit."""

from contextlib import suppress

from memokit.caches.base import (
    AsyncCache,
    Cache,
    StaleIfErrorCache,
)
from memokit.caches.memory import (
    AsyncMemoryCache,
    LRUCache,
    StaleIfErrorMemoryCache,
)

# Optional caches - only usable when their client libraries are installed
with suppress(ImportError):
    from memokit.caches.redis import AsyncRedisCache, RedisStaleIfErrorCache

with suppress(ImportError):
    from memokit.caches.http import AsyncHttpCache

__all__ = [
    "AsyncCache",
    "AsyncHttpCache",
    "AsyncMemoryCache",
    "AsyncRedisCache",
    "Cache",
    "LRUCache",
    "RedisStaleIfErrorCache",
    "StaleIfErrorCache",
    "StaleIfErrorMemoryCache",
]
