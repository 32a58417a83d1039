"""Redis cache implementations."""

from __future__ import annotations

import json
import time
from typing import Any

from memokit.duration import parse_duration, parse_time_to_live
from memokit.types import CacheResult, Duration


def _serialize_value(value: Any) -> str:
    """Serialize a cached value to JSON."""
    return json.dumps({"value": value})


def _deserialize_value(data: bytes | str) -> Any:
    """Deserialize a cached value from JSON."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return json.loads(data)["value"]


class AsyncRedisCache:
    """Async Redis cache reporting HIT or MISS.

    Values must be JSON serializable. With ``time_to_live`` set, Redis
    expires the keys itself and an expired entry reads as a miss. A
    ``time_to_live`` of zero is rejected; leave it unset to never expire.
    """

    def __init__(
        self,
        client: Any,  # redis.asyncio.Redis
        *,
        prefix: str = "memokit",
        time_to_live: Duration | None = None,
    ) -> None:
        self._client = client
        self._prefix = prefix
        self._ttl = parse_time_to_live(time_to_live)

    def _cache_key(self, key: str) -> str:
        """Generate full Redis key for cache entries."""
        return f"{self._prefix}:cache:{key}"

    async def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key."""
        data = await self._client.get(self._cache_key(key))
        if data is None:
            return CacheResult.miss()
        return CacheResult.hit(_deserialize_value(data))

    async def set(self, key: str, value: Any) -> None:
        """Store a value with optional expiration."""
        await self._client.set(
            self._cache_key(key),
            _serialize_value(value),
            px=self._ttl,
        )

    async def clear(self) -> None:
        """Clear all cached entries under this prefix."""
        # Use SCAN to find and delete all cache keys
        cursor: int = 0
        pattern = f"{self._prefix}:cache:*"
        while True:
            result = await self._client.scan(cursor, match=pattern, count=100)
            cursor = result[0]
            keys = result[1]
            if keys:
                await self._client.delete(*keys)
            if cursor == 0:
                break

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()


class RedisStaleIfErrorCache:
    """Sync Redis cache with a stale-if-error window.

    Each entry records when it stops being fresh and when it stops being
    usable as a fallback; Redis drops the key at the latter.
    """

    def __init__(
        self,
        client: Any,  # redis.Redis
        *,
        time_to_live: Duration,
        stale_if_error: Duration,
        prefix: str = "memokit",
    ) -> None:
        self._client = client
        self._prefix = prefix
        self._ttl = parse_duration(time_to_live)
        self._stale_if_error = parse_duration(stale_if_error)

    def _cache_key(self, key: str) -> str:
        """Generate full Redis key for cache entries."""
        return f"{self._prefix}:cache:{key}"

    def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key, classifying its freshness."""
        data = self._client.get(self._cache_key(key))
        if data is None:
            return CacheResult.miss()
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        obj = json.loads(data)

        now = int(time.time() * 1000)
        if now <= obj["expires_at"]:
            return CacheResult.hit(obj["value"])
        if now <= obj["stale_until"]:
            return CacheResult.stale_if_error(obj["value"])
        return CacheResult.miss()

    def set(self, key: str, value: Any) -> None:
        """Store a value, starting a fresh TTL."""
        now = int(time.time() * 1000)
        expires_at = now + self._ttl
        stale_until = expires_at + self._stale_if_error
        self._client.set(
            self._cache_key(key),
            json.dumps(
                {"value": value, "expires_at": expires_at, "stale_until": stale_until}
            ),
            pxat=stale_until,
        )

    def clear(self) -> None:
        """Clear all cached entries under this prefix."""
        cursor = 0
        pattern = f"{self._prefix}:cache:*"
        while True:
            cursor, keys = self._client.scan(cursor, match=pattern, count=100)
            if keys:
                self._client.delete(*keys)
            if cursor == 0:
                break

    def disconnect(self) -> None:
        """Close the Redis connection."""
        self._client.close()
