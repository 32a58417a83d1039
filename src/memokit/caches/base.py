"""Cache port protocols consumed by the memoizers."""

from typing import Any, Protocol, runtime_checkable

from memokit.types import CacheResult


@runtime_checkable
class Cache(Protocol):
    """Sync cache interface reporting HIT or MISS."""

    def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value."""
        ...

    def clear(self) -> None:
        """Clear all cached entries."""
        ...


@runtime_checkable
class AsyncCache(Protocol):
    """Async cache interface reporting HIT or MISS."""

    async def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a value."""
        ...

    async def clear(self) -> None:
        """Clear all cached entries."""
        ...


@runtime_checkable
class StaleIfErrorCache(Protocol):
    """Sync cache interface that can also report STALE_IF_ERROR.

    A STALE_IF_ERROR read carries a value that is past its freshness window
    but may still be served when refreshing it fails.
    """

    def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value."""
        ...

    def clear(self) -> None:
        """Clear all cached entries."""
        ...
