"""Memoization over an async cache with request coalescing."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar, overload

from memokit.caches.base import AsyncCache
from memokit.keys import default_create_key
from memokit.memoizes._base import AsyncMemoizedFunction
from memokit.types import CreateKey, Memoized, State, Threshold

P = ParamSpec("P")
R = TypeVar("R")


class AsyncCacheMemoizedFunction(AsyncMemoizedFunction[P, R]):
    """Memoized function backed by an ``AsyncCache``.

    Callers that join another caller's in-flight computation are reported
    as MISS, the same state the originating caller observed.
    """

    async def _lookup(
        self, key: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Memoized[R]:
        result = await self._cache.get(key)
        if result.state is State.HIT:
            return Memoized(result.value, State.HIT)

        pending = self._pending.get(key)
        if pending is not None:
            return Memoized(await asyncio.shield(pending), result.state)
        return Memoized(await self._refresh(key, args, kwargs), result.state)

    async def _store(self, key: str, value: R) -> None:
        await self._cache.set(key, value)


@overload
def memoize_with_async_cache(
    fn: Callable[P, Any],
    *,
    cache: AsyncCache,
    name: str | None = ...,
    create_key: CreateKey = ...,
    execution_time_threshold: Threshold = ...,
    verbose: bool = ...,
) -> AsyncCacheMemoizedFunction[P, Any]: ...


@overload
def memoize_with_async_cache(
    fn: None = ...,
    *,
    cache: AsyncCache,
    name: str | None = ...,
    create_key: CreateKey = ...,
    execution_time_threshold: Threshold = ...,
    verbose: bool = ...,
) -> Callable[[Callable[P, Any]], AsyncCacheMemoizedFunction[P, Any]]: ...


def memoize_with_async_cache(
    fn: Callable[P, Any] | None = None,
    *,
    cache: AsyncCache,
    name: str | None = None,
    create_key: CreateKey = default_create_key,
    execution_time_threshold: Threshold = 0,
    verbose: bool = False,
) -> Any:
    """Memoize ``fn`` (sync or async) in an async cache.

    Concurrent calls with the same key share a single call of ``fn``. A
    result is cached only if ``fn`` took at least
    ``execution_time_threshold`` (milliseconds or a duration string).

    Usage:
        @memoize_with_async_cache(cache=AsyncMemoryCache())
        async def get_user(id: str) -> dict:
            return await fetch_user(id)

        user = await get_user("123")
        user, state = await get_user.verbose("123")
    """
    if not isinstance(cache, AsyncCache):
        raise TypeError(f"Expected AsyncCache, got {type(cache)}")

    def decorator(fn: Callable[P, Any]) -> AsyncCacheMemoizedFunction[P, Any]:
        return AsyncCacheMemoizedFunction(
            fn,
            cache=cache,
            name=name,
            create_key=create_key,
            execution_time_threshold=execution_time_threshold,
            verbose=verbose,
        )

    if fn is None:
        return decorator
    return decorator(fn)


__all__ = ["AsyncCacheMemoizedFunction", "memoize_with_async_cache"]
