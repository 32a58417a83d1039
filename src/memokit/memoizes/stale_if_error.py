"""Async memoization that falls back to stale values when refreshing fails."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar, overload

from memokit.caches.base import StaleIfErrorCache
from memokit.keys import default_create_key
from memokit.memoizes._base import AsyncMemoizedFunction
from memokit.types import CreateKey, Memoized, State, Threshold

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

# Called with (cache key, swallowed exception)
StaleErrorHook = Callable[[str, Exception], None]


def _failed_with(future: asyncio.Future[Any], error: BaseException) -> bool:
    """Whether ``future`` settled with exactly ``error``."""
    return future.done() and not future.cancelled() and future.exception() is error


class StaleIfErrorMemoizedFunction(AsyncMemoizedFunction[P, R]):
    """Memoized function backed by a ``StaleIfErrorCache``.

    States reported:
    - HIT: fresh cached value
    - MISS: nothing cached, this call ran the function
    - STALE_IF_ERROR: entry was stale; either this call refreshed it, or the
      refresh failed and the stale value was served instead
    - REUSE: this call joined a computation another caller started

    An error is only raised when there is no stale value to fall back on.
    """

    def __init__(
        self,
        fn: Callable[P, Any],
        *,
        on_stale_error: StaleErrorHook | None = None,
        **options: Any,
    ) -> None:
        super().__init__(fn, **options)
        self._on_stale_error = on_stale_error

    async def _lookup(
        self, key: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Memoized[R]:
        result = self._cache.get(key)
        if result.state is State.HIT:
            return Memoized(result.value, State.HIT)

        pending = self._pending.get(key)
        if result.state is State.STALE_IF_ERROR:
            shared: asyncio.Future[Any]
            if pending is not None:
                state = State.REUSE
                shared = pending
            else:
                state = State.STALE_IF_ERROR
                pending, shared = self._originate(key, args, kwargs)

            try:
                return Memoized(await asyncio.shield(shared), state)
            except Exception as e:
                # Cache errors still propagate, only the function's own
                # failure is replaced by the stale value
                if not _failed_with(pending, e):
                    raise
                self._stale_error(key, e)
                return Memoized(result.value, State.STALE_IF_ERROR)

        # MISS: nothing to fall back on, errors propagate
        if pending is not None:
            return Memoized(await asyncio.shield(pending), State.REUSE)
        return Memoized(await self._refresh(key, args, kwargs), State.MISS)

    async def _store(self, key: str, value: R) -> None:
        self._cache.set(key, value)

    def _stale_error(self, key: str, error: Exception) -> None:
        logger.warning(
            "Refreshing %s failed, serving stale value", key, exc_info=error
        )
        if self._on_stale_error is not None:
            self._on_stale_error(key, error)


@overload
def memoize_async_stale_if_error(
    fn: Callable[P, Any],
    *,
    cache: StaleIfErrorCache,
    name: str | None = ...,
    create_key: CreateKey = ...,
    execution_time_threshold: Threshold = ...,
    verbose: bool = ...,
    on_stale_error: StaleErrorHook | None = ...,
) -> StaleIfErrorMemoizedFunction[P, Any]: ...


@overload
def memoize_async_stale_if_error(
    fn: None = ...,
    *,
    cache: StaleIfErrorCache,
    name: str | None = ...,
    create_key: CreateKey = ...,
    execution_time_threshold: Threshold = ...,
    verbose: bool = ...,
    on_stale_error: StaleErrorHook | None = ...,
) -> Callable[[Callable[P, Any]], StaleIfErrorMemoizedFunction[P, Any]]: ...


def memoize_async_stale_if_error(
    fn: Callable[P, Any] | None = None,
    *,
    cache: StaleIfErrorCache,
    name: str | None = None,
    create_key: CreateKey = default_create_key,
    execution_time_threshold: Threshold = 0,
    verbose: bool = False,
    on_stale_error: StaleErrorHook | None = None,
) -> Any:
    """Memoize ``fn`` with stale-if-error fallback.

    Args:
        fn: Function to memoize, sync or async (omit to get a decorator)
        cache: Cache reporting HIT, MISS or STALE_IF_ERROR
        name: Folded into keys to keep functions sharing a cache apart
        create_key: Key builder, ``(args, kwargs, name) -> str``
        execution_time_threshold: Minimum run time for a result to be cached
        verbose: Make plain calls resolve to ``Memoized`` pairs
        on_stale_error: Called with (key, exception) when a refresh error
            is replaced by a stale value

    Returns:
        The memoized function
    """
    if not isinstance(cache, StaleIfErrorCache):
        raise TypeError(f"Expected StaleIfErrorCache, got {type(cache)}")

    def decorator(fn: Callable[P, Any]) -> StaleIfErrorMemoizedFunction[P, Any]:
        return StaleIfErrorMemoizedFunction(
            fn,
            cache=cache,
            name=name,
            create_key=create_key,
            execution_time_threshold=execution_time_threshold,
            verbose=verbose,
            on_stale_error=on_stale_error,
        )

    if fn is None:
        return decorator
    return decorator(fn)


__all__ = ["StaleIfErrorMemoizedFunction", "memoize_async_stale_if_error"]
