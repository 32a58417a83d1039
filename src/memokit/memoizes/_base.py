"""Shared machinery of the async memoizers."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from functools import update_wrapper
from typing import Any, Generic, ParamSpec, TypeVar

from memokit.keys import default_create_key
from memokit.memoizes._gate import ExecutionTimeGate
from memokit.memoizes._pending import PendingCalls
from memokit.types import CreateKey, Memoized, Threshold

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class AsyncMemoizedFunction(Generic[P, R]):
    """An async memoized function.

    ``await f(...)`` resolves to the bare value (or to a ``Memoized`` pair when
    built with ``verbose=True``); ``await f.verbose(...)`` always resolves to a
    ``Memoized`` pair of value and state.

    Subclasses decide how a cache read is turned into a result in
    ``_lookup``; this class owns key derivation, the pending-call registry,
    the execution-time gate and the refresh procedure.
    """

    def __init__(
        self,
        fn: Callable[P, Any],
        *,
        cache: Any,
        name: str | None = None,
        create_key: CreateKey = default_create_key,
        execution_time_threshold: Threshold = 0,
        verbose: bool = False,
    ) -> None:
        update_wrapper(self, fn)
        self._fn = fn
        self._cache = cache
        self._name = name
        self._create_key = create_key
        self._gate = ExecutionTimeGate(execution_time_threshold)
        self._verbose = verbose
        self._pending = PendingCalls()
        self._refreshes: set[asyncio.Task[Any]] = set()

    @property
    def cache(self) -> Any:
        return self._cache

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def pending(self) -> PendingCalls:
        return self._pending

    async def __call__(self, *args: P.args, **kwargs: P.kwargs) -> Any:
        result = await self.verbose(*args, **kwargs)
        return result if self._verbose else result.value

    async def verbose(self, *args: P.args, **kwargs: P.kwargs) -> Memoized[R]:
        """Call through the cache and report how the value was obtained."""
        key = self._create_key(args, kwargs, self._name)
        return await self._lookup(key, args, kwargs)

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            return self
        return BoundMemoizedFunction(self, obj)

    async def _lookup(
        self, key: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Memoized[R]:
        raise NotImplementedError

    async def _store(self, key: str, value: R) -> None:
        raise NotImplementedError

    async def _refresh(
        self, key: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> R:
        """Run the origin function as the single in-flight call for ``key``."""
        _, refresh = self._originate(key, args, kwargs)
        return await asyncio.shield(refresh)

    def _originate(
        self, key: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> tuple[asyncio.Future[Any], asyncio.Task[R]]:
        """Call the origin function and register it as pending for ``key``.

        Returns the origin call's future and the task settling it. The task
        caches the result and unregisters the key even if the caller that
        started it is cancelled.
        """
        started = self._gate.start()
        future = self._pending.run(key, self._fn, args, kwargs)
        refresh = asyncio.create_task(self._settle(key, future, started))
        self._refreshes.add(refresh)
        refresh.add_done_callback(self._refresh_done)
        return future, refresh

    async def _settle(
        self, key: str, future: asyncio.Future[Any], started: float
    ) -> R:
        """Await an originated call, cache it if slow enough, unregister it."""
        try:
            result: R = await future
            if self._gate.should_cache(started):
                await self._store(key, result)
            else:
                logger.debug(
                    "Not caching %s: faster than %gms threshold",
                    key,
                    self._gate.threshold,
                )
            return result
        finally:
            self._pending.discard(key)

    def _refresh_done(self, task: asyncio.Task[Any]) -> None:
        self._refreshes.discard(task)
        # Marks the error retrieved when no caller is left to await it
        if not task.cancelled() and task.exception() is not None:
            logger.debug("Refresh failed", exc_info=task.exception())


class BoundMemoizedFunction:
    """A memoized function bound to an instance, for use as a method."""

    __slots__ = ("_function", "_obj")

    def __init__(self, function: AsyncMemoizedFunction[Any, Any], obj: Any) -> None:
        self._function = function
        self._obj = obj

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return await self._function(self._obj, *args, **kwargs)

    async def verbose(self, *args: Any, **kwargs: Any) -> Memoized[Any]:
        return await self._function.verbose(self._obj, *args, **kwargs)
