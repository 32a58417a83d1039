"""Registry of in-flight computations, keyed by cache key."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from typing import Any


class PendingCalls:
    """In-flight origin calls of one memoized function.

    Holds at most one future per cache key. Concurrent callers that find a
    future here await it instead of calling the origin function again.
    """

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Future[Any]] = {}

    def get(self, key: str) -> asyncio.Future[Any] | None:
        return self._pending.get(key)

    def run(
        self,
        key: str,
        fn: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> asyncio.Future[Any]:
        """Call ``fn`` and register its eventual outcome under ``key``.

        ``fn`` may return a plain value, raise, or return an awaitable; every
        case becomes a future. No await happens between the call and the
        registration, so any caller scheduled afterwards sees the entry.
        """
        loop = asyncio.get_running_loop()
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future: asyncio.Future[Any] = loop.create_future()
            future.set_exception(e)
        else:
            if inspect.isawaitable(result):
                future = asyncio.ensure_future(result)
            else:
                future = loop.create_future()
                future.set_result(result)

        self._pending[key] = future
        return future

    def discard(self, key: str) -> None:
        self._pending.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)
