"""Plain synchronous memoization."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial, update_wrapper
from typing import Any, Generic, ParamSpec, TypeVar, overload

from memokit.caches.base import Cache
from memokit.keys import default_create_key
from memokit.memoizes._gate import ExecutionTimeGate
from memokit.types import CreateKey, State, Threshold

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


class MemoizedFunction(Generic[P, R]):
    """A sync function memoized in a ``Cache``."""

    def __init__(
        self,
        fn: Callable[P, R],
        *,
        cache: Cache,
        name: str | None = None,
        create_key: CreateKey = default_create_key,
        execution_time_threshold: Threshold = 0,
    ) -> None:
        update_wrapper(self, fn)
        self._fn = fn
        self._cache = cache
        self._name = name
        self._create_key = create_key
        self._gate = ExecutionTimeGate(execution_time_threshold)

    @property
    def cache(self) -> Cache:
        return self._cache

    @property
    def name(self) -> str | None:
        return self._name

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R:
        key = self._create_key(args, kwargs, self._name)
        cached = self._cache.get(key)
        if cached.state is State.HIT:
            return cached.value  # type: ignore[return-value]

        started = self._gate.start()
        result = self._fn(*args, **kwargs)
        if self._gate.should_cache(started):
            self._cache.set(key, result)
        else:
            logger.debug(
                "Not caching %s: faster than %gms threshold",
                key,
                self._gate.threshold,
            )
        return result

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            return self
        return partial(self, obj)


@overload
def memoize(
    fn: Callable[P, R],
    *,
    cache: Cache,
    name: str | None = ...,
    create_key: CreateKey = ...,
    execution_time_threshold: Threshold = ...,
) -> MemoizedFunction[P, R]: ...


@overload
def memoize(
    fn: None = ...,
    *,
    cache: Cache,
    name: str | None = ...,
    create_key: CreateKey = ...,
    execution_time_threshold: Threshold = ...,
) -> Callable[[Callable[P, R]], MemoizedFunction[P, R]]: ...


def memoize(
    fn: Callable[P, R] | None = None,
    *,
    cache: Cache,
    name: str | None = None,
    create_key: CreateKey = default_create_key,
    execution_time_threshold: Threshold = 0,
) -> Any:
    """Memoize a sync function.

    Usage:
        @memoize(cache=LRUCache(100))
        def parse(text: str) -> Document:
            ...
    """
    if not isinstance(cache, Cache):
        raise TypeError(f"Expected Cache, got {type(cache)}")

    def decorator(fn: Callable[P, R]) -> MemoizedFunction[P, R]:
        return MemoizedFunction(
            fn,
            cache=cache,
            name=name,
            create_key=create_key,
            execution_time_threshold=execution_time_threshold,
        )

    if fn is None:
        return decorator
    return decorator(fn)


__all__ = ["MemoizedFunction", "memoize"]
