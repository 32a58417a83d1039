"""Memoizers for sync functions, async caches and stale-if-error caches."""

from memokit.memoizes._base import AsyncMemoizedFunction, BoundMemoizedFunction
from memokit.memoizes._pending import PendingCalls
from memokit.memoizes.async_cache import (
    AsyncCacheMemoizedFunction,
    memoize_with_async_cache,
)
from memokit.memoizes.memoize import MemoizedFunction, memoize
from memokit.memoizes.stale_if_error import (
    StaleIfErrorMemoizedFunction,
    memoize_async_stale_if_error,
)

__all__ = [
    "AsyncCacheMemoizedFunction",
    "AsyncMemoizedFunction",
    "BoundMemoizedFunction",
    "MemoizedFunction",
    "PendingCalls",
    "StaleIfErrorMemoizedFunction",
    "memoize",
    "memoize_async_stale_if_error",
    "memoize_with_async_cache",
]
