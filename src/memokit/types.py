"""Core types for memokit."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class State(str, Enum):
    """How a memoized call was answered."""

    HIT = "hit"
    MISS = "miss"
    STALE_IF_ERROR = "stale-if-error"
    # Synthesized by the memoizer, never returned by a cache
    REUSE = "reuse"


@dataclass(frozen=True, slots=True)
class CacheResult(Generic[T]):
    """A cache read: freshness state plus the value (None on a miss)."""

    state: State
    value: T | None = None

    @classmethod
    def hit(cls, value: T) -> "CacheResult[T]":
        return cls(State.HIT, value)

    @classmethod
    def miss(cls) -> "CacheResult[Any]":
        return cls(State.MISS)

    @classmethod
    def stale_if_error(cls, value: T) -> "CacheResult[T]":
        return cls(State.STALE_IF_ERROR, value)


@dataclass(frozen=True, slots=True)
class Memoized(Generic[T]):
    """The value of a memoized call tagged with how it was obtained."""

    value: T
    state: State

    def __iter__(self) -> Iterator[Any]:
        # Allows `value, state = await fn.verbose(...)`
        yield self.value
        yield self.state


# (args, kwargs, name) -> cache key
CreateKey = Callable[[tuple[Any, ...], dict[str, Any], str | None], str]

# Duration type alias
Duration = str | int  # "200ms", "30s", "5m", "2h", "1d" or milliseconds

# Execution-time threshold: a Duration or fractional milliseconds
Threshold = float | Duration
