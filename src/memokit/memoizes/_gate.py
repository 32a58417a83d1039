"""Execution-time gate deciding whether a result is worth caching."""

import time

from memokit.duration import parse_duration
from memokit.types import Threshold


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


def _parse_threshold(threshold: Threshold) -> float:
    if isinstance(threshold, float):
        if not threshold >= 0:
            raise ValueError(f"Duration must be non-negative: {threshold!r}")
        return threshold
    return parse_duration(threshold)


class ExecutionTimeGate:
    """Only results that took at least ``threshold`` milliseconds are cached.

    The threshold may be fractional. The default of 0 caches every
    successful result.
    """

    __slots__ = ("_threshold",)

    def __init__(self, threshold: Threshold = 0) -> None:
        self._threshold = _parse_threshold(threshold)

    @property
    def threshold(self) -> float:
        return self._threshold

    def start(self) -> float:
        """Timestamp marking the start of an execution."""
        return _monotonic_ms()

    def should_cache(self, started: float) -> bool:
        """Whether an execution begun at ``started`` ran long enough."""
        return _monotonic_ms() - started >= self._threshold
