"""Duration parsing utilities."""

import re

from memokit.types import Duration

_DURATION_PATTERN = re.compile(r"^(\d+)(ms|s|m|h|d)$")
_UNITS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_duration(duration: Duration) -> int:
    """Parse duration string to milliseconds. Passthrough if already int."""
    if isinstance(duration, bool):
        raise ValueError(f"Invalid duration: {duration!r}")
    if isinstance(duration, int):
        if duration < 0:
            raise ValueError(f"Duration must be non-negative: {duration!r}")
        return duration

    if not isinstance(duration, str):
        raise TypeError(f"Expected str or int duration, got {type(duration)}")

    match = _DURATION_PATTERN.match(duration)
    if not match:
        raise ValueError(f"Invalid duration: {duration!r}")

    value, unit = match.groups()
    return int(value) * _UNITS[unit]


def parse_time_to_live(time_to_live: Duration | None) -> int | None:
    """Parse an optional entry lifetime; ``None`` means entries never expire."""
    if time_to_live is None:
        return None
    ttl = parse_duration(time_to_live)
    if ttl == 0:
        raise ValueError("time_to_live must be positive")
    return ttl
