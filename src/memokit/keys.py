"""Cache key derivation from call arguments."""

import json
from typing import Any


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=repr)


def _normalize(value: Any) -> Any:
    """Rewrite containers so that equal arguments serialize identically.

    Dict keys become strings (non-string keys are replaced by their
    serialized form), tuples become lists and sets become lists sorted by
    the serialized form of their members.
    """
    if isinstance(value, dict):
        return {
            key if isinstance(key, str) else _dumps(_normalize(key)): _normalize(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted((_normalize(item) for item in value), key=_dumps)
    return value


def default_create_key(
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    name: str | None = None,
) -> str:
    """Build a stable cache key from call arguments.

    Arguments are serialized as JSON with sorted object keys, so two dicts
    with the same items always produce the same key regardless of insertion
    order. The same holds for sets, and for dicts mixing key types. Values
    JSON cannot represent fall back to their ``repr``.

    When ``name`` is given it prefixes the key, keeping identical arguments
    to different memoized functions apart in a shared cache.
    """
    payload = _dumps(_normalize([args, kwargs]))
    if name is None:
        return payload
    return f"{name}:{payload}"
