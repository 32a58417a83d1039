"""Async cache over HTTP, speaking a reference JSON wire format."""

from __future__ import annotations

from typing import Any, cast

from memokit.types import CacheResult


class AsyncHttpCache:
    """Async cache backed by a minimal JSON key-value service over HTTP.

    No particular product is targeted: this class defines a reference wire
    format, and any service implementing these endpoints can back it. Every
    call is a ``POST`` with a JSON body; ``api_key`` is sent as a bearer token.

    ``/v1/cache/get``
        Request ``{"key": str}``. Response ``{"entry": {"value": ...}}``, or
        ``{"entry": null}`` when the key is missing or expired.
    ``/v1/cache/set``
        Request ``{"key": str, "entry": {"value": ...}}``. Expiry is the
        service's concern.
    ``/v1/clear``
        Request ``{}``. Removes every entry.

    A non-2xx response raises ``RuntimeError`` carrying the body's
    ``"error"`` field, or ``HTTP <status>`` when the body is not JSON.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        import httpx

        headers = {"Content-Type": "application/json"}
        if api_key is not None:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
        )

    async def _request(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        """Make a POST request to the cache service."""
        response = await self._client.post(endpoint, json=body)
        if not response.is_success:
            try:
                error = response.json().get("error", "Request failed")
            except ValueError:
                error = f"HTTP {response.status_code}"
            raise RuntimeError(error)
        return cast(dict[str, Any], response.json())

    async def get(self, key: str) -> CacheResult[Any]:
        """Read an entry by key."""
        data = await self._request("/v1/cache/get", {"key": key})
        entry = data.get("entry")
        if entry is None:
            return CacheResult.miss()
        return CacheResult.hit(entry["value"])

    async def set(self, key: str, value: Any) -> None:
        """Store a value."""
        await self._request("/v1/cache/set", {"key": key, "entry": {"value": value}})

    async def clear(self) -> None:
        """Clear all cached entries."""
        await self._request("/v1/clear", {})

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
