"""
Base HTTP client for third-party metadata APIs.

Wraps an ``httpx.AsyncClient`` with default query params and headers, a
process-wide TTL cache for GET requests, and translation of transport and
status errors into ``ExternalApiError``.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional, Tuple

import httpx

from seerr.core.logging_config import get_logger

from .errors import ExternalApiError

DEFAULT_TTL = 300

# Keyed by full URL and query params; shared by all client instances
_response_cache: Dict[str, Tuple[float, Any]] = {}


def clear_cache() -> None:
    """Drop every cached GET response."""
    _response_cache.clear()


class ExternalAPI:
    """Thin async HTTP client shared by metadata providers."""

    def __init__(
        self,
        base_url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        cache_ttl: int = DEFAULT_TTL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.default_params = dict(params or {})
        self.cache_ttl = cache_ttl
        self._headers = {"Content-Type": "application/json", "Accept": "application/json", **(headers or {})}
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._owns_client = client is None
        self._logger = get_logger(f"{__name__}.{type(self).__name__}")

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ExternalAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _cache_key(self, endpoint: str, params: Dict[str, Any]) -> str:
        return f"{self.base_url}{endpoint}?{json.dumps(params, sort_keys=True, default=str)}"

    async def get(
        self,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        ttl: Optional[int] = None,
    ) -> Any:
        """GET ``endpoint`` and return the decoded JSON body.

        Args:
            endpoint: Path relative to the base URL
            params: Query params merged over the defaults
            headers: Extra request headers
            ttl: Cache lifetime in seconds; 0 disables caching for this call

        Raises:
            ExternalApiError: On transport errors and non-2xx responses
        """
        merged = {**self.default_params, **(params or {})}
        key = self._cache_key(endpoint, merged)
        lifetime = self.cache_ttl if ttl is None else ttl
        cached = _response_cache.get(key) if lifetime else None
        if cached is not None:
            if cached[0] > time.monotonic():
                return cached[1]
            del _response_cache[key]

        data = await self._request("GET", endpoint, params=merged, headers=headers)
        if lifetime:
            _response_cache[key] = (time.monotonic() + lifetime, data)
        return data

    async def post(
        self,
        endpoint: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        return await self._request("POST", endpoint, json_body=body, headers=headers)

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        self._logger.debug("%s %s params=%s", method, url, params)
        try:
            response = await self._client.request(
                method, url, params=params, json=json_body, headers={**self._headers, **(headers or {})}
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExternalApiError(
                f"{method} {endpoint} failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise ExternalApiError(f"{method} {endpoint} failed: {e}") from e
        return response.json()
