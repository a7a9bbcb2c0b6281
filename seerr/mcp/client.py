"""
HTTP client used by the MCP server.

Wraps the Seerr REST endpoints the MCP tools need (status, requests, routing
rules and the blocklist) and turns failures into ``SeerrApiError`` carrying the
status code and response body.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

import httpx

from seerr.core.logging_config import get_logger

DEFAULT_TIMEOUT = 30.0


class SeerrApiError(Exception):
    """A Seerr API call failed; ``status_code`` is None for transport errors."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class SeerrApiClient:
    """
    Thin async HTTP client for the Seerr REST API.

    Every call goes to ``{base_url}/api/v1`` with the ``X-Api-Key`` header.
    Non-2xx responses and transport failures raise ``SeerrApiError``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/api/v1"
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = get_logger(__name__)

    def _headers(self) -> dict[str, str]:
        return {"X-Api-Key": self.api_key, "Content-Type": "application/json"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        url = f"{self.api_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None} or None
        self._logger.debug("SeerrApiClient: %s %s params=%s", method, url, query)
        try:
            r = await self._client.request(method, url, headers=self._headers(), params=query, json=json)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SeerrApiError(
                f"Seerr API {method} {path} failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=_error_details(e.response),
            ) from e
        except httpx.RequestError as e:
            raise SeerrApiError(f"Seerr API {method} {path} failed: {e}") from e
        if r.status_code == 204 or not r.content:
            return None
        return r.json()

    async def get_status(self) -> Dict[str, Any]:
        return await self._request("GET", "/status")

    async def list_requests(
        self,
        *,
        take: int = 10,
        skip: int = 0,
        filter: str = "all",
        sort: Literal["added", "modified"] = "added",
        media_type: Optional[str] = None,
        requested_by: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {
            "take": take,
            "skip": skip,
            "filter": filter,
            "sort": sort,
            "mediaType": media_type,
            "requestedBy": requested_by,
        }
        return await self._request("GET", "/request", params=params)

    async def get_request(self, request_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/request/{request_id}")

    async def create_request(
        self,
        media_type: str,
        media_id: int,
        *,
        seasons: Optional[Union[List[int], Literal["all"]]] = None,
        is_4k: bool = False,
        server_id: Optional[int] = None,
        profile_id: Optional[int] = None,
        root_folder: Optional[str] = None,
        tags: Optional[List[int]] = None,
    ) -> Dict[str, Any]:
        body = {
            "mediaType": media_type,
            "mediaId": media_id,
            "seasons": seasons,
            "is4k": is_4k,
            "serverId": server_id,
            "profileId": profile_id,
            "rootFolder": root_folder,
            "tags": tags,
        }
        return await self._request("POST", "/request", json={k: v for k, v in body.items() if v is not None})

    async def approve_request(self, request_id: int) -> Dict[str, Any]:
        return await self._request("POST", f"/request/{request_id}/approve")

    async def decline_request(self, request_id: int, reason: Optional[str] = None) -> Dict[str, Any]:
        return await self._request("POST", f"/request/{request_id}/decline", json={"reason": reason} if reason else None)

    async def list_routing_rules(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/settings/routing-rules")

    async def list_blocklist(
        self, *, take: int = 25, skip: int = 0, search: Optional[str] = None, filter: str = "all"
    ) -> Dict[str, Any]:
        return await self._request(
            "GET", "/blocklist", params={"take": take, "skip": skip, "search": search, "filter": filter}
        )

    async def add_to_blocklist(self, tmdb_id: int, media_type: str, title: Optional[str] = None) -> Dict[str, Any]:
        body = {"tmdbId": tmdb_id, "mediaType": media_type, "title": title}
        return await self._request("POST", "/blocklist", json={k: v for k, v in body.items() if v is not None})

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "SeerrApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _error_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
