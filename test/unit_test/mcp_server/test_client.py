from __future__ import annotations

import json
import logging

import httpx
import pytest

from seerr.mcp import SeerrApiClient, SeerrApiError

pytestmark = pytest.mark.asyncio

BASE_URL = "http://mock-seerr/"


def _client(handler) -> SeerrApiClient:
    return SeerrApiClient(BASE_URL, "key-123", client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


async def test_sends_api_key_to_versioned_path():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"version": "1.0.0"})

    async with _client(handler) as client:
        status = await client.get_status()

    assert status == {"version": "1.0.0"}
    assert str(seen[0].url) == "http://mock-seerr/api/v1/status"
    assert seen[0].headers["X-Api-Key"] == "key-123"


async def test_list_requests_drops_unset_params():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"pageInfo": {}, "results": []})

    async with _client(handler) as client:
        await client.list_requests(take=5, filter="pending", media_type="tv")

    params = seen[0].url.params
    assert params["take"] == "5"
    assert params["filter"] == "pending"
    assert params["mediaType"] == "tv"
    assert "requestedBy" not in params


async def test_create_request_body():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(201, json={"id": 1})

    async with _client(handler) as client:
        created = await client.create_request("tv", 1399, seasons=[1, 2], tags=[3])

    assert created == {"id": 1}
    assert seen[0] == {"mediaType": "tv", "mediaId": 1399, "seasons": [1, 2], "is4k": False, "tags": [3]}


async def test_decline_with_reason():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 4, "status": 3})

    async with _client(handler) as client:
        await client.decline_request(4, "Not available in region")

    assert seen[0].url.path == "/api/v1/request/4/decline"
    assert json.loads(seen[0].content) == {"reason": "Not available in region"}


async def test_no_content_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    async with _client(handler) as client:
        assert await client.approve_request(1) is None


async def test_http_error_carries_status_and_details():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"detail": "Item already blocklisted"})

    async with _client(handler) as client:
        with pytest.raises(SeerrApiError) as exc_info:
            await client.add_to_blocklist(603, "movie", "The Matrix")

    assert exc_info.value.status_code == 409
    assert exc_info.value.details == {"detail": "Item already blocklisted"}


async def test_non_json_error_details_are_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    async with _client(handler) as client:
        with pytest.raises(SeerrApiError) as exc_info:
            await client.list_routing_rules()

    assert exc_info.value.details == "Bad Gateway"


async def test_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(SeerrApiError) as exc_info:
            await client.list_blocklist(search="matrix")

    assert exc_info.value.status_code is None


async def test_calls_are_logged_under_the_module_logger(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"version": "1.0.0"})

    with caplog.at_level(logging.DEBUG, logger="seerr.mcp.client"):
        async with _client(handler) as client:
            await client.get_status()

    records = [r for r in caplog.records if r.name == "seerr.mcp.client"]
    assert records
    assert "GET http://mock-seerr/api/v1/status" in records[0].getMessage()
