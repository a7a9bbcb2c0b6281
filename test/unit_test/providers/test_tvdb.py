from __future__ import annotations

import json

import httpx
import pytest

from seerr.providers import TheMovieDb, Tvdb, clear_cache

pytestmark = pytest.mark.asyncio


def _mock_transport(calls: list, *, tvdb_status: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.host == "mock-tmdb" and request.url.path == "/tv/1399":
            return httpx.Response(
                200,
                json={
                    "id": 1399,
                    "name": "Game of Thrones",
                    "external_ids": {"tvdb_id": 121361},
                    "seasons": [{"season_number": 1, "episode_count": 10}],
                },
            )
        if request.url.host == "mock-tmdb" and request.url.path == "/tv/2":
            return httpx.Response(200, json={"id": 2, "name": "No TVDB id", "external_ids": {}})
        if request.url.host == "mock-tmdb" and request.url.path == "/movie/603":
            return httpx.Response(200, json={"id": 603, "title": "The Matrix"})
        if request.url.path == "/login":
            body = json.loads(request.content)
            assert body["apikey"] == "tvdb-key"
            return httpx.Response(200, json={"data": {"token": "jwt"}})
        if request.url.path == "/series/121361/extended":
            if tvdb_status != 200:
                return httpx.Response(tvdb_status, json={"status": "failure"})
            assert request.headers["Authorization"] == "Bearer jwt"
            return httpx.Response(
                200,
                json={
                    "data": {
                        "seasons": [
                            {"number": 2, "type": {"type": "official"}},
                            {"number": 0, "type": {"type": "official"}},
                            {"number": 1, "type": {"type": "official"}},
                            {"number": 1, "type": {"type": "dvd"}},
                        ],
                        "episodes": [
                            {"seasonNumber": 0},
                            {"seasonNumber": 1},
                            {"seasonNumber": 1},
                            {"seasonNumber": 2},
                        ],
                    }
                },
            )
        return httpx.Response(404)

    return httpx.MockTransport(handler)


def _tvdb(client: httpx.AsyncClient) -> Tvdb:
    tmdb = TheMovieDb(base_url="http://mock-tmdb", client=client)
    return Tvdb("tvdb-key", tmdb, base_url="http://mock-tvdb", client=client)


async def test_official_seasons_replace_tmdb_seasons():
    calls: list = []
    async with httpx.AsyncClient(transport=_mock_transport(calls)) as client:
        show = await _tvdb(client).get_tv_show(1399)

    assert [(s.season_number, s.episode_count) for s in show.seasons] == [(0, 1), (1, 2), (2, 1)]
    assert show.title == "Game of Thrones"


async def test_login_happens_once():
    calls: list = []
    async with httpx.AsyncClient(transport=_mock_transport(calls)) as client:
        tvdb = _tvdb(client)
        await tvdb.get_tv_show(1399)
        clear_cache()
        await tvdb.get_tv_show(1399)

    assert [c.url.path for c in calls].count("/login") == 1
    assert tvdb.token == "jwt"


async def test_falls_back_to_tmdb_seasons_on_error():
    calls: list = []
    async with httpx.AsyncClient(transport=_mock_transport(calls, tvdb_status=500)) as client:
        show = await _tvdb(client).get_tv_show(1399)

    assert [s.season_number for s in show.seasons] == [1]


async def test_series_without_tvdb_id_skips_tvdb():
    calls: list = []
    async with httpx.AsyncClient(transport=_mock_transport(calls)) as client:
        show = await _tvdb(client).get_tv_show(2)

    assert show.title == "No TVDB id"
    assert all(c.url.host == "mock-tmdb" for c in calls)


async def test_movies_use_tmdb():
    calls: list = []
    async with httpx.AsyncClient(transport=_mock_transport(calls)) as client:
        movie = await _tvdb(client).get_movie(603)

    assert movie.title == "The Matrix"
