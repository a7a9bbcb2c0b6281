from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from seerr.core.models.domain import MediaType
from seerr.providers import ExternalApiError, MediaNotFoundError, TheMovieDb

pytestmark = pytest.mark.asyncio

TMDB_URL = "http://mock-tmdb"


def _mock_transport(calls: list) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.path == "/movie/603":
            return httpx.Response(
                200,
                json={
                    "id": 603,
                    "title": "The Matrix",
                    "original_language": "en",
                    "adult": False,
                    "genres": [{"id": 28, "name": "Action"}],
                    "keywords": {"keywords": [{"id": 4565, "name": "dystopia"}]},
                    "external_ids": {"imdb_id": "tt0133093"},
                    "release_dates": {
                        "results": [{"iso_3166_1": "US", "release_dates": [{"certification": "R", "type": 3}]}]
                    },
                },
            )
        if request.url.path == "/tv/1399":
            return httpx.Response(
                200,
                json={
                    "id": 1399,
                    "name": "Game of Thrones",
                    "original_language": "en",
                    "genres": [{"id": 18, "name": "Drama"}],
                    "keywords": {"results": [{"id": 818, "name": "based on novel"}]},
                    "external_ids": {"imdb_id": "tt0944947", "tvdb_id": 121361},
                    "seasons": [
                        {"season_number": 0, "episode_count": 3, "name": "Specials"},
                        {"season_number": 1, "episode_count": 10, "name": "Season 1"},
                    ],
                    "content_ratings": {"results": [{"iso_3166_1": "US", "rating": "TV-MA"}]},
                },
            )
        if request.url.path == "/movie/500":
            return httpx.Response(500, json={"status_message": "boom"})
        return httpx.Response(404, json={"status_message": "The resource you requested could not be found."})

    return httpx.MockTransport(handler)


@pytest.fixture
def calls() -> list:
    return []


@pytest_asyncio.fixture
async def tmdb(calls):
    client = httpx.AsyncClient(transport=_mock_transport(calls))
    provider = TheMovieDb("tmdb-key", base_url=TMDB_URL, client=client)
    yield provider
    await client.aclose()


async def test_get_movie(tmdb, calls):
    movie = await tmdb.get_movie(603)

    assert movie.media_type == MediaType.movie
    assert movie.title == "The Matrix"
    assert movie.genre_ids == [28]
    assert movie.keyword_ids == [4565]
    assert movie.external_ids.imdb_id == "tt0133093"
    assert movie.release_dates[0].release_dates[0].certification == "R"

    params = calls[0].url.params
    assert params["api_key"] == "tmdb-key"
    assert params["language"] == "en"
    assert params["append_to_response"] == "external_ids,keywords,release_dates"


async def test_get_tv_show(tmdb):
    show = await tmdb.get_tv_show(1399)

    assert show.media_type == MediaType.tv
    assert show.title == "Game of Thrones"
    assert [s.season_number for s in show.seasons] == [0, 1]
    assert show.external_ids.tvdb_id == 121361
    assert show.content_ratings[0].rating == "TV-MA"


async def test_responses_are_cached(tmdb, calls):
    await tmdb.get_movie(603)
    await tmdb.get_movie(603)

    assert len(calls) == 1


async def test_not_found(tmdb):
    with pytest.raises(MediaNotFoundError) as exc_info:
        await tmdb.get_movie(1)
    assert exc_info.value.status_code == 404


async def test_server_error(tmdb):
    with pytest.raises(ExternalApiError) as exc_info:
        await tmdb.get_movie(500)
    assert exc_info.value.status_code == 500
    assert not isinstance(exc_info.value, MediaNotFoundError)


async def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        provider = TheMovieDb(base_url=TMDB_URL, client=client)
        with pytest.raises(ExternalApiError) as exc_info:
            await provider.get_movie(603)
    assert exc_info.value.status_code is None
