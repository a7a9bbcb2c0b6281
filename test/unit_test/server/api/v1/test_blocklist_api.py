import pytest
from httpx import AsyncClient

from seerr.core.database.repositories import MediaRepository
from seerr.core.models.domain import MediaStatus
from seerr.core.permissions import Permission
from seerr.lib.blocklist import add_to_blocklist

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/blocklist"


async def _add(client: AsyncClient, tmdb_id: int, title: str, media_type: str = "movie", **kwargs):
    return await client.post(BASE, json={"tmdbId": tmdb_id, "mediaType": media_type, "title": title}, **kwargs)


async def test_add_entry(client: AsyncClient, session, admin_user):
    response = await _add(client, 603, "The Matrix")

    assert response.status_code == 201
    data = response.json()
    assert data["tmdbId"] == 603
    assert data["mediaType"] == "movie"
    assert data["userId"] == admin_user.id

    media = await MediaRepository(session).get_by_tmdb_id(603, "movie")
    assert media.status == MediaStatus.BLOCKLISTED


async def test_add_records_given_user(client: AsyncClient, make_user):
    user = await make_user()
    response = await client.post(BASE, json={"tmdbId": 603, "mediaType": "movie", "user": user.id})
    assert response.json()["userId"] == user.id


async def test_add_twice_conflicts(client: AsyncClient):
    await _add(client, 603, "The Matrix")

    response = await _add(client, 603, "The Matrix")

    assert response.status_code == 409
    assert response.json()["detail"] == "Item already blocklisted"


async def test_list_with_search_and_paging(client: AsyncClient):
    await _add(client, 603, "The Matrix")
    await _add(client, 604, "The Matrix Reloaded")
    await _add(client, 1399, "Game of Thrones", media_type="tv")

    page = (await client.get(BASE, params={"take": 2})).json()
    assert page["pageInfo"] == {"pages": 2, "pageSize": 2, "results": 3, "page": 1}
    assert len(page["results"]) == 2

    found = (await client.get(BASE, params={"search": "matrix"})).json()
    assert sorted(r["tmdbId"] for r in found["results"]) == [603, 604]


async def test_list_filter_by_origin(client: AsyncClient, session):
    await _add(client, 603, "The Matrix")
    await add_to_blocklist(session, "movie", 700, "Tagged", None, blocklisted_tags="1234")

    manual = (await client.get(BASE, params={"filter": "manual"})).json()
    tagged = (await client.get(BASE, params={"filter": "blocklistedTags"})).json()

    assert [r["tmdbId"] for r in manual["results"]] == [603]
    assert [r["tmdbId"] for r in tagged["results"]] == [700]


async def test_list_rejects_unknown_filter(client: AsyncClient):
    assert (await client.get(BASE, params={"filter": "everything"})).status_code == 422


async def test_view_permission_can_list_but_not_add(client: AsyncClient, make_user):
    viewer = await make_user(int(Permission.VIEW_BLOCKLIST))
    headers = {"X-Api-User": str(viewer.id)}

    assert (await client.get(BASE, headers=headers)).status_code == 200
    assert (await _add(client, 603, "The Matrix", headers=headers)).status_code == 403


async def test_get_entry(client: AsyncClient):
    await _add(client, 603, "The Matrix")

    found = await client.get(f"{BASE}/603", params={"mediaType": "movie"})
    wrong_type = await client.get(f"{BASE}/603", params={"mediaType": "tv"})
    no_type = await client.get(f"{BASE}/603")

    assert found.status_code == 200
    assert found.json()["title"] == "The Matrix"
    assert wrong_type.status_code == 404
    assert no_type.status_code == 400


async def test_delete_entry(client: AsyncClient, session):
    await _add(client, 603, "The Matrix")

    response = await client.delete(f"{BASE}/603", params={"mediaType": "movie"})

    assert response.status_code == 204
    assert (await client.get(f"{BASE}/603", params={"mediaType": "movie"})).status_code == 404
    assert await MediaRepository(session).get_by_tmdb_id(603, "movie") is None


async def test_delete_missing_entry(client: AsyncClient):
    assert (await client.delete(f"{BASE}/603", params={"mediaType": "movie"})).status_code == 404
    assert (await client.delete(f"{BASE}/603", params={"mediaType": "book"})).status_code == 400
