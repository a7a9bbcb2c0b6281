import json

import pytest
from httpx import AsyncClient

from seerr.core.permissions import Permission

pytestmark = pytest.mark.asyncio


async def test_get_main_settings(client: AsyncClient, store):
    response = await client.get("/api/v1/settings/main")

    assert response.status_code == 200
    data = response.json()
    assert data["apiKey"] == store.main.api_key
    assert data["applicationTitle"] == "Seerr"
    assert data["defaultPermissions"] == int(Permission.REQUEST)


async def test_main_settings_require_admin(client: AsyncClient, make_user):
    user = await make_user(int(Permission.MANAGE_SETTINGS))
    response = await client.get("/api/v1/settings/main", headers={"X-Api-User": str(user.id)})
    assert response.status_code == 403


async def test_update_main_settings_merges_and_saves(client: AsyncClient, store):
    old_key = store.main.api_key

    response = await client.post(
        "/api/v1/settings/main",
        json={"applicationTitle": "Home Requests", "apiKey": "hijacked", "defaultQuotas": {"movie": {"quotaLimit": 5}}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["applicationTitle"] == "Home Requests"
    assert data["apiKey"] == old_key
    assert data["defaultQuotas"]["movie"]["quotaLimit"] == 5
    assert data["localLogin"] is True

    on_disk = json.loads(store.path.read_text())
    assert on_disk["main"]["applicationTitle"] == "Home Requests"


async def test_update_main_settings_rejects_invalid_values(client: AsyncClient, store):
    response = await client.post("/api/v1/settings/main", json={"hideAvailable": "definitely-not-a-bool"})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("hideAvailable:")
    assert store.main.hide_available is False


@pytest.mark.parametrize("field", ["applicationUrl", "youtubeUrl"])
async def test_update_main_settings_rejects_invalid_urls(client: AsyncClient, store, field):
    response = await client.post("/api/v1/settings/main", json={field: "not a url"})

    assert response.status_code == 400
    assert response.json()["detail"] == f"Invalid URL for {field}."
    assert store.main.model_dump(by_alias=True)[field] == ""


async def test_update_main_settings_accepts_application_url(client: AsyncClient):
    response = await client.post("/api/v1/settings/main", json={"applicationUrl": "https://requests.example.com"})

    assert response.status_code == 200
    assert response.json()["applicationUrl"] == "https://requests.example.com"


async def test_regenerate_api_key(client: AsyncClient, store):
    old_key = store.main.api_key

    response = await client.post("/api/v1/settings/main/regenerate")

    assert response.status_code == 200
    new_key = response.json()["apiKey"]
    assert new_key != old_key
    assert (await client.get("/api/v1/settings/main")).status_code == 401
    assert (await client.get("/api/v1/settings/main", headers={"X-Api-Key": new_key})).status_code == 200


async def test_metadata_settings(client: AsyncClient):
    assert (await client.get("/api/v1/settings/metadata")).json() == {"tv": "tmdb", "anime": "tmdb"}

    response = await client.put("/api/v1/settings/metadata", json={"anime": "tvdb"})

    assert response.status_code == 200
    assert response.json() == {"tv": "tmdb", "anime": "tvdb"}


async def test_metadata_settings_reject_unknown_provider(client: AsyncClient):
    response = await client.put("/api/v1/settings/metadata", json={"tv": "imdb"})
    assert response.status_code == 422


async def test_public_settings(client: AsyncClient):
    response = await client.get("/api/v1/settings/public", headers={"X-Api-Key": ""})

    data = response.json()
    assert data["applicationTitle"] == "Seerr"
    assert data["movie4kEnabled"] is True
    assert data["series4kEnabled"] is False
    assert data["metadataSettings"] == {"tv": "tmdb", "anime": "tmdb"}
    assert "apiKey" not in data
