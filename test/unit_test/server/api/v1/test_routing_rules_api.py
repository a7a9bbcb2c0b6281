import pytest
from httpx import AsyncClient

from seerr.core.permissions import Permission

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/settings/routing-rules"


def _rule(name: str, **fields) -> dict:
    return {"name": name, "serviceType": "radarr", "targetServiceId": 0, "genres": "28", **fields}


async def test_requires_admin(client: AsyncClient, make_user):
    manager = await make_user(int(Permission.MANAGE_SETTINGS | Permission.MANAGE_REQUESTS))
    response = await client.get(BASE, headers={"X-Api-User": str(manager.id)})
    assert response.status_code == 403


async def test_create_assigns_increasing_priority(client: AsyncClient):
    first = await client.post(BASE, json=_rule("Action"))
    second = await client.post(BASE, json=_rule("Drama", genres="18"))

    assert first.status_code == 201
    assert first.json()["priority"] == 10
    assert second.json()["priority"] == 20
    assert first.json()["is4k"] is False


async def test_is_4k_follows_target_instance(client: AsyncClient):
    response = await client.post(BASE, json=_rule("UHD", targetServiceId=1, is4k=False))
    assert response.json()["is4k"] is True


@pytest.mark.parametrize(
    "fields,detail",
    [
        ({"serviceType": "lidarr"}, "Invalid serviceType."),
        ({"targetServiceId": 9}, "Target instance not found."),
        ({"genres": None}, "Non-fallback rules must have at least one condition."),
    ],
)
async def test_create_validation(client: AsyncClient, fields, detail):
    response = await client.post(BASE, json=_rule("Bad", **fields))

    assert response.status_code == 400
    assert response.json()["detail"] == detail


async def test_fallback_rules(client: AsyncClient):
    fallback = {
        "name": "Default",
        "serviceType": "radarr",
        "targetServiceId": 0,
        "isFallback": True,
        "genres": "28",
        "rootFolder": "/movies",
        "activeProfileId": 1,
        "minimumAvailability": "released",
    }

    created = await client.post(BASE, json=fallback)
    duplicate = await client.post(BASE, json=fallback)

    assert created.status_code == 201
    assert created.json()["priority"] == 0
    assert created.json()["genres"] is None
    assert duplicate.status_code == 409


@pytest.mark.parametrize(
    "missing,detail",
    [
        ("rootFolder", "Fallback requires rootFolder."),
        ("activeProfileId", "Fallback requires activeProfileId."),
        ("minimumAvailability", "Fallback requires minimumAvailability for radarr."),
    ],
)
async def test_fallback_requires_target_options(client: AsyncClient, missing, detail):
    body = {
        "name": "Default",
        "serviceType": "radarr",
        "targetServiceId": 0,
        "isFallback": True,
        "rootFolder": "/movies",
        "activeProfileId": 1,
        "minimumAvailability": "released",
    }
    body.pop(missing)

    response = await client.post(BASE, json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == detail


async def test_fallback_must_target_default_instance(client: AsyncClient, store):
    store.radarr[0].is_default = False

    response = await client.post(
        BASE,
        json={
            "name": "Default",
            "serviceType": "radarr",
            "targetServiceId": 0,
            "isFallback": True,
            "rootFolder": "/movies",
            "activeProfileId": 1,
            "minimumAvailability": "released",
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Fallback rules must target a default instance."


async def test_list_and_reorder(client: AsyncClient):
    a = (await client.post(BASE, json=_rule("A"))).json()["id"]
    b = (await client.post(BASE, json=_rule("B", genres="18"))).json()["id"]
    c = (await client.post(BASE, json=_rule("C", genres="35"))).json()["id"]

    listed = await client.get(BASE)
    assert [r["name"] for r in listed.json()] == ["C", "B", "A"]

    reordered = await client.post(f"{BASE}/reorder", json={"ruleIds": [a, b, c]})

    assert reordered.status_code == 200
    assert [(r["name"], r["priority"]) for r in reordered.json()] == [("A", 30), ("B", 20), ("C", 10)]


async def test_reorder_limit(client: AsyncClient):
    response = await client.post(f"{BASE}/reorder", json={"ruleIds": list(range(1001))})
    assert response.status_code == 400


async def test_update_rule(client: AsyncClient):
    rule_id = (await client.post(BASE, json=_rule("Action"))).json()["id"]

    response = await client.put(f"{BASE}/{rule_id}", json={"name": "Renamed", "rootFolder": "/action"})

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Renamed"
    assert data["rootFolder"] == "/action"
    assert data["genres"] == "28"


async def test_update_cannot_drop_last_condition(client: AsyncClient):
    rule_id = (await client.post(BASE, json=_rule("Action"))).json()["id"]

    response = await client.put(f"{BASE}/{rule_id}", json={"genres": None})

    assert response.status_code == 400


async def test_update_and_delete_missing_rule(client: AsyncClient):
    assert (await client.put(f"{BASE}/99", json={"name": "x"})).status_code == 404
    assert (await client.delete(f"{BASE}/99")).status_code == 404


async def test_delete_rule(client: AsyncClient):
    rule_id = (await client.post(BASE, json=_rule("Action"))).json()["id"]

    response = await client.delete(f"{BASE}/{rule_id}")

    assert response.status_code == 200
    assert (await client.get(BASE)).json() == []
