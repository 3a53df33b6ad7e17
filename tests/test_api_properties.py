from __future__ import annotations

import uuid

import httpx
import pytest

from factories import agent_payload, bearer, developer_payload, property_payload


async def _developer(client: httpx.AsyncClient, token: str, **overrides) -> str:
    r = await client.post(
        "/api/developers", headers=bearer(token), json=developer_payload(**overrides)
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]["id"]


async def _listing(client: httpx.AsyncClient, token: str, developer_id: str, **overrides) -> dict:
    r = await client.post(
        "/api/properties",
        headers=bearer(token),
        json=property_payload(developer_id, **overrides),
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_create_derives_slug_and_display_values(client, admin_token) -> None:
    dev = await _developer(client, admin_token)
    data = await _listing(client, admin_token, dev, propertyCode="prp-0001")

    assert data["propertyCode"] == "PRP-0001"
    assert data["slug"] == "sunny-loft-prp-0001"
    assert data["formattedPrice"] == "₱8,500,000.00"
    assert data["pricePerSqm"] == 170000
    assert data["developer"]["name"] == "Skyline Builders"
    assert data["agent"] is None


@pytest.mark.asyncio
async def test_create_checks_references_and_code(client, admin_token) -> None:
    dev = await _developer(client, admin_token)
    await _listing(client, admin_token, dev)
    headers = bearer(admin_token)

    r = await client.post("/api/properties", headers=headers, json=property_payload(dev))
    assert r.status_code == 400
    assert r.json()["message"] == "Property with this property code already exists"

    r = await client.post(
        "/api/properties",
        headers=headers,
        json=property_payload(str(uuid.uuid4()), propertyCode="PRP-2"),
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Developer not found"

    r = await client.post(
        "/api/properties",
        headers=headers,
        json=property_payload(dev, propertyCode="PRP-3", type="Castle"),
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_public_listing_never_returns_inactive(client, admin_token) -> None:
    dev = await _developer(client, admin_token)
    await _listing(client, admin_token, dev, propertyCode="A-1", title="Visible")
    await _listing(client, admin_token, dev, propertyCode="A-2", title="Hidden", isActive=False)

    for params in ({}, {"isActive": "false"}, {"search": "Hidden"}, {"featured": "false"}):
        r = await client.get("/api/properties/public", params=params)
        assert r.status_code == 200
        titles = [p["title"] for p in r.json()["data"]]
        assert "Hidden" not in titles

    r = await client.get("/api/properties/public")
    assert r.json()["pagination"]["limit"] == 12
    assert "views" not in r.json()["data"][0]


@pytest.mark.asyncio
async def test_price_filters(client, admin_token) -> None:
    dev = await _developer(client, admin_token)
    await _listing(client, admin_token, dev, propertyCode="P-1", price=100)
    await _listing(client, admin_token, dev, propertyCode="P-2", price=75)

    r = await client.get("/api/properties/public", params={"minPrice": "80"})
    assert [p["price"] for p in r.json()["data"]] == [100]

    r = await client.get("/api/properties/public", params={"minPrice": "100", "maxPrice": "50"})
    assert r.json()["data"] == []


@pytest.mark.asyncio
async def test_public_detail_counts_views_and_hides_inactive(client, admin_token) -> None:
    dev = await _developer(client, admin_token)
    live = await _listing(client, admin_token, dev, propertyCode="V-1")
    gone = await _listing(client, admin_token, dev, propertyCode="V-2", isActive=False)

    for _ in range(2):
        r = await client.get(f"/api/properties/public/{live['id']}")
        assert r.status_code == 200

    r = await client.get(f"/api/properties/{live['id']}", headers=bearer(admin_token))
    assert r.json()["data"]["views"] == 2

    r = await client.get(f"/api/properties/public/{gone['id']}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_staff_listing_accepts_view_or_edit(client, admin_token, make_staff) -> None:
    _, editor = await make_staff("properties.edit")
    _, outsider = await make_staff("agents.view")

    assert (await client.get("/api/properties", headers=bearer(editor))).status_code == 200
    r = await client.get("/api/properties", headers=bearer(outsider))
    assert r.status_code == 403
    assert r.json()["message"] == (
        "Access denied. Required any of: properties.view, properties.edit"
    )
    assert r.json()["reason"] == "InsufficientPermission"


@pytest.mark.asyncio
async def test_invalid_developer_filter_is_400(client, admin_token) -> None:
    r = await client.get(
        "/api/properties", params={"developer": "abc"}, headers=bearer(admin_token)
    )
    assert r.status_code == 400
    assert "developer" in r.json()["message"]


@pytest.mark.asyncio
async def test_update_toggle_and_overview(client, admin_token) -> None:
    headers = bearer(admin_token)
    dev = await _developer(client, admin_token)
    listing = await _listing(client, admin_token, dev)

    r = await client.put(
        f"/api/properties/{listing['id']}", headers=headers, json={"title": "Bright Loft"}
    )
    assert r.status_code == 200
    assert r.json()["data"]["slug"] == "bright-loft-prp-0001"

    r = await client.post(f"/api/properties/{listing['id']}/toggle-featured", headers=headers)
    assert r.json()["data"]["isFeatured"] is True

    r = await client.get("/api/properties/stats/overview", headers=headers)
    assert r.status_code == 200
    stats = r.json()["data"]
    assert stats["totalProperties"] == 1
    assert stats["featuredProperties"] == 1
    assert stats["propertiesByType"] == [{"type": "Condominium", "count": 1}]
    assert stats["recentProperties"][0]["title"] == "Bright Loft"


@pytest.mark.asyncio
async def test_agent_delete_unassigns_listings(client, admin_token) -> None:
    headers = bearer(admin_token)
    dev = await _developer(client, admin_token)
    agent = (await client.post("/api/agents", headers=headers, json=agent_payload())).json()
    listing = await _listing(client, admin_token, dev, agentId=agent["data"]["id"])
    assert listing["agent"]["email"] == "jane.doe@example.com"

    r = await client.delete(f"/api/agents/{agent['data']['id']}", headers=headers)
    assert r.status_code == 200

    r = await client.get(f"/api/properties/{listing['id']}", headers=headers)
    assert r.json()["data"]["agentId"] is None


@pytest.mark.asyncio
async def test_developer_with_listings_cannot_be_deleted(client, admin_token) -> None:
    headers = bearer(admin_token)
    dev = await _developer(client, admin_token)
    listing = await _listing(client, admin_token, dev)

    r = await client.delete(f"/api/developers/{dev}", headers=headers)
    assert r.status_code == 400
    assert r.json()["message"].startswith("Cannot delete developer.")

    await client.delete(f"/api/properties/{listing['id']}", headers=headers)
    assert (await client.delete(f"/api/developers/{dev}", headers=headers)).status_code == 200


@pytest.mark.asyncio
async def test_public_developer_directory(client, admin_token) -> None:
    await _developer(client, admin_token)
    await _developer(
        client,
        admin_token,
        email="old@example.com",
        registrationNumber="REG-2",
        isActive=False,
    )
    r = await client.get("/api/developers/public/list")
    data = r.json()["data"]
    assert [d["name"] for d in data] == ["Skyline Builders"]
    assert data[0]["completionRate"] == 70
    assert "registrationNumber" not in data[0]
