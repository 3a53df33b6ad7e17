from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi import FastAPI

from estate_cms.api.deps import agent_store
from factories import agent_payload, bearer


class RecordingStore:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def find(self, predicate, sort, skip, limit) -> list[Any]:
        self.calls.append("find")
        return []

    async def count(self, predicate) -> int:
        self.calls.append("count")
        return 0


async def _seed_agents(client: httpx.AsyncClient, token: str) -> None:
    people = [
        ("John", "Smith", "LIC-1", 2, True),
        ("Anna", "Smithson", "LIC-2", 9, True),
        ("Mark", "Lee", "LIC-3", 1, True),
        ("Old", "Smith", "LIC-4", 20, False),
    ]
    for first, last, lic, years, active in people:
        r = await client.post(
            "/api/agents",
            headers=bearer(token),
            json=agent_payload(
                firstName=first,
                lastName=last,
                email=f"{first.lower()}.{last.lower()}@example.com",
                licenseNumber=lic,
                experience=years,
                isActive=active,
            ),
        )
        assert r.status_code == 201, r.text


@pytest.mark.asyncio
async def test_search_returns_only_matching_agents(client, admin_token, make_staff) -> None:
    await _seed_agents(client, admin_token)
    _, token = await make_staff("agents.view")

    r = await client.get("/api/agents", params={"search": "smith"}, headers=bearer(token))
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert sorted(a["lastName"] for a in body["data"]) == ["Smith", "Smith", "Smithson"]
    assert body["pagination"] == {"current": 1, "pages": 1, "total": 3, "limit": 10}
    assert body["data"][0]["fullName"].endswith(body["data"][0]["lastName"])


@pytest.mark.asyncio
async def test_missing_permission_is_403_without_touching_the_store(
    app: FastAPI, client, make_staff
) -> None:
    _, token = await make_staff("properties.view")
    store = RecordingStore()
    app.dependency_overrides[agent_store] = lambda: store
    try:
        r = await client.get("/api/agents", params={"search": "smith"}, headers=bearer(token))
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 403
    assert r.json() == {
        "success": False,
        "message": "Access denied. Required permission: agents.view",
        "reason": "InsufficientPermission",
    }
    assert store.calls == []


@pytest.mark.asyncio
async def test_permitted_request_reaches_the_store(app: FastAPI, client, make_staff) -> None:
    _, token = await make_staff("agents.view")
    store = RecordingStore()
    app.dependency_overrides[agent_store] = lambda: store
    try:
        r = await client.get("/api/agents", headers=bearer(token))
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 200
    assert store.calls == ["find", "count"]


@pytest.mark.asyncio
async def test_no_token_is_401(client) -> None:
    r = await client.get("/api/agents")
    assert r.status_code == 401
    assert r.json()["message"] == "No token provided, authorization denied"
    assert r.json()["reason"] == "Unauthenticated"

    r = await client.get("/api/agents", headers=bearer("garbage"))
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid token"
    assert r.json()["reason"] == "InvalidCredential"


@pytest.mark.asyncio
async def test_unknown_params_and_page_zero_change_nothing(client, admin_token) -> None:
    await _seed_agents(client, admin_token)
    headers = bearer(admin_token)

    baseline = (await client.get("/api/agents", headers=headers)).json()
    noisy = (
        await client.get("/api/agents", params={"foo": "bar", "page": "0"}, headers=headers)
    ).json()
    negative = (await client.get("/api/agents", params={"page": "-1"}, headers=headers)).json()

    assert noisy == baseline == negative
    assert baseline["pagination"]["current"] == 1


@pytest.mark.asyncio
async def test_page_far_beyond_the_end_is_empty(client, admin_token) -> None:
    await _seed_agents(client, admin_token)
    r = await client.get(
        "/api/agents", params={"page": "9" * 20}, headers=bearer(admin_token)
    )
    assert r.status_code == 200
    body = r.json()
    assert body["data"] == []
    assert body["pagination"]["total"] > 0


@pytest.mark.asyncio
async def test_inverted_range_returns_nothing(client, admin_token) -> None:
    await _seed_agents(client, admin_token)
    r = await client.get(
        "/api/agents",
        params={"minExperience": "100", "maxExperience": "50"},
        headers=bearer(admin_token),
    )
    assert r.status_code == 200
    assert r.json()["data"] == []
    assert r.json()["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_bad_number_names_the_parameter(client, admin_token) -> None:
    r = await client.get(
        "/api/agents", params={"minExperience": "lots"}, headers=bearer(admin_token)
    )
    assert r.status_code == 400
    assert "minExperience" in r.json()["message"]


@pytest.mark.asyncio
async def test_public_directory_hides_inactive_and_internal_fields(client, admin_token) -> None:
    await _seed_agents(client, admin_token)

    # isActive is not a public filter; inactive agents stay hidden.
    r = await client.get(
        "/api/agents/public/list", params={"search": "smith", "isActive": "false"}
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert sorted(a["firstName"] for a in data) == ["Anna", "John"]
    assert all("licenseNumber" not in a and "commissionRate" not in a for a in data)
    assert r.json()["pagination"]["limit"] == 20


@pytest.mark.asyncio
async def test_uniqueness_on_create_and_update(client, admin_token) -> None:
    headers = bearer(admin_token)
    first = await client.post("/api/agents", headers=headers, json=agent_payload())
    assert first.status_code == 201

    dup = await client.post(
        "/api/agents", headers=headers, json=agent_payload(licenseNumber="LIC-9")
    )
    assert dup.status_code == 400
    assert dup.json()["message"] == "Agent with this email already exists"

    other = await client.post(
        "/api/agents",
        headers=headers,
        json=agent_payload(email="other@example.com", licenseNumber="LIC-9"),
    )
    assert other.status_code == 201
    r = await client.put(
        f"/api/agents/{other.json()['data']['id']}",
        headers=headers,
        json={"licenseNumber": "LIC-0001"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Another agent with this license number already exists"


@pytest.mark.asyncio
async def test_body_validation(client, admin_token) -> None:
    r = await client.post(
        "/api/agents",
        headers=bearer(admin_token),
        json=agent_payload(specializations=["Castles"], email="not-an-email"),
    )
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation errors"
    assert {e["field"] for e in body["errors"]} == {"specializations", "email"}


@pytest.mark.asyncio
async def test_crud_round(client, admin_token) -> None:
    headers = bearer(admin_token)
    created = (await client.post("/api/agents", headers=headers, json=agent_payload())).json()
    agent_id = created["data"]["id"]
    assert created["data"]["experienceLevel"] == "Senior"

    r = await client.put(f"/api/agents/{agent_id}", headers=headers, json={"experience": 10})
    assert r.json()["data"]["experienceLevel"] == "Expert"

    assert (await client.delete(f"/api/agents/{agent_id}", headers=headers)).status_code == 200
    r = await client.get(f"/api/agents/{agent_id}", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Agent not found"

    r = await client.get("/api/agents/not-a-uuid", headers=headers)
    assert r.status_code == 400
