from __future__ import annotations

import pytest

from factories import ADMIN_EMAIL, bearer, login


@pytest.mark.asyncio
async def test_profile_round_trip(client, make_staff) -> None:
    user, token = await make_staff("agents.view")
    headers = bearer(token)

    r = await client.get("/api/staff/profile", headers=headers)
    assert r.json()["data"]["email"] == user["email"]
    assert r.json()["data"]["fullName"] == f"Staff {user['lastName']}"

    r = await client.put("/api/staff/profile", headers=headers, json={"phone": "+63 917 000"})
    assert r.json()["data"]["phone"] == "+63 917 000"

    r = await client.put("/api/staff/profile", headers=headers, json={"email": ADMIN_EMAIL})
    assert r.status_code == 400
    assert r.json()["message"] == "Another user with this email already exists"


@pytest.mark.asyncio
async def test_change_password(client, make_staff) -> None:
    user, token = await make_staff()
    headers = bearer(token)

    r = await client.put(
        "/api/staff/change-password",
        headers=headers,
        json={"currentPassword": "wrong", "newPassword": "new-pass-456"},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Current password is incorrect"

    r = await client.put(
        "/api/staff/change-password",
        headers=headers,
        json={"currentPassword": "staff-pass-123", "newPassword": "x" * 73},
    )
    assert r.status_code == 400

    r = await client.put(
        "/api/staff/change-password",
        headers=headers,
        json={"currentPassword": "staff-pass-123", "newPassword": "new-pass-456"},
    )
    assert r.status_code == 200
    assert await login(client, user["email"], "new-pass-456")


@pytest.mark.asyncio
async def test_dashboard_only_counts_what_the_caller_may_view(client, make_staff) -> None:
    _, token = await make_staff("agents.view", "properties.view")

    r = await client.get("/api/staff/dashboard", headers=bearer(token))
    assert r.status_code == 200
    data = r.json()["data"]
    assert set(data["stats"]) == {"totalAgents", "totalProperties", "availableProperties"}
    assert data["permissions"] == ["agents.view", "properties.view"]
    assert data["user"]["lastLogin"] is None


@pytest.mark.asyncio
async def test_admin_dashboard_has_every_figure(client, admin_token) -> None:
    r = await client.get("/api/staff/dashboard", headers=bearer(admin_token))
    data = r.json()["data"]
    assert data["stats"]["totalUsers"] == 1
    assert data["user"]["role"] == "Administrator"
    assert data["user"]["lastLogin"] is not None
