from __future__ import annotations

import httpx
import pytest

from factories import ADMIN_EMAIL, ADMIN_PASSWORD, bearer, login


async def _role_id(client: httpx.AsyncClient, token: str, name: str) -> str:
    r = await client.get("/api/admin/roles", headers=bearer(token))
    return next(role["id"] for role in r.json()["data"] if role["name"] == name)


@pytest.mark.asyncio
async def test_system_admin_role_is_seeded_with_every_permission(client, admin_token) -> None:
    r = await client.get("/api/admin/roles", headers=bearer(admin_token))
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == len(body["data"]) == 1
    admin = body["data"][0]
    assert admin["name"] == "ADMIN"
    assert admin["isSystem"] is True
    assert "system.admin" in admin["permissions"]

    r = await client.get("/api/admin/permissions", headers=bearer(admin_token))
    data = r.json()["data"]
    assert set(admin["permissions"]) == {p["key"] for p in data["all"]}
    assert [p["key"] for p in data["grouped"]["roles"]][0] == "roles.view"


@pytest.mark.asyncio
async def test_role_create_validation(client, admin_token) -> None:
    headers = bearer(admin_token)
    payload = {
        "name": "editor",
        "displayName": "Editor",
        "description": "Edits listings",
        "permissions": ["properties.view", "properties.edit", "properties.view"],
    }
    r = await client.post("/api/admin/roles", headers=headers, json=payload)
    assert r.status_code == 201
    assert r.json()["data"]["name"] == "EDITOR"
    assert r.json()["data"]["permissions"] == ["properties.view", "properties.edit"]

    r = await client.post("/api/admin/roles", headers=headers, json=payload)
    assert r.status_code == 400
    assert r.json()["message"] == "Role with this name already exists"

    r = await client.post(
        "/api/admin/roles",
        headers=headers,
        json={**payload, "name": "other", "permissions": ["manage_properties"]},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid permissions: manage_properties"


@pytest.mark.asyncio
async def test_system_role_is_read_only(client, admin_token) -> None:
    headers = bearer(admin_token)
    admin_role = await _role_id(client, admin_token, "ADMIN")

    r = await client.put(
        f"/api/admin/roles/{admin_role}", headers=headers, json={"displayName": "Boss"}
    )
    assert r.status_code == 403
    assert r.json()["message"] == "System roles cannot be modified"

    r = await client.delete(f"/api/admin/roles/{admin_role}", headers=headers)
    assert r.status_code == 403
    assert r.json()["message"] == "System roles cannot be deleted"


@pytest.mark.asyncio
async def test_role_in_use_cannot_be_deleted(client, admin_token, make_staff) -> None:
    headers = bearer(admin_token)
    user, _ = await make_staff("agents.view", role_name="sales")
    role_id = user["role"]["id"]

    r = await client.delete(f"/api/admin/roles/{role_id}", headers=headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete role. 1 user(s) are assigned to this role."

    r = await client.delete(f"/api/admin/staff/{user['id']}", headers=headers)
    assert r.status_code == 200
    assert (await client.delete(f"/api/admin/roles/{role_id}", headers=headers)).status_code == 200


@pytest.mark.asyncio
async def test_role_edits_apply_to_existing_tokens(client, admin_token, make_staff) -> None:
    user, token = await make_staff("agents.view")
    assert (await client.get("/api/agents", headers=bearer(token))).status_code == 200

    r = await client.put(
        f"/api/admin/roles/{user['role']['id']}",
        headers=bearer(admin_token),
        json={"permissions": ["developers.view"]},
    )
    assert r.status_code == 200
    assert (await client.get("/api/agents", headers=bearer(token))).status_code == 403
    assert (await client.get("/api/developers", headers=bearer(token))).status_code == 200


@pytest.mark.asyncio
async def test_self_delete_is_rejected(client, admin_token) -> None:
    me = (await client.get("/api/auth/me", headers=bearer(admin_token))).json()["data"]

    r = await client.delete(f"/api/admin/staff/{me['id']}", headers=bearer(admin_token))
    assert r.status_code == 400
    assert r.json()["message"] == "You cannot delete your own account"
    assert r.json()["reason"] == "SelfDelete"
    assert (await client.get("/api/auth/me", headers=bearer(admin_token))).status_code == 200


@pytest.mark.asyncio
async def test_staff_listing_and_update(client, admin_token, make_staff) -> None:
    headers = bearer(admin_token)
    user, token = await make_staff("agents.view")

    r = await client.get("/api/admin/staff", params={"search": "member"}, headers=headers)
    assert [u["email"] for u in r.json()["data"]] == [user["email"]]

    r = await client.get("/api/admin/staff", params={"role": "nope"}, headers=headers)
    assert r.status_code == 400

    r = await client.put(
        f"/api/admin/staff/{user['id']}", headers=headers, json={"email": ADMIN_EMAIL}
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Another user with this email already exists"

    admin_role = await _role_id(client, admin_token, "ADMIN")
    r = await client.put(
        f"/api/admin/staff/{user['id']}",
        headers=headers,
        json={"roleId": admin_role, "department": "Sales"},
    )
    assert r.status_code == 200
    assert r.json()["data"]["role"]["name"] == "ADMIN"
    assert r.json()["data"]["department"] == "Sales"

    r = await client.put(
        f"/api/admin/staff/{user['id']}", headers=headers, json={"isActive": False}
    )
    assert r.status_code == 200
    r = await client.get("/api/auth/me", headers=bearer(token))
    assert r.status_code == 401
    assert r.json()["message"] == "Account is deactivated"


@pytest.mark.asyncio
async def test_login_and_register_rules(client, admin_token, make_staff) -> None:
    r = await client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"}
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid email or password"

    r = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "whatever"}
    )
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid email or password"

    # Emails are matched case-insensitively.
    assert await login(client, ADMIN_EMAIL.upper(), ADMIN_PASSWORD)

    _, token = await make_staff("agents.view")
    r = await client.post(
        "/api/auth/register",
        headers=bearer(token),
        json={
            "firstName": "No",
            "lastName": "Access",
            "email": "na@example.com",
            "password": "secret-123",
            "roleId": "00000000-0000-0000-0000-000000000000",
        },
    )
    assert r.status_code == 403

    r = await client.post(
        "/api/auth/register",
        headers=bearer(admin_token),
        json={
            "firstName": "Bad",
            "lastName": "Role",
            "email": "bad.role@example.com",
            "password": "secret-123",
            "roleId": "00000000-0000-0000-0000-000000000000",
        },
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid role specified"


@pytest.mark.asyncio
async def test_logout_requires_a_token(client, admin_token) -> None:
    assert (await client.post("/api/auth/logout")).status_code == 401
    r = await client.post("/api/auth/logout", headers=bearer(admin_token))
    assert r.json() == {"success": True, "message": "Logged out successfully"}
