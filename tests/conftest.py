"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file, an HTTP client, and helpers
for creating staff members that hold specific permissions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from estate_cms.api.app import create_app
from estate_cms.settings import Settings
from factories import ADMIN_EMAIL, ADMIN_PASSWORD, bearer, login


@pytest.fixture
def settings(tmp_path) -> Settings:
    # A file database: in-memory SQLite is private to each pooled connection.
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'estate.db'}",
        jwt_secret="test-secret-that-is-long-enough-for-hs256",
        bootstrap_admin_email=ADMIN_EMAIL,
        bootstrap_admin_password=ADMIN_PASSWORD,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx's ASGITransport does not run lifespan events; drive them here.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def admin_token(client: httpx.AsyncClient) -> str:
    return await login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def make_staff(client: httpx.AsyncClient, admin_token: str):
    """
    Create a role with `permissions` plus a member of it; returns (user, token).
    """

    counter = {"n": 0}

    async def _make(*permissions: str, role_name: str | None = None) -> tuple[dict[str, Any], str]:
        counter["n"] += 1
        n = counter["n"]
        r = await client.post(
            "/api/admin/roles",
            headers=bearer(admin_token),
            json={
                "name": role_name or f"tester_{n}",
                "displayName": f"Tester {n}",
                "description": "Role created by tests",
                "permissions": list(permissions),
            },
        )
        assert r.status_code == 201, r.text
        role_id = r.json()["data"]["id"]

        email = f"staff{n}@example.com"
        r = await client.post(
            "/api/auth/register",
            headers=bearer(admin_token),
            json={
                "firstName": "Staff",
                "lastName": f"Member{n}",
                "email": email,
                "password": "staff-pass-123",
                "roleId": role_id,
            },
        )
        assert r.status_code == 201, r.text
        body = r.json()
        return body["user"], body["token"]

    return _make
