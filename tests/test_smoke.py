"""
tests.test_smoke

Boot the app against a fresh database and hit the probes.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "estate-cms"}
    assert r.headers["x-request-id"]

    r = await client.get("/readyz", headers={"x-request-id": "req-1"})
    assert r.status_code == 200
    assert r.json()["status"] == "ready"
    assert r.headers["x-request-id"] == "req-1"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json()["success"] is False
