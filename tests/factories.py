"""
tests.factories

Request payloads and small HTTP helpers shared by the API tests.
"""

from __future__ import annotations

from typing import Any

import httpx

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-pass-123"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def login(client: httpx.AsyncClient, email: str, password: str) -> str:
    r = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["token"]


def agent_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane.doe@example.com",
        "phone": "+63 900 000 0000",
        "licenseNumber": "LIC-0001",
        "specializations": ["Residential"],
        "experience": 4,
        "city": "Makati",
    }
    payload.update(overrides)
    return payload


def developer_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": "Skyline Builders",
        "email": "info@skyline.example.com",
        "phone": "+63 2 8000 0000",
        "contactName": "Ana Cruz",
        "registrationNumber": "REG-0001",
        "specializations": ["Condominiums"],
        "establishedYear": 2001,
        "totalProjects": 10,
        "completedProjects": 7,
    }
    payload.update(overrides)
    return payload


def property_payload(developer_id: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "propertyCode": "PRP-0001",
        "title": "Sunny Loft",
        "description": "Corner unit with city views",
        "type": "Condominium",
        "address": "12 Ayala Ave",
        "city": "Makati",
        "province": "Metro Manila",
        "zipCode": "1226",
        "price": 8500000,
        "floorArea": 50,
        "bedrooms": 2,
        "bathrooms": 1,
        "developerId": developer_id,
    }
    payload.update(overrides)
    return payload
