"""
estate_cms.api.routers.properties

Property listing endpoints.

Responsibilities:
- Staff listing/CRUD gated by `properties.*` permissions.
- Public search and detail pages (active listings only).
- Overview figures for the admin dashboard.

Static paths (`/public`, `/stats/overview`) are registered before `/{property_id}`.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import Field, field_validator
from starlette.status import HTTP_201_CREATED

from estate_cms.api.deps import property_service, property_store
from estate_cms.api.serializers import ApiRequest, PropertyOut, PropertyPublicOut, dump
from estate_cms.auth.deps import require_any, require_permission
from estate_cms.db.repositories.properties import PropertyRepo
from estate_cms.domain.vocabulary import FURNISHING, PROPERTY_STATUSES, PROPERTY_TYPES
from estate_cms.query import specs
from estate_cms.services.listing import list_page
from estate_cms.services.properties import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])

_can_read = require_any("properties.view", "properties.edit")


def _one_of(value: str | None, allowed: frozenset[str], label: str) -> str | None:
    if value is not None and value not in allowed:
        raise ValueError(f"Invalid {label}: {value}")
    return value


class PropertyFields(ApiRequest):
    clearable = frozenset({"lot_area", "year_built", "main_image", "agent_id"})

    status: str | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    lot_area: float | None = Field(default=None, ge=0)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    parking: int | None = Field(default=None, ge=0)
    year_built: int | None = Field(default=None, ge=1800, le=2100)
    furnishing: str | None = None
    features: list[str] | None = None
    main_image: str | None = Field(default=None, max_length=512)
    agent_id: uuid.UUID | None = None
    is_active: bool | None = None
    is_featured: bool | None = None

    @field_validator("status")
    @classmethod
    def known_status(cls, v: str | None) -> str | None:
        return _one_of(v, PROPERTY_STATUSES, "status")

    @field_validator("furnishing")
    @classmethod
    def known_furnishing(cls, v: str | None) -> str | None:
        return _one_of(v, FURNISHING, "furnishing")

    @field_validator("type", check_fields=False)
    @classmethod
    def known_type(cls, v: str | None) -> str | None:
        return _one_of(v, PROPERTY_TYPES, "type")


class PropertyCreateRequest(PropertyFields):
    property_code: str = Field(min_length=1, max_length=64)
    title: str = Field(min_length=1, max_length=256)
    description: str = Field(min_length=1)
    type: str
    address: str = Field(min_length=1, max_length=512)
    city: str = Field(min_length=1, max_length=128)
    province: str = Field(min_length=1, max_length=128)
    zip_code: str = Field(min_length=1, max_length=32)
    price: float = Field(ge=0)
    floor_area: float = Field(gt=0)
    developer_id: uuid.UUID


class PropertyUpdateRequest(PropertyFields):
    property_code: str | None = Field(default=None, min_length=1, max_length=64)
    title: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = Field(default=None, min_length=1)
    type: str | None = None
    address: str | None = Field(default=None, min_length=1, max_length=512)
    city: str | None = Field(default=None, min_length=1, max_length=128)
    province: str | None = Field(default=None, min_length=1, max_length=128)
    zip_code: str | None = Field(default=None, min_length=1, max_length=32)
    price: float | None = Field(default=None, ge=0)
    floor_area: float | None = Field(default=None, gt=0)
    developer_id: uuid.UUID | None = None


@router.get("", dependencies=[Depends(_can_read)])
async def list_properties(
    request: Request, store: PropertyRepo = Depends(property_store)
) -> dict[str, Any]:
    return await list_page(
        store,
        specs.PROPERTIES,
        dict(request.query_params),
        serialize=lambda p: dump(PropertyOut, p),
    )


@router.get("/public")
async def list_public_properties(
    request: Request, store: PropertyRepo = Depends(property_store)
) -> dict[str, Any]:
    return await list_page(
        store,
        specs.PUBLIC_PROPERTIES,
        dict(request.query_params),
        serialize=lambda p: dump(PropertyPublicOut, p),
        public=True,
    )


@router.get("/public/{property_id}")
async def get_public_property(
    property_id: uuid.UUID, listings: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    listing = await listings.get_public(property_id)
    return {"success": True, "data": dump(PropertyPublicOut, listing)}


@router.get("/stats/overview", dependencies=[Depends(_can_read)])
async def overview(listings: PropertyService = Depends(property_service)) -> dict[str, Any]:
    stats = await listings.overview()
    stats["recentProperties"] = [dump(PropertyOut, p) for p in stats["recentProperties"]]
    return {"success": True, "data": stats}


@router.get("/{property_id}", dependencies=[Depends(_can_read)])
async def get_property(
    property_id: uuid.UUID, listings: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    return {"success": True, "data": dump(PropertyOut, await listings.get(property_id))}


@router.post(
    "",
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("properties.create"))],
)
async def create_property(
    body: PropertyCreateRequest, listings: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    listing = await listings.create(body.changes())
    return {
        "success": True,
        "message": "Property created successfully",
        "data": dump(PropertyOut, listing),
    }


@router.put("/{property_id}", dependencies=[Depends(require_permission("properties.edit"))])
async def update_property(
    property_id: uuid.UUID,
    body: PropertyUpdateRequest,
    listings: PropertyService = Depends(property_service),
) -> dict[str, Any]:
    listing = await listings.update(property_id, body.changes())
    return {
        "success": True,
        "message": "Property updated successfully",
        "data": dump(PropertyOut, listing),
    }


@router.delete("/{property_id}", dependencies=[Depends(require_permission("properties.delete"))])
async def delete_property(
    property_id: uuid.UUID, listings: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    await listings.delete(property_id)
    return {"success": True, "message": "Property deleted successfully"}


@router.post(
    "/{property_id}/toggle-featured",
    dependencies=[Depends(require_permission("properties.edit"))],
)
async def toggle_featured(
    property_id: uuid.UUID, listings: PropertyService = Depends(property_service)
) -> dict[str, Any]:
    listing = await listings.toggle_featured(property_id)
    state = "featured" if listing.is_featured else "unfeatured"
    return {
        "success": True,
        "message": f"Property {state} successfully",
        "data": dump(PropertyOut, listing),
    }
