"""
estate_cms.api.routers.developers

Developer endpoints.

Responsibilities:
- Staff listing/CRUD gated by `developers.*` permissions.
- Public directory of active developers, ordered by project count.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import EmailStr, Field, field_validator
from starlette.status import HTTP_201_CREATED

from estate_cms.api.deps import developer_service, developer_store
from estate_cms.api.serializers import (
    ApiRequest,
    DeveloperOut,
    DeveloperPublicOut,
    check_vocabulary,
    dump,
)
from estate_cms.auth.deps import require_permission
from estate_cms.db.repositories.developers import DeveloperRepo
from estate_cms.domain.vocabulary import DEVELOPER_SPECIALIZATIONS
from estate_cms.query import specs
from estate_cms.services.developers import DeveloperService
from estate_cms.services.listing import list_page

router = APIRouter(prefix="/api/developers", tags=["developers"])


class DeveloperFields(ApiRequest):
    clearable = frozenset(
        {
            "website",
            "description",
            "logo",
            "contact_position",
            "contact_email",
            "contact_phone",
            "license_number",
            "established_year",
            "city",
        }
    )

    phone: str | None = Field(default=None, min_length=1, max_length=64)
    website: str | None = Field(default=None, max_length=512)
    description: str | None = Field(default=None, max_length=2000)
    logo: str | None = Field(default=None, max_length=512)
    contact_position: str | None = Field(default=None, max_length=128)
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(default=None, max_length=64)
    license_number: str | None = Field(default=None, max_length=64)
    established_year: int | None = Field(default=None, ge=1800, le=2100)
    specializations: list[str] | None = None
    city: str | None = Field(default=None, max_length=128)
    total_projects: int | None = Field(default=None, ge=0)
    completed_projects: int | None = Field(default=None, ge=0)
    ongoing_projects: int | None = Field(default=None, ge=0)
    average_rating: float | None = Field(default=None, ge=0, le=5)
    is_active: bool | None = None
    is_verified: bool | None = None

    @field_validator("specializations")
    @classmethod
    def known_specializations(cls, v: list[str] | None) -> list[str] | None:
        return check_vocabulary(v, DEVELOPER_SPECIALIZATIONS, "specializations")


class DeveloperCreateRequest(DeveloperFields):
    name: str = Field(min_length=1, max_length=256)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=64)
    contact_name: str = Field(min_length=1, max_length=256)
    registration_number: str = Field(min_length=1, max_length=64)


class DeveloperUpdateRequest(DeveloperFields):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    email: EmailStr | None = None
    contact_name: str | None = Field(default=None, min_length=1, max_length=256)
    registration_number: str | None = Field(default=None, min_length=1, max_length=64)


@router.get("", dependencies=[Depends(require_permission("developers.view"))])
async def list_developers(
    request: Request, store: DeveloperRepo = Depends(developer_store)
) -> dict[str, Any]:
    return await list_page(
        store,
        specs.DEVELOPERS,
        dict(request.query_params),
        serialize=lambda d: dump(DeveloperOut, d),
    )


@router.get("/public/list")
async def list_public_developers(
    request: Request, store: DeveloperRepo = Depends(developer_store)
) -> dict[str, Any]:
    return await list_page(
        store,
        specs.PUBLIC_DEVELOPERS,
        dict(request.query_params),
        serialize=lambda d: dump(DeveloperPublicOut, d),
        public=True,
    )


@router.get("/{developer_id}", dependencies=[Depends(require_permission("developers.view"))])
async def get_developer(
    developer_id: uuid.UUID, developers: DeveloperService = Depends(developer_service)
) -> dict[str, Any]:
    return {"success": True, "data": dump(DeveloperOut, await developers.get(developer_id))}


@router.post(
    "",
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("developers.create"))],
)
async def create_developer(
    body: DeveloperCreateRequest, developers: DeveloperService = Depends(developer_service)
) -> dict[str, Any]:
    developer = await developers.create(body.changes())
    return {
        "success": True,
        "message": "Developer created successfully",
        "data": dump(DeveloperOut, developer),
    }


@router.put("/{developer_id}", dependencies=[Depends(require_permission("developers.edit"))])
async def update_developer(
    developer_id: uuid.UUID,
    body: DeveloperUpdateRequest,
    developers: DeveloperService = Depends(developer_service),
) -> dict[str, Any]:
    developer = await developers.update(developer_id, body.changes())
    return {
        "success": True,
        "message": "Developer updated successfully",
        "data": dump(DeveloperOut, developer),
    }


@router.delete("/{developer_id}", dependencies=[Depends(require_permission("developers.delete"))])
async def delete_developer(
    developer_id: uuid.UUID, developers: DeveloperService = Depends(developer_service)
) -> dict[str, Any]:
    await developers.delete(developer_id)
    return {"success": True, "message": "Developer deleted successfully"}
