"""
estate_cms.api.routers.admin

Administration endpoints: roles, the permission catalog and staff accounts.

Responsibilities:
- Role CRUD (system roles are read-only).
- Expose the permission catalog for the role editor.
- Staff listing and administration.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import EmailStr, Field
from starlette.status import HTTP_201_CREATED

from estate_cms.api.deps import role_service, user_store
from estate_cms.api.serializers import ApiRequest, RoleOut, StaffOut, dump
from estate_cms.auth.catalog import PERMISSIONS, PermissionInfo
from estate_cms.auth.deps import account_service, require_permission
from estate_cms.auth.models import Principal
from estate_cms.db.repositories.users import UserRepo
from estate_cms.query import specs
from estate_cms.services.accounts import AccountService
from estate_cms.services.listing import list_page
from estate_cms.services.roles import RoleService

router = APIRouter(prefix="/api/admin", tags=["admin"])


class RoleCreateRequest(ApiRequest):
    name: str = Field(min_length=2, max_length=64)
    display_name: str = Field(min_length=1, max_length=128)
    description: str = Field(min_length=1)
    permissions: list[str] = Field(default_factory=list)


class RoleUpdateRequest(ApiRequest):
    display_name: str | None = Field(default=None, min_length=1, max_length=128)
    description: str | None = Field(default=None, min_length=1)
    permissions: list[str] | None = None
    is_active: bool | None = None


class StaffUpdateRequest(ApiRequest):
    clearable = frozenset({"phone", "department"})

    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=64)
    department: str | None = Field(default=None, max_length=128)
    role_id: uuid.UUID | None = None
    is_active: bool | None = None


def _permission(info: PermissionInfo) -> dict[str, str]:
    return {"key": info.key, "description": info.description, "category": info.category}


@router.get("/roles", dependencies=[Depends(require_permission("roles.view"))])
async def list_roles(roles: RoleService = Depends(role_service)) -> dict[str, Any]:
    rows = await roles.list_all()
    return {"success": True, "count": len(rows), "data": [dump(RoleOut, r) for r in rows]}


@router.post(
    "/roles",
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("roles.create"))],
)
async def create_role(
    body: RoleCreateRequest, roles: RoleService = Depends(role_service)
) -> dict[str, Any]:
    role = await roles.create(**body.model_dump())
    return {"success": True, "message": "Role created successfully", "data": dump(RoleOut, role)}


@router.put("/roles/{role_id}", dependencies=[Depends(require_permission("roles.edit"))])
async def update_role(
    role_id: uuid.UUID, body: RoleUpdateRequest, roles: RoleService = Depends(role_service)
) -> dict[str, Any]:
    role = await roles.update(role_id, body.changes())
    return {"success": True, "message": "Role updated successfully", "data": dump(RoleOut, role)}


@router.delete("/roles/{role_id}", dependencies=[Depends(require_permission("roles.delete"))])
async def delete_role(
    role_id: uuid.UUID, roles: RoleService = Depends(role_service)
) -> dict[str, Any]:
    await roles.delete(role_id)
    return {"success": True, "message": "Role deleted successfully"}


@router.get("/permissions", dependencies=[Depends(require_permission("roles.view"))])
async def list_permissions() -> dict[str, Any]:
    return {
        "success": True,
        "data": {
            "all": [_permission(p) for p in PERMISSIONS.describe()],
            "grouped": {
                category: [_permission(p) for p in infos]
                for category, infos in PERMISSIONS.grouped().items()
            },
        },
    }


@router.get("/staff", dependencies=[Depends(require_permission("users.view"))])
async def list_staff(request: Request, store: UserRepo = Depends(user_store)) -> dict[str, Any]:
    return await list_page(
        store,
        specs.STAFF,
        dict(request.query_params),
        serialize=lambda u: dump(StaffOut, u),
    )


@router.get("/staff/{user_id}", dependencies=[Depends(require_permission("users.view"))])
async def get_staff(
    user_id: uuid.UUID, accounts: AccountService = Depends(account_service)
) -> dict[str, Any]:
    return {"success": True, "data": dump(StaffOut, await accounts.get_staff(user_id))}


@router.put("/staff/{user_id}", dependencies=[Depends(require_permission("users.edit"))])
async def update_staff(
    user_id: uuid.UUID,
    body: StaffUpdateRequest,
    accounts: AccountService = Depends(account_service),
) -> dict[str, Any]:
    user = await accounts.update_staff(user_id, body.changes())
    return {
        "success": True,
        "message": "Staff member updated successfully",
        "data": dump(StaffOut, user),
    }


@router.delete("/staff/{user_id}")
async def delete_staff(
    user_id: uuid.UUID,
    principal: Principal = Depends(require_permission("users.delete")),
    accounts: AccountService = Depends(account_service),
) -> dict[str, Any]:
    await accounts.delete_staff(principal, user_id)
    return {"success": True, "message": "Staff member deleted successfully"}
