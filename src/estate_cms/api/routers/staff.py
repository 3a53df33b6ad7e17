"""
estate_cms.api.routers.staff

Self-service endpoints for the signed-in staff member.

Responsibilities:
- Read/update the caller's own profile and password.
- Serve the dashboard summary (figures limited to what the caller may view).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field

from estate_cms.api.serializers import ApiRequest, Password, StaffOut, dump
from estate_cms.auth.deps import account_service, get_principal
from estate_cms.auth.models import Principal
from estate_cms.services.accounts import AccountService

router = APIRouter(prefix="/api/staff", tags=["staff"])


class ProfileUpdateRequest(ApiRequest):
    clearable = frozenset({"phone", "department", "avatar"})

    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=64)
    department: str | None = Field(default=None, max_length=128)
    avatar: str | None = Field(default=None, max_length=512)


class ChangePasswordRequest(ApiRequest):
    current_password: str = Field(min_length=1)
    new_password: Password


@router.get("/profile")
async def get_profile(
    principal: Principal = Depends(get_principal),
    accounts: AccountService = Depends(account_service),
) -> dict[str, Any]:
    return {"success": True, "data": dump(StaffOut, await accounts.me(principal))}


@router.put("/profile")
async def update_profile(
    body: ProfileUpdateRequest,
    principal: Principal = Depends(get_principal),
    accounts: AccountService = Depends(account_service),
) -> dict[str, Any]:
    user = await accounts.update_profile(principal, body.changes())
    return {
        "success": True,
        "message": "Profile updated successfully",
        "data": dump(StaffOut, user),
    }


@router.put("/change-password")
async def change_password(
    body: ChangePasswordRequest,
    principal: Principal = Depends(get_principal),
    accounts: AccountService = Depends(account_service),
) -> dict[str, Any]:
    await accounts.change_password(
        principal, current=body.current_password, new=body.new_password
    )
    return {"success": True, "message": "Password changed successfully"}


@router.get("/dashboard")
async def dashboard(
    principal: Principal = Depends(get_principal),
    accounts: AccountService = Depends(account_service),
) -> dict[str, Any]:
    return {"success": True, "data": await accounts.dashboard(principal)}
