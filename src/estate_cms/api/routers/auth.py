"""
estate_cms.api.routers.auth

Staff authentication endpoints.

Responsibilities:
- Register staff accounts (requires `users.create`).
- Exchange email/password for an access token.
- Return the current account; acknowledge logout.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import EmailStr, Field
from starlette.status import HTTP_201_CREATED

from estate_cms.api.serializers import ApiRequest, Password, StaffOut, dump
from estate_cms.auth.deps import account_service, get_principal, require_permission
from estate_cms.auth.models import Principal
from estate_cms.services.accounts import AccountService

router = APIRouter(prefix="/api/auth", tags=["auth"])


class RegisterRequest(ApiRequest):
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    email: EmailStr
    password: Password
    role_id: uuid.UUID
    phone: str | None = Field(default=None, max_length=64)
    department: str | None = Field(default=None, max_length=128)


class LoginRequest(ApiRequest):
    email: EmailStr
    password: str = Field(min_length=1)


@router.post(
    "/register",
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("users.create"))],
)
async def register(
    body: RegisterRequest, accounts: AccountService = Depends(account_service)
) -> dict[str, Any]:
    user, token = await accounts.register(**body.model_dump())
    return {
        "success": True,
        "message": "User registered successfully",
        "token": token,
        "user": dump(StaffOut, user),
    }


@router.post("/login")
async def login(
    body: LoginRequest, accounts: AccountService = Depends(account_service)
) -> dict[str, Any]:
    user, token = await accounts.login(email=body.email, password=body.password)
    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "user": dump(StaffOut, user),
    }


@router.get("/me")
async def me(
    principal: Principal = Depends(get_principal),
    accounts: AccountService = Depends(account_service),
) -> dict[str, Any]:
    return {"success": True, "data": dump(StaffOut, await accounts.me(principal))}


@router.post("/logout", dependencies=[Depends(get_principal)])
async def logout() -> dict[str, Any]:
    # Tokens are stateless; the client discards its copy.
    return {"success": True, "message": "Logged out successfully"}
