"""
estate_cms.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal` (via `PrincipalResolver`).
- Enforce permission requirements via reusable dependency factories.
- Build the account service with the configured token settings.
"""

from __future__ import annotations

from datetime import timedelta

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.api.deps import db_session, settings_dep
from estate_cms.auth.decisions import (
    AnyOf,
    Deny,
    DenyReason,
    Requirement,
    Single,
    decide,
)
from estate_cms.auth.jwt import JwtConfig, JwtCredentialVerifier
from estate_cms.auth.models import Principal
from estate_cms.auth.resolver import PrincipalResolver, ResolutionError
from estate_cms.db.repositories.users import UserRepo
from estate_cms.errors import ForbiddenError, UnauthorizedError
from estate_cms.observability.logging import get_logger
from estate_cms.services.accounts import AccountService
from estate_cms.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal:
    resolver = PrincipalResolver(
        verifier=JwtCredentialVerifier(jwt_config(settings)),
        directory=UserRepo(session),
    )
    try:
        principal = await resolver.resolve(creds.credentials if creds else None)
    except ResolutionError as e:
        log.info("auth.rejected", failure=type(e).__name__)
        raise UnauthorizedError(e.message, reason=type(e).__name__) from e

    structlog.contextvars.bind_contextvars(principal_id=principal.identity)
    return principal


def account_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AccountService:
    return AccountService(
        session,
        jwt=jwt_config(settings),
        token_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
    )


def require(requirement: Requirement):
    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        decision = decide(principal, requirement)
        if isinstance(decision, Deny):
            log.info(
                "auth.denied",
                reason=decision.reason.value,
                missing=list(decision.missing),
            )
            if decision.reason is DenyReason.unauthenticated:
                raise UnauthorizedError("Authentication required", reason=decision.reason.value)
            raise ForbiddenError(
                f"Access denied. {requirement.describe()}", reason=decision.reason.value
            )
        return principal

    return _dep


def require_permission(permission: str):
    return require(Single(permission))


def require_any(*permissions: str):
    return require(AnyOf(permissions))


# --- Module Notes -----------------------------------------------------------
# Route-level `dependencies=[Depends(require_permission(...))]` run before endpoint
# parameters, so a denied request never constructs a repository or issues a query.
