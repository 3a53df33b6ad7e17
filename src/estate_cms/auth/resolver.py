"""
estate_cms.auth.resolver

Principal resolution.

Responsibilities:
- Turn a raw bearer credential into a `Principal`.
- Report why resolution failed (missing, expired/malformed/invalid, unknown user, inactive).

The resolver is read-only: it never touches last-login timestamps or any other
directory state.
"""

from __future__ import annotations

from typing import Protocol

from estate_cms.auth.jwt import FailureKind, JwtValidationError, VerifiedCredential
from estate_cms.auth.models import Principal


class RoleRecord(Protocol):
    name: str
    permissions: list[str]
    is_active: bool


class UserRecord(Protocol):
    id: object
    is_active: bool
    role: RoleRecord


class CredentialVerifier(Protocol):
    def verify(self, token: str) -> VerifiedCredential: ...


class UserDirectory(Protocol):
    async def find_by_id(self, identity: str) -> UserRecord | None: ...


class ResolutionError(Exception):
    message = "Authentication required"

    def __str__(self) -> str:
        return self.message


class Unauthenticated(ResolutionError):
    message = "No token provided, authorization denied"


class InvalidCredential(ResolutionError):
    def __init__(self, kind: FailureKind) -> None:
        super().__init__(kind)
        self.kind = kind

    @property
    def expired(self) -> bool:
        return self.kind == "expired"

    @property
    def message(self) -> str:  # type: ignore[override]
        return "Token has expired" if self.expired else "Invalid token"


class PrincipalNotFound(ResolutionError):
    message = "Token is not valid - user not found"


class PrincipalInactive(ResolutionError):
    message = "Account is deactivated"


def principal_for(user: UserRecord) -> Principal:
    role = user.role
    # An inactive role still names the user's role but grants nothing.
    permissions = frozenset(role.permissions or ()) if role.is_active else frozenset()
    return Principal(
        identity=str(user.id),
        display_role=role.name,
        permissions=permissions,
        is_active=user.is_active,
    )


class PrincipalResolver:
    def __init__(self, *, verifier: CredentialVerifier, directory: UserDirectory) -> None:
        self._verifier = verifier
        self._directory = directory

    async def resolve(self, raw_credential: str | None) -> Principal:
        token = (raw_credential or "").strip()
        if not token:
            raise Unauthenticated()

        try:
            credential = self._verifier.verify(token)
        except JwtValidationError as e:
            raise InvalidCredential(e.kind) from e

        user = await self._directory.find_by_id(credential.identity)
        if user is None:
            raise PrincipalNotFound()
        if not user.is_active:
            raise PrincipalInactive()
        return principal_for(user)


# --- Module Notes -----------------------------------------------------------
# Permissions come from the directory's current role, not from token claims, so a role
# edit takes effect on the next request instead of at token expiry.
