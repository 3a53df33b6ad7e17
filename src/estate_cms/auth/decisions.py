"""
estate_cms.auth.decisions

Access decision engine.

Responsibilities:
- Model permission requirements (single, all-of, any-of, role equality).
- Decide allow/deny for a principal with a machine-readable reason.

`decide` is pure: no I/O, no clock, no globals. Endpoints translate a `Deny` into
401/403 in `auth.deps`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from estate_cms.auth.models import Principal


@dataclass(frozen=True, slots=True)
class Single:
    permission: str

    def describe(self) -> str:
        return f"Required permission: {self.permission}"


@dataclass(frozen=True, slots=True)
class AllOf:
    permissions: tuple[str, ...] | frozenset[str] | list[str]

    def __post_init__(self) -> None:
        # Accept any iterable (sets, lists); store an ordered tuple.
        object.__setattr__(self, "permissions", tuple(self.permissions))

    def describe(self) -> str:
        return f"Required permissions: {', '.join(self.permissions)}"


@dataclass(frozen=True, slots=True)
class AnyOf:
    permissions: tuple[str, ...] | frozenset[str] | list[str]

    def __post_init__(self) -> None:
        # Accept any iterable (sets, lists); store an ordered tuple.
        object.__setattr__(self, "permissions", tuple(self.permissions))

    def describe(self) -> str:
        return f"Required any of: {', '.join(self.permissions)}"


@dataclass(frozen=True, slots=True)
class RoleEquals:
    role: str

    def describe(self) -> str:
        return f"{self.role.title()} access required"


Requirement = Single | AllOf | AnyOf | RoleEquals


class DenyReason(enum.StrEnum):
    unauthenticated = "Unauthenticated"
    insufficient_permission = "InsufficientPermission"
    role_mismatch = "RoleMismatch"


@dataclass(frozen=True, slots=True)
class Allow:
    allowed = True


@dataclass(frozen=True, slots=True)
class Deny:
    reason: DenyReason
    missing: tuple[str, ...] = ()

    allowed = False


Decision = Allow | Deny

ALLOW = Allow()


def decide(principal: Principal | None, requirement: Requirement) -> Decision:
    if principal is None:
        return Deny(DenyReason.unauthenticated)

    granted = principal.permissions
    match requirement:
        case Single(permission=p):
            if p in granted:
                return ALLOW
            return Deny(DenyReason.insufficient_permission, (p,))
        case AllOf(permissions=ps):
            missing = tuple(p for p in ps if p not in granted)
            if not missing:
                return ALLOW
            return Deny(DenyReason.insufficient_permission, missing)
        case AnyOf(permissions=ps):
            if any(p in granted for p in ps):
                return ALLOW
            return Deny(DenyReason.insufficient_permission, ps)
        case RoleEquals(role=role):
            if principal.display_role == role:
                return ALLOW
            return Deny(DenyReason.role_mismatch)
    raise TypeError(f"unsupported requirement: {requirement!r}")


def is_self(principal: Principal, target_identity: object) -> bool:
    """
    Self-protection check evaluated by callers after an `Allow`, e.g. to stop an
    administrator from deleting their own account.
    """

    return principal.identity == str(target_identity)


# --- Module Notes -----------------------------------------------------------
# AllOf(()) allows (vacuous truth); AnyOf(()) denies. Neither is used by the routers.
