"""
estate_cms.services.accounts

Staff accounts: registration, login, administration and self-service.

Responsibilities:
- Issue access tokens for verified credentials.
- Keep emails unique and role references valid.
- Stop actors from deleting their own account.
- Build the permission-gated dashboard summary.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.auth.decisions import is_self
from estate_cms.auth.jwt import JwtConfig, issue_token
from estate_cms.auth.models import Principal
from estate_cms.auth.passwords import hash_password, verify_password
from estate_cms.db.base import utcnow
from estate_cms.db.models import StaffUser
from estate_cms.db.repositories.agents import AgentRepo
from estate_cms.db.repositories.developers import DeveloperRepo
from estate_cms.db.repositories.properties import PropertyRepo
from estate_cms.db.repositories.roles import RoleRepo
from estate_cms.db.repositories.users import UserRepo
from estate_cms.errors import BadRequestError, NotFoundError, UnauthorizedError
from estate_cms.observability.logging import get_logger
from estate_cms.query.predicates import Eq, all_of
from estate_cms.services.common import apply_changes, ensure_unique

log = get_logger(__name__)


class AccountService:
    def __init__(self, session: AsyncSession, *, jwt: JwtConfig, token_ttl: timedelta) -> None:
        self._users = UserRepo(session)
        self._roles = RoleRepo(session)
        self._session = session
        self._jwt = jwt
        self._token_ttl = token_ttl

    def issue(self, user: StaffUser) -> str:
        return issue_token(
            cfg=self._jwt,
            subject=str(user.id),
            role=user.role.name,
            permissions=list(user.role.permissions),
            ttl=self._token_ttl,
        )

    async def _require_role(self, role_id: uuid.UUID) -> None:
        if await self._roles.get(role_id) is None:
            raise BadRequestError("Invalid role specified")

    async def _get(self, user_id: uuid.UUID, missing: str) -> StaffUser:
        user = await self._users.get(user_id)
        if user is None:
            raise NotFoundError(missing)
        return user

    async def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role_id: uuid.UUID,
        phone: str | None = None,
        department: str | None = None,
    ) -> tuple[StaffUser, str]:
        email = email.lower()
        if await self._users.find_by_email(email) is not None:
            raise BadRequestError("User already exists with this email")
        await self._require_role(role_id)

        user = await self._users.add(
            StaffUser(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password_hash=hash_password(password),
                role_id=role_id,
                phone=phone,
                department=department,
                is_active=True,
            )
        )
        await self._users.refresh(user, "role")
        await self._users.commit()
        log.info("account.registered", user_id=str(user.id), role=user.role.name)
        return user, self.issue(user)

    async def login(self, *, email: str, password: str) -> tuple[StaffUser, str]:
        user = await self._users.find_by_email(email)
        if user is None:
            log.info("account.login_failed", cause="unknown_email")
            raise UnauthorizedError("Invalid email or password")
        if not user.is_active:
            raise UnauthorizedError("Account is deactivated. Please contact administrator.")
        if not verify_password(password, user.password_hash):
            log.info("account.login_failed", cause="bad_password", user_id=str(user.id))
            raise UnauthorizedError("Invalid email or password")

        user.last_login = utcnow()
        await self._users.commit()
        return user, self.issue(user)

    async def me(self, principal: Principal) -> StaffUser:
        return await self._get(uuid.UUID(principal.identity), "User not found")

    async def get_staff(self, user_id: uuid.UUID) -> StaffUser:
        return await self._get(user_id, "Staff member not found")

    async def update_staff(self, user_id: uuid.UUID, changes: Mapping[str, Any]) -> StaffUser:
        user = await self._get(user_id, "Staff member not found")
        changes = dict(changes)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()
            if changes["email"] != user.email:
                await ensure_unique(
                    self._users,
                    noun="user",
                    fields={"email": ("email", changes["email"])},
                    exclude_id=user.id,
                )
        if changes.get("role_id") is not None:
            await self._require_role(changes["role_id"])

        apply_changes(user, changes)
        await self._session.flush()
        await self._users.refresh(user, "role")
        await self._users.commit()
        log.info("staff.updated", user_id=str(user.id), fields=sorted(changes))
        return user

    async def delete_staff(self, actor: Principal, user_id: uuid.UUID) -> None:
        user = await self._get(user_id, "Staff member not found")
        if is_self(actor, user.id):
            raise BadRequestError("You cannot delete your own account", reason="SelfDelete")
        await self._users.delete(user)
        await self._users.commit()
        log.info("staff.deleted", user_id=str(user_id))

    async def update_profile(self, actor: Principal, changes: Mapping[str, Any]) -> StaffUser:
        user = await self.me(actor)
        changes = dict(changes)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()
            if changes["email"] != user.email:
                await ensure_unique(
                    self._users,
                    noun="user",
                    fields={"email": ("email", changes["email"])},
                    exclude_id=user.id,
                )
        apply_changes(user, changes)
        await self._users.commit()
        return user

    async def change_password(self, actor: Principal, *, current: str, new: str) -> None:
        user = await self.me(actor)
        if not verify_password(current, user.password_hash):
            raise BadRequestError("Current password is incorrect")
        user.password_hash = hash_password(new)
        user.touch()
        await self._users.commit()
        log.info("account.password_changed", user_id=str(user.id))

    async def dashboard(self, actor: Principal) -> dict[str, Any]:
        user = await self.me(actor)
        active = Eq("is_active", True)
        stats: dict[str, int] = {}

        if actor.has("users.view"):
            stats["totalUsers"] = await self._users.count(active)
        if actor.has("agents.view"):
            stats["totalAgents"] = await AgentRepo(self._session).count(active)
        if actor.has("developers.view"):
            stats["totalDevelopers"] = await DeveloperRepo(self._session).count(active)
        if actor.has("properties.view"):
            listings = PropertyRepo(self._session)
            stats["totalProperties"] = await listings.count(active)
            stats["availableProperties"] = await listings.count(
                all_of(active, Eq("status", "Available"))
            )

        return {
            "user": {
                "name": f"{user.first_name} {user.last_name}",
                "role": user.role.display_name,
                "lastLogin": user.last_login.isoformat() if user.last_login else None,
                "avatar": user.avatar,
            },
            "permissions": sorted(actor.permissions),
            "stats": stats,
        }


# --- Module Notes -----------------------------------------------------------
# Email uniqueness is checked before writing but only the users.email unique index makes
# it authoritative; a racing duplicate surfaces as IntegrityError -> 400.
