"""
estate_cms.services.roles

Role administration.

Responsibilities:
- Create/update/delete roles with catalog validation.
- Protect system roles and roles still assigned to staff.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.auth.catalog import PERMISSIONS, PermissionCatalog
from estate_cms.db.models import Role
from estate_cms.db.repositories.roles import RoleRepo
from estate_cms.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from estate_cms.observability.logging import get_logger
from estate_cms.services.common import apply_changes

log = get_logger(__name__)


class RoleService:
    def __init__(self, session: AsyncSession, *, catalog: PermissionCatalog = PERMISSIONS) -> None:
        self._roles = RoleRepo(session)
        self._catalog = catalog

    def _validated(self, permissions: list[str]) -> list[str]:
        invalid = self._catalog.invalid(permissions)
        if invalid:
            raise BadRequestError(f"Invalid permissions: {', '.join(invalid)}")
        return list(dict.fromkeys(permissions))

    async def list_all(self) -> list[Role]:
        return await self._roles.list_all()

    async def create(
        self, *, name: str, display_name: str, description: str, permissions: list[str]
    ) -> Role:
        canonical = name.strip().upper()
        if await self._roles.find_by_name(canonical) is not None:
            raise ConflictError("Role with this name already exists")

        role = await self._roles.add(
            Role(
                name=canonical,
                display_name=display_name,
                description=description,
                permissions=self._validated(permissions),
                is_active=True,
                is_system=False,
            )
        )
        await self._roles.commit()
        log.info("role.created", role=role.name)
        return role

    async def _editable(self, role_id: uuid.UUID, verb: str) -> Role:
        role = await self._roles.get(role_id)
        if role is None:
            raise NotFoundError("Role not found")
        if role.is_system:
            raise ForbiddenError(f"System roles cannot be {verb}")
        return role

    async def update(self, role_id: uuid.UUID, changes: Mapping[str, Any]) -> Role:
        role = await self._editable(role_id, "modified")
        changes = dict(changes)
        if changes.get("permissions") is not None:
            changes["permissions"] = self._validated(changes["permissions"])
        apply_changes(role, changes)
        await self._roles.commit()
        log.info("role.updated", role=role.name, fields=sorted(changes))
        return role

    async def delete(self, role_id: uuid.UUID) -> None:
        role = await self._editable(role_id, "deleted")
        members = await self._roles.count_members(role)
        if members > 0:
            raise ConflictError(
                f"Cannot delete role. {members} user(s) are assigned to this role."
            )
        await self._roles.delete(role)
        await self._roles.commit()
        log.info("role.deleted", role=role.name)


# --- Module Notes -----------------------------------------------------------
# The member count is read before the delete; a user assigned concurrently is caught by
# the roles.id foreign key on databases that enforce it.
