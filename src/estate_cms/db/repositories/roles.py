"""
estate_cms.db.repositories.roles

Repository for `Role` entities (the role store).
"""

from __future__ import annotations

from sqlalchemy import desc, func, select

from estate_cms.db.models import Role, StaffUser
from estate_cms.db.repositories.base import SqlStore


class RoleRepo(SqlStore[Role]):
    model = Role

    async def find_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(Role.name == name.upper())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        stmt = select(Role).order_by(desc(Role.created_at), Role.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def count_members(self, role: Role) -> int:
        stmt = select(func.count()).select_from(StaffUser).where(StaffUser.role_id == role.id)
        return int((await self._session.execute(stmt)).scalar_one())
