"""
estate_cms.db.repositories.users

Repository for staff accounts; doubles as the user directory for principal resolution.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select

from estate_cms.db.models import StaffUser
from estate_cms.db.repositories.base import SqlStore


class UserRepo(SqlStore[StaffUser]):
    model = StaffUser

    async def find_by_id(self, identity: str) -> StaffUser | None:
        try:
            user_id = uuid.UUID(identity)
        except ValueError:
            return None
        return await self.get(user_id)

    async def find_by_email(self, email: str) -> StaffUser | None:
        stmt = select(StaffUser).where(StaffUser.email == email.lower())
        return (await self._session.execute(stmt)).scalars().first()


# --- Module Notes -----------------------------------------------------------
# Emails are stored lower-cased (see services.accounts), so lookups lower-case too.
