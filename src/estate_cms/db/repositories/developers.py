from __future__ import annotations

from sqlalchemy import func, select

from estate_cms.db.models import Developer, Property
from estate_cms.db.repositories.base import SqlStore


class DeveloperRepo(SqlStore[Developer]):
    model = Developer

    async def count_listings(self, developer: Developer) -> int:
        stmt = (
            select(func.count())
            .select_from(Property)
            .where(Property.developer_id == developer.id)
        )
        return int((await self._session.execute(stmt)).scalar_one())
