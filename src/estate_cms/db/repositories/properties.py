"""
estate_cms.db.repositories.properties

Repository for `Property` listings.

Responsibilities:
- Listing/CRUD via `SqlStore`.
- Counter updates and dashboard aggregates.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import desc, func, select, update

from estate_cms.db.models import Property
from estate_cms.db.repositories.base import SqlStore


class PropertyRepo(SqlStore[Property]):
    model = Property

    async def increment_views(self, property_id: uuid.UUID) -> None:
        # Single UPDATE so concurrent viewers never lose increments.
        stmt = (
            update(Property)
            .where(Property.id == property_id)
            .values(views=Property.views + 1)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)

    async def count_by_type(self) -> list[dict[str, Any]]:
        stmt = select(Property.type, func.count()).group_by(Property.type).order_by(Property.type)
        rows = (await self._session.execute(stmt)).all()
        return [{"type": t, "count": int(n)} for t, n in rows]

    async def recent(self, limit: int = 5) -> list[Property]:
        stmt = select(Property).order_by(desc(Property.created_at), Property.id).limit(limit)
        return list((await self._session.execute(stmt)).scalars().all())

    async def clear_agent(self, agent_id: uuid.UUID) -> None:
        stmt = (
            update(Property)
            .where(Property.agent_id == agent_id)
            .values(agent_id=None)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)


# --- Module Notes -----------------------------------------------------------
# `increment_views` bypasses the identity map; callers re-read the row when they need
# the updated counter.
