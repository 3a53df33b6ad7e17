"""
estate_cms.db.repositories.base

Generic SQLAlchemy data store.

Responsibilities:
- Implement the listing contract `find(predicate, sort, skip, limit)` / `count(predicate)`.
- Provide get/add/delete shared by every entity repository.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.db.base import Base
from estate_cms.db.predicates import order_by, to_clause
from estate_cms.query.filters import Sort
from estate_cms.query.predicates import MATCH_ALL, Predicate

M = TypeVar("M", bound=Base)


class SqlStore(Generic[M]):
    model: ClassVar[type[Any]]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find(
        self, predicate: Predicate, sort: Sort, skip: int, limit: int
    ) -> Sequence[M]:
        stmt = (
            select(self.model)
            .where(to_clause(self.model, predicate))
            .order_by(*order_by(self.model, sort))
            .offset(skip)
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self, predicate: Predicate = MATCH_ALL) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(to_clause(self.model, predicate))
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def get(self, entity_id: uuid.UUID) -> M | None:
        return await self._session.get(self.model, entity_id)

    async def find_one(self, predicate: Predicate) -> M | None:
        stmt = select(self.model).where(to_clause(self.model, predicate)).limit(1)
        return (await self._session.execute(stmt)).scalars().first()

    async def add(self, entity: M) -> M:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def delete(self, entity: M) -> None:
        await self._session.delete(entity)
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def refresh(self, entity: M, *attributes: str) -> None:
        # Loads relationships after FK changes without triggering async lazy loads.
        await self._session.refresh(entity, attribute_names=list(attributes) or None)


# --- Module Notes -----------------------------------------------------------
# `find_one` reuses the predicate compiler so uniqueness pre-checks read the same way as
# listing filters (e.g. `all_of(Eq("email", e), Not(Eq("id", current)))`).
