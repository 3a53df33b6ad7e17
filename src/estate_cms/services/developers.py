"""
estate_cms.services.developers

Developer companies.

Responsibilities:
- Create/update/delete developers with unique email and registration number.
- Refuse to delete a developer that listings still reference.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.db.models import Developer
from estate_cms.db.repositories.developers import DeveloperRepo
from estate_cms.errors import ConflictError, NotFoundError
from estate_cms.observability.logging import get_logger
from estate_cms.services.common import apply_changes, ensure_unique

log = get_logger(__name__)


class DeveloperService:
    def __init__(self, session: AsyncSession) -> None:
        self._developers = DeveloperRepo(session)

    async def get(self, developer_id: uuid.UUID) -> Developer:
        developer = await self._developers.get(developer_id)
        if developer is None:
            raise NotFoundError("Developer not found")
        return developer

    async def _check_unique(self, changes: Mapping[str, Any], exclude_id: uuid.UUID | None) -> None:
        await ensure_unique(
            self._developers,
            noun="developer",
            fields={
                "email": ("email", changes.get("email")),
                "registration_number": (
                    "registration number",
                    changes.get("registration_number"),
                ),
            },
            exclude_id=exclude_id,
        )

    async def create(self, fields: Mapping[str, Any]) -> Developer:
        fields = dict(fields)
        fields["email"] = fields["email"].lower()
        await self._check_unique(fields, None)

        developer = await self._developers.add(Developer(**fields))
        await self._developers.commit()
        log.info("developer.created", developer_id=str(developer.id))
        return developer

    async def update(self, developer_id: uuid.UUID, changes: Mapping[str, Any]) -> Developer:
        developer = await self.get(developer_id)
        changes = dict(changes)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()
        await self._check_unique(changes, developer.id)

        apply_changes(developer, changes)
        await self._developers.commit()
        log.info("developer.updated", developer_id=str(developer.id), fields=sorted(changes))
        return developer

    async def delete(self, developer_id: uuid.UUID) -> None:
        developer = await self.get(developer_id)
        listings = await self._developers.count_listings(developer)
        if listings > 0:
            raise ConflictError(
                f"Cannot delete developer. {listings} property listing(s) reference it."
            )
        await self._developers.delete(developer)
        await self._developers.commit()
        log.info("developer.deleted", developer_id=str(developer_id))
