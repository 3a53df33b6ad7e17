"""
estate_cms.services.properties

Property listings.

Responsibilities:
- Create/update/delete listings with a unique property code and valid references.
- Keep the slug in step with the title and code.
- Serve single public listings (active only) and count their views.
- Build the staff overview figures.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.db.models import Property
from estate_cms.db.repositories.agents import AgentRepo
from estate_cms.db.repositories.developers import DeveloperRepo
from estate_cms.db.repositories.properties import PropertyRepo
from estate_cms.domain.derivations import listing_slug
from estate_cms.errors import BadRequestError, NotFoundError
from estate_cms.observability.logging import get_logger
from estate_cms.query.predicates import Eq, all_of
from estate_cms.services.common import apply_changes, ensure_unique

log = get_logger(__name__)


class PropertyService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._listings = PropertyRepo(session)
        self._developers = DeveloperRepo(session)
        self._agents = AgentRepo(session)

    async def get(self, property_id: uuid.UUID) -> Property:
        listing = await self._listings.get(property_id)
        if listing is None:
            raise NotFoundError("Property not found")
        return listing

    async def get_public(self, property_id: uuid.UUID) -> Property:
        listing = await self._listings.find_one(
            all_of(Eq("id", property_id), Eq("is_active", True))
        )
        if listing is None:
            raise NotFoundError("Property not found")
        await self._listings.increment_views(listing.id)
        await self._listings.commit()
        await self._listings.refresh(listing, "views")
        return listing

    async def _check_references(self, changes: Mapping[str, Any]) -> None:
        developer_id = changes.get("developer_id")
        if developer_id is not None and await self._developers.get(developer_id) is None:
            raise BadRequestError("Developer not found")
        agent_id = changes.get("agent_id")
        if agent_id is not None and await self._agents.get(agent_id) is None:
            raise BadRequestError("Agent not found")

    async def create(self, fields: Mapping[str, Any]) -> Property:
        fields = dict(fields)
        fields["property_code"] = fields["property_code"].upper()
        await ensure_unique(
            self._listings,
            noun="property",
            fields={"property_code": ("property code", fields["property_code"])},
        )
        await self._check_references(fields)

        fields["slug"] = listing_slug(fields["title"], fields["property_code"])
        listing = await self._listings.add(Property(**fields))
        await self._listings.refresh(listing, "developer", "agent")
        await self._listings.commit()
        log.info("property.created", property_id=str(listing.id), code=listing.property_code)
        return listing

    async def update(self, property_id: uuid.UUID, changes: Mapping[str, Any]) -> Property:
        listing = await self.get(property_id)
        changes = dict(changes)
        if changes.get("property_code"):
            changes["property_code"] = changes["property_code"].upper()
            await ensure_unique(
                self._listings,
                noun="property",
                fields={"property_code": ("property code", changes["property_code"])},
                exclude_id=listing.id,
            )
        await self._check_references(changes)

        if "title" in changes or "property_code" in changes:
            changes["slug"] = listing_slug(
                changes.get("title", listing.title),
                changes.get("property_code", listing.property_code),
            )
        apply_changes(listing, changes)
        await self._session.flush()
        await self._listings.refresh(listing, "developer", "agent")
        await self._listings.commit()
        log.info("property.updated", property_id=str(listing.id), fields=sorted(changes))
        return listing

    async def delete(self, property_id: uuid.UUID) -> None:
        listing = await self.get(property_id)
        await self._listings.delete(listing)
        await self._listings.commit()
        log.info("property.deleted", property_id=str(property_id))

    async def toggle_featured(self, property_id: uuid.UUID) -> Property:
        listing = await self.get(property_id)
        listing.is_featured = not listing.is_featured
        listing.touch()
        await self._listings.commit()
        log.info("property.featured", property_id=str(listing.id), featured=listing.is_featured)
        return listing

    async def overview(self) -> dict[str, Any]:
        active = Eq("is_active", True)
        return {
            "totalProperties": await self._listings.count(),
            "activeProperties": await self._listings.count(active),
            "featuredProperties": await self._listings.count(
                all_of(active, Eq("is_featured", True))
            ),
            "availableProperties": await self._listings.count(
                all_of(active, Eq("status", "Available"))
            ),
            "propertiesByType": await self._listings.count_by_type(),
            "recentProperties": await self._listings.recent(5),
        }


# --- Module Notes -----------------------------------------------------------
# `overview` returns ORM rows under "recentProperties"; the router serializes them.
