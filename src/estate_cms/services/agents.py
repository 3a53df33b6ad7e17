"""
estate_cms.services.agents

Agent profiles.

Responsibilities:
- Create/update/delete agents with unique email and license number.
- Detach listings from an agent that is removed.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.db.models import Agent
from estate_cms.db.repositories.agents import AgentRepo
from estate_cms.db.repositories.properties import PropertyRepo
from estate_cms.errors import NotFoundError
from estate_cms.observability.logging import get_logger
from estate_cms.services.common import apply_changes, ensure_unique

log = get_logger(__name__)


class AgentService:
    def __init__(self, session: AsyncSession) -> None:
        self._agents = AgentRepo(session)
        self._listings = PropertyRepo(session)

    async def get(self, agent_id: uuid.UUID) -> Agent:
        agent = await self._agents.get(agent_id)
        if agent is None:
            raise NotFoundError("Agent not found")
        return agent

    async def _check_unique(self, changes: Mapping[str, Any], exclude_id: uuid.UUID | None) -> None:
        await ensure_unique(
            self._agents,
            noun="agent",
            fields={
                "email": ("email", changes.get("email")),
                "license_number": ("license number", changes.get("license_number")),
            },
            exclude_id=exclude_id,
        )

    async def create(self, fields: Mapping[str, Any]) -> Agent:
        fields = dict(fields)
        fields["email"] = fields["email"].lower()
        await self._check_unique(fields, None)

        agent = await self._agents.add(Agent(**fields))
        await self._agents.commit()
        log.info("agent.created", agent_id=str(agent.id))
        return agent

    async def update(self, agent_id: uuid.UUID, changes: Mapping[str, Any]) -> Agent:
        agent = await self.get(agent_id)
        changes = dict(changes)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()
        await self._check_unique(changes, agent.id)

        apply_changes(agent, changes)
        await self._agents.commit()
        log.info("agent.updated", agent_id=str(agent.id), fields=sorted(changes))
        return agent

    async def delete(self, agent_id: uuid.UUID) -> None:
        agent = await self.get(agent_id)
        await self._listings.clear_agent(agent.id)
        await self._agents.delete(agent)
        await self._agents.commit()
        log.info("agent.deleted", agent_id=str(agent_id))
