"""
estate_cms.api.routers.agents

Agent endpoints.

Responsibilities:
- Staff listing/CRUD gated by `agents.*` permissions.
- Public directory of active agents, ordered by sales.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import EmailStr, Field, field_validator
from starlette.status import HTTP_201_CREATED

from estate_cms.api.deps import agent_service, agent_store
from estate_cms.api.serializers import (
    AgentOut,
    AgentPublicOut,
    ApiRequest,
    check_vocabulary,
    dump,
)
from estate_cms.auth.deps import require_permission
from estate_cms.db.repositories.agents import AgentRepo
from estate_cms.domain.vocabulary import AGENT_SPECIALIZATIONS
from estate_cms.query import specs
from estate_cms.services.agents import AgentService
from estate_cms.services.listing import list_page

router = APIRouter(prefix="/api/agents", tags=["agents"])


class AgentFields(ApiRequest):
    clearable = frozenset({"bio", "avatar", "city"})

    phone: str | None = Field(default=None, min_length=1, max_length=64)
    specializations: list[str] | None = None
    bio: str | None = Field(default=None, max_length=1000)
    avatar: str | None = Field(default=None, max_length=512)
    experience: int | None = Field(default=None, ge=0)
    languages: list[str] | None = None
    city: str | None = Field(default=None, max_length=128)
    commission_rate: float | None = Field(default=None, ge=0, le=100)
    properties_sold: int | None = Field(default=None, ge=0)
    total_sales_value: float | None = Field(default=None, ge=0)
    clients_served: int | None = Field(default=None, ge=0)
    average_rating: float | None = Field(default=None, ge=0, le=5)
    is_active: bool | None = None

    @field_validator("specializations")
    @classmethod
    def known_specializations(cls, v: list[str] | None) -> list[str] | None:
        return check_vocabulary(v, AGENT_SPECIALIZATIONS, "specializations")


class AgentCreateRequest(AgentFields):
    first_name: str = Field(min_length=1, max_length=128)
    last_name: str = Field(min_length=1, max_length=128)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=64)
    license_number: str = Field(min_length=1, max_length=64)


class AgentUpdateRequest(AgentFields):
    first_name: str | None = Field(default=None, min_length=1, max_length=128)
    last_name: str | None = Field(default=None, min_length=1, max_length=128)
    email: EmailStr | None = None
    license_number: str | None = Field(default=None, min_length=1, max_length=64)


@router.get("", dependencies=[Depends(require_permission("agents.view"))])
async def list_agents(request: Request, store: AgentRepo = Depends(agent_store)) -> dict[str, Any]:
    return await list_page(
        store, specs.AGENTS, dict(request.query_params), serialize=lambda a: dump(AgentOut, a)
    )


@router.get("/public/list")
async def list_public_agents(
    request: Request, store: AgentRepo = Depends(agent_store)
) -> dict[str, Any]:
    return await list_page(
        store,
        specs.PUBLIC_AGENTS,
        dict(request.query_params),
        serialize=lambda a: dump(AgentPublicOut, a),
        public=True,
    )


@router.get("/{agent_id}", dependencies=[Depends(require_permission("agents.view"))])
async def get_agent(
    agent_id: uuid.UUID, agents: AgentService = Depends(agent_service)
) -> dict[str, Any]:
    return {"success": True, "data": dump(AgentOut, await agents.get(agent_id))}


@router.post(
    "",
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(require_permission("agents.create"))],
)
async def create_agent(
    body: AgentCreateRequest, agents: AgentService = Depends(agent_service)
) -> dict[str, Any]:
    agent = await agents.create(body.changes())
    return {"success": True, "message": "Agent created successfully", "data": dump(AgentOut, agent)}


@router.put("/{agent_id}", dependencies=[Depends(require_permission("agents.edit"))])
async def update_agent(
    agent_id: uuid.UUID,
    body: AgentUpdateRequest,
    agents: AgentService = Depends(agent_service),
) -> dict[str, Any]:
    agent = await agents.update(agent_id, body.changes())
    return {"success": True, "message": "Agent updated successfully", "data": dump(AgentOut, agent)}


@router.delete("/{agent_id}", dependencies=[Depends(require_permission("agents.delete"))])
async def delete_agent(
    agent_id: uuid.UUID, agents: AgentService = Depends(agent_service)
) -> dict[str, Any]:
    await agents.delete(agent_id)
    return {"success": True, "message": "Agent deleted successfully"}
