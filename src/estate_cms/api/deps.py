"""
estate_cms.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Provide per-entity data stores so tests can swap them out.
- Provide the entity services bound to the request session.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from estate_cms.db.repositories.agents import AgentRepo
from estate_cms.db.repositories.developers import DeveloperRepo
from estate_cms.db.repositories.properties import PropertyRepo
from estate_cms.db.repositories.users import UserRepo
from estate_cms.services.agents import AgentService
from estate_cms.services.developers import DeveloperService
from estate_cms.services.properties import PropertyService
from estate_cms.services.roles import RoleService
from estate_cms.settings import Settings, get_settings


def settings_dep(request: Request) -> Settings:
    # `create_app` stores the settings it was built with; fall back to env settings.
    return getattr(request.app.state, "settings", None) or get_settings()


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created in the lifespan handler of `estate_cms.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by services.
    async with session_factory() as session:
        yield session


def user_store(session: AsyncSession = Depends(db_session)) -> UserRepo:
    return UserRepo(session)


def agent_store(session: AsyncSession = Depends(db_session)) -> AgentRepo:
    return AgentRepo(session)


def developer_store(session: AsyncSession = Depends(db_session)) -> DeveloperRepo:
    return DeveloperRepo(session)


def property_store(session: AsyncSession = Depends(db_session)) -> PropertyRepo:
    return PropertyRepo(session)


def role_service(session: AsyncSession = Depends(db_session)) -> RoleService:
    return RoleService(session)


def agent_service(session: AsyncSession = Depends(db_session)) -> AgentService:
    return AgentService(session)


def developer_service(session: AsyncSession = Depends(db_session)) -> DeveloperService:
    return DeveloperService(session)


def property_service(session: AsyncSession = Depends(db_session)) -> PropertyService:
    return PropertyService(session)


# --- Module Notes -----------------------------------------------------------
# All stores built for one request share the same session (FastAPI caches `db_session`
# per request), so a service can commit once across repositories.
