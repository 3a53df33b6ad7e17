"""
estate_cms.api.routers.health

Liveness and readiness probes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from estate_cms.api.deps import db_session, settings_dep
from estate_cms.settings import Settings

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # One round-trip proves the database is reachable.
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
