"""
estate_cms.api.app

FastAPI app factory for the estate CMS API.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Seed the system roles and the bootstrap administrator on startup.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from estate_cms import __version__
from estate_cms.api.errors import register_exception_handlers
from estate_cms.api.routers.admin import router as admin_router
from estate_cms.api.routers.agents import router as agents_router
from estate_cms.api.routers.auth import router as auth_router
from estate_cms.api.routers.developers import router as developers_router
from estate_cms.api.routers.health import router as health_router
from estate_cms.api.routers.properties import router as properties_router
from estate_cms.api.routers.staff import router as staff_router
from estate_cms.db.init_db import init_db
from estate_cms.db.seed import ensure_bootstrap_admin, seed_system_roles
from estate_cms.db.session import create_engine, create_sessionmaker, session_scope
from estate_cms.observability.logging import configure_logging, get_logger
from estate_cms.observability.middleware import RequestContextMiddleware
from estate_cms.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, env=settings.env
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schemas come from Alembic migrations.
            await init_db(engine)

        async with session_scope(app.state.sessionmaker) as session:
            admin_role = await seed_system_roles(session)
            if settings.bootstrap_admin_email and settings.bootstrap_admin_password:
                await ensure_bootstrap_admin(
                    session,
                    role=admin_role,
                    email=settings.bootstrap_admin_email,
                    password=settings.bootstrap_admin_password,
                )
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Estate CMS API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last so it wraps CORS and sees every request.
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(staff_router)
    app.include_router(agents_router)
    app.include_router(developers_router)
    app.include_router(properties_router)
    return app


# --- Module Notes -----------------------------------------------------------
# Composition only; business rules live in services and authorization in auth.deps.
