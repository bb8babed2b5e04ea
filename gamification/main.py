"""
Gamification engine — application entry point.

This is the **only** file that assembles the app.  The points engine
lives in ``engine/``; database work for recomputes in ``services/``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gamification.api.v1.api import api_router
from gamification.core.config import settings
from gamification.core.exceptions import register_exception_handlers
from gamification.core.logging import configure_logging
from gamification.db.base import Base
from gamification.db.session import engine

# Ensure all models are imported so metadata.create_all can see them
from gamification.models.employee import AttendanceLog, Employee, OTRequest  # noqa: F401
from gamification.models.gamification import (BadgeDefinition,  # noqa: F401
                                              EmployeeBadge, EmployeePoints,
                                              PointTransaction)
from gamification.models.system_setting import SystemSetting  # noqa: F401

configure_logging()
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    logger.info("🚀 %s v%s started", settings.PROJECT_NAME, settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Points, streaks, badges and levels from attendance history",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_V1_PREFIX)
    return application


app = create_app()
