"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, optional schema
creation in debug mode, and SQL engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from fleet_access.core.config import get_settings
from fleet_access.infrastructure.persistence.database import dispose_engine, init_models
from fleet_access.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine.

    In debug mode with DATABASE_URL set, tables are created on startup so
    a fresh local database works without running scripts.
    """
    settings = get_settings()
    setup_logging()
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    if settings.debug and settings.database_url:
        await init_models()
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Shutdown complete")
