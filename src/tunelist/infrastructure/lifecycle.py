"""Application lifecycle management for startup and shutdown tasks.

This module holds the FastAPI lifespan context manager that sets up logging and
the database at startup and releases the engine at shutdown.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tunelist.config import Settings, get_settings
from tunelist.infrastructure.observability import configure_logging
from tunelist.infrastructure.persistence import Database

logger = logging.getLogger(__name__)


# Listen future me, @asynccontextmanager makes this a CONTEXT MANAGER for FastAPI lifespan!
# Everything before `yield` runs at STARTUP, everything after runs at SHUTDOWN. Settings come
# from app.state.settings when create_app() was given explicit ones (tests do that to get an
# in-memory DB), otherwise from the cached env-based get_settings(). The Database lives on
# app.state.db - that's where get_db_session() picks it up.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown tasks including:
    - Logging configuration
    - Directory creation
    - Database initialization and table creation
    - Resource cleanup
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info("Starting application: %s", settings.app_name)

    db: Database | None = None
    try:
        settings.ensure_directories()

        db = Database(settings)
        app.state.db = db
        logger.info("Database initialized: %s", settings.database.url)

        await db.create_tables()
        logger.info("Database tables ready")

        yield
    finally:
        logger.info("Shutting down application")
        if db is not None:
            await db.close()
            logger.info("Database connection closed")
