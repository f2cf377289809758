"""
Application lifecycle management using the FastAPI lifespan pattern.

Startup creates the tables, builds the service container and starts the
scheduler; shutdown stops the scheduler and disposes the engine.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from turnos.config.settings import Settings, get_settings
from turnos.core.container import ServiceContainer
from turnos.database.async_db import close_async_db, get_async_engine, get_session_factory, init_db

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup initialization and graceful shutdown.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize lifecycle manager."""
        self._settings = settings or get_settings()
        self._container: ServiceContainer | None = None
        self._initialized = False

    async def startup(self, app: FastAPI) -> None:
        """
        Execute startup tasks.

        Called when the application starts.
        """
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")

        # First use creates the process engine; get_async_db reuses it
        await init_db(get_async_engine(self._settings))

        self._verify_configurations()

        self._container = ServiceContainer(
            session_factory=get_session_factory(self._settings), settings=self._settings
        )
        app.state.container = self._container

        await self._container.scheduler.start()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        """
        Execute shutdown tasks.

        Called when the application stops.
        """
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")

        if self._container is not None:
            await self._container.scheduler.stop()

        await close_async_db()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        """Verify critical application configurations."""
        if not self._settings.WHATSAPP_ACCESS_TOKEN:
            logger.warning("WHATSAPP_ACCESS_TOKEN not configured - reminders and replies will fail")

        if not self._settings.REMINDER_SCHEDULER_ENABLED:
            logger.info("Reminder scheduler is disabled via REMINDER_SCHEDULER_ENABLED=False")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Args:
        app: FastAPI application instance
    """
    manager = LifecycleManager(getattr(app.state, "settings", None))
    await manager.startup(app)
    try:
        yield
    finally:
        await manager.shutdown()
