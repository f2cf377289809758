import pytest
from fastapi import FastAPI
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from turnos.core.container import ServiceContainer
from turnos.core.lifecycle import LifecycleManager
from turnos.database.async_db import get_async_engine, get_session_factory


class TestLifecycleManager:
    """Pruebas del arranque y cierre de la aplicación"""

    @pytest.mark.asyncio
    async def test_startup_uses_the_app_database(self, test_settings, database_url):
        app = FastAPI()
        manager = LifecycleManager(test_settings)

        await manager.startup(app)
        try:
            assert str(get_async_engine().url) == database_url
            assert isinstance(app.state.container, ServiceContainer)
            assert app.state.container.session_factory is get_session_factory()
        finally:
            await manager.shutdown()

        engine = create_async_engine(database_url, poolclass=NullPool)
        try:
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        finally:
            await engine.dispose()

        assert {"appointments", "doctors", "studies", "obras_sociales", "tarifas"} <= set(tables)

    @pytest.mark.asyncio
    async def test_shutdown_without_startup_is_noop(self, test_settings):
        await LifecycleManager(test_settings).shutdown()
