import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, NullPool

from turnos.config.settings import Settings, get_settings
from turnos.models.db import Base

logger = logging.getLogger(__name__)

_async_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_async_database_engine(settings: Settings | None = None) -> AsyncEngine:
    """Crea el engine de base de datos asíncrono"""
    settings = settings or get_settings()
    try:
        database_url = settings.database_url

        # Configuración base común
        base_config = {
            "echo": settings.DB_ECHO,
            "pool_pre_ping": True,
        }

        # SQLite (tests) y desarrollo: sin pooling
        if settings.DEBUG or database_url.startswith("sqlite"):
            logger.info("Creating async database engine for DEVELOPMENT (NullPool)")
            engine_config = {
                **base_config,
                "poolclass": NullPool,
            }
        else:
            logger.info("Creating async database engine for PRODUCTION (QueuePool)")
            engine_config = {
                **base_config,
                "poolclass": AsyncAdaptedQueuePool,
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_recycle": settings.DB_POOL_RECYCLE,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
            }

        return create_async_engine(database_url, **engine_config)

    except Exception as e:
        logger.error(f"Failed to create async database engine: {e}")
        raise


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session maker asíncrono para un engine dado"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_async_engine(settings: Settings | None = None) -> AsyncEngine:
    """Engine del proceso, creado en el primer uso con ``settings``"""
    global _async_engine
    if _async_engine is None:
        _async_engine = create_async_database_engine(settings)
    return _async_engine


def get_session_factory(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Session maker del proceso, ligado a ``get_async_engine()``"""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_async_engine(settings))
    return _session_factory


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency para obtener la sesión de base de datos asíncrona
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Crea las tablas que no existan"""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")


async def close_async_db() -> None:
    """Libera el pool de conexiones"""
    global _async_engine, _session_factory
    if _async_engine is not None:
        await _async_engine.dispose()
        logger.info("Async database engine disposed")
    _async_engine = None
    _session_factory = None
