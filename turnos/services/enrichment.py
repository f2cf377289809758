"""
Best-effort name resolution for unvalidated references.

Each lookup runs concurrently in its own session; a failed lookup yields
``None`` instead of failing the listing.
"""

import asyncio
import logging
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from turnos.repositories.base import SQLAlchemyRepository

logger = logging.getLogger(__name__)


async def _lookup_name(
    session_factory: async_sessionmaker[AsyncSession],
    repository_cls: type[SQLAlchemyRepository],
    entity_id: str,
    name_attr: str,
) -> str | None:
    try:
        async with session_factory() as session:
            entity = await repository_cls(session).find_by_id(entity_id)
            return getattr(entity, name_attr) if entity is not None else None
    except Exception as e:
        logger.warning(f"Lookup of {repository_cls.model.__tablename__}/{entity_id} failed: {e}")
        return None


async def resolve_names(
    session_factory: async_sessionmaker[AsyncSession],
    repository_cls: type[SQLAlchemyRepository],
    ids: Iterable[str | None],
    name_attr: str,
) -> dict[str, str | None]:
    """
    Resolve display names for a set of ids.

    Returns:
        Mapping id -> name (``None`` when missing or when the lookup failed)
    """
    unique_ids = [entity_id for entity_id in dict.fromkeys(ids) if entity_id]
    names = await asyncio.gather(
        *(_lookup_name(session_factory, repository_cls, entity_id, name_attr) for entity_id in unique_ids)
    )
    return dict(zip(unique_ids, names))
