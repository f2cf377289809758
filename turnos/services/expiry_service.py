"""
Expiry Service

Deletes appointments past their ``expires_at`` (start + 30 days).
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from turnos.domain.time_utils import utc_now
from turnos.repositories import SQLAlchemyAppointmentRepository

logger = logging.getLogger(__name__)


class ExpiryService:
    """Purge expired appointments."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = utc_now,
    ):
        self._session_factory = session_factory
        self._clock = clock

    async def purge_expired(self) -> int:
        """Delete expired rows and return how many were removed."""
        now_epoch = int(self._clock().timestamp())
        async with self._session_factory() as session:
            return await SQLAlchemyAppointmentRepository(session).delete_expired(now_epoch)
