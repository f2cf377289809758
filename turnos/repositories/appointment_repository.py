"""
Appointment Repository Implementation
"""

import logging

from sqlalchemy import delete, or_, select

from turnos.domain.appointment_status import AppointmentStatus
from turnos.models.db import Appointment
from turnos.repositories.base import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class SQLAlchemyAppointmentRepository(SQLAlchemyRepository[Appointment]):
    """
    Persistence for appointments.

    ``start_time`` is a fixed-offset ISO string, so string ranges and ordering
    are chronological.
    """

    model = Appointment
    id_column = "appointment_id"

    async def find_in_range(
        self,
        start_from: str,
        start_to: str,
        doctor_id: str | None = None,
    ) -> list[Appointment]:
        """Appointments with ``start_from <= start_time <= start_to``, sorted by start time."""
        query = select(Appointment).where(Appointment.start_time.between(start_from, start_to))
        if doctor_id:
            query = query.where(Appointment.doctor_id == doctor_id)
        result = await self.session.execute(query.order_by(Appointment.start_time))
        return list(result.scalars().all())

    async def find_pending_reminders(self, window_start: str, window_end: str) -> list[Appointment]:
        """Tentative appointments inside the window that have not been reminded yet."""
        result = await self.session.execute(
            select(Appointment)
            .where(
                Appointment.status == AppointmentStatus.TENTATIVE.value,
                Appointment.start_time.between(window_start, window_end),
                or_(Appointment.reminder_sent.is_(None), Appointment.reminder_sent.is_(False)),
            )
            .order_by(Appointment.start_time)
        )
        return list(result.scalars().all())

    async def find_awaiting_reply(self) -> list[Appointment]:
        """Tentative appointments whose reminder was already sent, soonest first."""
        result = await self.session.execute(
            select(Appointment)
            .where(
                Appointment.status == AppointmentStatus.TENTATIVE.value,
                Appointment.reminder_sent.is_(True),
            )
            .order_by(Appointment.start_time)
        )
        return list(result.scalars().all())

    async def delete_expired(self, now_epoch: int) -> int:
        """Delete appointments whose ``expires_at`` is in the past. Returns the row count."""
        result = await self.session.execute(delete(Appointment).where(Appointment.expires_at < now_epoch))
        await self.session.commit()
        deleted = result.rowcount or 0
        if deleted:
            logger.info(f"Deleted {deleted} expired appointments")
        return deleted
