# ============================================================================
# SCOPE: SCHEDULED JOB
# Description: Envío de recordatorios de turnos por WhatsApp 47-49 hs antes.
# ============================================================================
"""Reminder Service.

Finds tentative appointments starting inside the reminder window, sends the
approved WhatsApp template and flags them as reminded.

The send happens before the flag is persisted: two overlapping runs can send
the same reminder twice.
"""

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from turnos.domain.time_utils import (
    format_hour,
    format_spanish_date,
    parse_iso_datetime,
    to_ar_iso,
    utc_now,
    utc_now_iso,
)
from turnos.integrations.whatsapp import WhatsAppMessenger
from turnos.models.db import Appointment
from turnos.repositories import SQLAlchemyAppointmentRepository
from turnos.utils.phone import normalize_phone_ar

logger = logging.getLogger(__name__)

DEFAULT_PATIENT_NAME = "paciente"


@dataclass
class ReminderRunSummary:
    found: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class ReminderService:
    """Send reminders for appointments starting within the configured window."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        messenger: WhatsAppMessenger,
        template_name: str,
        template_lang: str,
        window_start_hours: int = 47,
        window_end_hours: int = 49,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize reminder service.

        Args:
            session_factory: Factory for the session used by each run.
            messenger: WhatsApp messenger used to send the template.
            template_name: Approved template name.
            template_lang: Template language code.
            window_start_hours: Lower bound of the window, in hours from now.
            window_end_hours: Upper bound of the window, in hours from now.
            clock: Returns the current aware datetime (overridable in tests).
        """
        self._session_factory = session_factory
        self._messenger = messenger
        self._template_name = template_name
        self._template_lang = template_lang
        self._window_start = timedelta(hours=window_start_hours)
        self._window_end = timedelta(hours=window_end_hours)
        self._clock = clock

    def reminder_window(self, now: datetime) -> tuple[str, str]:
        """Window bounds in the stored ``-03:00`` representation."""
        return to_ar_iso(now + self._window_start), to_ar_iso(now + self._window_end)

    def build_template_parameters(self, appointment: Appointment) -> list[str]:
        """Body parameters: patient name, Spanish date text and HH:MM."""
        start = parse_iso_datetime(appointment.start_time)
        return [
            appointment.patient_name or DEFAULT_PATIENT_NAME,
            format_spanish_date(start),
            format_hour(start),
        ]

    async def run(self) -> ReminderRunSummary:
        """
        Execute one reminder pass.

        Per-appointment failures are logged and counted; a failure of the
        window query propagates to the caller.
        """
        summary = ReminderRunSummary()
        window_start, window_end = self.reminder_window(self._clock())
        logger.info(f"Checking reminders between {window_start} and {window_end}")

        try:
            async with self._session_factory() as session:
                repository = SQLAlchemyAppointmentRepository(session)
                appointments = await repository.find_pending_reminders(window_start, window_end)
        except Exception as e:
            logger.error(f"Error querying appointments for reminders: {e}")
            raise

        summary.found = len(appointments)
        if not appointments:
            logger.info("No appointments found for reminders")
            return summary

        for appointment in appointments:
            appointment_id = appointment.appointment_id

            if not appointment.patient_phone:
                logger.warning(f"No phone for appointment {appointment_id}, skipping")
                summary.skipped += 1
                continue

            try:
                await self._messenger.send_template(
                    normalize_phone_ar(appointment.patient_phone),
                    self._template_name,
                    language_code=self._template_lang,
                    body_parameters=self.build_template_parameters(appointment),
                )
                await self._mark_sent(appointment_id)
                summary.sent += 1
                logger.info(f"Reminder sent for appointment {appointment_id}")
            except Exception as e:
                logger.error(f"Failed to send reminder for {appointment_id}: {e}")
                summary.failed += 1

        logger.info(
            f"Reminders completed: {summary.sent} sent, {summary.skipped} skipped, {summary.failed} failed"
        )
        return summary

    async def _mark_sent(self, appointment_id: str) -> None:
        """Flag the appointment as reminded in its own session."""
        async with self._session_factory() as session:
            repository = SQLAlchemyAppointmentRepository(session)
            appointment = await repository.find_by_id(appointment_id)
            if appointment is None:
                logger.warning(f"Appointment {appointment_id} disappeared before marking reminder")
                return
            await repository.update(appointment, {"reminder_sent": True, "reminder_sent_at": utc_now_iso()})
