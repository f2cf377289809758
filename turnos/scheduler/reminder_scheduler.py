"""Reminder Scheduler.

APScheduler-based async scheduler for the periodic jobs:
- reminder pass every 30 minutes (47-49 hs lookahead)
- expired-appointment sweep every hour
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore[import-not-found]
from apscheduler.triggers.interval import IntervalTrigger  # type: ignore[import-not-found]
from pytz import timezone

from turnos.services.expiry_service import ExpiryService
from turnos.services.reminder_service import ReminderService

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Scheduler de recordatorios y limpieza de turnos."""

    def __init__(
        self,
        reminder_service: ReminderService,
        expiry_service: ExpiryService,
        reminder_interval_minutes: int = 30,
        expiry_interval_minutes: int = 60,
        timezone_name: str = "America/Argentina/Buenos_Aires",
        enabled: bool = True,
    ):
        """Initialize scheduler.

        Args:
            reminder_service: Service executing one reminder pass.
            expiry_service: Service deleting expired appointments.
            reminder_interval_minutes: Minutes between reminder passes.
            expiry_interval_minutes: Minutes between expiry sweeps.
            timezone_name: Timezone for scheduling jobs.
            enabled: Whether scheduler is enabled.
        """
        self._reminder_service = reminder_service
        self._expiry_service = expiry_service
        self.reminder_interval_minutes = reminder_interval_minutes
        self.expiry_interval_minutes = expiry_interval_minutes
        self.tz = timezone(timezone_name)
        self.enabled = enabled

        self._scheduler: AsyncIOScheduler | None = None
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def start(self) -> None:
        """Start the scheduler."""
        if not self.enabled:
            logger.info("ReminderScheduler is disabled, skipping start")
            return

        if self._is_running:
            logger.warning("ReminderScheduler already running")
            return

        scheduler = AsyncIOScheduler(timezone=self.tz)
        self._scheduler = scheduler

        scheduler.add_job(
            self._send_reminders,
            IntervalTrigger(minutes=self.reminder_interval_minutes, timezone=self.tz),
            id="appointment_reminders",
            replace_existing=True,
            name="Appointment Reminders",
            max_instances=1,
            coalesce=True,
        )

        scheduler.add_job(
            self._purge_expired,
            IntervalTrigger(minutes=self.expiry_interval_minutes, timezone=self.tz),
            id="expired_appointments_sweep",
            replace_existing=True,
            name="Expired Appointments Sweep",
            max_instances=1,
            coalesce=True,
        )

        scheduler.start()
        self._is_running = True
        logger.info(
            f"ReminderScheduler started with timezone {self.tz} "
            f"(reminders every {self.reminder_interval_minutes}m, sweep every {self.expiry_interval_minutes}m)"
        )

    async def stop(self) -> None:
        """Stop the scheduler gracefully."""
        if self._scheduler and self._is_running:
            self._scheduler.shutdown(wait=False)
            self._is_running = False
            logger.info("ReminderScheduler stopped")

    async def _send_reminders(self) -> None:
        logger.info("Starting reminder job")
        try:
            summary = await self._reminder_service.run()
            logger.info(f"Reminder job finished: {summary.to_dict()}")
        except Exception as e:
            logger.error(f"Error in reminder job: {e}", exc_info=True)

    async def _purge_expired(self) -> None:
        try:
            await self._expiry_service.purge_expired()
        except Exception as e:
            logger.error(f"Error purging expired appointments: {e}", exc_info=True)
