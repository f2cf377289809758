"""
Dependency Injection Container

Builds the long-lived collaborators (calendar client, WhatsApp messenger,
scheduled-job services) once per process and hands them to the API layer.
Request-scoped services are built per request from these and a session.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from turnos.config.settings import Settings, get_settings
from turnos.integrations.aws import SecretsManagerClient
from turnos.integrations.google import CalendarService
from turnos.integrations.whatsapp import WhatsAppHttpClient, WhatsAppMessenger
from turnos.scheduler import ReminderScheduler
from turnos.services import ExpiryService, ReminderService, WhatsAppWebhookService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for process-wide services.

    Collaborators can be injected (tests pass mocks); anything not given is
    built from settings.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings | None = None,
        calendar: CalendarService | None = None,
        messenger: WhatsAppMessenger | None = None,
    ):
        """
        Initialize container.

        Args:
            session_factory: Factory for sessions outside the request cycle
            settings: Application settings (uses default if not provided)
            calendar: Calendar client override
            messenger: WhatsApp messenger override
        """
        self.settings = settings or get_settings()
        self.session_factory = session_factory
        self.calendar = calendar or self._create_calendar()
        self.messenger = messenger or self._create_messenger()

        self.reminder_service = ReminderService(
            session_factory=session_factory,
            messenger=self.messenger,
            template_name=self.settings.WHATSAPP_TEMPLATE_NAME,
            template_lang=self.settings.WHATSAPP_TEMPLATE_LANG,
            window_start_hours=self.settings.REMINDER_WINDOW_START_HOURS,
            window_end_hours=self.settings.REMINDER_WINDOW_END_HOURS,
        )
        self.expiry_service = ExpiryService(session_factory)
        self.webhook_service = WhatsAppWebhookService(
            session_factory=session_factory,
            messenger=self.messenger,
            verify_token=self.settings.WHATSAPP_VERIFY_TOKEN,
        )
        self.scheduler = ReminderScheduler(
            reminder_service=self.reminder_service,
            expiry_service=self.expiry_service,
            reminder_interval_minutes=self.settings.REMINDER_CHECK_INTERVAL_MINUTES,
            expiry_interval_minutes=self.settings.EXPIRY_SWEEP_INTERVAL_MINUTES,
            timezone_name=self.settings.CALENDAR_TIMEZONE,
            enabled=self.settings.REMINDER_SCHEDULER_ENABLED,
        )

        logger.info("ServiceContainer initialized")

    def _create_calendar(self) -> CalendarService:
        return CalendarService(
            secrets=SecretsManagerClient(region=self.settings.AWS_REGION),
            secret_name=self.settings.GOOGLE_SECRET_NAME,
            calendar_id=self.settings.GOOGLE_CALENDAR_ID,
            timezone_name=self.settings.CALENDAR_TIMEZONE,
            impersonate_user=self.settings.GOOGLE_IMPERSONATE_USER,
        )

    def _create_messenger(self) -> WhatsAppMessenger:
        if not self.settings.WHATSAPP_ACCESS_TOKEN or not self.settings.WHATSAPP_PHONE_NUMBER_ID:
            logger.warning("WhatsApp credentials not configured - messages will fail")

        http_client = WhatsAppHttpClient(
            base_url=self.settings.WHATSAPP_API_BASE,
            version=self.settings.WHATSAPP_API_VERSION,
            phone_number_id=self.settings.WHATSAPP_PHONE_NUMBER_ID,
            access_token=self.settings.WHATSAPP_ACCESS_TOKEN,
            timeout=self.settings.WHATSAPP_TIMEOUT,
        )
        return WhatsAppMessenger(http_client)
