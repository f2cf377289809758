"""
Google Calendar integration.

Creates tentative events for new appointments using a service account whose
key lives in AWS Secrets Manager.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from turnos.core.exceptions import CalendarError, SecretRetrievalError
from turnos.integrations.aws.secrets_manager import SecretsManagerClient

logger = logging.getLogger(__name__)

CALENDAR_SCOPES = ["https://www.googleapis.com/auth/calendar"]
REQUIRED_KEY_FIELDS = ("client_email", "private_key")


@dataclass(frozen=True)
class CalendarEvent:
    event_id: str
    html_link: str | None = None


def build_calendar_resource(credentials: Any) -> Any:
    """Build the Calendar v3 API resource."""
    return build("calendar", "v3", credentials=credentials, cache_discovery=False)


class CalendarService:
    """
    Google Calendar client with a controlled lifetime.

    The API resource is built on first use and cached for the life of the
    instance. Credentials are not refreshed from the secret store afterwards.
    """

    def __init__(
        self,
        secrets: SecretsManagerClient,
        secret_name: str,
        calendar_id: str,
        timezone_name: str,
        impersonate_user: str | None = None,
        resource_builder: Callable[[Any], Any] = build_calendar_resource,
    ):
        self._secrets = secrets
        self._secret_name = secret_name
        self._calendar_id = calendar_id
        self._timezone_name = timezone_name
        self._impersonate_user = impersonate_user
        self._resource_builder = resource_builder
        self._resource: Any = None
        self._lock = asyncio.Lock()

    def _load_credentials(self) -> Any:
        info = self._secrets.get_secret_json(self._secret_name)
        missing = [field for field in REQUIRED_KEY_FIELDS if not info.get(field)]
        if missing:
            raise SecretRetrievalError(
                f"Service account secret {self._secret_name} is missing fields: {', '.join(missing)}"
            )

        credentials = service_account.Credentials.from_service_account_info(info, scopes=CALENDAR_SCOPES)
        if self._impersonate_user:
            credentials = credentials.with_subject(self._impersonate_user)
        return credentials

    def _build_resource(self) -> Any:
        credentials = self._load_credentials()
        logger.info(f"Google Calendar client initialized for calendar: {self._calendar_id}")
        return self._resource_builder(credentials)

    async def _get_resource(self) -> Any:
        if self._resource is None:
            async with self._lock:
                if self._resource is None:
                    self._resource = await asyncio.to_thread(self._build_resource)
        return self._resource

    def build_event_body(
        self,
        summary: str,
        description: str,
        start_time: str,
        end_time: str,
        attendee_email: str | None = None,
        attendee_name: str | None = None,
    ) -> dict[str, Any]:
        """Build a tentative event body for the Calendar API."""
        body: dict[str, Any] = {
            "summary": summary,
            "description": description,
            "start": {"dateTime": start_time, "timeZone": self._timezone_name},
            "end": {"dateTime": end_time, "timeZone": self._timezone_name},
            "status": "tentative",
        }
        if attendee_email:
            body["attendees"] = [{"email": attendee_email, "displayName": attendee_name}]
        return body

    async def create_event(self, body: dict[str, Any]) -> CalendarEvent:
        """
        Insert an event.

        Raises:
            SecretRetrievalError: If the service account cannot be loaded
            CalendarError: If the Calendar API rejects the request
        """
        resource = await self._get_resource()
        request = resource.events().insert(calendarId=self._calendar_id, body=body)
        try:
            created = await asyncio.to_thread(request.execute)
        except HttpError as e:
            logger.error(f"Google Calendar error creating event: {e}")
            raise CalendarError("Google Calendar rejected the event", details=str(e)) from e

        event_id = created.get("id")
        if not event_id:
            raise CalendarError("Google Calendar returned an event without id")

        logger.info(f"Calendar event created: {event_id}")
        return CalendarEvent(event_id=event_id, html_link=created.get("htmlLink"))
