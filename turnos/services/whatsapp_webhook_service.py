"""
WhatsApp Webhook Service.

Handles the Meta subscription handshake and patients' replies to reminders:
matches the sender to a pending appointment, classifies the reply and
confirms or cancels the appointment.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from turnos.domain.appointment_status import AppointmentStatus
from turnos.domain.intent import ReplyIntent, parse_intent
from turnos.domain.time_utils import format_hour, format_spanish_date, parse_iso_datetime, utc_now_iso
from turnos.integrations.whatsapp import WhatsAppMessenger
from turnos.models.db import Appointment
from turnos.repositories import SQLAlchemyAppointmentRepository
from turnos.utils.phone import phones_match

logger = logging.getLogger(__name__)

NO_APPOINTMENT_REPLY = (
    "No encontramos un turno pendiente de confirmar asociado a tu número. "
    "Si tenés alguna consulta, contactanos directamente."
)
CANCELLED_REPLY = "❌ Tu turno fue cancelado. Si necesitás reprogramar, contactanos. ¡Gracias!"
UNKNOWN_REPLY = 'No pudimos entender tu respuesta. Por favor respondé "Confirmar" o "Cancelar".'


def confirmed_reply(appointment: Appointment) -> str:
    start = parse_iso_datetime(appointment.start_time)
    return (
        f"✅ ¡Tu turno fue confirmado! Te esperamos el {format_spanish_date(start)} "
        f"a las {format_hour(start)}. ¡Gracias!"
    )


def extract_messages(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Messages in ``entry[0].changes[0].value.messages`` (empty for status updates)."""
    try:
        value = payload["entry"][0]["changes"][0]["value"]
    except (KeyError, IndexError, TypeError):
        return []
    messages = value.get("messages") if isinstance(value, dict) else None
    return messages or []


def extract_text(message: dict[str, Any]) -> str | None:
    """
    Text of an inbound message.

    Returns ``None`` for unsupported message types (images, audio, ...).
    """
    message_type = message.get("type")
    if message_type == "text":
        return (message.get("text") or {}).get("body") or ""
    if message_type == "interactive":
        interactive = message.get("interactive") or {}
        return (
            (interactive.get("button_reply") or {}).get("title")
            or (interactive.get("list_reply") or {}).get("title")
            or ""
        )
    return None


class WhatsAppWebhookService:
    """Process webhook verification and inbound replies."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        messenger: WhatsAppMessenger,
        verify_token: str,
    ):
        self._session_factory = session_factory
        self._messenger = messenger
        self._verify_token = verify_token

    def verify_subscription(self, mode: str | None, token: str | None, challenge: str | None) -> str | None:
        """Return the challenge to echo if the handshake is valid, otherwise ``None``."""
        if mode == "subscribe" and token == self._verify_token:
            logger.info("Webhook verified")
            return challenge or ""
        logger.warning("Webhook verification failed")
        return None

    async def find_pending_appointment(self, sender: str) -> Appointment | None:
        """
        Soonest tentative, already-reminded appointment whose phone matches ``sender``.

        Phones match when either one ends with the last 10 digits of the other.
        """
        async with self._session_factory() as session:
            candidates = await SQLAlchemyAppointmentRepository(session).find_awaiting_reply()
        for appointment in candidates:
            if phones_match(appointment.patient_phone, sender):
                return appointment
        return None

    async def _set_status(self, appointment_id: str, status: AppointmentStatus) -> None:
        async with self._session_factory() as session:
            repository = SQLAlchemyAppointmentRepository(session)
            appointment = await repository.find_by_id(appointment_id)
            if appointment is None:
                logger.warning(f"Appointment {appointment_id} not found when updating status")
                return

            current = AppointmentStatus(appointment.status)
            if not current.can_transition_to(status):
                logger.warning(f"Invalid transition {current.value} -> {status.value} for {appointment_id}")
                return

            timestamp_column = "confirmed_at" if status == AppointmentStatus.CONFIRMED else "cancelled_at"
            await repository.update(appointment, {"status": status.value, timestamp_column: utc_now_iso()})

    async def handle_message(self, sender: str, text: str) -> ReplyIntent | None:
        """
        Process one reply.

        Returns:
            The detected intent, or ``None`` if no pending appointment matched
        """
        logger.info(f"Message from {sender}: '{text}'")

        appointment = await self.find_pending_appointment(sender)
        if appointment is None:
            logger.info(f"No pending appointment for {sender}")
            await self._messenger.send_text(sender, NO_APPOINTMENT_REPLY)
            return None

        intent = parse_intent(text)

        if intent == ReplyIntent.CONFIRM:
            await self._set_status(appointment.appointment_id, AppointmentStatus.CONFIRMED)
            await self._messenger.send_text(sender, confirmed_reply(appointment))
            logger.info(f"Appointment {appointment.appointment_id} CONFIRMED")
        elif intent == ReplyIntent.CANCEL:
            await self._set_status(appointment.appointment_id, AppointmentStatus.CANCELLED)
            await self._messenger.send_text(sender, CANCELLED_REPLY)
            logger.info(f"Appointment {appointment.appointment_id} CANCELLED")
        else:
            await self._messenger.send_text(sender, UNKNOWN_REPLY)

        return intent

    async def handle_payload(self, payload: dict[str, Any]) -> int:
        """
        Process every supported message in a webhook delivery.

        A failure on one message is logged and does not stop the rest.

        Returns:
            Number of messages processed
        """
        messages = extract_messages(payload)
        if not messages:
            logger.info("No new messages (probably a status update)")
            return 0

        processed = 0
        for message in messages:
            text = extract_text(message)
            if text is None:
                logger.info(f"Unsupported message type: {message.get('type')}")
                continue

            sender = message.get("from") or ""
            try:
                await self.handle_message(sender, text)
                processed += 1
            except Exception as e:
                logger.error(f"Error processing message from {sender}: {e}", exc_info=True)
        return processed
