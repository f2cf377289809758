from unittest.mock import MagicMock

import pytest

from turnos.domain.intent import ReplyIntent
from turnos.models.db import Appointment
from turnos.services import WhatsAppWebhookService
from turnos.services.whatsapp_webhook_service import (
    CANCELLED_REPLY,
    NO_APPOINTMENT_REPLY,
    UNKNOWN_REPLY,
    extract_messages,
    extract_text,
)

SENDER = "5491112345678"


def text_payload(*messages: dict) -> dict:
    return {
        "object": "whatsapp_business_account",
        "entry": [{"id": "1", "changes": [{"field": "messages", "value": {"messages": list(messages)}}]}],
    }


def text_message(body: str, sender: str = SENDER) -> dict:
    return {"from": sender, "id": "wamid.in", "type": "text", "text": {"body": body}}


@pytest.fixture
def webhook_service(session_factory, mock_messenger) -> WhatsAppWebhookService:
    return WhatsAppWebhookService(session_factory=session_factory, messenger=mock_messenger, verify_token="secret")


async def load(session_factory, appointment_id: str) -> Appointment:
    async with session_factory() as session:
        return await session.get(Appointment, appointment_id)


class TestVerifySubscription:
    @pytest.fixture
    def webhook_service(self, mock_messenger) -> WhatsAppWebhookService:
        return WhatsAppWebhookService(session_factory=MagicMock(), messenger=mock_messenger, verify_token="secret")

    def test_valid_token(self, webhook_service):
        assert webhook_service.verify_subscription("subscribe", "secret", "12345") == "12345"

    def test_wrong_token(self, webhook_service):
        assert webhook_service.verify_subscription("subscribe", "other", "12345") is None

    def test_wrong_mode(self, webhook_service):
        assert webhook_service.verify_subscription("unsubscribe", "secret", "12345") is None


class TestPayloadParsing:
    def test_extract_messages(self):
        assert extract_messages(text_payload(text_message("hola"))) == [text_message("hola")]

    @pytest.mark.parametrize("payload", [{}, {"entry": []}, {"entry": [{"changes": [{"value": {"statuses": []}}]}]}])
    def test_status_updates_have_no_messages(self, payload):
        assert extract_messages(payload) == []

    def test_extract_button_reply(self):
        message = {"type": "interactive", "interactive": {"button_reply": {"id": "b1", "title": "Confirmar"}}}
        assert extract_text(message) == "Confirmar"

    def test_unsupported_type(self):
        assert extract_text({"type": "image", "image": {"id": "media"}}) is None


class TestHandleMessage:
    """Pruebas del procesamiento de respuestas a recordatorios"""

    @pytest.mark.asyncio
    async def test_confirm(self, webhook_service, session_factory, mock_messenger, make_appointment, add_rows):
        await add_rows(make_appointment(appointment_id="pending", patient_phone="11 1234-5678", reminder_sent=True))

        intent = await webhook_service.handle_message(SENDER, "Sí, confirmo")

        assert intent == ReplyIntent.CONFIRM
        stored = await load(session_factory, "pending")
        assert stored.status == "CONFIRMED"
        assert stored.confirmed_at is not None
        mock_messenger.send_text.assert_awaited_once()
        sender, reply = mock_messenger.send_text.await_args.args
        assert sender == SENDER
        assert "viernes 13 de febrero" in reply
        assert "10:00" in reply

    @pytest.mark.asyncio
    async def test_cancel(self, webhook_service, session_factory, mock_messenger, make_appointment, add_rows):
        await add_rows(make_appointment(appointment_id="pending", reminder_sent=True))

        intent = await webhook_service.handle_message(SENDER, "No puedo asistir")

        assert intent == ReplyIntent.CANCEL
        stored = await load(session_factory, "pending")
        assert stored.status == "CANCELLED"
        assert stored.cancelled_at is not None
        mock_messenger.send_text.assert_awaited_once_with(SENDER, CANCELLED_REPLY)

    @pytest.mark.asyncio
    async def test_unknown_leaves_status(
        self, webhook_service, session_factory, mock_messenger, make_appointment, add_rows
    ):
        await add_rows(make_appointment(appointment_id="pending", reminder_sent=True))

        intent = await webhook_service.handle_message(SENDER, "tal vez")

        assert intent == ReplyIntent.UNKNOWN
        assert (await load(session_factory, "pending")).status == "TENTATIVE"
        mock_messenger.send_text.assert_awaited_once_with(SENDER, UNKNOWN_REPLY)

    @pytest.mark.asyncio
    async def test_not_reminded_appointment_is_not_matched(
        self, webhook_service, session_factory, mock_messenger, make_appointment, add_rows
    ):
        await add_rows(make_appointment(appointment_id="fresh", reminder_sent=False))

        intent = await webhook_service.handle_message(SENDER, "confirmo")

        assert intent is None
        assert (await load(session_factory, "fresh")).status == "TENTATIVE"
        mock_messenger.send_text.assert_awaited_once_with(SENDER, NO_APPOINTMENT_REPLY)

    @pytest.mark.asyncio
    async def test_soonest_matching_appointment_is_used(
        self, webhook_service, session_factory, make_appointment, add_rows
    ):
        await add_rows(
            make_appointment(
                appointment_id="later",
                start_time="2026-02-20T10:00:00-03:00",
                end_time="2026-02-20T10:30:00-03:00",
                reminder_sent=True,
            ),
            make_appointment(appointment_id="sooner", reminder_sent=True),
            make_appointment(appointment_id="other", patient_phone="3514445555", reminder_sent=True),
        )

        await webhook_service.handle_message(SENDER, "ok")

        assert (await load(session_factory, "sooner")).status == "CONFIRMED"
        assert (await load(session_factory, "later")).status == "TENTATIVE"
        assert (await load(session_factory, "other")).status == "TENTATIVE"

    @pytest.mark.asyncio
    async def test_empty_phone_never_matches(
        self, webhook_service, session_factory, mock_messenger, make_appointment, add_rows
    ):
        await add_rows(make_appointment(appointment_id="nophone", patient_phone="", reminder_sent=True))

        assert await webhook_service.handle_message(SENDER, "confirmo") is None
        mock_messenger.send_text.assert_awaited_once_with(SENDER, NO_APPOINTMENT_REPLY)


class TestHandlePayload:
    @pytest.mark.asyncio
    async def test_status_update_is_ignored(self, webhook_service, mock_messenger):
        assert await webhook_service.handle_payload({"entry": [{"changes": [{"value": {"statuses": []}}]}]}) == 0
        mock_messenger.send_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_on_one_message_does_not_stop_the_rest(
        self, webhook_service, session_factory, mock_messenger, make_appointment, add_rows
    ):
        await add_rows(make_appointment(appointment_id="pending", reminder_sent=True))
        mock_messenger.send_text.side_effect = [RuntimeError("WhatsApp down"), {"messages": []}]

        processed = await webhook_service.handle_payload(
            text_payload(text_message("hola", sender="5493519999999"), text_message("confirmo"))
        )

        assert processed == 1
        assert (await load(session_factory, "pending")).status == "CONFIRMED"

    @pytest.mark.asyncio
    async def test_unsupported_messages_are_skipped(self, webhook_service, mock_messenger):
        payload = text_payload({"from": SENDER, "type": "image", "image": {"id": "media"}})
        assert await webhook_service.handle_payload(payload) == 0
        mock_messenger.send_text.assert_not_awaited()
