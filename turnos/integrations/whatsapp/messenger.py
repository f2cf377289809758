"""
WhatsApp Messenger.

Single Responsibility: Build and send the message types the turnos flow uses
(reminder templates and free-text replies).
"""

import logging
from typing import Any

from turnos.integrations.whatsapp.http_client import WhatsAppHttpClient

logger = logging.getLogger(__name__)


class WhatsAppMessenger:
    """Message sender for WhatsApp."""

    def __init__(self, http_client: WhatsAppHttpClient):
        """
        Initialize messenger.

        Args:
            http_client: HTTP client for API calls
        """
        self._client = http_client

    async def send_text(self, numero: str, mensaje: str) -> dict[str, Any]:
        """Send text message."""
        if not numero or not mensaje:
            raise ValueError("Number and message required")

        payload = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": numero,
            "type": "text",
            "text": {"body": mensaje},
        }

        return await self._client.post(payload)

    async def send_template(
        self,
        numero: str,
        template_name: str,
        language_code: str = "es_AR",
        body_parameters: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Send an approved template message.

        Args:
            numero: Recipient in international format (e.g. 5491112345678)
            template_name: Template name as approved in Meta
            language_code: Template language code
            body_parameters: Positional values for the template body ({{1}}, {{2}}, ...)
        """
        if not numero or not template_name:
            raise ValueError("Number and template name required")

        template: dict[str, Any] = {
            "name": template_name,
            "language": {"code": language_code},
        }

        if body_parameters:
            template["components"] = [
                {
                    "type": "body",
                    "parameters": [{"type": "text", "text": value} for value in body_parameters],
                }
            ]

        payload = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": numero,
            "type": "template",
            "template": template,
        }

        logger.info(f"Sending template '{template_name}' to {numero}")
        return await self._client.post(payload)
