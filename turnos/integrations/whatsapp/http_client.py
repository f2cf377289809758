"""
WhatsApp HTTP Client.

Single Responsibility: Handle HTTP communication with the WhatsApp Cloud API (Meta Graph API).
"""

import logging
from typing import Any

import httpx

from turnos.core.exceptions import IntegrationError, WhatsAppApiError

logger = logging.getLogger(__name__)


class WhatsAppHttpClient:
    """
    HTTP client for the WhatsApp Cloud API.

    Raises on any non-2xx response; there are no retries.
    """

    def __init__(
        self,
        base_url: str,
        version: str,
        phone_number_id: str,
        access_token: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Graph API base URL
            version: API version (e.g. v21.0)
            phone_number_id: Phone number ID for sending messages
            access_token: Bearer token for authentication
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._base_url = base_url.rstrip("/")
        self._version = version
        self._phone_number_id = phone_number_id
        self._access_token = access_token
        self._timeout = timeout
        self._transport = transport

    @property
    def message_url(self) -> str:
        """Get URL for sending messages."""
        return f"{self._base_url}/{self._version}/{self._phone_number_id}/messages"

    @property
    def headers(self) -> dict[str, str]:
        """Get standard headers for requests."""
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

    async def post(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Send a message payload.

        Args:
            payload: Graph API message body

        Returns:
            Parsed JSON response from the API

        Raises:
            WhatsAppApiError: If the API answers with a non-2xx status
            IntegrationError: On timeouts or connection failures
        """
        url = self.message_url
        logger.debug(f"POST {url}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=self.headers)
        except httpx.TimeoutException as e:
            raise IntegrationError("Timeout connecting to WhatsApp API", details=str(e)) from e
        except httpx.HTTPError as e:
            raise IntegrationError("Connection error with WhatsApp API", details=str(e)) from e

        logger.info(f"WhatsApp API Response: {response.status_code}")

        if not response.is_success:
            self._handle_error_response(response)

        return response.json() if response.content else {}

    def _handle_error_response(self, response: httpx.Response) -> None:
        """Log and raise for an error response from the API."""
        error_detail = response.text
        logger.error(f"Error {response.status_code}: {error_detail}")
        raise WhatsAppApiError(response.status_code, error_detail)
