"""
Application exceptions.

Raised by services and translated to JSON error responses by the API layer.
Every response body follows the ``{"error": ..., "details": ...}`` shape.
"""

from typing import Any


class TurnosError(Exception):
    """
    Base exception for all handled application errors.

    Subclasses set ``status_code``; the exception handler turns the instance
    into a response using ``to_dict``.
    """

    status_code: int = 500

    def __init__(self, message: str, details: Any = None, extra: dict[str, Any] | None = None):
        """
        Initialize application error.

        Args:
            message: Human-readable error message (goes to ``error``)
            details: Optional raw detail (exception message, validation list)
            extra: Additional top-level keys merged into the response body
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.extra = extra or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        body.update(self.extra)
        return body


class InvalidRequestError(TurnosError):
    """Raised when the request is missing fields or carries malformed values."""

    status_code = 400


class NotFoundError(TurnosError):
    """Raised when the addressed record does not exist."""

    status_code = 404


class ConflictError(TurnosError):
    """
    Raised when a write would violate a uniqueness rule.

    The conflicting record is returned under ``key`` so clients can act on it.
    """

    status_code = 409

    def __init__(self, message: str, key: str, record: dict[str, Any]):
        super().__init__(message, extra={key: record})
        self.record = record


class IntegrationError(TurnosError):
    """Raised when a downstream dependency (store, calendar, secrets, messaging) fails."""

    status_code = 500


class SecretRetrievalError(IntegrationError):
    """Error obtaining or parsing a secret from AWS Secrets Manager."""

    pass


class CalendarError(IntegrationError):
    """Error creating an event in Google Calendar."""

    pass


class WhatsAppApiError(IntegrationError):
    """Non-2xx response from the WhatsApp Cloud API."""

    def __init__(self, status: int, body: str):
        super().__init__(f"WhatsApp API error {status}: {body}", details=body)
        self.status = status
        self.body = body
