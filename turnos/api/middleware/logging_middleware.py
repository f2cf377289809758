"""
Request logging middleware.

Every request is tagged with a short correlation id and logged on a channel:
``api`` for the back-office and appointment endpoints, ``whatsapp`` for the
Meta webhook. Meta posts a delivery/read status for every message we send,
so successful webhook calls are logged at DEBUG to keep them out of the
INFO stream.
"""

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
WEBHOOK_PATH = "/webhook/whatsapp"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request."""

    SILENT_PATHS: tuple[str, ...] = ("/health",)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:8]
        request.state.correlation_id = correlation_id
        path = request.url.path

        if path in self.SILENT_PATHS:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        channel = "whatsapp" if path.startswith(WEBHOOK_PATH) else "api"
        prefix = f"[{correlation_id}] [{channel}] {request.method} {path}"
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error(f"{prefix} failed after {elapsed_ms:.2f}ms: {e}")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(
            self._level_for(channel, response.status_code),
            f"{prefix} -> {response.status_code} in {elapsed_ms:.2f}ms",
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
        return response

    @staticmethod
    def _level_for(channel: str, status_code: int) -> int:
        if status_code >= 400:
            return logging.WARNING
        if channel == "whatsapp":
            return logging.DEBUG
        return logging.INFO
