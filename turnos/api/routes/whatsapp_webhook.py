# ============================================================================
# SCOPE: GLOBAL
# Description: Webhook de WhatsApp Cloud API para confirmar o cancelar turnos.
# ============================================================================
"""
WhatsApp Webhook Endpoints.

ENDPOINTS:
  - GET /webhook/whatsapp  → Meta subscription handshake
  - POST /webhook/whatsapp → Patient replies to reminders

The POST endpoint always answers 200 so Meta does not retry deliveries.
"""

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from turnos.api.dependencies import get_webhook_service
from turnos.services import WhatsAppWebhookService

router = APIRouter(prefix="/webhook/whatsapp", tags=["webhook"])
logger = logging.getLogger(__name__)

WebhookServiceDep = Annotated[WhatsAppWebhookService, Depends(get_webhook_service)]


@router.get("")
async def verify_webhook(
    service: WebhookServiceDep,
    mode: Annotated[str | None, Query(alias="hub.mode")] = None,
    token: Annotated[str | None, Query(alias="hub.verify_token")] = None,
    challenge: Annotated[str | None, Query(alias="hub.challenge")] = None,
) -> Response:
    """Echo ``hub.challenge`` when the verify token matches."""
    echoed = service.verify_subscription(mode, token, challenge)
    if echoed is None:
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": "Verification failed"})
    return PlainTextResponse(echoed)


@router.post("")
async def process_webhook(request: Request, service: WebhookServiceDep) -> PlainTextResponse:
    """
    Process inbound messages.

    Status updates (delivered, read) carry no messages and are acknowledged
    without work. Every internal error is logged and answered with 200.
    """
    try:
        payload = json.loads(await request.body())
        processed = await service.handle_payload(payload)
        logger.info(f"Webhook processed {processed} message(s)")
    except Exception as e:
        logger.error(f"Error processing webhook: {e}", exc_info=True)

    return PlainTextResponse("OK")
