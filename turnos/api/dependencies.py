"""
API Dependencies

FastAPI dependencies shared by the routers.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from turnos.core.container import ServiceContainer
from turnos.core.exceptions import IntegrationError, TurnosError
from turnos.database.async_db import get_async_db
from turnos.services import (
    AppointmentService,
    DoctorService,
    ObraSocialService,
    StudyService,
    TarifaService,
    WhatsAppWebhookService,
)

logger = logging.getLogger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_container(request: Request) -> ServiceContainer:
    """Container built by the application lifespan."""
    return request.app.state.container


Container = Annotated[ServiceContainer, Depends(get_container)]


def get_appointment_service(db: DbSession, container: Container) -> AppointmentService:
    return AppointmentService(db, calendar=container.calendar, session_factory=container.session_factory)


def get_doctor_service(db: DbSession) -> DoctorService:
    return DoctorService(db)


def get_study_service(db: DbSession) -> StudyService:
    return StudyService(db)


def get_obra_social_service(db: DbSession) -> ObraSocialService:
    return ObraSocialService(db)


def get_tarifa_service(db: DbSession, container: Container) -> TarifaService:
    return TarifaService(db, session_factory=container.session_factory)


def get_webhook_service(container: Container) -> WhatsAppWebhookService:
    return container.webhook_service


@contextmanager
def operation_errors(message: str) -> Iterator[None]:
    """
    Translate unexpected failures of a route into a 500 with ``message``.

    Application errors (400/404/409) pass through untouched.
    """
    try:
        yield
    except TurnosError:
        raise
    except Exception as e:
        logger.error(f"{message}: {e}", exc_info=True)
        raise IntegrationError(message, details=str(e)) from e


__all__ = [
    "Container",
    "DbSession",
    "get_appointment_service",
    "get_container",
    "get_doctor_service",
    "get_obra_social_service",
    "get_study_service",
    "get_tarifa_service",
    "get_webhook_service",
    "operation_errors",
]
