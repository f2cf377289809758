"""
Shared pytest fixtures for all tests.

Provides a SQLite database per test, mocked external integrations (Google
Calendar, WhatsApp) and a FastAPI test client wired to both.
"""

import asyncio
import os
from collections.abc import AsyncGenerator, Callable, Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["REMINDER_SCHEDULER_ENABLED"] = "false"

from turnos.config.settings import Settings  # noqa: E402
from turnos.core.app_factory import create_app  # noqa: E402
from turnos.core.container import ServiceContainer  # noqa: E402
from turnos.database.async_db import create_session_factory, get_async_db, init_db  # noqa: E402
from turnos.integrations.google import CalendarEvent, CalendarService  # noqa: E402
from turnos.integrations.whatsapp import WhatsAppMessenger  # noqa: E402
from turnos.models.db import Appointment  # noqa: E402

TEST_EVENT_ID = "evt-123"
TEST_EVENT_LINK = "https://calendar.google.com/calendar/event?eid=evt-123"


# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture
def database_url(tmp_path) -> str:
    """SQLite file database isolated per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'turnos_test.db'}"


@pytest.fixture
def test_settings(database_url: str) -> Settings:
    return Settings(
        DATABASE_URL=database_url,
        ENVIRONMENT="test",
        REMINDER_SCHEDULER_ENABLED=False,
        WHATSAPP_VERIFY_TOKEN="test-verify-token",
        WHATSAPP_ACCESS_TOKEN="test_token",
        WHATSAPP_PHONE_NUMBER_ID="123456789",
        SENTRY_DSN=None,
    )


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def db_engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine with all tables created."""
    engine = create_async_engine(database_url, poolclass=NullPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(db_engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_appointment() -> Callable[..., Appointment]:
    """Factory for appointment rows with sensible defaults."""

    def _make(**overrides: Any) -> Appointment:
        values: dict[str, Any] = {
            "appointment_id": "appt-1",
            "patient_name": "Juan Pérez",
            "patient_phone": "+5491112345678",
            "start_time": "2026-02-13T10:00:00-03:00",
            "end_time": "2026-02-13T10:30:00-03:00",
            "status": "TENTATIVE",
            "reminder_sent": False,
            "created_at": "2026-02-01T12:00:00.000Z",
            "expires_at": 1773406800,
        }
        values.update(overrides)
        return Appointment(**values)

    return _make


@pytest.fixture
def add_rows(session_factory) -> Callable[..., Any]:
    """Insert rows in their own session."""

    async def _add(*rows: Any) -> None:
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()

    return _add


# ============================================================================
# MOCK INTEGRATIONS
# ============================================================================


@pytest.fixture
def mock_messenger() -> AsyncMock:
    """WhatsApp messenger whose sends always succeed."""
    messenger = AsyncMock(spec=WhatsAppMessenger)
    messenger.send_text.return_value = {"messages": [{"id": "wamid.text"}]}
    messenger.send_template.return_value = {"messages": [{"id": "wamid.template"}]}
    return messenger


@pytest.fixture
def mock_calendar() -> CalendarService:
    """Calendar service with a real event builder and a mocked insert."""
    calendar = CalendarService(
        secrets=MagicMock(),
        secret_name="turnos/google-service-account",
        calendar_id="primary",
        timezone_name="America/Argentina/Buenos_Aires",
    )
    calendar.create_event = AsyncMock(return_value=CalendarEvent(event_id=TEST_EVENT_ID, html_link=TEST_EVENT_LINK))
    return calendar


# ============================================================================
# API FIXTURES
# ============================================================================


@pytest.fixture
def api_session_factory(database_url: str) -> Generator[async_sessionmaker[AsyncSession], None, None]:
    """
    Session factory for API tests.

    TestClient runs the app on its own event loop, so the schema is created
    synchronously and NullPool keeps connections from crossing loops.
    """
    engine = create_async_engine(database_url, poolclass=NullPool)
    asyncio.run(init_db(engine))
    yield create_session_factory(engine)
    asyncio.run(engine.dispose())


@pytest.fixture
def container(api_session_factory, test_settings, mock_calendar, mock_messenger) -> ServiceContainer:
    return ServiceContainer(
        session_factory=api_session_factory,
        settings=test_settings,
        calendar=mock_calendar,
        messenger=mock_messenger,
    )


@pytest.fixture
def client(test_settings, container, api_session_factory) -> Generator[TestClient, None, None]:
    """Test client without lifespan: the container is injected directly."""
    app = create_app(test_settings)
    app.state.container = container

    async def override_get_async_db() -> AsyncGenerator[AsyncSession, None]:
        async with api_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_db] = override_get_async_db
    yield TestClient(app)
    app.dependency_overrides.clear()
