"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio

from attendance_mailer.core.config import get_settings
from attendance_mailer.domain.entities.email_template import OutboundEmail
from attendance_mailer.infrastructure.persistence.database import DatabaseManager
from attendance_mailer.infrastructure.services.email.mail_transport import MailTransport
from attendance_mailer.infrastructure.services.notification_dispatcher import (
    NotificationDispatcher,
)
from attendance_mailer.infrastructure.settings.config_loader import TransportConfig
from attendance_mailer.infrastructure.settings.settings_gateway import InMemorySettingsGateway

SMTP_ENV_VARS = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_SECURE",
    "SMTP_USER",
    "SMTP_PASS",
    "SMTP_PASSWORD",
    "SMTP_FROM",
    "SMTP_TIMEOUT",
)


class RecordingTransport(MailTransport):
    """Transport that records messages instead of sending them."""

    def __init__(self, config: TransportConfig, error: BaseException | None = None) -> None:
        super().__init__(config)
        self.error = error
        self.sent: list[OutboundEmail] = []
        self.verified = 0

    async def deliver(self, message: OutboundEmail) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(message)

    async def verify(self) -> None:
        if self.error is not None:
            raise self.error
        self.verified += 1


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch):
    """Keep host SMTP variables and cached settings out of tests."""
    for name in SMTP_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings_gateway() -> InMemorySettingsGateway:
    """Empty in-memory settings store."""
    return InMemorySettingsGateway()


@pytest.fixture
def built_transports() -> list[RecordingTransport]:
    """Every transport built by the transport_factory fixture, in order."""
    return []


@pytest.fixture
def transport_factory(built_transports: list[RecordingTransport]):
    """Factory producing recording transports."""

    def factory(config: TransportConfig) -> RecordingTransport:
        transport = RecordingTransport(config)
        built_transports.append(transport)
        return transport

    return factory


@pytest.fixture
def failing_transport_factory():
    """Build a factory whose transports raise the given error."""

    def make(error: BaseException):
        def factory(config: TransportConfig) -> RecordingTransport:
            return RecordingTransport(config, error=error)

        return factory

    return make


@pytest.fixture
def dispatcher(settings_gateway, transport_factory) -> NotificationDispatcher:
    """Dispatcher over the in-memory store and recording transports."""
    return NotificationDispatcher.from_gateway(settings_gateway, transport_factory=transport_factory)


@pytest_asyncio.fixture
async def db_manager(tmp_path) -> AsyncGenerator[DatabaseManager, None]:
    """Database manager on a temporary SQLite file with tables created."""
    db = DatabaseManager(database_url=f"sqlite+aiosqlite:///{tmp_path / 'settings.db'}", echo=False)
    await db.create_tables()
    yield db
    await db.disconnect()
