"""Ownership and lifecycle of the outbound mail transport.

The manager holds at most one transport. It is built lazily from the config
loader on first use and replaced wholesale on :meth:`TransportManager.refresh`.
Deliveries capture the transport reference when they start, so a refresh
never affects a send already in flight.
"""

import asyncio
from typing import Any, Callable, Literal

from attendance_mailer.core.exceptions import TransportUnavailableError
from attendance_mailer.core.logging import get_logger
from attendance_mailer.domain.entities.email_template import OutboundEmail
from attendance_mailer.infrastructure.services.email.mail_transport import MailTransport
from attendance_mailer.infrastructure.services.email.smtp_transport import SMTPTransport
from attendance_mailer.infrastructure.settings.config_loader import ConfigLoader, TransportConfig

TransportFactory = Callable[[TransportConfig], MailTransport]
TransportState = Literal["uninitialized", "ready"]


class TransportManager:
    """Builds, hands out and swaps the mail transport."""

    def __init__(
        self,
        config_loader: ConfigLoader,
        transport_factory: TransportFactory = SMTPTransport,
        logger: Any | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            config_loader: Source of the transport configuration.
            transport_factory: Builds a transport from a config snapshot.
            logger: Optional structured logger.
        """
        self.config_loader = config_loader
        self.transport_factory = transport_factory
        self.logger = logger or get_logger(__name__)
        self._transport: MailTransport | None = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> TransportState:
        return "ready" if self._transport is not None else "uninitialized"

    async def current_transport(self) -> MailTransport:
        """Return the held transport, building it on first use.

        Raises:
            TransportUnavailableError: If no transport could be constructed.
        """
        transport = self._transport
        if transport is not None:
            return transport
        async with self._lock:
            if self._transport is None:
                self._transport = await self._build()
            return self._transport

    async def deliver(self, message: OutboundEmail) -> None:
        """Deliver a message on the transport current at call start.

        Raises:
            TransportUnavailableError: If no transport could be constructed.
            Exception: Any error raised by the transport, unclassified.
        """
        transport = await self.current_transport()
        await transport.deliver(message)

    async def test_connection(self) -> bool:
        """Probe the configured server. Never raises."""
        try:
            transport = await self.current_transport()
            await transport.verify()
        except Exception as e:
            self.logger.warning("Email connection failed", error=str(e))
            return False
        self.logger.info("Email connection verified", host=transport.config.host)
        return True

    async def refresh(self) -> None:
        """Reload configuration and swap in a freshly built transport.

        The previous transport is dropped but not closed; sends that already
        hold it finish normally.

        Raises:
            TransportUnavailableError: If the new transport cannot be constructed.
                The manager is left uninitialized and retries on next use.
        """
        async with self._lock:
            self.config_loader.invalidate()
            self._transport = None
            self._transport = await self._build()
        self.logger.info("Email transport refreshed")

    async def _build(self) -> MailTransport:
        try:
            config = await self.config_loader.current_transport_config()
            transport = self.transport_factory(config)
        except Exception as e:
            self.logger.error("Failed to initialize email transport", error=str(e))
            raise TransportUnavailableError(
                f"Mail transport could not be constructed: {e}", cause=e
            ) from e
        self.logger.info(
            "Email transport initialized",
            source=config.source,
            host=config.host,
            port=config.port,
        )
        return transport
