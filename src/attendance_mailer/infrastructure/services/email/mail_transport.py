"""Abstract base class for mail transports.

A transport is built from one immutable TransportConfig snapshot and is never
reconfigured; a settings change produces a new transport instead.
"""

from abc import ABC, abstractmethod

from attendance_mailer.domain.entities.email_template import OutboundEmail
from attendance_mailer.infrastructure.settings.config_loader import TransportConfig


class MailTransport(ABC):
    """Live handle capable of delivering outbound email."""

    def __init__(self, config: TransportConfig) -> None:
        self.config = config

    @abstractmethod
    async def deliver(self, message: OutboundEmail) -> None:
        """Deliver one message.

        Args:
            message: Fully addressed message.

        Raises:
            Exception: Any transport-level error, unclassified.
        """
        pass

    @abstractmethod
    async def verify(self) -> None:
        """Connect and authenticate without sending.

        Raises:
            Exception: If the handshake or login fails.
        """
        pass

