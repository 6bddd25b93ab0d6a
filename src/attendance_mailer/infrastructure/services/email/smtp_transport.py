"""SMTP mail transport.

Uses aiosmtplib for asynchronous delivery. Each delivery opens its own
connection, so a transport can be replaced while sends on it are still in
flight.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any

import aiosmtplib

from attendance_mailer.core.logging import get_logger
from attendance_mailer.domain.entities.email_template import OutboundEmail
from attendance_mailer.infrastructure.services.email.mail_transport import MailTransport
from attendance_mailer.infrastructure.settings.config_loader import TransportConfig


class SMTPTransport(MailTransport):
    """SMTP transport built from a TransportConfig snapshot."""

    def __init__(self, config: TransportConfig, logger: Any | None = None) -> None:
        """Initialize the SMTP transport.

        Args:
            config: SMTP configuration snapshot.
            logger: Optional structured logger.

        Raises:
            ValueError: If the configuration cannot describe an SMTP server.
        """
        if not config.host or not config.host.strip():
            raise ValueError("SMTP host is not configured")
        super().__init__(config)
        self.logger = logger or get_logger(__name__)

    def _client(self) -> aiosmtplib.SMTP:
        # aiosmtplib's use_tls means implicit TLS on connect; STARTTLS is
        # negotiated automatically when the server offers it
        return aiosmtplib.SMTP(
            hostname=self.config.host,
            port=self.config.port,
            use_tls=self.config.secure,
            timeout=self.config.timeout,
        )

    async def _login(self, smtp: aiosmtplib.SMTP) -> None:
        if self.config.user:
            await smtp.login(self.config.user, self.config.password)

    @staticmethod
    def build_message(message: OutboundEmail) -> MIMEMultipart:
        """Build the MIME message with optional plain-text alternative."""
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = message.from_address
        mime["To"] = message.to
        if message.text:
            mime.attach(MIMEText(message.text, "plain", "utf-8"))
        mime.attach(MIMEText(message.html, "html", "utf-8"))
        return mime

    async def deliver(self, message: OutboundEmail) -> None:
        """Send a message via SMTP.

        Raises:
            Exception: If connection, login or sending fails.
        """
        mime = self.build_message(message)
        async with self._client() as smtp:
            await self._login(smtp)
            await smtp.send_message(mime)
        self.logger.debug("SMTP message accepted", host=self.config.host, to=message.to)

    async def verify(self) -> None:
        """Connect and log in without sending anything."""
        async with self._client() as smtp:
            await self._login(smtp)
