"""Mail transports, template resolution and transport lifecycle."""

from attendance_mailer.infrastructure.services.email.mail_transport import MailTransport
from attendance_mailer.infrastructure.services.email.smtp_transport import SMTPTransport
from attendance_mailer.infrastructure.services.email.template_resolver import TemplateResolver
from attendance_mailer.infrastructure.services.email.transport_manager import TransportManager

__all__ = ["MailTransport", "SMTPTransport", "TemplateResolver", "TransportManager"]
