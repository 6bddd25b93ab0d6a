"""Attendance Mailer - notification templating and delivery for attendance tracking.

Resolves notification templates from administrator overrides or built-in
defaults, renders them, and delivers them over SMTP with settings that can
change while the system is running.
"""

__version__ = "0.1.0"

from attendance_mailer.core.exceptions import (
    DeliveryFailureError,
    MailConfigurationError,
    NotificationError,
    TransportUnavailableError,
    UnknownNotificationTypeError,
)
from attendance_mailer.domain.entities.notification_type import NotificationType
from attendance_mailer.infrastructure.services.notification_dispatcher import (
    NotificationDispatcher,
)

__all__ = [
    "DeliveryFailureError",
    "MailConfigurationError",
    "NotificationDispatcher",
    "NotificationError",
    "NotificationType",
    "TransportUnavailableError",
    "UnknownNotificationTypeError",
    "__version__",
]
