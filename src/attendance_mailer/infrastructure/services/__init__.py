"""Application-facing services."""

from attendance_mailer.infrastructure.services.notification_dispatcher import (
    NotificationDispatcher,
)

__all__ = ["NotificationDispatcher"]
