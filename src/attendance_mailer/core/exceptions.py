"""Exceptions raised by the notification engine.

Template resolution and rendering never raise for known notification types;
only the delivery path surfaces errors to callers.
"""


class NotificationError(Exception):
    """Base class for all notification errors."""
    pass


class UnknownNotificationTypeError(NotificationError, ValueError):
    """Raised when a caller names a notification type missing from the catalog."""

    def __init__(self, notification_type: str):
        self.notification_type = notification_type
        super().__init__(f"Unknown notification type: {notification_type!r}")


class MailConfigurationError(NotificationError):
    """Raised when stored mail settings are present but cannot be used."""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        super().__init__(f"{message} (setting '{key}')" if key else message)


class TransportUnavailableError(NotificationError):
    """Raised when no mail transport could be constructed."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class DeliveryFailureError(NotificationError):
    """Raised when the transport rejected or could not complete a send.

    Attributes:
        message: User-facing explanation of the failure.
        original: The low-level transport error.
        notification_type: Notification type identifier, or None for raw sends.
        recipient: Recipient address of the failed send.
    """

    def __init__(
        self,
        message: str,
        original: BaseException,
        notification_type: str | None = None,
        recipient: str | None = None,
    ):
        self.message = message
        self.original = original
        self.notification_type = notification_type
        self.recipient = recipient
        super().__init__(f"Email sending failed: {message}")
