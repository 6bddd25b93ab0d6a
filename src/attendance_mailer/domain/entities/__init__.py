"""Domain entities for the notification engine."""

from attendance_mailer.domain.entities.email_template import (
    OutboundEmail,
    RenderedEmail,
    ResolvedTemplate,
    TemplateOverride,
)
from attendance_mailer.domain.entities.notification_type import (
    NOTIFICATION_CATALOG,
    NotificationType,
    NotificationTypeInfo,
    get_notification_type_info,
    list_notification_types,
)
from attendance_mailer.domain.entities.organization_identity import OrganizationIdentity

__all__ = [
    "NOTIFICATION_CATALOG",
    "NotificationType",
    "NotificationTypeInfo",
    "OrganizationIdentity",
    "OutboundEmail",
    "RenderedEmail",
    "ResolvedTemplate",
    "TemplateOverride",
    "get_notification_type_info",
    "list_notification_types",
]
