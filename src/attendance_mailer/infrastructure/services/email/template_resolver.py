"""Resolve a notification type to the template used for one dispatch.

An administrator override stored under the type's settings key wins when it
parses into a subject and body; anything else falls back to the built-in
default with a logged warning.
"""

from typing import Any

from pydantic import ValidationError

from attendance_mailer.core.logging import get_logger
from attendance_mailer.domain.default_templates import get_default_template
from attendance_mailer.domain.entities.email_template import ResolvedTemplate, TemplateOverride
from attendance_mailer.domain.entities.notification_type import NotificationType
from attendance_mailer.infrastructure.settings.settings_gateway import (
    SettingsGateway,
    is_present,
    parse_structured,
)


class TemplateResolver:
    """Looks up template overrides and falls back to defaults."""

    def __init__(self, gateway: SettingsGateway, logger: Any | None = None) -> None:
        """Initialize the resolver.

        Args:
            gateway: Settings store gateway holding overrides.
            logger: Optional structured logger.
        """
        self.gateway = gateway
        self.logger = logger or get_logger(__name__)

    async def resolve(self, notification_type: NotificationType | str) -> ResolvedTemplate:
        """Return the override for a type if usable, else its default.

        Args:
            notification_type: Catalog type or its identifier.

        Returns:
            The resolved template.

        Raises:
            UnknownNotificationTypeError: If the identifier is not in the catalog.
        """
        notification_type = NotificationType.parse(notification_type)
        default = get_default_template(notification_type)
        key = notification_type.storage_key

        try:
            raw = await self.gateway.get(key)
        except Exception as e:
            self._degraded(notification_type, key, f"settings lookup failed: {e}")
            return default

        if not is_present(raw):
            return default

        try:
            override = TemplateOverride.model_validate(parse_structured(raw))
        except (ValueError, ValidationError, RecursionError) as e:
            self._degraded(notification_type, key, str(e))
            return default

        return ResolvedTemplate(
            subject=override.subject,
            body=override.body,
            text=override.text or None,
            source="override",
        )

    def _degraded(self, notification_type: NotificationType, key: str, reason: str) -> None:
        self.logger.warning(
            "template_override_degraded",
            notification_type=notification_type.value,
            key=key,
            reason=reason,
        )
