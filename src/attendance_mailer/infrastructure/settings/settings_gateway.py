"""Read-only access to the administrator settings store.

A gateway returns the raw stored value for a key, or None when the key is
absent or inactive. Values may be JSON-encoded strings or already-structured
objects; callers normalize them with :func:`parse_structured`.
"""

import json
from typing import Any, Mapping, Protocol, runtime_checkable

from attendance_mailer.infrastructure.persistence.database import DatabaseManager
from attendance_mailer.infrastructure.persistence.repositories.admin_setting_repository import (
    AdminSettingRepository,
)

# Settings keys read by the notification engine
MAIL_SETTINGS_KEY = "email.smtp"
LEGACY_MAIL_SETTINGS_KEY = "smtp_config"
COMPANY_NAME_KEY = "company_name"
SUPPORT_EMAIL_KEY = "support_email"
LOGIN_URL_KEY = "login_url"


@runtime_checkable
class SettingsGateway(Protocol):
    """Key/value lookup into the administrator settings store."""

    async def get(self, key: str) -> Any | None:
        """Return the stored value for key, or None if absent."""
        ...


def parse_structured(value: Any) -> dict[str, Any]:
    """Normalize a stored value into a dictionary.

    Args:
        value: A mapping, or a string holding a JSON object.

    Returns:
        A new dictionary with the value's fields.

    Raises:
        ValueError: If the value is not an object or JSON object string.
    """
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (str, bytes, bytearray)):
        parsed = json.loads(value)
        if not isinstance(parsed, dict):
            raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
        return parsed
    raise ValueError(f"expected an object or JSON string, got {type(value).__name__}")


def is_present(value: Any) -> bool:
    """Return True if a stored value counts as set.

    None and empty strings are treated as absent.
    """
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


class InMemorySettingsGateway:
    """Dictionary-backed gateway used for embedding and tests."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    async def get(self, key: str) -> Any | None:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class DatabaseSettingsGateway:
    """Gateway reading the admin_settings table, one short session per lookup."""

    def __init__(self, db: DatabaseManager) -> None:
        """Initialize the gateway.

        Args:
            db: Database manager providing sessions.
        """
        self.db = db

    async def get(self, key: str) -> Any | None:
        async with self.db.session() as session:
            return await AdminSettingRepository(session).get_value(key)
