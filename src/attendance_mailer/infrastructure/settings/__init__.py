"""Settings store access and cached configuration loading."""

from attendance_mailer.infrastructure.settings.config_loader import ConfigLoader, TransportConfig
from attendance_mailer.infrastructure.settings.settings_gateway import (
    DatabaseSettingsGateway,
    InMemorySettingsGateway,
    SettingsGateway,
    parse_structured,
)

__all__ = [
    "ConfigLoader",
    "DatabaseSettingsGateway",
    "InMemorySettingsGateway",
    "SettingsGateway",
    "TransportConfig",
    "parse_structured",
]
