"""Unit tests for template override resolution."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from attendance_mailer.core.exceptions import UnknownNotificationTypeError
from attendance_mailer.domain.default_templates import get_default_template
from attendance_mailer.domain.entities.notification_type import NotificationType
from attendance_mailer.infrastructure.services.email.template_resolver import TemplateResolver


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def resolver(settings_gateway, logger) -> TemplateResolver:
    return TemplateResolver(settings_gateway, logger=logger)


@pytest.mark.asyncio
@pytest.mark.parametrize("notification_type", list(NotificationType))
async def test_default_used_without_override(resolver, notification_type):
    """Test that every type resolves to its default when nothing is stored."""
    template = await resolver.resolve(notification_type)

    assert template == get_default_template(notification_type)
    assert template.source == "default"


@pytest.mark.asyncio
async def test_override_object(settings_gateway, resolver):
    """Test that a stored object override wins."""
    settings_gateway.set(
        "email.templates.welcome",
        {"subject": "Hi {{employeeName}}", "body": "<p>Custom</p>", "text": "Custom"},
    )

    template = await resolver.resolve("welcome")

    assert template.subject == "Hi {{employeeName}}"
    assert template.body == "<p>Custom</p>"
    assert template.text == "Custom"
    assert template.source == "override"


@pytest.mark.asyncio
async def test_override_json_string_with_html_field(settings_gateway, resolver):
    """Test the admin screen's JSON string form using 'html' for the body."""
    settings_gateway.set(
        "email.templates.passwordReset",
        json.dumps({"subject": "Reset", "html": "<a href='{{resetLink}}'>Reset</a>"}),
    )

    template = await resolver.resolve(NotificationType.PASSWORD_RESET)

    assert template.body == "<a href='{{resetLink}}'>Reset</a>"
    assert template.text is None
    assert template.source == "override"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw",
    [
        "{this is not json",
        {"subject": "Only a subject"},
        {"subject": "", "body": "<p>x</p>"},
        {"subject": 5, "body": ["not", "text"]},
        "[1, 2, 3]",
    ],
)
async def test_malformed_override_falls_back_with_warning(settings_gateway, resolver, logger, raw):
    """Test that unusable overrides degrade to the default and are logged."""
    settings_gateway.set("email.templates.attendanceReminder", raw)

    template = await resolver.resolve(NotificationType.ATTENDANCE_REMINDER)

    assert template == get_default_template(NotificationType.ATTENDANCE_REMINDER)
    logger.warning.assert_called_once()
    assert logger.warning.call_args.args[0] == "template_override_degraded"
    assert logger.warning.call_args.kwargs["key"] == "email.templates.attendanceReminder"


@pytest.mark.asyncio
async def test_blank_override_is_silent_default(settings_gateway, resolver, logger):
    """Test that an empty stored value counts as no override."""
    settings_gateway.set("email.templates.custom", "")

    template = await resolver.resolve(NotificationType.CUSTOM)

    assert template.source == "default"
    logger.warning.assert_not_called()


@pytest.mark.asyncio
async def test_gateway_failure_falls_back(logger):
    """Test that a failing settings store never blocks resolution."""
    gateway = AsyncMock()
    gateway.get.side_effect = ConnectionError("database is locked")
    resolver = TemplateResolver(gateway, logger=logger)

    template = await resolver.resolve(NotificationType.WEEKLY_REPORT)

    assert template == get_default_template(NotificationType.WEEKLY_REPORT)
    assert "database is locked" in logger.warning.call_args.kwargs["reason"]


@pytest.mark.asyncio
async def test_unknown_type_raises(resolver):
    """Test that identifiers outside the catalog are rejected."""
    with pytest.raises(UnknownNotificationTypeError):
        await resolver.resolve("birthdayGreeting")


@pytest.mark.asyncio
async def test_deeply_nested_override_falls_back(settings_gateway, resolver, logger):
    """Test that JSON too deep to decode degrades to the default."""
    settings_gateway.set("email.templates.welcome", "[" * 200000)

    template = await resolver.resolve(NotificationType.WELCOME)

    assert template == get_default_template(NotificationType.WELCOME)
    assert logger.warning.call_args.args[0] == "template_override_degraded"
    assert logger.warning.call_args.kwargs["key"] == "email.templates.welcome"
