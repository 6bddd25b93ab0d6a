"""Unit tests for the notification catalog and default templates."""

import pytest

from attendance_mailer.core.exceptions import UnknownNotificationTypeError
from attendance_mailer.domain.default_templates import DEFAULT_TEMPLATES, get_default_template
from attendance_mailer.domain.entities.notification_type import (
    NOTIFICATION_CATALOG,
    NotificationType,
    get_notification_type_info,
    list_notification_types,
)
from attendance_mailer.domain.services.template_renderer import Placeholder, compile_template

IDENTITY_VARIABLES = {"companyName", "supportEmail", "loginUrl"}


def test_every_type_has_catalog_entry_and_default():
    """Test that catalog and default set cover exactly the same types."""
    assert set(NOTIFICATION_CATALOG) == set(NotificationType)
    assert set(DEFAULT_TEMPLATES) == set(NotificationType)


def test_storage_keys_are_unique_and_prefixed():
    """Test that override keys follow the email.templates.<type> convention."""
    keys = [info.key for info in list_notification_types()]

    assert len(keys) == len(set(keys))
    assert NotificationType.PASSWORD_RESET.storage_key == "email.templates.passwordReset"
    assert all(key.startswith("email.templates.") for key in keys)


def test_parse_accepts_identifier_strings():
    """Test that identifiers resolve to enum members."""
    assert NotificationType.parse("welcome") is NotificationType.WELCOME
    assert NotificationType.parse(NotificationType.CUSTOM) is NotificationType.CUSTOM
    assert get_notification_type_info("custom").name == "Custom Message"


def test_parse_rejects_unknown_identifier():
    """Test that unknown identifiers raise a catalog error."""
    with pytest.raises(UnknownNotificationTypeError) as exc_info:
        NotificationType.parse("birthday")

    assert exc_info.value.notification_type == "birthday"
    assert isinstance(exc_info.value, ValueError)


def test_list_preserves_declaration_order():
    """Test that the listing starts with attendance notifications and ends with custom."""
    types = [info.type for info in list_notification_types()]

    assert types[0] is NotificationType.ATTENDANCE_REMINDER
    assert types[-1] is NotificationType.CUSTOM


def test_to_dict_for_admin_ui():
    """Test the serializable form of a catalog entry."""
    data = get_notification_type_info(NotificationType.WELCOME).to_dict()

    assert data == {
        "type": "welcome",
        "key": "email.templates.welcome",
        "name": "Welcome Email",
        "description": "Sent when a new employee account is created",
        "variables": ["employeeName", "email", "temporaryPassword", "loginUrl", "companyName"],
    }


@pytest.mark.parametrize("notification_type", list(NotificationType))
def test_default_placeholders_are_declared(notification_type: NotificationType):
    """Test that defaults only use declared variables or organization defaults."""
    template = get_default_template(notification_type)
    declared = set(NOTIFICATION_CATALOG[notification_type].variables) | IDENTITY_VARIABLES

    used = {
        segment.name
        for text in (template.subject, template.body)
        for segment in compile_template(text)
        if isinstance(segment, Placeholder)
    }

    assert used
    assert used <= declared
    assert template.source == "default"
