"""Unit tests for mail settings and organization identity loading."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from attendance_mailer.core.config import SMTPEnvironment
from attendance_mailer.core.exceptions import MailConfigurationError
from attendance_mailer.domain.entities.organization_identity import OrganizationIdentity
from attendance_mailer.infrastructure.settings.config_loader import ConfigLoader, TransportConfig
from attendance_mailer.infrastructure.settings.settings_gateway import InMemorySettingsGateway

@pytest.fixture
def loader(settings_gateway: InMemorySettingsGateway) -> ConfigLoader:
    return ConfigLoader(settings_gateway, logger=MagicMock())

@pytest.mark.asyncio
async def test_environment_fallback_defaults(loader: ConfigLoader):
    """Test built-in defaults when nothing is stored or set in the environment."""
    config = await loader.current_transport_config()

    assert config.source == "environment"
    assert config.host == "smtp.gmail.com"
    assert config.port == 587
    assert config.secure is False
    assert config.user == ""

@pytest.mark.asyncio
async def test_environment_variables_used(monkeypatch, loader: ConfigLoader):
    """Test that SMTP_* variables feed the fallback config."""
    monkeypatch.setenv("SMTP_HOST", "mail.internal")
    monkeypatch.setenv("SMTP_PORT", "2525")
    monkeypatch.setenv("SMTP_USER", "bot@internal")
    monkeypatch.setenv("SMTP_PASS", "pw")

    config = await loader.current_transport_config()

    assert config.host == "mail.internal"
    assert config.port == 2525
    assert config.user == "bot@internal"
    assert config.password == "pw"

@pytest.mark.asyncio
async def test_invalid_environment_port_falls_back_to_defaults(monkeypatch, loader: ConfigLoader):
    """Test that unparseable SMTP environment variables do not break loading."""
    monkeypatch.setenv("SMTP_PORT", "not-a-port")

    config = await loader.current_transport_config()

    assert config.port == 587

@pytest.mark.asyncio
async def test_current_key_wins_over_legacy(settings_gateway, loader):
    """Test that the current mail settings key takes precedence."""
    settings_gateway.set("email.smtp", {"host": "current.example.com"})
    settings_gateway.set("smtp_config", {"host": "legacy.example.com"})

    config = await loader.current_transport_config()

    assert config.host == "current.example.com"
    assert config.source == "email.smtp"

@pytest.mark.asyncio
async def test_legacy_key_used_when_current_absent(settings_gateway, loader):
    """Test fallback to the legacy key, stored as a JSON string."""
    settings_gateway.set(
        "smtp_config",
        json.dumps({"host": "legacy.example.com", "port": "465", "secure": "true"}),
    )

    config = await loader.current_transport_config()

    assert config.source == "smtp_config"
    assert config.host == "legacy.example.com"
    assert config.port == 465
    assert config.secure is True

@pytest.mark.asyncio
async def test_blank_current_key_treated_as_absent(settings_gateway, loader):
    """Test that an empty string under the current key falls through."""
    settings_gateway.set("email.smtp", "  ")
    settings_gateway.set("smtp_config", {"host": "legacy.example.com"})

    config = await loader.current_transport_config()

    assert config.host == "legacy.example.com"

@pytest.mark.asyncio
async def test_stored_fields_merge_over_environment(monkeypatch, settings_gateway, loader):
    """Test that missing stored fields keep the environment values."""
    monkeypatch.setenv("SMTP_USER", "env@example.com")
    monkeypatch.setenv("SMTP_PASS", "env-pass")
    settings_gateway.set("email.smtp", {"host": "stored.example.com", "port": 0})

    config = await loader.current_transport_config()

    assert config.host == "stored.example.com"
    assert config.port == 587
    assert config.user == "env@example.com"
    assert config.password == "env-pass"

@pytest.mark.asyncio
async def test_password_and_sender_aliases(settings_gateway, loader):
    """Test the field names written by both settings screens."""
    settings_gateway.set(
        "email.smtp",
        {
            "host": "smtp.example.com",
            "user": "mailer@example.com",
            "pass": "secret",
            "fromEmail": "hr@example.com",
            "fromName": "HR Team",
        },
    )

    config = await loader.current_transport_config()

    assert config.password == "secret"
    assert config.from_address == "HR Team <hr@example.com>"

@pytest.mark.asyncio
async def test_explicit_from_wins_over_from_email(settings_gateway, loader):
    """Test that a plain 'from' field takes precedence."""
    settings_gateway.set(
        "email.smtp",
        {"host": "h", "from": "Acme <no-reply@acme.test>", "fromEmail": "other@acme.test"},
    )

    config = await loader.current_transport_config()

    assert config.from_address == "Acme <no-reply@acme.test>"

@pytest.mark.asyncio
async def test_environment_from_not_applied_to_stored_config(monkeypatch, settings_gateway, loader):
    """Test that SMTP_FROM only applies to the environment fallback."""
    monkeypatch.setenv("SMTP_FROM", "Env <env@example.com>")
    settings_gateway.set("email.smtp", {"host": "h"})

    config = await loader.current_transport_config()

    assert config.from_address is None

@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", 42])
async def test_malformed_stored_config_raises(settings_gateway, loader, raw):
    """Test that a present but unusable mail config is reported, not ignored."""
    settings_gateway.set("email.smtp", raw)

    with pytest.raises(MailConfigurationError) as exc_info:
        await loader.current_transport_config()

    assert exc_info.value.key == "email.smtp"

@pytest.mark.asyncio
async def test_transport_config_cached_until_invalidated(settings_gateway, loader):
    """Test that stored changes are picked up only after invalidate()."""
    settings_gateway.set("email.smtp", {"host": "first.example.com"})
    first = await loader.current_transport_config()

    settings_gateway.set("email.smtp", {"host": "second.example.com"})
    assert await loader.current_transport_config() is first

    loader.invalidate()
    second = await loader.current_transport_config()

    assert second.host == "second.example.com"

@pytest.mark.asyncio
async def test_load_started_before_invalidate_is_not_cached():
    """Test that a stale load does not overwrite the cache after invalidate()."""
    started = asyncio.Event()
    release = asyncio.Event()
    values = {"email.smtp": {"host": "old.example.com"}}

    class SlowGateway:
        async def get(self, key):
            value = values.get(key)
            if key == "email.smtp":
                started.set()
                await release.wait()
            return value

    loader = ConfigLoader(SlowGateway(), logger=MagicMock())
    pending = asyncio.create_task(loader.current_transport_config())
    await started.wait()

    values["email.smtp"] = {"host": "new.example.com"}
    loader.invalidate()
    release.set()
    stale = await pending

    assert stale.host == "old.example.com"
    fresh = await loader.current_transport_config()
    assert fresh.host == "new.example.com"

@pytest.mark.asyncio
async def test_identity_fields_fall_back_individually(settings_gateway, loader):
    """Test that each identity field uses its own default when unset."""
    settings_gateway.set("company_name", "Acme Corp")
    settings_gateway.set("support_email", "")

    identity = await loader.current_organization_identity()

    assert identity == OrganizationIdentity(
        company_name="Acme Corp",
        support_email="support@company.com",
        login_url="http://localhost:3000/login",
    )

@pytest.mark.asyncio
async def test_identity_ignores_gateway_errors_and_non_scalars():
    """Test that unreadable organization settings never raise."""
    gateway = AsyncMock()
    gateway.get.side_effect = [
        RuntimeError("store offline"),
        {"unexpected": "object"},
        "https://acme.test/login",
    ]
    logger = MagicMock()
    loader = ConfigLoader(gateway, logger=logger)

    identity = await loader.current_organization_identity()

    assert identity.company_name == "Company"
    assert identity.support_email == "support@company.com"
    assert identity.login_url == "https://acme.test/login"
    assert logger.warning.call_count == 2

@pytest.mark.parametrize(
    ("user", "from_address", "expected"),
    [
        ("mailer@acme.test", None, "Acme <mailer@acme.test>"),
        ("apikey", None, "Acme <noreply@company.com>"),
        ("", None, "Acme <noreply@company.com>"),
        ("mailer@acme.test", "Payroll <pay@acme.test>", "Payroll <pay@acme.test>"),
    ],
)
def test_sender_variants(user, from_address, expected):
    """Test the From header fallbacks."""
    config = TransportConfig(host="h", user=user, from_address=from_address)

    assert config.sender(OrganizationIdentity(company_name="Acme")) == expected

@pytest.mark.asyncio
async def test_deeply_nested_stored_config_raises_configuration_error(settings_gateway, loader):
    """Test that JSON too deep to decode is reported as malformed."""
    settings_gateway.set("email.smtp", "[" * 200000)

    with pytest.raises(MailConfigurationError):
        await loader.current_transport_config()

def test_transport_config_from_environment_object():
    """Test building a config from an explicit SMTP environment."""
    environment = SMTPEnvironment(
        host="relay.example.com", port=465, secure=True, from_address="R <r@example.com>"
    )

    config = TransportConfig.from_environment(environment)

    assert config.host == "relay.example.com"
    assert config.port == 465
    assert config.secure is True
    assert config.from_address == "R <r@example.com>"
    assert config.source == "environment"
