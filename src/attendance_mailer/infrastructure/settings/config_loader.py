"""Cached loading of mail transport settings and organization identity.

Mail settings are read from the current settings key, then the legacy key,
then the ``SMTP_*`` environment variables. Organization identity fields are
read one key at a time and fall back to defaults individually. Loaded values
are cached until :meth:`ConfigLoader.invalidate` is called; nothing is polled.
"""

import asyncio
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from attendance_mailer.core.config import SMTPEnvironment
from attendance_mailer.core.exceptions import MailConfigurationError
from attendance_mailer.core.logging import get_logger
from attendance_mailer.domain.entities.organization_identity import (
    DEFAULT_COMPANY_NAME,
    DEFAULT_LOGIN_URL,
    DEFAULT_SUPPORT_EMAIL,
    OrganizationIdentity,
)
from attendance_mailer.infrastructure.settings.settings_gateway import (
    COMPANY_NAME_KEY,
    LEGACY_MAIL_SETTINGS_KEY,
    LOGIN_URL_KEY,
    MAIL_SETTINGS_KEY,
    SUPPORT_EMAIL_KEY,
    SettingsGateway,
    is_present,
    parse_structured,
)

DEFAULT_SMTP_PORT = 587
DEFAULT_TIMEOUT_SECONDS = 10.0
FALLBACK_SENDER_ADDRESS = "noreply@company.com"
ENVIRONMENT_SOURCE = "environment"

_TRUE_STRINGS = {"true", "1", "yes", "on"}


class TransportConfig(BaseModel):
    """Configuration for the outbound SMTP transport.

    Attributes:
        host: SMTP server host.
        port: SMTP server port.
        secure: Use implicit TLS on connect (port 465 style); otherwise STARTTLS
            is attempted when the server offers it.
        user: Login user name. Empty disables authentication.
        password: Login password.
        from_address: Explicit From header, if configured.
        timeout: Per-operation timeout in seconds.
        source: Where the values came from (settings key or 'environment').
    """

    model_config = ConfigDict(frozen=True)

    host: str
    port: int = DEFAULT_SMTP_PORT
    secure: bool = False
    user: str = ""
    password: str = ""
    from_address: str | None = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    source: str = ENVIRONMENT_SOURCE

    @field_validator("port", mode="before")
    @classmethod
    def coerce_port(cls, v: Any) -> int:
        """Fall back to the default port when the stored value is unusable."""
        try:
            port = int(v)
        except (TypeError, ValueError):
            return DEFAULT_SMTP_PORT
        return port if port > 0 else DEFAULT_SMTP_PORT

    @field_validator("secure", mode="before")
    @classmethod
    def coerce_secure(cls, v: Any) -> bool:
        """Accept booleans and 'true'/'false' style strings."""
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_STRINGS
        return bool(v)

    @field_validator("user", "password", mode="before")
    @classmethod
    def coerce_optional_string(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("timeout", mode="before")
    @classmethod
    def coerce_timeout(cls, v: Any) -> float:
        try:
            timeout = float(v)
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT_SECONDS
        return timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_environment(cls, environment: SMTPEnvironment) -> "TransportConfig":
        """Build a config from the SMTP environment fallback."""
        return cls(
            host=environment.host,
            port=environment.port,
            secure=environment.secure,
            user=environment.user,
            password=environment.password,
            from_address=environment.from_address or None,
            timeout=environment.timeout,
            source=ENVIRONMENT_SOURCE,
        )

    @classmethod
    def from_stored(
        cls, data: dict[str, Any], defaults: "TransportConfig", source: str
    ) -> "TransportConfig":
        """Build a config from a stored settings object.

        Stored fields override the environment defaults. Field names written
        by both settings screens are accepted: ``pass``/``password`` and
        ``from``/``fromEmail`` (with optional ``fromName``).
        """
        values: dict[str, Any] = defaults.model_dump()
        values["source"] = source
        # A stored config carries its own sender; the env SMTP_FROM only applies to env configs
        values["from_address"] = None

        for field in ("host", "port", "secure", "user", "timeout"):
            if is_present(data.get(field)):
                values[field] = data[field]
        for alias in ("pass", "password"):
            if is_present(data.get(alias)):
                values["password"] = data[alias]
                break

        from_address = data.get("from")
        if not is_present(from_address) and is_present(data.get("fromEmail")):
            from_address = data["fromEmail"]
            if is_present(data.get("fromName")):
                from_address = f"{data['fromName']} <{from_address}>"
        if is_present(from_address):
            values["from_address"] = str(from_address)

        return cls.model_validate(values)

    def sender(self, identity: OrganizationIdentity) -> str:
        """Return the From header for outgoing mail.

        Uses the configured from-address, else ``"{company} <{user}>"``, else a
        no-reply address under the company name.
        """
        if self.from_address:
            return self.from_address
        address = self.user if "@" in self.user else FALLBACK_SENDER_ADDRESS
        return f"{identity.company_name} <{address}>"


class ConfigLoader:
    """Loads and caches transport settings and organization identity.

    Both caches are replaced by whole-reference assignment so concurrent
    readers see either the old or the new value. A load that was started
    before :meth:`invalidate` does not overwrite the cache afterwards.

    A stored mail config counts as present once its key holds a non-blank
    value. A present config that cannot be parsed is an error, not a reason
    to fall back to the ``SMTP_*`` environment.
    """

    def __init__(
        self,
        gateway: SettingsGateway,
        environment: SMTPEnvironment | None = None,
        logger: Any | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            gateway: Settings store gateway.
            environment: Optional fixed SMTP environment; read on each load if omitted.
            logger: Optional structured logger.
        """
        self.gateway = gateway
        self.environment = environment
        self.logger = logger or get_logger(__name__)
        self._transport_config: TransportConfig | None = None
        self._identity: OrganizationIdentity | None = None
        self._generation = 0
        self._transport_lock = asyncio.Lock()
        self._identity_lock = asyncio.Lock()

    def invalidate(self) -> None:
        """Discard cached values; the next access reloads from the store."""
        self._generation += 1
        self._transport_config = None
        self._identity = None
        self.logger.info("Mail configuration cache invalidated", generation=self._generation)

    async def current_transport_config(self) -> TransportConfig:
        """Return the cached transport config, loading it on first access.

        Raises:
            MailConfigurationError: If a stored mail config is present but unusable.
        """
        cached = self._transport_config
        if cached is not None:
            return cached
        async with self._transport_lock:
            if self._transport_config is not None:
                return self._transport_config
            generation = self._generation
            config = await self._load_transport_config()
            if generation == self._generation:
                self._transport_config = config
            return config

    async def current_organization_identity(self) -> OrganizationIdentity:
        """Return the cached organization identity, loading it on first access.

        Never raises; unreadable fields fall back to their defaults.
        """
        cached = self._identity
        if cached is not None:
            return cached
        async with self._identity_lock:
            if self._identity is not None:
                return self._identity
            generation = self._generation
            identity = await self._load_identity()
            if generation == self._generation:
                self._identity = identity
            return identity

    def _environment_config(self) -> TransportConfig:
        environment = self.environment
        if environment is None:
            try:
                environment = SMTPEnvironment()
            except ValidationError as e:
                self.logger.warning(
                    "Invalid SMTP environment variables, using defaults",
                    error=str(e),
                )
                environment = SMTPEnvironment.model_construct()
        return TransportConfig.from_environment(environment)

    async def _load_transport_config(self) -> TransportConfig:
        defaults = self._environment_config()

        for key in (MAIL_SETTINGS_KEY, LEGACY_MAIL_SETTINGS_KEY):
            raw = await self.gateway.get(key)
            if not is_present(raw):
                continue
            try:
                data = parse_structured(raw)
                config = TransportConfig.from_stored(data, defaults, source=key)
            except (ValueError, ValidationError, RecursionError) as e:
                self.logger.error("Stored mail settings are malformed", key=key, error=str(e))
                raise MailConfigurationError("Stored mail settings are malformed", key=key) from e
            self.logger.info(
                "Mail transport settings loaded",
                source=key,
                host=config.host,
                port=config.port,
                secure=config.secure,
            )
            return config

        self.logger.info(
            "Mail transport settings loaded",
            source=ENVIRONMENT_SOURCE,
            host=defaults.host,
            port=defaults.port,
            secure=defaults.secure,
        )
        return defaults

    async def _load_identity(self) -> OrganizationIdentity:
        return OrganizationIdentity(
            company_name=await self._identity_field(COMPANY_NAME_KEY, DEFAULT_COMPANY_NAME),
            support_email=await self._identity_field(SUPPORT_EMAIL_KEY, DEFAULT_SUPPORT_EMAIL),
            login_url=await self._identity_field(LOGIN_URL_KEY, DEFAULT_LOGIN_URL),
        )

    async def _identity_field(self, key: str, default: str) -> str:
        try:
            value = await self.gateway.get(key)
        except Exception as e:
            self.logger.warning("Failed to read organization setting", key=key, error=str(e))
            return default
        if not is_present(value):
            return default
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
        self.logger.warning(
            "Ignoring non-scalar organization setting",
            key=key,
            value_type=type(value).__name__,
        )
        return default
