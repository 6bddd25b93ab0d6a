"""Configuration management for the attendance mailer.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Application settings are loaded once at
startup; SMTP credentials are only read from the environment when the
administrator settings store holds no mail configuration.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ATTENDANCE_MAILER_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Attendance Mailer"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/attendance.db"
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


class SMTPEnvironment(BaseSettings):
    """SMTP fallback settings read from unprefixed ``SMTP_*`` variables.

    Used only when neither the current nor the legacy mail settings key is
    present in the settings store. Every field has a default so a transport
    can always be constructed, even if it cannot actually send.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SMTP_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    host: str = "smtp.gmail.com"
    port: int = 587
    secure: bool = False
    user: str = ""
    password: str = Field(default="", validation_alias=AliasChoices("SMTP_PASS", "SMTP_PASSWORD"))
    from_address: str | None = Field(default=None, validation_alias="SMTP_FROM")
    timeout: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
