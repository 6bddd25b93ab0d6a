"""Repositories for persisted settings."""

from attendance_mailer.infrastructure.persistence.repositories.admin_setting_repository import (
    AdminSettingRepository,
)

__all__ = ["AdminSettingRepository"]
