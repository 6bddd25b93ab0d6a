"""SQLAlchemy models read by the notification engine."""

from attendance_mailer.infrastructure.persistence.models.admin_setting import AdminSettingModel

__all__ = ["AdminSettingModel"]
