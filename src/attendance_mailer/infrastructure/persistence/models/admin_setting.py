"""SQLAlchemy model for the admin_settings table.

Administrator settings are key/value rows. Values are JSON: mail settings and
template overrides are objects (or JSON-encoded strings written by older
clients), organization identity values are plain strings.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from attendance_mailer.infrastructure.persistence.database import Base


class AdminSettingModel(Base):
    """SQLAlchemy model for the admin_settings table.

    Attributes:
        key: Setting key (e.g., 'email.smtp', 'company_name').
        value: Setting value as JSON.
        category: Optional grouping used by the admin UI (e.g., 'email').
        description: Optional human-readable description.
        is_active: Inactive settings are treated as absent.
        created_at: Timestamp when the setting was created.
        updated_at: Timestamp when the setting was last updated.
    """

    __tablename__ = "admin_settings"

    key: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Setting key",
    )
    value: Mapped[Any] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
        comment="Setting value as JSON",
    )
    category: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        comment="Setting category (e.g., 'email', 'company')",
    )
    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="1",
        comment="Inactive settings are ignored",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<AdminSetting(key={self.key}, active={self.is_active})>"
