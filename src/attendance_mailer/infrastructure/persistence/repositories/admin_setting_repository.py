"""Admin setting repository for database operations."""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_mailer.infrastructure.persistence.models.admin_setting import AdminSettingModel


class AdminSettingRepository:
    """Repository for admin setting database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_active(self, key: str) -> Optional[AdminSettingModel]:
        """Get an active setting by key.

        Args:
            key: Setting key.

        Returns:
            Setting model if found and active, None otherwise.
        """
        result = await self.session.execute(
            select(AdminSettingModel).where(
                AdminSettingModel.key == key,
                AdminSettingModel.is_active.is_(True),
            )
        )
        return result.scalar_one_or_none()

    async def get_value(self, key: str) -> Any | None:
        """Get the value of an active setting, or None if absent."""
        setting = await self.get_active(key)
        return setting.value if setting is not None else None

    async def upsert(
        self,
        key: str,
        value: Any,
        category: str | None = None,
        description: str | None = None,
    ) -> AdminSettingModel:
        """Create or replace a setting and mark it active.

        Args:
            key: Setting key.
            value: JSON-serializable value.
            category: Optional category.
            description: Optional description.

        Returns:
            The stored setting model.
        """
        setting = await self.session.get(AdminSettingModel, key)
        if setting is None:
            setting = AdminSettingModel(key=key)
            self.session.add(setting)
        setting.value = value
        setting.is_active = True
        if category is not None:
            setting.category = category
        if description is not None:
            setting.description = description
        await self.session.flush()
        return setting
