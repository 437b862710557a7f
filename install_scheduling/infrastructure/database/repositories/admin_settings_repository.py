"""Admin settings repository implementation."""

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.application.interfaces.repositories import (
    SchedulingSettingsRepositoryInterface,
)
from install_scheduling.infrastructure.database.models.scheduling import AdminSettingModel


class AdminSettingsRepository(SchedulingSettingsRepositoryInterface):
    """Reads setting blobs from the admin_settings table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_rules(self, setting_keys: List[str]) -> Dict[str, Dict[str, Any]]:
        stmt = select(AdminSettingModel).where(AdminSettingModel.setting_key.in_(setting_keys))
        result = await self.db.execute(stmt)
        return {
            model.setting_key: model.setting_value or {}
            for model in result.scalars().all()
        }
