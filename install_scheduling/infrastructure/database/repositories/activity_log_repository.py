"""Order activity log repository implementation."""

from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.application.interfaces.repositories import (
    ActivityLogRepositoryInterface,
)
from install_scheduling.infrastructure.database.models.scheduling import OrderActivityModel


class ActivityLogRepository(ActivityLogRepositoryInterface):
    """Order activity log repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def log_activity(
        self,
        job_id: UUID,
        activity_type: str,
        description: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.db.add(
            OrderActivityModel(
                order_id=job_id,
                activity_type=activity_type,
                description=description,
                details=details or {},
            )
        )
        await self.db.flush()
