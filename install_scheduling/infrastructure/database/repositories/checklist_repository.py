"""Completion checklist repository implementation."""

from typing import List
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.application.interfaces.repositories import (
    ChecklistRepositoryInterface,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.checklist_item import ChecklistItem
from install_scheduling.infrastructure.database.models.scheduling import ChecklistItemModel

logger = get_logger(__name__)


class ChecklistRepository(ChecklistRepositoryInterface):
    """Completion checklist repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_job_id(self, job_id: UUID) -> List[ChecklistItem]:
        stmt = (
            select(ChecklistItemModel)
            .where(ChecklistItemModel.order_id == job_id)
            .order_by(ChecklistItemModel.created_at)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return [
            ChecklistItem(
                id=model.id,
                job_id=model.order_id,
                item_key=model.item_id,
                label=model.item_label,
                is_completed=model.is_completed,
                completed_at=model.completed_at,
            )
            for model in result.scalars().all()
        ]

    async def reset_for_job(self, job_id: UUID) -> int:
        """Mark every checklist row of the job incomplete."""
        stmt = (
            update(ChecklistItemModel)
            .where(ChecklistItemModel.order_id == job_id)
            .values(is_completed=False, completed_at=None)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        await self.db.flush()

        logger.debug("Checklist reset", job_id=str(job_id), rows=result.rowcount)
        return result.rowcount
