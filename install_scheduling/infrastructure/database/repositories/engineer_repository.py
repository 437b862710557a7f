"""Engineer repository implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from install_scheduling.application.interfaces.repositories import (
    EngineerRepositoryInterface,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.engineer import (
    Engineer,
    ServiceArea,
    TimeOff,
    WorkingHours,
)
from install_scheduling.infrastructure.database.models.engineer import EngineerModel

logger = get_logger(__name__)


class EngineerRepository(EngineerRepositoryInterface):
    """Engineer repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _select(self):
        return select(EngineerModel).options(
            selectinload(EngineerModel.working_hours),
            selectinload(EngineerModel.time_off),
            selectinload(EngineerModel.service_areas),
        )

    async def get_by_id(self, engineer_id: UUID) -> Optional[Engineer]:
        """Get engineer with working hours, time off and service areas."""
        result = await self.db.execute(self._select().where(EngineerModel.id == engineer_id))
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def find_all(self) -> List[Engineer]:
        """Find every engineer ordered by name."""
        result = await self.db.execute(
            self._select().order_by(EngineerModel.name, EngineerModel.id)
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    def _model_to_entity(self, model: EngineerModel) -> Engineer:
        """Convert SQLAlchemy model to domain entity."""
        return Engineer(
            id=model.id,
            name=model.name,
            email=model.email,
            starting_postcode=model.starting_postcode,
            availability=model.availability,
            region=model.region,
            working_hours=self._working_hours(model),
            time_off=[
                TimeOff(
                    start_date=entry.start_date,
                    end_date=entry.end_date,
                    status=entry.status,
                    reason=entry.reason,
                )
                for entry in model.time_off
            ],
            service_areas=[
                ServiceArea(
                    postcode_area=area.postcode_area,
                    max_travel_time_minutes=area.max_travel_time_minutes,
                )
                for area in model.service_areas
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _working_hours(self, model: EngineerModel) -> List[WorkingHours]:
        """Roster rows that fail validation are left out, so that day reads as not worked."""
        entries = []
        for hours in model.working_hours:
            try:
                entries.append(
                    WorkingHours(
                        day_of_week=hours.day_of_week,
                        start_time=hours.start_time,
                        end_time=hours.end_time,
                        is_available=hours.is_available,
                    )
                )
            except ValueError as e:
                logger.warning(
                    "Skipping invalid working hours",
                    engineer_id=str(model.id),
                    day_of_week=hours.day_of_week,
                    error=str(e),
                )
        return entries
