"""Engineer schedule use case."""

from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID

from install_scheduling.application.interfaces.repositories import (
    EngineerRepositoryInterface,
)
from install_scheduling.application.services.availability import AvailabilityService
from install_scheduling.application.services.settings_provider import (
    SchedulingSettingsProvider,
)
from install_scheduling.domain.entities.engineer import Engineer, WorkingHours
from install_scheduling.domain.exceptions.not_found_error import EngineerNotFoundError


@dataclass
class EngineerDayAvailability:
    """What an engineer's day looks like for booking purposes."""

    engineer: Engineer
    day: date
    available: bool
    workload: int
    max_jobs_per_day: int
    working_hours: Optional[WorkingHours]
    earliest_available_date: Optional[date]

    @property
    def over_allocated(self) -> bool:
        return self.workload >= self.max_jobs_per_day


class EngineerScheduleUseCase:
    """Use case for workload and availability queries on one engineer."""

    def __init__(
        self,
        engineer_repo: EngineerRepositoryInterface,
        availability: AvailabilityService,
        settings_provider: SchedulingSettingsProvider,
    ):
        self.engineer_repo = engineer_repo
        self.availability = availability
        self.settings_provider = settings_provider

    async def get_workload(self, engineer_id: UUID, day: date) -> int:
        await self._get_engineer(engineer_id)
        return await self.availability.get_engineer_workload(engineer_id, day)

    async def get_availability(self, engineer_id: UUID, day: date) -> EngineerDayAvailability:
        engineer = await self._get_engineer(engineer_id)
        settings = await self.settings_provider.get_settings()
        return EngineerDayAvailability(
            engineer=engineer,
            day=day,
            available=self.availability.is_available(engineer, day),
            workload=await self.availability.get_engineer_workload(engineer_id, day),
            max_jobs_per_day=settings.max_jobs_per_day,
            working_hours=engineer.hours_for(day),
            earliest_available_date=await self.availability.earliest_available_date(
                engineer, day, settings
            ),
        )

    async def _get_engineer(self, engineer_id: UUID) -> Engineer:
        engineer = await self.engineer_repo.get_by_id(engineer_id)
        if not engineer:
            raise EngineerNotFoundError(engineer_id)
        return engineer
