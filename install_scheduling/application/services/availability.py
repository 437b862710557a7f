"""
Engineer availability and workload checks.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable, Optional
from uuid import UUID

from install_scheduling.application.interfaces.repositories import JobRepositoryInterface
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.engineer import Engineer
from install_scheduling.domain.value_objects.scheduling_settings import SchedulingSettings

logger = get_logger(__name__)

DEFAULT_SEARCH_DAYS = 30


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


class AvailabilityService:
    """Answers whether an engineer can take work on a given day."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        bank_holidays: Optional[Iterable[date]] = None,
        search_days: int = DEFAULT_SEARCH_DAYS,
        clock: Callable[[], datetime] = None,
    ):
        self.job_repo = job_repo
        self.bank_holidays = frozenset(bank_holidays or [])
        self.search_days = search_days
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.logger = logger

    def is_available(self, engineer: Engineer, day: date) -> bool:
        """Availability flag set and no approved time off covering the day."""
        return engineer.is_available_on(day)

    def is_holiday(self, day: date) -> bool:
        return day in self.bank_holidays

    async def get_engineer_workload(
        self, engineer_id: UUID, day: date, exclude_job_id: Optional[UUID] = None
    ) -> int:
        """Number of jobs assigned to the engineer on the day."""
        return await self.job_repo.count_by_engineer_and_date(
            engineer_id, day, exclude_job_id=exclude_job_id
        )

    async def is_over_allocated(
        self,
        engineer_id: UUID,
        day: date,
        settings: SchedulingSettings,
        exclude_job_id: Optional[UUID] = None,
    ) -> bool:
        workload = await self.get_engineer_workload(engineer_id, day, exclude_job_id)
        return workload >= settings.max_jobs_per_day

    def is_bookable_day(
        self, engineer: Engineer, day: date, settings: SchedulingSettings
    ) -> bool:
        """Calendar and roster checks for a day, without looking at workload."""
        if not self.is_available(engineer, day):
            return False
        if is_weekend(day) and not settings.allow_weekend_bookings:
            return False
        if self.is_holiday(day) and not settings.allow_holiday_bookings:
            return False
        hours = engineer.hours_for(day)
        return hours is not None and hours.is_available

    async def earliest_available_date(
        self,
        engineer: Engineer,
        from_day: date,
        settings: SchedulingSettings,
        exclude_job_id: Optional[UUID] = None,
    ) -> Optional[date]:
        """
        First day the engineer could take the job.

        The search starts at the later of from_day and the advance-notice
        horizon and gives up after search_days days.
        """
        notice_horizon = (
            self.clock() + timedelta(hours=settings.hours_advance_notice)
        ).date()
        day = max(from_day, notice_horizon)

        for _ in range(self.search_days):
            if self.is_bookable_day(engineer, day, settings):
                workload = await self.get_engineer_workload(
                    engineer.id, day, exclude_job_id=exclude_job_id
                )
                if workload < settings.max_jobs_per_day:
                    return day
            day += timedelta(days=1)

        self.logger.debug(
            "No available date found",
            engineer_id=str(engineer.id),
            from_day=from_day.isoformat(),
            search_days=self.search_days,
        )
        return None
