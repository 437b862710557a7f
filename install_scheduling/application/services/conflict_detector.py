"""
Scheduling conflict detection for an assigned job.
"""

from datetime import date, time
from typing import List, Optional
from uuid import UUID

from install_scheduling.application.interfaces.repositories import (
    ClientBlockedDateRepositoryInterface,
    EngineerRepositoryInterface,
    JobRepositoryInterface,
)
from install_scheduling.application.services.availability import (
    AvailabilityService,
    is_weekend,
)
from install_scheduling.application.services.distance_service import DistanceService
from install_scheduling.application.services.settings_provider import (
    SchedulingSettingsProvider,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.engineer import Engineer
from install_scheduling.domain.entities.job import Job
from install_scheduling.domain.exceptions.distance_error import DistanceLookupError
from install_scheduling.domain.exceptions.not_found_error import JobNotFoundError
from install_scheduling.domain.value_objects.conflict import (
    ConflictSeverity,
    ConflictType,
    SchedulingConflict,
)
from install_scheduling.domain.value_objects.scheduling_settings import SchedulingSettings
from install_scheduling.domain.value_objects.time_window import TimeWindow
from install_scheduling.infrastructure.monitoring.metrics import record_conflict

logger = get_logger(__name__)


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


class ConflictDetector:
    """Reports advisory conflicts for a job's engineer/date assignment."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        engineer_repo: EngineerRepositoryInterface,
        blocked_date_repo: ClientBlockedDateRepositoryInterface,
        distance_service: DistanceService,
        settings_provider: SchedulingSettingsProvider,
        availability: AvailabilityService,
    ):
        self.job_repo = job_repo
        self.engineer_repo = engineer_repo
        self.blocked_date_repo = blocked_date_repo
        self.distance_service = distance_service
        self.settings_provider = settings_provider
        self.availability = availability
        self.logger = logger

    async def detect_conflicts(self, job_id: UUID) -> List[SchedulingConflict]:
        """
        Detect conflicts for the job's current assignment.

        Returns an empty list when the job has no engineer or no date.
        Conflicts never block an assignment.

        Raises:
            JobNotFoundError: job does not exist
        """
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise JobNotFoundError(job_id)

        if not job.has_assignment():
            return []

        settings = await self.settings_provider.get_settings()
        same_day_jobs = [
            other
            for other in await self.job_repo.find_by_engineer_and_date(
                job.engineer_id, job.scheduled_date
            )
            if other.id != job.id
        ]

        conflicts: List[SchedulingConflict] = []
        conflicts.extend(self._double_bookings(job, same_day_jobs))
        conflicts.extend(await self._client_blocked(job))

        engineer = await self.engineer_repo.get_by_id(job.engineer_id)
        if engineer is None:
            self.logger.warning(
                "Assigned engineer not found, skipping roster checks",
                job_id=str(job.id),
                engineer_id=str(job.engineer_id),
            )
        else:
            conflicts.extend(self._outside_hours(job, engineer, settings))

        conflicts.extend(self._calendar_rules(job.scheduled_date, settings))
        conflicts.extend(await self._over_allocation(job, settings))
        conflicts.extend(await self._travel_conflicts(job, same_day_jobs, settings))

        for conflict in conflicts:
            record_conflict(conflict.type.value, conflict.severity.value)

        self.logger.info(
            "Scheduling conflicts detected",
            job_id=str(job.id),
            conflict_count=len(conflicts),
        )
        return conflicts

    def _double_bookings(self, job: Job, same_day_jobs: List[Job]) -> List[SchedulingConflict]:
        conflicts = []
        for other in same_day_jobs:
            if job.window.overlaps(other.time_window):
                label = other.order_number or str(other.id)
                conflicts.append(
                    SchedulingConflict(
                        type=ConflictType.DOUBLE_BOOKING,
                        severity=ConflictSeverity.HIGH,
                        message=(
                            f"Engineer is already booked for job {label} "
                            f"({other.window.value}) on {job.scheduled_date.isoformat()}"
                        ),
                    )
                )
        return conflicts

    async def _client_blocked(self, job: Job) -> List[SchedulingConflict]:
        blocked_dates = await self.blocked_date_repo.get_by_client_id(job.client_id)
        for blocked in blocked_dates:
            if blocked.blocked_date == job.scheduled_date:
                message = f"Client is unavailable on {job.scheduled_date.isoformat()}"
                if blocked.reason:
                    message += f": {blocked.reason}"
                return [
                    SchedulingConflict(
                        type=ConflictType.CLIENT_BLOCKED,
                        severity=ConflictSeverity.HIGH,
                        message=message,
                    )
                ]
        return []

    def _outside_hours(
        self, job: Job, engineer: Engineer, settings: SchedulingSettings
    ) -> List[SchedulingConflict]:
        day = job.scheduled_date
        if not self.availability.is_available(engineer, day):
            return [
                SchedulingConflict(
                    type=ConflictType.OUTSIDE_HOURS,
                    severity=ConflictSeverity.HIGH,
                    message=f"{engineer.name} is unavailable on {day.isoformat()}",
                )
            ]

        hours = engineer.hours_for(day)
        if hours is None or not hours.is_available:
            return [
                SchedulingConflict(
                    type=ConflictType.OUTSIDE_HOURS,
                    severity=ConflictSeverity.MEDIUM,
                    message=f"{engineer.name} does not work on {day.strftime('%A')}s",
                )
            ]

        conflicts = []
        if hours.start_time < settings.day_start or hours.end_time > settings.day_end:
            conflicts.append(
                SchedulingConflict(
                    type=ConflictType.OUTSIDE_HOURS,
                    severity=ConflictSeverity.MEDIUM,
                    message=(
                        f"{engineer.name} works {hours.start_time.strftime('%H:%M')}-"
                        f"{hours.end_time.strftime('%H:%M')}, outside company hours "
                        f"{settings.working_hours_start}-{settings.working_hours_end}"
                    ),
                )
            )

        day_start = max(hours.start_time, settings.day_start)
        day_end = min(hours.end_time, settings.day_end)
        window_start, window_end = job.window.bounds(day_start, day_end)
        available_minutes = _minutes(window_end) - _minutes(window_start)
        if available_minutes < job.duration_hours * 60:
            conflicts.append(
                SchedulingConflict(
                    type=ConflictType.OUTSIDE_HOURS,
                    severity=ConflictSeverity.MEDIUM,
                    message=(
                        f"A {job.duration_hours}h job does not fit the "
                        f"{job.window.value} window of {engineer.name}'s hours"
                    ),
                )
            )
        return conflicts

    def _calendar_rules(self, day: date, settings: SchedulingSettings) -> List[SchedulingConflict]:
        conflicts = []
        if is_weekend(day) and not settings.allow_weekend_bookings:
            conflicts.append(
                SchedulingConflict(
                    type=ConflictType.OUTSIDE_HOURS,
                    severity=ConflictSeverity.LOW,
                    message=f"Weekend booking on {day.isoformat()}",
                )
            )
        if self.availability.is_holiday(day) and not settings.allow_holiday_bookings:
            conflicts.append(
                SchedulingConflict(
                    type=ConflictType.OUTSIDE_HOURS,
                    severity=ConflictSeverity.LOW,
                    message=f"Bank holiday booking on {day.isoformat()}",
                )
            )
        return conflicts

    async def _over_allocation(
        self, job: Job, settings: SchedulingSettings
    ) -> List[SchedulingConflict]:
        over_allocated = await self.availability.is_over_allocated(
            job.engineer_id, job.scheduled_date, settings, exclude_job_id=job.id
        )
        if not over_allocated:
            return []

        others = await self.availability.get_engineer_workload(
            job.engineer_id, job.scheduled_date, exclude_job_id=job.id
        )
        return [
            SchedulingConflict(
                type=ConflictType.OUTSIDE_HOURS,
                severity=ConflictSeverity.LOW,
                message=(
                    f"Engineer is over-allocated with {others + 1} jobs "
                    f"(maximum {settings.max_jobs_per_day})"
                ),
            )
        ]

    async def _travel_conflicts(
        self, job: Job, same_day_jobs: List[Job], settings: SchedulingSettings
    ) -> List[SchedulingConflict]:
        conflicts = []
        for other in same_day_jobs:
            pair = {job.window, other.window}
            if pair != {TimeWindow.MORNING, TimeWindow.AFTERNOON}:
                continue

            earlier, later = sorted([job, other], key=lambda j: j.window.order)
            conflict = await self._check_travel(earlier, later, settings)
            if conflict:
                conflicts.append(conflict)
        return conflicts

    async def _check_travel(
        self, earlier: Job, later: Job, settings: SchedulingSettings
    ) -> Optional[SchedulingConflict]:
        if not earlier.destination_postcode or not later.destination_postcode:
            return None

        try:
            result = await self.distance_service.lookup(
                earlier.destination_postcode, later.destination_postcode
            )
        except DistanceLookupError as e:
            self.logger.warning(
                "Skipping travel check, distance unavailable",
                earlier_job_id=str(earlier.id),
                later_job_id=str(later.id),
                error=str(e),
            )
            return None

        earlier_start, _ = earlier.window.bounds(settings.day_start, settings.day_end)
        _, later_end = later.window.bounds(settings.day_start, settings.day_end)
        earliest_finish = _minutes(earlier_start) + earlier.duration_hours * 60
        latest_start = _minutes(later_end) - later.duration_hours * 60
        gap = latest_start - earliest_finish
        travel = result.travel_minutes

        if gap >= travel:
            return None

        return SchedulingConflict(
            type=ConflictType.TRAVEL_CONFLICT,
            severity=ConflictSeverity.HIGH if gap < 0 else ConflictSeverity.MEDIUM,
            message=(
                f"{travel} minutes of travel between {earlier.destination_postcode} and "
                f"{later.destination_postcode} but only {max(gap, 0)} minutes between jobs"
            ),
        )
