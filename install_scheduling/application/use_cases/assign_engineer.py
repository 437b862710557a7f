"""Assign engineer use case."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union
from uuid import UUID

from install_scheduling.application.interfaces.repositories import (
    ActivityLogRepositoryInterface,
    ChecklistRepositoryInterface,
    EngineerWorkArchiveRepositoryInterface,
    JobRepositoryInterface,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.job import Job
from install_scheduling.domain.events.engineer_work_reset import EngineerWorkReset
from install_scheduling.domain.exceptions.assignment_error import (
    AssignmentError,
    ConcurrentAssignmentError,
)
from install_scheduling.domain.exceptions.not_found_error import (
    JobNotFoundError,
    NotFoundError,
)
from install_scheduling.domain.exceptions.validation_error import ValidationError
from install_scheduling.domain.value_objects.reset_reason import ResetReason
from install_scheduling.domain.value_objects.time_window import TimeWindow
from install_scheduling.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from install_scheduling.infrastructure.monitoring.metrics import record_assignment

logger = get_logger(__name__)


def to_day(value: Optional[Union[date, datetime]]) -> Optional[date]:
    """Reduce a datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass
class AssignmentRequest:
    """Engineer/date change for a job. Optional edits left as None are untouched."""

    job_id: UUID
    engineer_id: Optional[UUID]
    scheduled_date: Optional[Union[date, datetime]]
    time_window: Optional[TimeWindow] = None
    estimated_duration_hours: Optional[int] = None
    internal_notes: Optional[str] = None
    postcode: Optional[str] = None
    expected_version: Optional[int] = None


@dataclass
class AssignmentResult:
    """Result of an assignment change."""

    job: Job
    reset: Optional[EngineerWorkReset] = None

    @property
    def engineer_work_archived(self) -> bool:
        return bool(self.reset and self.reset.engineer_work_archived)


class AssignEngineerUseCase:
    """Use case for applying engineer/date changes and resetting superseded work."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        archive_repo: EngineerWorkArchiveRepositoryInterface,
        checklist_repo: ChecklistRepositoryInterface,
        activity_repo: ActivityLogRepositoryInterface,
        transaction_service: TransactionService,
    ):
        self.job_repo = job_repo
        self.archive_repo = archive_repo
        self.checklist_repo = checklist_repo
        self.activity_repo = activity_repo
        self.transaction_service = transaction_service
        self.logger = logger

    async def execute(self, request: AssignmentRequest) -> AssignmentResult:
        """
        Apply an engineer/date change to a job.

        Previously completed engineer work is archived before it is cleared,
        and the checklist is reset, whenever an existing engineer+date is
        superseded. Archive, clear, checklist reset and the job update commit
        together; the activity entry is written afterwards on a best-effort
        basis.

        Raises:
            JobNotFoundError: job does not exist
            ConcurrentAssignmentError: expected_version is stale
            AssignmentError: the change could not be stored
        """
        if request.estimated_duration_hours is not None and request.estimated_duration_hours <= 0:
            raise ValidationError("estimated_duration_hours must be positive")

        job = await self._load(request.job_id, request.expected_version)

        new_engineer_id = request.engineer_id
        new_date = to_day(request.scheduled_date)
        previous_engineer_id = job.engineer_id
        previous_date = job.scheduled_date

        engineer_changing = new_engineer_id != previous_engineer_id
        date_changing = new_date != previous_date
        changing = engineer_changing or date_changing
        needs_archival = changing and job.has_assignment()
        had_engineer_work = job.has_engineer_work()
        notes_present = job.engineer_notes is not None
        reset_reason = (
            ResetReason.ENGINEER_CHANGED if engineer_changing else ResetReason.RESCHEDULED
        )

        self.logger.info(
            "Applying assignment",
            job_id=str(job.id),
            engineer_changing=engineer_changing,
            date_changing=date_changing,
            needs_archival=needs_archival,
        )

        async def apply_change() -> Job:
            if needs_archival:
                await self.archive_repo.archive_engineer_work(
                    job.id, reset_reason, scheduled_date_after=new_date
                )

            if changing:
                job.clear_engineer_work()

            if needs_archival:
                await self.checklist_repo.reset_for_job(job.id)

            job.apply_assignment(new_engineer_id, new_date)
            if request.time_window is not None:
                job.time_window = request.time_window
            if request.estimated_duration_hours is not None:
                job.estimated_duration_hours = request.estimated_duration_hours
            if request.internal_notes is not None:
                job.internal_install_notes = request.internal_notes
            if request.postcode is not None:
                job.postcode = request.postcode

            return await self.job_repo.update(job, expected_version=request.expected_version)

        updated = await self._commit(job.id, apply_change, "assign_engineer")

        reset = None
        if needs_archival or (changing and had_engineer_work):
            reset = EngineerWorkReset(
                job_id=job.id,
                reset_reason=reset_reason,
                previous_engineer_id=previous_engineer_id,
                new_engineer_id=new_engineer_id,
                previous_date=previous_date,
                new_date=new_date,
                engineer_work_archived=needs_archival,
                checklist_reset=needs_archival,
                notes_cleared=notes_present,
            )
            await self._log_reset(reset)

        record_assignment(reset.reset_reason.value if reset else "none")

        self.logger.info(
            "Assignment applied",
            job_id=str(updated.id),
            engineer_id=str(updated.engineer_id) if updated.engineer_id else None,
            scheduled_date=updated.scheduled_date.isoformat() if updated.scheduled_date else None,
            version=updated.version,
            reset_reason=reset.reset_reason.value if reset else None,
        )
        return AssignmentResult(job=updated, reset=reset)

    async def clear_assignment(
        self, job_id: UUID, expected_version: Optional[int] = None
    ) -> AssignmentResult:
        """
        Remove engineer, date and booking details from a job.

        Work done under a prior engineer+date is archived with reason
        assignment_cleared and the checklist is reset.
        """
        job = await self._load(job_id, expected_version)

        previous_engineer_id = job.engineer_id
        previous_date = job.scheduled_date
        had_assignment = job.has_assignment()
        had_engineer_work = job.has_engineer_work()
        notes_present = job.engineer_notes is not None

        async def apply_clear() -> Job:
            if had_assignment:
                await self.archive_repo.archive_engineer_work(
                    job.id, ResetReason.ASSIGNMENT_CLEARED, scheduled_date_after=None
                )

            job.clear_engineer_work()

            if had_assignment:
                await self.checklist_repo.reset_for_job(job.id)

            job.apply_assignment(None, None)
            job.time_window = None
            job.estimated_duration_hours = None
            job.internal_install_notes = None

            return await self.job_repo.update(job, expected_version=expected_version)

        updated = await self._commit(job.id, apply_clear, "clear_assignment")

        reset = None
        if had_assignment or had_engineer_work:
            reset = EngineerWorkReset(
                job_id=job.id,
                reset_reason=ResetReason.ASSIGNMENT_CLEARED,
                previous_engineer_id=previous_engineer_id,
                new_engineer_id=None,
                previous_date=previous_date,
                new_date=None,
                engineer_work_archived=had_assignment,
                checklist_reset=had_assignment,
                notes_cleared=notes_present,
            )
            await self._log_reset(reset)

        record_assignment(ResetReason.ASSIGNMENT_CLEARED.value if reset else "none")
        self.logger.info(
            "Assignment cleared",
            job_id=str(updated.id),
            engineer_work_archived=had_assignment,
            version=updated.version,
        )
        return AssignmentResult(job=updated, reset=reset)

    async def _load(self, job_id: UUID, expected_version: Optional[int]) -> Job:
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise JobNotFoundError(job_id)
        if expected_version is not None and job.version != expected_version:
            raise ConcurrentAssignmentError(job_id, expected_version, job.version)
        return job

    async def _commit(self, job_id: UUID, operation, name: str) -> Job:
        try:
            return await self.transaction_service.execute_in_transaction(operation, name=name)
        except (AssignmentError, NotFoundError):
            raise
        except Exception as e:
            self.logger.error(
                "Failed to update installation details",
                job_id=str(job_id),
                error=str(e),
                exc_info=True,
            )
            raise AssignmentError(job_id, str(e)) from e

    async def _log_reset(self, reset: EngineerWorkReset) -> None:
        """Write the activity entry; failures are logged and never raised."""
        try:
            await self.transaction_service.execute_in_transaction(
                lambda: self.activity_repo.log_activity(
                    reset.job_id,
                    reset.activity_type,
                    reset.description,
                    reset.to_details(),
                ),
                name="log_engineer_reset",
            )
        except Exception as e:
            self.logger.error(
                "Failed to write engineer reset activity",
                job_id=str(reset.job_id),
                reset_reason=reset.reset_reason.value,
                error=str(e),
                exc_info=True,
            )
