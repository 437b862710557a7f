"""Job repository implementation."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.application.interfaces.repositories import JobRepositoryInterface
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.job import Job
from install_scheduling.domain.exceptions.assignment_error import ConcurrentAssignmentError
from install_scheduling.domain.exceptions.not_found_error import JobNotFoundError
from install_scheduling.domain.value_objects.conflict import (
    ConflictSeverity,
    ConflictType,
    SchedulingConflict,
)
from install_scheduling.domain.value_objects.job_status import JobStatus
from install_scheduling.domain.value_objects.time_window import TimeWindow
from install_scheduling.infrastructure.database.models.job import JobModel

logger = get_logger(__name__)


class JobRepository(JobRepositoryInterface):
    """Job repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        stmt = (
            select(JobModel)
            .where(JobModel.id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def update(self, job: Job, expected_version: Optional[int] = None) -> Job:
        """Write every scheduling field in one statement and bump the version."""
        stmt = update(JobModel).where(JobModel.id == job.id)
        if expected_version is not None:
            stmt = stmt.where(JobModel.version == expected_version)

        stmt = stmt.values(
            postcode=job.postcode,
            status=job.status.value,
            engineer_id=job.engineer_id,
            scheduled_install_date=job.scheduled_date,
            time_window=job.time_window.value if job.time_window else None,
            estimated_duration_hours=job.estimated_duration_hours,
            internal_install_notes=job.internal_install_notes,
            engineer_signed_off_at=job.engineer_signed_off_at,
            engineer_signature_data=job.engineer_signature_data,
            engineer_notes=job.engineer_notes,
            engineer_status=job.engineer_status,
            scheduling_conflicts=[c.to_dict() for c in job.scheduling_conflicts],
            version=JobModel.version + 1,
            updated_at=job.updated_at,
        ).execution_options(synchronize_session=False)

        result = await self.db.execute(stmt)

        if result.rowcount == 0:
            current = await self.db.execute(
                select(JobModel.version).where(JobModel.id == job.id)
            )
            actual_version = current.scalar_one_or_none()
            if actual_version is None:
                raise JobNotFoundError(job.id)
            logger.warning(
                "Job version mismatch",
                job_id=str(job.id),
                expected_version=expected_version,
                actual_version=actual_version,
            )
            raise ConcurrentAssignmentError(job.id, expected_version, actual_version)

        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()

        updated = await self.get_by_id(job.id)
        if updated is None:
            raise JobNotFoundError(job.id)
        return updated

    async def find_by_engineer_and_date(self, engineer_id: UUID, day: date) -> List[Job]:
        """Find jobs assigned to an engineer on a day."""
        stmt = (
            select(JobModel)
            .where(
                JobModel.engineer_id == engineer_id,
                JobModel.scheduled_install_date == day,
            )
            .order_by(JobModel.created_at)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def count_by_engineer_and_date(
        self, engineer_id: UUID, day: date, exclude_job_id: Optional[UUID] = None
    ) -> int:
        """Count jobs assigned to an engineer on a day."""
        stmt = select(func.count(JobModel.id)).where(
            JobModel.engineer_id == engineer_id,
            JobModel.scheduled_install_date == day,
        )
        if exclude_job_id is not None:
            stmt = stmt.where(JobModel.id != exclude_job_id)

        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    def _model_to_entity(self, model: JobModel) -> Job:
        """Convert SQLAlchemy model to domain entity."""
        conflicts = []
        for raw in model.scheduling_conflicts or []:
            try:
                conflicts.append(
                    SchedulingConflict(
                        type=ConflictType(raw["type"]),
                        severity=ConflictSeverity(raw["severity"]),
                        message=raw.get("message", ""),
                    )
                )
            except (KeyError, TypeError, ValueError):
                logger.warning("Ignoring unreadable stored conflict", job_id=str(model.id))

        return Job(
            id=model.id,
            order_number=model.order_number,
            client_id=model.client_id,
            postcode=model.postcode,
            status=JobStatus(model.status) if model.status else JobStatus.AWAITING_INSTALL_BOOKING,
            engineer_id=model.engineer_id,
            scheduled_date=model.scheduled_install_date,
            time_window=TimeWindow(model.time_window) if model.time_window else None,
            estimated_duration_hours=model.estimated_duration_hours,
            internal_install_notes=model.internal_install_notes,
            engineer_signed_off_at=model.engineer_signed_off_at,
            engineer_signature_data=model.engineer_signature_data,
            engineer_notes=model.engineer_notes,
            engineer_status=model.engineer_status,
            scheduling_conflicts=conflicts,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
