"""
Job and assignment API schemas.
"""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from install_scheduling.domain.entities.job import Job
from install_scheduling.domain.value_objects.time_window import TimeWindow


class ConflictSchema(BaseModel):
    """Scheduling conflict schema."""

    type: str
    severity: str
    message: str


class JobResponse(BaseModel):
    """Job scheduling state."""

    id: UUID
    order_number: Optional[str] = None
    client_id: UUID
    postcode: Optional[str] = None
    status: str
    engineer_id: Optional[UUID] = None
    scheduled_date: Optional[date] = None
    time_window: Optional[TimeWindow] = None
    estimated_duration_hours: Optional[int] = None
    internal_install_notes: Optional[str] = None
    engineer_signed_off_at: Optional[datetime] = None
    engineer_status: Optional[str] = None
    version: int
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, job: Job) -> "JobResponse":
        return cls(
            id=job.id,
            order_number=job.order_number,
            client_id=job.client_id,
            postcode=job.postcode,
            status=job.status.value,
            engineer_id=job.engineer_id,
            scheduled_date=job.scheduled_date,
            time_window=job.time_window,
            estimated_duration_hours=job.estimated_duration_hours,
            internal_install_notes=job.internal_install_notes,
            engineer_signed_off_at=job.engineer_signed_off_at,
            engineer_status=job.engineer_status,
            version=job.version,
            updated_at=job.updated_at,
        )


class AssignmentUpdateRequest(BaseModel):
    """Engineer/date change with optional booking edits."""

    engineer_id: Optional[UUID] = None
    scheduled_date: Optional[date] = None
    time_window: Optional[TimeWindow] = None
    estimated_duration_hours: Optional[int] = Field(None, ge=1, le=24)
    internal_notes: Optional[str] = Field(None, max_length=5000)
    postcode: Optional[str] = Field(None, min_length=2, max_length=16)
    expected_version: Optional[int] = Field(
        None, ge=1, description="Version read by the caller; stale versions are rejected"
    )


class AssignmentResponse(BaseModel):
    """Result of an assignment change."""

    job: JobResponse
    reset_reason: Optional[str] = None
    engineer_work_archived: bool = False


class ConflictsResponse(BaseModel):
    """Conflicts recomputed for a job."""

    job_id: UUID
    conflicts: List[ConflictSchema]
    has_high_severity: bool = False
