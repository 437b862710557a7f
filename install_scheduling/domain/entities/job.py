"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from install_scheduling.domain.value_objects.conflict import SchedulingConflict
from install_scheduling.domain.value_objects.job_status import JobStatus
from install_scheduling.domain.value_objects.postcode import normalize_postcode
from install_scheduling.domain.value_objects.time_window import TimeWindow

DEFAULT_DURATION_HOURS = 2


@dataclass
class Job:
    """Installation job in scheduling context."""

    client_id: UUID
    postcode: Optional[str]
    id: UUID = field(default_factory=uuid4)
    order_number: Optional[str] = None
    status: JobStatus = JobStatus.AWAITING_INSTALL_BOOKING

    # Assignment
    engineer_id: Optional[UUID] = None
    scheduled_date: Optional[date] = None
    time_window: Optional[TimeWindow] = None
    estimated_duration_hours: Optional[int] = None
    internal_install_notes: Optional[str] = None

    # Engineer-completed work, only present once work has started
    engineer_signed_off_at: Optional[datetime] = None
    engineer_signature_data: Optional[str] = None
    engineer_notes: Optional[str] = None
    engineer_status: Optional[str] = None

    # Recomputed on read, never the source of truth
    scheduling_conflicts: List[SchedulingConflict] = field(default_factory=list)

    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Set timestamps if not provided."""
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def destination_postcode(self) -> Optional[str]:
        """Normalized installation postcode, or None when unusable."""
        normalized = normalize_postcode(self.postcode)
        return normalized or None

    @property
    def duration_hours(self) -> int:
        """Estimated duration, falling back to the default job length."""
        return self.estimated_duration_hours or DEFAULT_DURATION_HOURS

    @property
    def window(self) -> TimeWindow:
        """Booked window; an unset window occupies the whole day."""
        return TimeWindow.resolve(self.time_window)

    def has_assignment(self) -> bool:
        """Check if the job has both an engineer and a scheduled date."""
        return self.engineer_id is not None and self.scheduled_date is not None

    def has_engineer_work(self) -> bool:
        """Check if any engineer-completed-work field is populated."""
        return any(
            value is not None
            for value in (
                self.engineer_signed_off_at,
                self.engineer_signature_data,
                self.engineer_notes,
                self.engineer_status,
            )
        )

    def clear_engineer_work(self) -> None:
        """Null out engineer sign-off, signature, status and notes."""
        self.engineer_signed_off_at = None
        self.engineer_signature_data = None
        self.engineer_status = None
        self.engineer_notes = None
        self.updated_at = datetime.now(timezone.utc)

    def apply_assignment(
        self, engineer_id: Optional[UUID], scheduled_date: Optional[date]
    ) -> None:
        """Set engineer and date and move the job along the booking pipeline."""
        self.engineer_id = engineer_id
        self.scheduled_date = scheduled_date
        self.refresh_scheduling_status()
        self.updated_at = datetime.now(timezone.utc)

    def refresh_scheduling_status(self) -> None:
        """Keep the booking statuses in step with the assignment fields."""
        if self.status == JobStatus.AWAITING_INSTALL_BOOKING and self.has_assignment():
            self.status = JobStatus.SCHEDULED
        elif self.status == JobStatus.SCHEDULED and not self.has_assignment():
            self.status = JobStatus.AWAITING_INSTALL_BOOKING

    def to_dict(self) -> dict:
        """Convert job to dictionary."""
        return {
            "id": str(self.id),
            "order_number": self.order_number,
            "client_id": str(self.client_id),
            "postcode": self.postcode,
            "status": self.status.value,
            "engineer_id": str(self.engineer_id) if self.engineer_id else None,
            "scheduled_date": self.scheduled_date.isoformat()
            if self.scheduled_date
            else None,
            "time_window": self.time_window.value if self.time_window else None,
            "estimated_duration_hours": self.estimated_duration_hours,
            "version": self.version,
        }
