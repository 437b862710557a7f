"""
Engineer work reset domain event.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from install_scheduling.domain.value_objects.reset_reason import ResetReason

ACTIVITY_TYPE = "engineer_status_reset"


@dataclass
class EngineerWorkReset:
    """Event raised when an assignment change invalidates engineer work."""

    job_id: UUID
    reset_reason: ResetReason
    previous_engineer_id: Optional[UUID]
    new_engineer_id: Optional[UUID]
    previous_date: Optional[date]
    new_date: Optional[date]
    engineer_work_archived: bool
    checklist_reset: bool
    notes_cleared: bool
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def activity_type(self) -> str:
        return ACTIVITY_TYPE

    @property
    def description(self) -> str:
        if self.engineer_work_archived:
            return (
                f"{self.reset_reason.description} - Previous work archived "
                "and engineer workspace reset"
            )
        return f"{self.reset_reason.description} - Engineer workspace reset"

    def to_details(self) -> Dict[str, Any]:
        """Structured payload stored with the activity entry."""
        return {
            "reset_reason": self.reset_reason.value,
            "previous_engineer": str(self.previous_engineer_id)
            if self.previous_engineer_id
            else None,
            "new_engineer": str(self.new_engineer_id) if self.new_engineer_id else None,
            "previous_date": self.previous_date.isoformat() if self.previous_date else None,
            "new_date": self.new_date.isoformat() if self.new_date else None,
            "engineer_work_archived": self.engineer_work_archived,
            "checklist_reset": self.checklist_reset,
            "notes_cleared": self.notes_cleared,
        }
