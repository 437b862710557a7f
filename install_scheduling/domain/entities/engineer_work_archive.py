"""Engineer work archive entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from install_scheduling.domain.value_objects.reset_reason import ResetReason


@dataclass
class EngineerWorkArchive:
    """Snapshot of engineer-completed work taken before it is reset."""

    job_id: UUID
    reset_reason: ResetReason
    id: UUID = field(default_factory=uuid4)
    engineer_id: Optional[UUID] = None
    scheduled_date_before: Optional[date] = None
    scheduled_date_after: Optional[date] = None
    engineer_notes: Optional[str] = None
    engineer_signature_data: Optional[str] = None
    engineer_signed_off_at: Optional[datetime] = None
    engineer_status: Optional[str] = None
    uploads: List[Dict[str, Any]] = field(default_factory=list)
    archived_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.archived_at:
            self.archived_at = datetime.now(timezone.utc)
