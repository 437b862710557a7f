"""Completion checklist item entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


@dataclass
class ChecklistItem:
    """One verification step of an installation's completion checklist."""

    job_id: UUID
    item_key: str
    label: str
    id: UUID = field(default_factory=uuid4)
    is_completed: bool = False
    completed_at: Optional[datetime] = None

    def mark_completed(self, completed_at: Optional[datetime] = None) -> None:
        """Mark item as completed."""
        self.is_completed = True
        self.completed_at = completed_at or datetime.now(timezone.utc)

    def reset(self) -> None:
        """Mark item as incomplete again."""
        self.is_completed = False
        self.completed_at = None
