"""
Scheduling conflict value objects.
"""

from dataclasses import dataclass
from enum import Enum


class ConflictType(str, Enum):
    """Kinds of scheduling conflict."""

    DOUBLE_BOOKING = "double_booking"
    CLIENT_BLOCKED = "client_blocked"
    OUTSIDE_HOURS = "outside_hours"
    TRAVEL_CONFLICT = "travel_conflict"


class ConflictSeverity(str, Enum):
    """UI emphasis tier for a conflict. Never used to block an assignment."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class SchedulingConflict:
    """Advisory conflict surfaced to the operator."""

    type: ConflictType
    severity: ConflictSeverity
    message: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
        }
