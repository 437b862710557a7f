"""
Reset reason value object.
"""

from enum import Enum


class ResetReason(str, Enum):
    """Why previously completed engineer work was archived and reset."""

    ENGINEER_CHANGED = "engineer_changed"
    RESCHEDULED = "rescheduled"
    ASSIGNMENT_CLEARED = "assignment_cleared"

    @property
    def description(self) -> str:
        """Human-readable activity description."""
        return {
            ResetReason.ENGINEER_CHANGED: "Engineer reassigned",
            ResetReason.RESCHEDULED: "Installation rescheduled",
            ResetReason.ASSIGNMENT_CLEARED: "Installation assignment cleared",
        }[self]
