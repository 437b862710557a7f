"""
Time-of-day window value object.
"""

from datetime import time
from enum import Enum
from typing import Optional, Tuple

MIDDAY = time(12, 0)


class TimeWindow(str, Enum):
    """Part of the working day a job is booked into."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    ALL_DAY = "all_day"

    @classmethod
    def resolve(cls, window: Optional["TimeWindow"]) -> "TimeWindow":
        """A job without a window occupies the whole day."""
        return window or cls.ALL_DAY

    def overlaps(self, other: Optional["TimeWindow"]) -> bool:
        """Check if two windows share any part of the day."""
        other = TimeWindow.resolve(other)
        if self == TimeWindow.ALL_DAY or other == TimeWindow.ALL_DAY:
            return True
        return self == other

    def bounds(self, day_start: time, day_end: time) -> Tuple[time, time]:
        """Clock bounds of the window inside the given working day."""
        if self == TimeWindow.MORNING:
            return day_start, min(MIDDAY, day_end)
        if self == TimeWindow.AFTERNOON:
            return max(MIDDAY, day_start), day_end
        return day_start, day_end

    @property
    def order(self) -> int:
        """Position of the window in the day."""
        return {TimeWindow.MORNING: 0, TimeWindow.ALL_DAY: 1, TimeWindow.AFTERNOON: 2}[
            self
        ]
