"""
Domain value objects package.
"""

from .conflict import ConflictSeverity, ConflictType, SchedulingConflict
from .job_status import JobStatus
from .postcode import Postcode, normalize_postcode
from .reset_reason import ResetReason
from .scheduling_settings import DEFAULT_SCHEDULING_SETTINGS, SchedulingSettings
from .time_window import TimeWindow

__all__ = [
    "ConflictSeverity",
    "ConflictType",
    "DEFAULT_SCHEDULING_SETTINGS",
    "JobStatus",
    "Postcode",
    "ResetReason",
    "SchedulingConflict",
    "SchedulingSettings",
    "TimeWindow",
    "normalize_postcode",
]
