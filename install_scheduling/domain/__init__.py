"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "ChecklistItem",
    "ClientBlockedDate",
    "Engineer",
    "EngineerWorkArchive",
    "Job",
    # Events
    "EngineerWorkReset",
    # Exceptions
    "AssignmentError",
    "ConcurrentAssignmentError",
    "DistanceLookupError",
    "JobNotFoundError",
    "ValidationError",
    # Value Objects
    "JobStatus",
    "SchedulingConflict",
    "SchedulingSettings",
    "TimeWindow",
]
