"""
Domain entities package.
"""

from .checklist_item import ChecklistItem
from .client_blocked_date import ClientBlockedDate
from .engineer import Engineer, ServiceArea, TimeOff, WorkingHours
from .engineer_work_archive import EngineerWorkArchive
from .job import Job

__all__ = [
    "ChecklistItem",
    "ClientBlockedDate",
    "Engineer",
    "EngineerWorkArchive",
    "Job",
    "ServiceArea",
    "TimeOff",
    "WorkingHours",
]
