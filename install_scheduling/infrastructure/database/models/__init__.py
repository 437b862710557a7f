"""
Database models package.
"""

from .base import Base, BaseModel
from .engineer import (
    EngineerAvailabilityModel,
    EngineerModel,
    EngineerServiceAreaModel,
    EngineerTimeOffModel,
)
from .job import JobModel
from .scheduling import (
    AdminSettingModel,
    ChecklistItemModel,
    ClientBlockedDateModel,
    EngineerUploadModel,
    EngineerWorkArchiveModel,
    OrderActivityModel,
)

__all__ = [
    "Base",
    "BaseModel",
    "AdminSettingModel",
    "ChecklistItemModel",
    "ClientBlockedDateModel",
    "EngineerAvailabilityModel",
    "EngineerModel",
    "EngineerServiceAreaModel",
    "EngineerTimeOffModel",
    "EngineerUploadModel",
    "EngineerWorkArchiveModel",
    "JobModel",
    "OrderActivityModel",
]
