"""
Application interfaces package.
"""

from .providers import DistanceMatrix, DistanceMatrixRequest, DistanceProviderInterface
from .repositories import (
    ActivityLogRepositoryInterface,
    ChecklistRepositoryInterface,
    ClientBlockedDateRepositoryInterface,
    EngineerRepositoryInterface,
    EngineerWorkArchiveRepositoryInterface,
    JobRepositoryInterface,
    SchedulingSettingsRepositoryInterface,
)
from .services import CachedDistance, DistanceCacheInterface

__all__ = [
    "DistanceMatrix",
    "DistanceMatrixRequest",
    "DistanceProviderInterface",
    "ActivityLogRepositoryInterface",
    "ChecklistRepositoryInterface",
    "ClientBlockedDateRepositoryInterface",
    "EngineerRepositoryInterface",
    "EngineerWorkArchiveRepositoryInterface",
    "JobRepositoryInterface",
    "SchedulingSettingsRepositoryInterface",
    "CachedDistance",
    "DistanceCacheInterface",
]
