"""
API schemas for the Install Scheduling Service.
"""

from .common import ErrorResponse
from .job import (
    AssignmentResponse,
    AssignmentUpdateRequest,
    ConflictSchema,
    ConflictsResponse,
    JobResponse,
)
from .scheduling import (
    AvailabilityResponse,
    CacheClearResponse,
    DistanceResponse,
    RecommendationsResponse,
    SchedulingSettingsSchema,
    SuggestionSchema,
    WorkloadResponse,
)

__all__ = [
    "ErrorResponse",
    "AssignmentResponse",
    "AssignmentUpdateRequest",
    "ConflictSchema",
    "ConflictsResponse",
    "JobResponse",
    "AvailabilityResponse",
    "CacheClearResponse",
    "DistanceResponse",
    "RecommendationsResponse",
    "SchedulingSettingsSchema",
    "SuggestionSchema",
    "WorkloadResponse",
]
