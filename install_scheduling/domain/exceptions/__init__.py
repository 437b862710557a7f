"""
Domain exceptions package.
"""

from .assignment_error import AssignmentError, ConcurrentAssignmentError
from .distance_error import (
    DistanceLookupError,
    DistanceProviderConfigurationError,
    DistanceProviderError,
)
from .not_found_error import EngineerNotFoundError, JobNotFoundError, NotFoundError
from .validation_error import ValidationError

__all__ = [
    "AssignmentError",
    "ConcurrentAssignmentError",
    "DistanceLookupError",
    "DistanceProviderConfigurationError",
    "DistanceProviderError",
    "EngineerNotFoundError",
    "JobNotFoundError",
    "NotFoundError",
    "ValidationError",
]
