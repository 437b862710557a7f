"""
Assignment-related domain exceptions.
"""

from typing import Optional
from uuid import UUID


class AssignmentError(Exception):
    """Raised when an engineer/date change could not be applied to a job."""

    def __init__(self, job_id: UUID, reason: Optional[str] = None):
        self.job_id = job_id
        self.reason = reason
        message = "Failed to update installation details"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConcurrentAssignmentError(AssignmentError):
    """Raised when the job changed since the caller read it."""

    def __init__(self, job_id: UUID, expected_version: int, actual_version: Optional[int]):
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            job_id,
            f"job {job_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})",
        )
