"""
Lookup-related domain exceptions.
"""

from uuid import UUID


class NotFoundError(Exception):
    """Base exception for missing records."""

    pass


class JobNotFoundError(NotFoundError):
    """Raised when a job does not exist."""

    def __init__(self, job_id: UUID):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class EngineerNotFoundError(NotFoundError):
    """Raised when an engineer does not exist."""

    def __init__(self, engineer_id: UUID):
        self.engineer_id = engineer_id
        super().__init__(f"Engineer {engineer_id} not found")
