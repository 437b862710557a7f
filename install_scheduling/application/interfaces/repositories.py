"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from install_scheduling.domain.entities.checklist_item import ChecklistItem
from install_scheduling.domain.entities.client_blocked_date import ClientBlockedDate
from install_scheduling.domain.entities.engineer import Engineer
from install_scheduling.domain.entities.engineer_work_archive import EngineerWorkArchive
from install_scheduling.domain.entities.job import Job
from install_scheduling.domain.value_objects.reset_reason import ResetReason


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def update(self, job: Job, expected_version: Optional[int] = None) -> Job:
        """
        Persist job fields in a single update and bump its version.

        Raises ConcurrentAssignmentError when expected_version is given and
        no longer matches the stored version.
        """
        pass

    @abstractmethod
    async def find_by_engineer_and_date(self, engineer_id: UUID, day: date) -> List[Job]:
        """Find jobs assigned to an engineer on a day."""
        pass

    @abstractmethod
    async def count_by_engineer_and_date(
        self, engineer_id: UUID, day: date, exclude_job_id: Optional[UUID] = None
    ) -> int:
        """Count jobs assigned to an engineer on a day."""
        pass


class EngineerRepositoryInterface(ABC):
    """Engineer repository interface."""

    @abstractmethod
    async def get_by_id(self, engineer_id: UUID) -> Optional[Engineer]:
        """Get engineer with working hours, time off and service areas."""
        pass

    @abstractmethod
    async def find_all(self) -> List[Engineer]:
        """Find every engineer in a stable order."""
        pass


class ClientBlockedDateRepositoryInterface(ABC):
    """Client blocked date repository interface."""

    @abstractmethod
    async def get_by_client_id(self, client_id: UUID) -> List[ClientBlockedDate]:
        """Get all blocked dates for a client."""
        pass


class ChecklistRepositoryInterface(ABC):
    """Completion checklist repository interface."""

    @abstractmethod
    async def get_by_job_id(self, job_id: UUID) -> List[ChecklistItem]:
        """Get checklist items for a job."""
        pass

    @abstractmethod
    async def reset_for_job(self, job_id: UUID) -> int:
        """Mark every checklist row of a job incomplete; return rows touched."""
        pass


class EngineerWorkArchiveRepositoryInterface(ABC):
    """Engineer work archive repository interface."""

    @abstractmethod
    async def archive_engineer_work(
        self,
        job_id: UUID,
        reset_reason: ResetReason,
        scheduled_date_after: Optional[date] = None,
    ) -> EngineerWorkArchive:
        """Snapshot the job's current engineer-completed work."""
        pass


class ActivityLogRepositoryInterface(ABC):
    """Order activity log repository interface."""

    @abstractmethod
    async def log_activity(
        self,
        job_id: UUID,
        activity_type: str,
        description: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Insert an activity entry."""
        pass


class SchedulingSettingsRepositoryInterface(ABC):
    """Admin settings repository interface."""

    @abstractmethod
    async def get_rules(self, setting_keys: List[str]) -> Dict[str, Dict[str, Any]]:
        """Get stored setting blobs keyed by setting key."""
        pass
