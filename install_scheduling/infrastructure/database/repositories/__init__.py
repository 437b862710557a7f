"""
Database repositories package.
"""

from .activity_log_repository import ActivityLogRepository
from .admin_settings_repository import AdminSettingsRepository
from .checklist_repository import ChecklistRepository
from .client_blocked_date_repository import ClientBlockedDateRepository
from .engineer_repository import EngineerRepository
from .engineer_work_archive_repository import EngineerWorkArchiveRepository
from .job_repository import JobRepository
from .transaction_repository import TransactionService

__all__ = [
    "ActivityLogRepository",
    "AdminSettingsRepository",
    "ChecklistRepository",
    "ClientBlockedDateRepository",
    "EngineerRepository",
    "EngineerWorkArchiveRepository",
    "JobRepository",
    "TransactionService",
]
