"""
FastAPI dependency injection container.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from install_scheduling.application.services.availability import AvailabilityService
from install_scheduling.application.services.conflict_detector import ConflictDetector
from install_scheduling.application.services.distance_service import DistanceService
from install_scheduling.application.services.recommendation_engine import (
    EngineerRecommendationEngine,
)
from install_scheduling.application.services.settings_provider import (
    SchedulingSettingsProvider,
)
from install_scheduling.application.use_cases.assign_engineer import AssignEngineerUseCase
from install_scheduling.application.use_cases.detect_conflicts import (
    DetectConflictsUseCase,
)
from install_scheduling.application.use_cases.engineer_schedule import (
    EngineerScheduleUseCase,
)
from install_scheduling.application.use_cases.recommend_engineers import (
    RecommendEngineersUseCase,
)
from install_scheduling.config.database import get_db_session
from install_scheduling.config.logging import get_logger
from install_scheduling.config.settings import settings
from install_scheduling.domain.exceptions.distance_error import (
    DistanceProviderConfigurationError,
)
from install_scheduling.infrastructure.database.repositories.activity_log_repository import (
    ActivityLogRepository,
)
from install_scheduling.infrastructure.database.repositories.admin_settings_repository import (
    AdminSettingsRepository,
)
from install_scheduling.infrastructure.database.repositories.checklist_repository import (
    ChecklistRepository,
)
from install_scheduling.infrastructure.database.repositories.client_blocked_date_repository import (
    ClientBlockedDateRepository,
)
from install_scheduling.infrastructure.database.repositories.engineer_repository import (
    EngineerRepository,
)
from install_scheduling.infrastructure.database.repositories.engineer_work_archive_repository import (
    EngineerWorkArchiveRepository,
)
from install_scheduling.infrastructure.database.repositories.job_repository import (
    JobRepository,
)
from install_scheduling.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from install_scheduling.infrastructure.monitoring.health_checks import HealthChecker

logger = get_logger(__name__)


# Database Dependencies
async def get_job_repository(
    db: AsyncSession = Depends(get_db_session),
) -> JobRepository:
    """Get job repository instance."""
    return JobRepository(db)


async def get_engineer_repository(
    db: AsyncSession = Depends(get_db_session),
) -> EngineerRepository:
    """Get engineer repository instance."""
    return EngineerRepository(db)


async def get_blocked_date_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ClientBlockedDateRepository:
    return ClientBlockedDateRepository(db)


async def get_checklist_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ChecklistRepository:
    return ChecklistRepository(db)


async def get_archive_repository(
    db: AsyncSession = Depends(get_db_session),
) -> EngineerWorkArchiveRepository:
    return EngineerWorkArchiveRepository(db)


async def get_activity_repository(
    db: AsyncSession = Depends(get_db_session),
) -> ActivityLogRepository:
    return ActivityLogRepository(db)


async def get_settings_repository(
    db: AsyncSession = Depends(get_db_session),
) -> AdminSettingsRepository:
    return AdminSettingsRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service bound to the request session."""
    return TransactionService(db)


# Service Dependencies
def get_distance_service(request: Request) -> DistanceService:
    """
    Get the process-wide distance service.

    The provider is built once at startup; a provider that could not be
    configured surfaces here as a provider error on first use.
    """
    service = getattr(request.app.state, "distance_service", None)
    if service is None:
        error = getattr(request.app.state, "distance_provider_error", None)
        raise error or DistanceProviderConfigurationError("Distance provider not configured")
    return service


def get_health_checker(request: Request) -> HealthChecker:
    return request.app.state.health_checker


async def get_settings_provider(
    settings_repo: AdminSettingsRepository = Depends(get_settings_repository),
) -> SchedulingSettingsProvider:
    return SchedulingSettingsProvider(settings_repo)


async def get_availability_service(
    job_repo: JobRepository = Depends(get_job_repository),
) -> AvailabilityService:
    return AvailabilityService(
        job_repo,
        bank_holidays=settings.BANK_HOLIDAYS,
        search_days=settings.SCHEDULING_SEARCH_DAYS,
    )


async def get_recommendation_engine(
    distance_service: DistanceService = Depends(get_distance_service),
    settings_provider: SchedulingSettingsProvider = Depends(get_settings_provider),
    availability: AvailabilityService = Depends(get_availability_service),
) -> EngineerRecommendationEngine:
    """Get recommendation engine instance."""
    return EngineerRecommendationEngine(distance_service, settings_provider, availability)


async def get_conflict_detector(
    job_repo: JobRepository = Depends(get_job_repository),
    engineer_repo: EngineerRepository = Depends(get_engineer_repository),
    blocked_date_repo: ClientBlockedDateRepository = Depends(get_blocked_date_repository),
    distance_service: DistanceService = Depends(get_distance_service),
    settings_provider: SchedulingSettingsProvider = Depends(get_settings_provider),
    availability: AvailabilityService = Depends(get_availability_service),
) -> ConflictDetector:
    """Get conflict detector instance."""
    return ConflictDetector(
        job_repo,
        engineer_repo,
        blocked_date_repo,
        distance_service,
        settings_provider,
        availability,
    )


# Use Case Dependencies
async def get_recommend_engineers_use_case(
    job_repo: JobRepository = Depends(get_job_repository),
    engineer_repo: EngineerRepository = Depends(get_engineer_repository),
    engine: EngineerRecommendationEngine = Depends(get_recommendation_engine),
) -> RecommendEngineersUseCase:
    return RecommendEngineersUseCase(job_repo, engineer_repo, engine)


async def get_detect_conflicts_use_case(
    detector: ConflictDetector = Depends(get_conflict_detector),
) -> DetectConflictsUseCase:
    return DetectConflictsUseCase(detector)


async def get_assign_engineer_use_case(
    job_repo: JobRepository = Depends(get_job_repository),
    archive_repo: EngineerWorkArchiveRepository = Depends(get_archive_repository),
    checklist_repo: ChecklistRepository = Depends(get_checklist_repository),
    activity_repo: ActivityLogRepository = Depends(get_activity_repository),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> AssignEngineerUseCase:
    return AssignEngineerUseCase(
        job_repo, archive_repo, checklist_repo, activity_repo, transaction_service
    )


async def get_engineer_schedule_use_case(
    engineer_repo: EngineerRepository = Depends(get_engineer_repository),
    availability: AvailabilityService = Depends(get_availability_service),
    settings_provider: SchedulingSettingsProvider = Depends(get_settings_provider),
) -> EngineerScheduleUseCase:
    return EngineerScheduleUseCase(engineer_repo, availability, settings_provider)


# Type aliases for cleaner dependency injection
DistanceServiceDep = Annotated[DistanceService, Depends(get_distance_service)]
HealthCheckerDep = Annotated[HealthChecker, Depends(get_health_checker)]
SettingsProviderDep = Annotated[SchedulingSettingsProvider, Depends(get_settings_provider)]
RecommendEngineersDep = Annotated[
    RecommendEngineersUseCase, Depends(get_recommend_engineers_use_case)
]
DetectConflictsDep = Annotated[DetectConflictsUseCase, Depends(get_detect_conflicts_use_case)]
AssignEngineerDep = Annotated[AssignEngineerUseCase, Depends(get_assign_engineer_use_case)]
EngineerScheduleDep = Annotated[
    EngineerScheduleUseCase, Depends(get_engineer_schedule_use_case)
]
