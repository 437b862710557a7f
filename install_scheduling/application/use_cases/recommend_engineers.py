"""Recommend engineers use case."""

from datetime import date
from typing import Optional
from uuid import UUID

from install_scheduling.application.interfaces.repositories import (
    EngineerRepositoryInterface,
    JobRepositoryInterface,
)
from install_scheduling.application.services.recommendation_engine import (
    EngineerRecommendationEngine,
    RecommendationResult,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.exceptions.not_found_error import JobNotFoundError

logger = get_logger(__name__)


class RecommendEngineersUseCase:
    """Use case for ranking every engineer against a job."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        engineer_repo: EngineerRepositoryInterface,
        engine: EngineerRecommendationEngine,
    ):
        self.job_repo = job_repo
        self.engineer_repo = engineer_repo
        self.engine = engine

    async def execute(
        self, job_id: UUID, target_date: Optional[date] = None
    ) -> RecommendationResult:
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise JobNotFoundError(job_id)

        candidates = await self.engineer_repo.find_all()
        logger.debug(
            "Recommending engineers", job_id=str(job_id), candidates=len(candidates)
        )
        return await self.engine.recommend(job, candidates, target_date=target_date)
