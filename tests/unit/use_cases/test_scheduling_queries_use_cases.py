"""
Unit tests for the read-side scheduling use cases.
"""

from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from install_scheduling.application.services.recommendation_engine import (
    RecommendationResult,
)
from install_scheduling.application.use_cases.detect_conflicts import DetectConflictsUseCase
from install_scheduling.application.use_cases.engineer_schedule import (
    EngineerScheduleUseCase,
)
from install_scheduling.application.use_cases.recommend_engineers import (
    RecommendEngineersUseCase,
)
from install_scheduling.domain.exceptions.not_found_error import (
    EngineerNotFoundError,
    JobNotFoundError,
)
from install_scheduling.domain.value_objects.conflict import (
    ConflictSeverity,
    ConflictType,
    SchedulingConflict,
)


class TestRecommendEngineersUseCase:
    """Test cases for RecommendEngineersUseCase."""

    @pytest.mark.asyncio
    async def test_passes_every_engineer_to_engine(
        self,
        make_job,
        make_engineer,
        mock_job_repository,
        mock_engineer_repository,
        scheduling_settings,
    ):
        job = make_job()
        engineers = [make_engineer("One"), make_engineer("Two")]
        mock_job_repository.get_by_id.return_value = job
        mock_engineer_repository.find_all.return_value = engineers
        engine = AsyncMock()
        engine.recommend = AsyncMock(
            return_value=RecommendationResult(suggestions=[], settings=scheduling_settings)
        )
        use_case = RecommendEngineersUseCase(
            mock_job_repository, mock_engineer_repository, engine
        )

        await use_case.execute(job.id, target_date=date(2025, 1, 15))

        engine.recommend.assert_awaited_once_with(job, engineers, target_date=date(2025, 1, 15))

    @pytest.mark.asyncio
    async def test_missing_job(self, mock_job_repository, mock_engineer_repository):
        mock_job_repository.get_by_id.return_value = None
        use_case = RecommendEngineersUseCase(
            mock_job_repository, mock_engineer_repository, AsyncMock()
        )

        with pytest.raises(JobNotFoundError):
            await use_case.execute(uuid4())


class TestDetectConflictsUseCase:
    """Test cases for DetectConflictsUseCase."""

    @pytest.mark.asyncio
    async def test_flags_high_severity(self):
        detector = AsyncMock()
        detector.detect_conflicts = AsyncMock(
            return_value=[
                SchedulingConflict(ConflictType.OUTSIDE_HOURS, ConflictSeverity.LOW, "weekend"),
                SchedulingConflict(ConflictType.CLIENT_BLOCKED, ConflictSeverity.HIGH, "away"),
            ]
        )
        job_id = uuid4()

        result = await DetectConflictsUseCase(detector).execute(job_id)

        assert result.job_id == job_id
        assert len(result.conflicts) == 2
        assert result.has_high_severity is True


class TestEngineerScheduleUseCase:
    """Test cases for EngineerScheduleUseCase."""

    @pytest.fixture
    def use_case(self, mock_engineer_repository, availability, mock_settings_provider):
        return EngineerScheduleUseCase(
            mock_engineer_repository, availability, mock_settings_provider
        )

    @pytest.mark.asyncio
    async def test_availability_summary(
        self, use_case, make_engineer, mock_engineer_repository, mock_job_repository
    ):
        engineer = make_engineer()
        mock_engineer_repository.get_by_id.return_value = engineer
        mock_job_repository.count_by_engineer_and_date.return_value = 3

        result = await use_case.get_availability(engineer.id, date(2025, 1, 15))

        assert result.available is True
        assert result.workload == 3
        assert result.over_allocated is True
        assert result.working_hours.day_of_week == 2

    @pytest.mark.asyncio
    async def test_unknown_engineer(self, use_case, mock_engineer_repository):
        mock_engineer_repository.get_by_id.return_value = None

        with pytest.raises(EngineerNotFoundError):
            await use_case.get_workload(uuid4(), date(2025, 1, 15))
