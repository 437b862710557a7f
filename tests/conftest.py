"""
Pytest configuration and fixtures.
"""

from datetime import date, datetime, time, timezone
from typing import AsyncGenerator, Dict, FrozenSet, Optional
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from install_scheduling.application.interfaces.providers import (
    DistanceMatrix,
    DistanceMatrixRequest,
    DistanceProviderInterface,
)
from install_scheduling.application.interfaces.repositories import (
    ActivityLogRepositoryInterface,
    ChecklistRepositoryInterface,
    ClientBlockedDateRepositoryInterface,
    EngineerRepositoryInterface,
    EngineerWorkArchiveRepositoryInterface,
    JobRepositoryInterface,
    SchedulingSettingsRepositoryInterface,
)
from install_scheduling.application.services.availability import AvailabilityService
from install_scheduling.application.services.distance_cache import DistanceCache
from install_scheduling.application.services.distance_service import DistanceService
from install_scheduling.config.settings import Settings
from install_scheduling.domain.entities.engineer import Engineer, WorkingHours
from install_scheduling.domain.entities.job import Job
from install_scheduling.domain.exceptions.distance_error import DistanceProviderError
from install_scheduling.domain.value_objects.postcode import normalize_postcode
from install_scheduling.domain.value_objects.scheduling_settings import SchedulingSettings
from install_scheduling.infrastructure.database.models import Base

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Monday
NOW = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)


class FakeDistanceProvider(DistanceProviderInterface):
    """Distance provider answering from a fixed table of postcode pairs."""

    def __init__(self, distances: Optional[Dict[FrozenSet[str], float]] = None):
        self.distances = distances or {}
        self.calls = []
        self.fail = False

    @property
    def name(self) -> str:
        return "fake"

    def add(self, postcode_a: str, postcode_b: str, miles: float) -> None:
        key = frozenset({normalize_postcode(postcode_a), normalize_postcode(postcode_b)})
        self.distances[key] = miles

    async def get_distance_matrix(self, request: DistanceMatrixRequest) -> DistanceMatrix:
        self.calls.append(request)
        if self.fail:
            raise DistanceProviderError("provider unavailable")

        origin, destination = request.origins[0], request.destinations[0]
        miles = self.distances.get(frozenset({origin, destination}))
        if miles is None:
            raise DistanceProviderError(f"no route between {origin} and {destination}")
        return DistanceMatrix(distances=[[miles]], method="fake")


class FakeTransactionService:
    """Runs operations inline and counts commits."""

    def __init__(self):
        self.committed = []
        self.rolled_back = []
        self.fail_on = None

    async def execute_in_transaction(self, operation, name: str = "operation"):
        try:
            if self.fail_on == name:
                raise RuntimeError(f"{name} failed")
            result = await operation()
        except Exception:
            self.rolled_back.append(name)
            raise
        self.committed.append(name)
        return result


class FakeClock:
    """Settable clock."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(scope="session")
def test_settings():
    """Test settings configuration."""
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL=TEST_DATABASE_URL,
        REDIS_URL="redis://localhost:6379/1",
        DISTANCE_PROVIDER="mapbox",
        MAPBOX_ACCESS_TOKEN="test-token",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENABLE_ADMIN_ROUTES=True,
    )


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def weekday_hours():
    """Monday to Friday, 08:00-18:00."""
    return [WorkingHours(day, time(8, 0), time(18, 0)) for day in range(5)]


@pytest.fixture
def make_engineer(weekday_hours):
    """Factory for engineers working weekdays."""

    def _make(name="Alex Engineer", postcode="SW1A 1AB", **kwargs):
        kwargs.setdefault("working_hours", list(weekday_hours))
        return Engineer(name=name, starting_postcode=postcode, **kwargs)

    return _make


@pytest.fixture
def make_job():
    """Factory for installation jobs."""

    def _make(postcode="SW1A 1AA", **kwargs):
        kwargs.setdefault("client_id", uuid4())
        return Job(postcode=postcode, **kwargs)

    return _make


@pytest.fixture
def scheduling_settings():
    return SchedulingSettings()


@pytest.fixture
def fake_provider():
    return FakeDistanceProvider()


@pytest.fixture
def distance_cache(clock):
    return DistanceCache(clock=clock)


@pytest.fixture
def distance_service(fake_provider, distance_cache):
    return DistanceService(fake_provider, distance_cache)


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)

    mock_repo.get_by_id = AsyncMock()
    mock_repo.update = AsyncMock()
    mock_repo.find_by_engineer_and_date = AsyncMock(return_value=[])
    mock_repo.count_by_engineer_and_date = AsyncMock(return_value=0)

    return mock_repo


@pytest.fixture
def mock_engineer_repository():
    """Mock engineer repository."""
    mock_repo = AsyncMock(spec=EngineerRepositoryInterface)

    mock_repo.get_by_id = AsyncMock()
    mock_repo.find_all = AsyncMock(return_value=[])

    return mock_repo


@pytest.fixture
def mock_blocked_date_repository():
    mock_repo = AsyncMock(spec=ClientBlockedDateRepositoryInterface)
    mock_repo.get_by_client_id = AsyncMock(return_value=[])
    return mock_repo


@pytest.fixture
def mock_checklist_repository():
    mock_repo = AsyncMock(spec=ChecklistRepositoryInterface)
    mock_repo.reset_for_job = AsyncMock(return_value=0)
    return mock_repo


@pytest.fixture
def mock_archive_repository():
    mock_repo = AsyncMock(spec=EngineerWorkArchiveRepositoryInterface)
    mock_repo.archive_engineer_work = AsyncMock()
    return mock_repo


@pytest.fixture
def mock_activity_repository():
    mock_repo = AsyncMock(spec=ActivityLogRepositoryInterface)
    mock_repo.log_activity = AsyncMock()
    return mock_repo


@pytest.fixture
def mock_settings_repository():
    """Settings repository holding no stored rules."""
    mock_repo = AsyncMock(spec=SchedulingSettingsRepositoryInterface)
    mock_repo.get_rules = AsyncMock(return_value={})
    return mock_repo


@pytest.fixture
def mock_settings_provider(scheduling_settings):
    """Settings provider returning fixed settings."""
    provider = AsyncMock()
    provider.get_settings = AsyncMock(return_value=scheduling_settings)
    return provider


@pytest.fixture
def availability(mock_job_repository, clock):
    return AvailabilityService(
        mock_job_repository,
        bank_holidays=[date(2025, 1, 1), date(2025, 12, 25)],
        clock=clock,
    )


@pytest.fixture
def transaction_service():
    return FakeTransactionService()
