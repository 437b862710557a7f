"""
Unit tests for AvailabilityService.
"""

from datetime import date
from uuid import uuid4

import pytest

from install_scheduling.application.services.availability import is_weekend
from install_scheduling.domain.entities.engineer import TimeOff
from install_scheduling.domain.value_objects.scheduling_settings import SchedulingSettings


class TestAvailabilityService:
    """Test cases for AvailabilityService."""

    def test_is_weekend(self):
        assert is_weekend(date(2025, 1, 11)) is True
        assert is_weekend(date(2025, 1, 12)) is True
        assert is_weekend(date(2025, 1, 13)) is False

    def test_availability_flag(self, availability, make_engineer):
        engineer = make_engineer(availability=False)
        assert availability.is_available(engineer, date(2025, 1, 8)) is False

    @pytest.mark.parametrize(
        "day,expected",
        [
            (date(2025, 1, 9), True),
            (date(2025, 1, 10), False),
            (date(2025, 1, 12), False),
            (date(2025, 1, 13), True),
        ],
    )
    def test_time_off_boundaries_inclusive(self, availability, make_engineer, day, expected):
        engineer = make_engineer(
            time_off=[TimeOff(date(2025, 1, 10), date(2025, 1, 12), status="approved")]
        )
        assert availability.is_available(engineer, day) is expected

    def test_rejected_time_off_ignored(self, availability, make_engineer):
        engineer = make_engineer(
            time_off=[TimeOff(date(2025, 1, 10), date(2025, 1, 12), status="rejected")]
        )
        assert availability.is_available(engineer, date(2025, 1, 10)) is True

    def test_is_bookable_day(self, availability, make_engineer, scheduling_settings):
        engineer = make_engineer()
        assert availability.is_bookable_day(engineer, date(2025, 1, 8), scheduling_settings)
        assert not availability.is_bookable_day(engineer, date(2025, 1, 11), scheduling_settings)
        assert not availability.is_bookable_day(engineer, date(2025, 1, 1), scheduling_settings)

    def test_weekend_allowed_still_needs_working_hours(self, availability, make_engineer):
        settings = SchedulingSettings(allow_weekend_bookings=True)
        engineer = make_engineer()
        assert not availability.is_bookable_day(engineer, date(2025, 1, 11), settings)

    @pytest.mark.asyncio
    async def test_workload_passes_exclusion(self, availability, mock_job_repository):
        engineer_id, job_id = uuid4(), uuid4()
        mock_job_repository.count_by_engineer_and_date.return_value = 2

        workload = await availability.get_engineer_workload(
            engineer_id, date(2025, 1, 8), exclude_job_id=job_id
        )

        assert workload == 2
        mock_job_repository.count_by_engineer_and_date.assert_awaited_once_with(
            engineer_id, date(2025, 1, 8), exclude_job_id=job_id
        )

    @pytest.mark.asyncio
    async def test_over_allocated_at_limit(
        self, availability, mock_job_repository, scheduling_settings
    ):
        mock_job_repository.count_by_engineer_and_date.return_value = 3
        assert await availability.is_over_allocated(
            uuid4(), date(2025, 1, 8), scheduling_settings
        )

    @pytest.mark.asyncio
    async def test_earliest_date_skips_full_days(
        self, availability, make_engineer, mock_job_repository, scheduling_settings
    ):
        engineer = make_engineer()
        full_day = date(2025, 1, 8)

        async def count(engineer_id, day, exclude_job_id=None):
            return 3 if day == full_day else 0

        mock_job_repository.count_by_engineer_and_date.side_effect = count

        earliest = await availability.earliest_available_date(
            engineer, date(2025, 1, 6), scheduling_settings
        )

        assert earliest == date(2025, 1, 9)

    @pytest.mark.asyncio
    async def test_earliest_date_starts_from_later_day(
        self, availability, make_engineer, scheduling_settings
    ):
        earliest = await availability.earliest_available_date(
            make_engineer(), date(2025, 1, 20), scheduling_settings
        )
        assert earliest == date(2025, 1, 20)
