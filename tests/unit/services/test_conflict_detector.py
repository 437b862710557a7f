"""
Unit tests for ConflictDetector.
"""

from datetime import date, time
from uuid import uuid4

import pytest

from install_scheduling.application.services.conflict_detector import ConflictDetector
from install_scheduling.domain.entities.client_blocked_date import ClientBlockedDate
from install_scheduling.domain.entities.engineer import TimeOff, WorkingHours
from install_scheduling.domain.exceptions.not_found_error import JobNotFoundError
from install_scheduling.domain.value_objects.conflict import ConflictSeverity, ConflictType
from install_scheduling.domain.value_objects.time_window import TimeWindow

# Wednesday
BOOKED_DAY = date(2025, 1, 15)


class TestConflictDetector:
    """Test cases for ConflictDetector."""

    @pytest.fixture
    def detector(
        self,
        mock_job_repository,
        mock_engineer_repository,
        mock_blocked_date_repository,
        distance_service,
        mock_settings_provider,
        availability,
    ):
        return ConflictDetector(
            mock_job_repository,
            mock_engineer_repository,
            mock_blocked_date_repository,
            distance_service,
            mock_settings_provider,
            availability,
        )

    @pytest.fixture
    def engineer(self, make_engineer, mock_engineer_repository):
        engineer = make_engineer()
        mock_engineer_repository.get_by_id.return_value = engineer
        return engineer

    @pytest.fixture
    def assign(self, make_job, mock_job_repository, engineer):
        """Build a job booked with the engineer and make it the job under test."""

        def _assign(day=BOOKED_DAY, **kwargs):
            job = make_job(engineer_id=engineer.id, scheduled_date=day, **kwargs)
            mock_job_repository.get_by_id.return_value = job
            return job

        return _assign

    def _types(self, conflicts):
        return [(c.type, c.severity) for c in conflicts]

    @pytest.mark.asyncio
    async def test_missing_job_raises(self, detector, mock_job_repository):
        mock_job_repository.get_by_id.return_value = None

        with pytest.raises(JobNotFoundError):
            await detector.detect_conflicts(uuid4())

    @pytest.mark.asyncio
    async def test_unassigned_job_has_no_conflicts(
        self, detector, make_job, mock_job_repository
    ):
        job = make_job(scheduled_date=BOOKED_DAY)
        mock_job_repository.get_by_id.return_value = job

        assert await detector.detect_conflicts(job.id) == []
        mock_job_repository.find_by_engineer_and_date.assert_not_called()

    @pytest.mark.asyncio
    async def test_clean_assignment(self, detector, assign):
        job = assign(time_window=TimeWindow.MORNING)

        assert await detector.detect_conflicts(job.id) == []

    @pytest.mark.asyncio
    async def test_double_booking(
        self, detector, assign, make_job, engineer, mock_job_repository
    ):
        job = assign()
        other = make_job(
            "SW1A 1AB",
            engineer_id=engineer.id,
            scheduled_date=BOOKED_DAY,
            time_window=TimeWindow.AFTERNOON,
            order_number="ORD-2",
        )
        mock_job_repository.find_by_engineer_and_date.return_value = [job, other]
        mock_job_repository.count_by_engineer_and_date.return_value = 1

        conflicts = await detector.detect_conflicts(job.id)

        assert self._types(conflicts) == [(ConflictType.DOUBLE_BOOKING, ConflictSeverity.HIGH)]
        assert "ORD-2" in conflicts[0].message

    @pytest.mark.asyncio
    async def test_morning_and_afternoon_do_not_double_book(
        self, detector, assign, make_job, engineer, mock_job_repository
    ):
        job = assign(time_window=TimeWindow.MORNING)
        other = make_job(
            "SW1A 1AA",
            engineer_id=engineer.id,
            scheduled_date=BOOKED_DAY,
            time_window=TimeWindow.AFTERNOON,
        )
        mock_job_repository.find_by_engineer_and_date.return_value = [other]
        mock_job_repository.count_by_engineer_and_date.return_value = 1

        assert await detector.detect_conflicts(job.id) == []

    @pytest.mark.asyncio
    async def test_client_blocked_date(self, detector, assign, mock_blocked_date_repository):
        job = assign()
        mock_blocked_date_repository.get_by_client_id.return_value = [
            ClientBlockedDate(job.client_id, BOOKED_DAY, reason="away")
        ]

        conflicts = await detector.detect_conflicts(job.id)

        assert self._types(conflicts) == [(ConflictType.CLIENT_BLOCKED, ConflictSeverity.HIGH)]
        assert conflicts[0].message.endswith("away")

    @pytest.mark.asyncio
    async def test_engineer_on_time_off(self, detector, assign, engineer):
        engineer.time_off.append(TimeOff(BOOKED_DAY, BOOKED_DAY, status="approved"))
        job = assign()

        conflicts = await detector.detect_conflicts(job.id)

        assert self._types(conflicts) == [(ConflictType.OUTSIDE_HOURS, ConflictSeverity.HIGH)]

    @pytest.mark.asyncio
    async def test_pending_time_off_is_ignored(self, detector, assign, engineer):
        engineer.time_off.append(TimeOff(BOOKED_DAY, BOOKED_DAY, status="pending"))
        job = assign()

        assert await detector.detect_conflicts(job.id) == []

    @pytest.mark.asyncio
    async def test_weekend_booking(self, detector, assign):
        job = assign(day=date(2025, 1, 18))

        conflicts = await detector.detect_conflicts(job.id)

        assert self._types(conflicts) == [
            (ConflictType.OUTSIDE_HOURS, ConflictSeverity.MEDIUM),
            (ConflictType.OUTSIDE_HOURS, ConflictSeverity.LOW),
        ]

    @pytest.mark.asyncio
    async def test_bank_holiday_booking(self, detector, assign):
        job = assign(day=date(2025, 1, 1))

        conflicts = await detector.detect_conflicts(job.id)

        assert (ConflictType.OUTSIDE_HOURS, ConflictSeverity.LOW) in self._types(conflicts)
        assert any("holiday" in c.message for c in conflicts)

    @pytest.mark.asyncio
    async def test_job_longer_than_window(self, detector, assign):
        job = assign(time_window=TimeWindow.MORNING, estimated_duration_hours=5)

        conflicts = await detector.detect_conflicts(job.id)

        assert self._types(conflicts) == [(ConflictType.OUTSIDE_HOURS, ConflictSeverity.MEDIUM)]
        assert "5h" in conflicts[0].message

    @pytest.mark.asyncio
    async def test_engineer_hours_outside_company_hours(self, detector, assign, engineer):
        engineer.working_hours[2] = WorkingHours(2, time(6, 0), time(20, 0))
        job = assign()

        conflicts = await detector.detect_conflicts(job.id)

        assert self._types(conflicts) == [(ConflictType.OUTSIDE_HOURS, ConflictSeverity.MEDIUM)]
        assert "outside company hours" in conflicts[0].message

    @pytest.mark.asyncio
    async def test_over_allocation(self, detector, assign, mock_job_repository):
        job = assign()
        mock_job_repository.count_by_engineer_and_date.return_value = 3

        conflicts = await detector.detect_conflicts(job.id)

        assert self._types(conflicts) == [(ConflictType.OUTSIDE_HOURS, ConflictSeverity.LOW)]
        assert "4 jobs" in conflicts[0].message

    @pytest.mark.asyncio
    async def test_filling_last_slot_is_not_over_allocation(
        self, detector, assign, mock_job_repository
    ):
        job = assign()
        mock_job_repository.count_by_engineer_and_date.return_value = 2

        conflicts = await detector.detect_conflicts(job.id)

        assert conflicts == []
        mock_job_repository.count_by_engineer_and_date.assert_any_await(
            job.engineer_id, job.scheduled_date, exclude_job_id=job.id
        )

    @pytest.mark.asyncio
    async def test_tight_travel_between_windows(
        self, detector, assign, make_job, engineer, fake_provider, mock_job_repository
    ):
        job = assign(time_window=TimeWindow.MORNING, estimated_duration_hours=4)
        other = make_job(
            "M1 1AE",
            engineer_id=engineer.id,
            scheduled_date=BOOKED_DAY,
            time_window=TimeWindow.AFTERNOON,
            estimated_duration_hours=4,
        )
        mock_job_repository.find_by_engineer_and_date.return_value = [job, other]
        mock_job_repository.count_by_engineer_and_date.return_value = 1
        fake_provider.add("SW1A 1AA", "M1 1AE", 200.0)

        conflicts = await detector.detect_conflicts(job.id)

        # 08:00 + 4h = 12:00 finish, 18:00 - 4h = 14:00 latest start
        assert self._types(conflicts) == [
            (ConflictType.TRAVEL_CONFLICT, ConflictSeverity.MEDIUM)
        ]
        assert "400 minutes" in conflicts[0].message

    @pytest.mark.asyncio
    async def test_overlapping_jobs_are_high_travel_conflict(
        self, detector, assign, make_job, engineer, fake_provider, mock_job_repository
    ):
        job = assign(time_window=TimeWindow.AFTERNOON, estimated_duration_hours=6)
        other = make_job(
            "E1 6AN",
            engineer_id=engineer.id,
            scheduled_date=BOOKED_DAY,
            time_window=TimeWindow.MORNING,
            estimated_duration_hours=6,
        )
        mock_job_repository.find_by_engineer_and_date.return_value = [other]
        mock_job_repository.count_by_engineer_and_date.return_value = 1
        fake_provider.add("SW1A 1AA", "E1 6AN", 3.0)

        conflicts = await detector.detect_conflicts(job.id)

        assert (ConflictType.TRAVEL_CONFLICT, ConflictSeverity.HIGH) in self._types(conflicts)

    @pytest.mark.asyncio
    async def test_short_hop_has_no_travel_conflict(
        self, detector, assign, make_job, engineer, fake_provider, mock_job_repository
    ):
        job = assign(time_window=TimeWindow.MORNING)
        other = make_job(
            "E1 6AN",
            engineer_id=engineer.id,
            scheduled_date=BOOKED_DAY,
            time_window=TimeWindow.AFTERNOON,
        )
        mock_job_repository.find_by_engineer_and_date.return_value = [other]
        mock_job_repository.count_by_engineer_and_date.return_value = 1
        fake_provider.add("SW1A 1AA", "E1 6AN", 3.0)

        assert await detector.detect_conflicts(job.id) == []

    @pytest.mark.asyncio
    async def test_distance_failure_skips_travel_check(
        self, detector, assign, make_job, engineer, fake_provider, mock_job_repository
    ):
        job = assign(time_window=TimeWindow.MORNING)
        other = make_job(
            "E1 6AN",
            engineer_id=engineer.id,
            scheduled_date=BOOKED_DAY,
            time_window=TimeWindow.AFTERNOON,
        )
        mock_job_repository.find_by_engineer_and_date.return_value = [other]
        mock_job_repository.count_by_engineer_and_date.return_value = 1
        fake_provider.fail = True

        assert await detector.detect_conflicts(job.id) == []
