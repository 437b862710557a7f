"""Integration tests for assignment writes against a real database session."""

from datetime import date, datetime, time, timezone
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import select

from install_scheduling.application.services.availability import AvailabilityService
from install_scheduling.application.use_cases.assign_engineer import (
    AssignEngineerUseCase,
    AssignmentRequest,
)
from install_scheduling.domain.exceptions.assignment_error import ConcurrentAssignmentError
from install_scheduling.domain.value_objects.job_status import JobStatus
from install_scheduling.infrastructure.database.models import (
    AdminSettingModel,
    ChecklistItemModel,
    EngineerAvailabilityModel,
    EngineerModel,
    EngineerTimeOffModel,
    EngineerUploadModel,
    EngineerWorkArchiveModel,
    JobModel,
    OrderActivityModel,
)
from install_scheduling.infrastructure.database.repositories import (
    ActivityLogRepository,
    AdminSettingsRepository,
    ChecklistRepository,
    EngineerRepository,
    EngineerWorkArchiveRepository,
    JobRepository,
    TransactionService,
)


@pytest.mark.integration
class TestAssignmentPersistence:
    """Reassignment against sqlite through the real repositories."""

    @pytest_asyncio.fixture
    async def engineers(self, db_session):
        engineer_x = EngineerModel(id=uuid4(), name="Engineer X", starting_postcode="SW1A 1AB")
        engineer_y = EngineerModel(id=uuid4(), name="Engineer Y", starting_postcode="E1 6AN")
        db_session.add_all([engineer_x, engineer_y])
        await db_session.flush()
        return engineer_x, engineer_y

    @pytest_asyncio.fixture
    async def signed_off_job(self, db_session, engineers):
        engineer_x, _ = engineers
        job = JobModel(
            id=uuid4(),
            order_number="ORD-1001",
            client_id=uuid4(),
            postcode="SW1A 1AA",
            status=JobStatus.SCHEDULED.value,
            engineer_id=engineer_x.id,
            scheduled_install_date=date(2025, 1, 10),
            time_window="morning",
            engineer_signed_off_at=datetime(2025, 1, 10, 16, 30, tzinfo=timezone.utc),
            engineer_signature_data="signature",
            engineer_notes="Fitted and tested",
            engineer_status="completed",
            version=1,
        )
        db_session.add(job)
        await db_session.flush()

        db_session.add_all(
            [
                ChecklistItemModel(
                    order_id=job.id,
                    item_id="meter_photo",
                    item_label="Meter photo",
                    is_completed=True,
                    completed_at=datetime(2025, 1, 10, 15, 0, tzinfo=timezone.utc),
                ),
                ChecklistItemModel(
                    order_id=job.id,
                    item_id="handover",
                    item_label="Customer handover",
                    is_completed=True,
                    completed_at=datetime(2025, 1, 10, 16, 0, tzinfo=timezone.utc),
                ),
                EngineerUploadModel(
                    order_id=job.id,
                    engineer_id=engineer_x.id,
                    upload_type="photo",
                    file_name="meter.jpg",
                    file_url="https://files.test/meter.jpg",
                ),
            ]
        )
        await db_session.commit()
        return job

    def _use_case(self, session):
        return AssignEngineerUseCase(
            job_repo=JobRepository(session),
            archive_repo=EngineerWorkArchiveRepository(session),
            checklist_repo=ChecklistRepository(session),
            activity_repo=ActivityLogRepository(session),
            transaction_service=TransactionService(session),
        )

    @pytest.mark.asyncio
    async def test_reassignment_archives_and_resets(self, db_session, engineers, signed_off_job):
        _, engineer_y = engineers

        result = await self._use_case(db_session).execute(
            AssignmentRequest(
                job_id=signed_off_job.id,
                engineer_id=engineer_y.id,
                scheduled_date=date(2025, 1, 15),
                expected_version=1,
            )
        )

        assert result.job.engineer_id == engineer_y.id
        assert result.job.scheduled_date == date(2025, 1, 15)
        assert result.job.engineer_signed_off_at is None
        assert result.job.engineer_notes is None
        assert result.job.version == 2

        archives = (await db_session.execute(select(EngineerWorkArchiveModel))).scalars().all()
        assert len(archives) == 1
        archive = archives[0]
        assert archive.reset_reason == "engineer_changed"
        assert archive.engineer_notes == "Fitted and tested"
        assert archive.engineer_signed_off_at is not None
        assert archive.scheduled_date_before == date(2025, 1, 10)
        assert archive.scheduled_date_after == date(2025, 1, 15)
        assert [upload["file_name"] for upload in archive.uploads] == ["meter.jpg"]

        checklist = await ChecklistRepository(db_session).get_by_job_id(signed_off_job.id)
        assert [item.is_completed for item in checklist] == [False, False]
        assert all(item.completed_at is None for item in checklist)

        activity = (await db_session.execute(select(OrderActivityModel))).scalars().one()
        assert activity.activity_type == "engineer_status_reset"
        assert activity.details["new_engineer"] == str(engineer_y.id)

    @pytest.mark.asyncio
    async def test_stale_version_leaves_job_untouched(
        self, db_session, engineers, signed_off_job
    ):
        _, engineer_y = engineers
        use_case = self._use_case(db_session)

        await use_case.execute(
            AssignmentRequest(
                job_id=signed_off_job.id,
                engineer_id=signed_off_job.engineer_id,
                scheduled_date=date(2025, 1, 10),
                time_window=None,
                internal_notes="Call ahead",
                expected_version=1,
            )
        )

        with pytest.raises(ConcurrentAssignmentError):
            await use_case.execute(
                AssignmentRequest(
                    job_id=signed_off_job.id,
                    engineer_id=engineer_y.id,
                    scheduled_date=date(2025, 1, 15),
                    expected_version=1,
                )
            )

        job = await JobRepository(db_session).get_by_id(signed_off_job.id)
        assert job.engineer_id == signed_off_job.engineer_id
        assert job.engineer_notes == "Fitted and tested"
        assert job.internal_install_notes == "Call ahead"
        assert job.version == 2
        archives = (await db_session.execute(select(EngineerWorkArchiveModel))).scalars().all()
        assert archives == []

    @pytest.mark.asyncio
    async def test_version_checked_in_update_statement(self, db_session, signed_off_job):
        repo = JobRepository(db_session)
        job = await repo.get_by_id(signed_off_job.id)
        job.internal_install_notes = "first writer"
        await repo.update(job, expected_version=1)

        with pytest.raises(ConcurrentAssignmentError):
            await repo.update(job, expected_version=1)


@pytest.mark.integration
class TestSchedulingRepositories:
    """Read paths used by recommendations and conflict detection."""

    @pytest.mark.asyncio
    async def test_engineer_roster_loaded(self, db_session):
        engineer = EngineerModel(id=uuid4(), name="Rostered", starting_postcode="SW1A 1AB")
        db_session.add(engineer)
        await db_session.flush()
        db_session.add_all(
            [
                EngineerAvailabilityModel(
                    engineer_id=engineer.id,
                    day_of_week=0,
                    start_time=time(8, 0),
                    end_time=time(17, 0),
                ),
                EngineerTimeOffModel(
                    engineer_id=engineer.id,
                    start_date=date(2025, 1, 10),
                    end_date=date(2025, 1, 12),
                    status="approved",
                ),
            ]
        )
        await db_session.commit()

        loaded = await EngineerRepository(db_session).get_by_id(engineer.id)

        assert loaded.hours_for(date(2025, 1, 6)).end_time == time(17, 0)
        assert loaded.is_on_time_off(date(2025, 1, 12)) is True

    @pytest.mark.asyncio
    async def test_inverted_hours_row_does_not_break_roster(self, db_session):
        good = EngineerModel(id=uuid4(), name="Good", starting_postcode="SW1A 1AB")
        bad = EngineerModel(id=uuid4(), name="Bad", starting_postcode="SW1A 1AB")
        db_session.add_all([good, bad])
        await db_session.flush()
        db_session.add_all(
            [
                EngineerAvailabilityModel(
                    engineer_id=good.id, day_of_week=0, start_time=time(8, 0), end_time=time(18, 0)
                ),
                EngineerAvailabilityModel(
                    engineer_id=bad.id, day_of_week=0, start_time=time(18, 0), end_time=time(17, 0)
                ),
                EngineerAvailabilityModel(
                    engineer_id=bad.id, day_of_week=1, start_time=time(9, 0), end_time=time(17, 0)
                ),
            ]
        )
        await db_session.commit()

        roster = await EngineerRepository(db_session).find_all()

        by_name = {engineer.name: engineer for engineer in roster}
        assert set(by_name) == {"Good", "Bad"}
        assert by_name["Bad"].hours_for(date(2025, 1, 6)) is None
        assert by_name["Bad"].hours_for(date(2025, 1, 7)).start_time == time(9, 0)
        assert by_name["Good"].hours_for(date(2025, 1, 6)).end_time == time(18, 0)

    @pytest.mark.asyncio
    async def test_workload_counts_exclude_job(self, db_session):
        engineer = EngineerModel(id=uuid4(), name="Counted", starting_postcode="SW1A 1AB")
        db_session.add(engineer)
        await db_session.flush()
        day = date(2025, 1, 15)
        jobs = [
            JobModel(
                id=uuid4(),
                client_id=uuid4(),
                postcode="SW1A 1AA",
                engineer_id=engineer.id,
                scheduled_install_date=day,
            )
            for _ in range(3)
        ]
        db_session.add_all(jobs)
        await db_session.commit()

        availability = AvailabilityService(JobRepository(db_session))

        assert await availability.get_engineer_workload(engineer.id, day) == 3
        assert (
            await availability.get_engineer_workload(engineer.id, day, exclude_job_id=jobs[0].id)
            == 2
        )

    @pytest.mark.asyncio
    async def test_settings_rules_read(self, db_session):
        db_session.add(
            AdminSettingModel(
                setting_key="scheduling_rules", setting_value={"max_distance_miles": 40}
            )
        )
        await db_session.commit()

        rules = await AdminSettingsRepository(db_session).get_rules(
            ["scheduling_rules", "booking_rules"]
        )

        assert rules == {"scheduling_rules": {"max_distance_miles": 40}}
