"""Engineer workload and availability endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query

from install_scheduling.api.dependencies import EngineerScheduleDep
from install_scheduling.api.schemas.scheduling import (
    AvailabilityResponse,
    WorkingHoursSchema,
    WorkloadResponse,
)

router = APIRouter(prefix="/engineers", tags=["engineers"])


@router.get("/{engineer_id}/workload", response_model=WorkloadResponse)
async def get_workload(
    engineer_id: UUID,
    use_case: EngineerScheduleDep,
    day: date = Query(..., alias="date"),
):
    """Count jobs assigned to the engineer on a day."""
    workload = await use_case.get_workload(engineer_id, day)
    return WorkloadResponse(engineer_id=engineer_id, date=day, workload=workload)


@router.get("/{engineer_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    engineer_id: UUID,
    use_case: EngineerScheduleDep,
    day: date = Query(..., alias="date"),
):
    result = await use_case.get_availability(engineer_id, day)
    hours = result.working_hours
    return AvailabilityResponse(
        engineer_id=engineer_id,
        date=day,
        available=result.available,
        workload=result.workload,
        max_jobs_per_day=result.max_jobs_per_day,
        over_allocated=result.over_allocated,
        working_hours=WorkingHoursSchema(
            start_time=hours.start_time,
            end_time=hours.end_time,
            is_available=hours.is_available,
        )
        if hours
        else None,
        earliest_available_date=result.earliest_available_date,
    )
