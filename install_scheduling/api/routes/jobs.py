"""Job scheduling API endpoints."""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query

from install_scheduling.api.dependencies import (
    AssignEngineerDep,
    DetectConflictsDep,
    RecommendEngineersDep,
)
from install_scheduling.api.schemas.job import (
    AssignmentResponse,
    AssignmentUpdateRequest,
    ConflictSchema,
    ConflictsResponse,
    JobResponse,
)
from install_scheduling.api.schemas.scheduling import (
    RecommendationsResponse,
    SchedulingSettingsSchema,
    SuggestionSchema,
)
from install_scheduling.application.use_cases.assign_engineer import (
    AssignmentRequest,
    AssignmentResult,
)
from install_scheduling.config.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


def _assignment_response(result: AssignmentResult) -> AssignmentResponse:
    return AssignmentResponse(
        job=JobResponse.from_entity(result.job),
        reset_reason=result.reset.reset_reason.value if result.reset else None,
        engineer_work_archived=result.engineer_work_archived,
    )


@router.get("/{job_id}/recommendations", response_model=RecommendationsResponse)
async def get_recommendations(
    job_id: UUID,
    use_case: RecommendEngineersDep,
    target_date: Optional[date] = Query(None, alias="date"),
):
    """Rank engineers for a job by travel distance."""
    result = await use_case.execute(job_id, target_date=target_date)

    logger.info(
        "Recommendations served",
        job_id=str(job_id),
        suggestions=len(result.suggestions),
    )

    return RecommendationsResponse(
        job_id=job_id,
        suggestions=[SuggestionSchema.from_suggestion(s) for s in result.suggestions],
        settings=SchedulingSettingsSchema(**result.settings.model_dump()),
    )


@router.get("/{job_id}/conflicts", response_model=ConflictsResponse)
async def get_conflicts(job_id: UUID, use_case: DetectConflictsDep):
    """Recompute advisory conflicts for a job's current assignment."""
    result = await use_case.execute(job_id)
    return ConflictsResponse(
        job_id=job_id,
        conflicts=[ConflictSchema(**conflict.to_dict()) for conflict in result.conflicts],
        has_high_severity=result.has_high_severity,
    )


@router.put("/{job_id}/assignment", response_model=AssignmentResponse)
async def update_assignment(
    job_id: UUID,
    payload: AssignmentUpdateRequest,
    use_case: AssignEngineerDep,
):
    """Set or change the engineer and date for a job."""
    result = await use_case.execute(
        AssignmentRequest(
            job_id=job_id,
            engineer_id=payload.engineer_id,
            scheduled_date=payload.scheduled_date,
            time_window=payload.time_window,
            estimated_duration_hours=payload.estimated_duration_hours,
            internal_notes=payload.internal_notes,
            postcode=payload.postcode,
            expected_version=payload.expected_version,
        )
    )
    return _assignment_response(result)


@router.delete("/{job_id}/assignment", response_model=AssignmentResponse)
async def clear_assignment(
    job_id: UUID,
    use_case: AssignEngineerDep,
    expected_version: Optional[int] = Query(None, ge=1),
):
    """Remove the engineer, date and booking details from a job."""
    result = await use_case.clear_assignment(job_id, expected_version=expected_version)
    return _assignment_response(result)
