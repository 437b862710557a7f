"""
Recommendation, engineer and settings API schemas.
"""

from datetime import date, time
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from install_scheduling.application.services.recommendation_engine import (
    EngineerSuggestion,
)


class SchedulingSettingsSchema(BaseModel):
    """Effective scheduling policy."""

    hours_advance_notice: int
    max_distance_miles: float
    max_jobs_per_day: int
    working_hours_start: str
    working_hours_end: str
    allow_weekend_bookings: bool
    allow_holiday_bookings: bool
    require_client_confirmation: bool


class EngineerSummarySchema(BaseModel):
    """Engineer summary schema."""

    id: UUID
    name: str
    email: Optional[str] = None
    starting_postcode: Optional[str] = None
    region: Optional[str] = None


class SuggestionSchema(BaseModel):
    """Ranked engineer suggestion."""

    engineer: EngineerSummarySchema
    distance_miles: float
    travel_minutes: int
    score: float
    reasons: List[str]
    earliest_date: Optional[date] = None
    workload: int
    available: bool

    @classmethod
    def from_suggestion(cls, suggestion: EngineerSuggestion) -> "SuggestionSchema":
        engineer = suggestion.engineer
        return cls(
            engineer=EngineerSummarySchema(
                id=engineer.id,
                name=engineer.name,
                email=engineer.email,
                starting_postcode=engineer.starting_postcode,
                region=engineer.region,
            ),
            distance_miles=suggestion.distance_miles,
            travel_minutes=suggestion.travel_minutes,
            score=suggestion.score,
            reasons=suggestion.reasons,
            earliest_date=suggestion.earliest_date,
            workload=suggestion.workload,
            available=suggestion.available,
        )


class RecommendationsResponse(BaseModel):
    """Ranked suggestions with the policy they were computed under."""

    job_id: UUID
    suggestions: List[SuggestionSchema]
    settings: SchedulingSettingsSchema


class WorkloadResponse(BaseModel):
    """Jobs assigned to an engineer on a day."""

    engineer_id: UUID
    date: date
    workload: int


class WorkingHoursSchema(BaseModel):
    start_time: time
    end_time: time
    is_available: bool


class AvailabilityResponse(BaseModel):
    """Engineer availability on a day."""

    engineer_id: UUID
    date: date
    available: bool
    workload: int
    max_jobs_per_day: int
    over_allocated: bool
    working_hours: Optional[WorkingHoursSchema] = None
    earliest_available_date: Optional[date] = None


class DistanceResponse(BaseModel):
    """Resolved distance between two postcodes."""

    origin: str
    destination: str
    distance_miles: float
    travel_minutes: int
    method: str
    cached: bool


class CacheClearResponse(BaseModel):
    """Distance cache clear result."""

    removed_entries: int
