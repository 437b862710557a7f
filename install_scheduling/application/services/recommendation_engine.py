"""
Engineer recommendation engine for installation jobs.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from install_scheduling.application.services.availability import AvailabilityService
from install_scheduling.application.services.distance_service import (
    DistanceResult,
    DistanceService,
)
from install_scheduling.application.services.settings_provider import (
    SchedulingSettingsProvider,
)
from install_scheduling.config.logging import get_logger
from install_scheduling.domain.entities.engineer import Engineer
from install_scheduling.domain.entities.job import Job
from install_scheduling.domain.exceptions.distance_error import DistanceLookupError
from install_scheduling.domain.value_objects.scheduling_settings import SchedulingSettings
from install_scheduling.infrastructure.monitoring.metrics import (
    record_recommendation_candidate,
)

logger = get_logger(__name__)

BASE_SCORE = 100.0
PENALTY_PER_MILE = 0.5
MAX_DISTANCE_PENALTY = 30.0
SCORE_FLOOR = 10.0

VERY_CLOSE_MILES = 10
REASONABLE_MILES = 25


def score_for_distance(distance_miles: float) -> float:
    """100 minus a capped distance penalty, never below the floor."""
    penalty = min(distance_miles * PENALTY_PER_MILE, MAX_DISTANCE_PENALTY)
    return max(BASE_SCORE - penalty, SCORE_FLOOR)


def distance_reason(distance_miles: float) -> str:
    if distance_miles <= VERY_CLOSE_MILES:
        return "very close location"
    if distance_miles <= REASONABLE_MILES:
        return "reasonable distance"
    return "longer travel required"


@dataclass
class EngineerSuggestion:
    """Ranked candidate for a job."""

    engineer: Engineer
    distance_miles: float
    travel_minutes: int
    score: float
    reasons: List[str] = field(default_factory=list)
    earliest_date: Optional[date] = None
    workload: int = 0
    available: bool = True
    distance_method: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "engineer": self.engineer.to_dict(),
            "distance_miles": self.distance_miles,
            "travel_minutes": self.travel_minutes,
            "score": self.score,
            "reasons": list(self.reasons),
            "earliest_date": self.earliest_date.isoformat() if self.earliest_date else None,
            "workload": self.workload,
            "available": self.available,
            "distance_method": self.distance_method,
        }


@dataclass
class RecommendationResult:
    """Ranked suggestions with the settings they were computed under."""

    suggestions: List[EngineerSuggestion]
    settings: SchedulingSettings


class EngineerRecommendationEngine:
    """Ranks candidate engineers for a job by travel distance."""

    def __init__(
        self,
        distance_service: DistanceService,
        settings_provider: SchedulingSettingsProvider,
        availability: AvailabilityService,
        clock: Callable[[], datetime] = None,
    ):
        self.distance_service = distance_service
        self.settings_provider = settings_provider
        self.availability = availability
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.logger = logger

    async def recommend(
        self,
        job: Job,
        candidates: List[Engineer],
        target_date: Optional[date] = None,
    ) -> RecommendationResult:
        """
        Rank candidates for the job.

        Args:
            job: Job to staff; needs a usable postcode
            candidates: Engineers to consider, in enumeration order
            target_date: Day used for workload/availability annotations
                and as the start of the earliest-date search

        Returns:
            RecommendationResult with suggestions sorted by score (stable)
            and the effective settings
        """
        settings = await self.settings_provider.get_settings()

        destination = job.destination_postcode
        if not destination:
            self.logger.warning(
                "Job has no usable postcode, no recommendations",
                job_id=str(job.id),
            )
            return RecommendationResult(suggestions=[], settings=settings)

        day = target_date or job.scheduled_date or self.clock().date()

        # provider lookups run concurrently; database reads below stay sequential
        distances = await asyncio.gather(
            *[self._resolve_distance(job, destination, engineer) for engineer in candidates]
        )

        suggestions = []
        for engineer, result in zip(candidates, distances):
            if result is None:
                continue
            suggestion = await self._evaluate(job, destination, engineer, result, day, settings)
            if suggestion is not None:
                suggestions.append(suggestion)

        # sort is stable, equal scores keep candidate order
        suggestions.sort(key=lambda s: s.score, reverse=True)

        self.logger.info(
            "Engineer recommendations computed",
            job_id=str(job.id),
            candidates=len(candidates),
            suggestions=len(suggestions),
            top_score=suggestions[0].score if suggestions else None,
        )
        return RecommendationResult(suggestions=suggestions, settings=settings)

    async def _resolve_distance(
        self, job: Job, destination: str, engineer: Engineer
    ) -> Optional[DistanceResult]:
        if not engineer.starting_postcode:
            record_recommendation_candidate("skipped")
            self.logger.debug(
                "Engineer has no starting postcode", engineer_id=str(engineer.id)
            )
            return None

        try:
            result = await self.distance_service.lookup(
                engineer.starting_postcode, destination
            )
        except DistanceLookupError as e:
            record_recommendation_candidate("skipped")
            self.logger.warning(
                "Skipping engineer, distance lookup failed",
                job_id=str(job.id),
                engineer_id=str(engineer.id),
                error=str(e),
            )
            return None

        return result

    async def _evaluate(
        self,
        job: Job,
        destination: str,
        engineer: Engineer,
        result: DistanceResult,
        day: date,
        settings: SchedulingSettings,
    ) -> Optional[EngineerSuggestion]:
        if result.distance_miles > settings.max_distance_miles:
            record_recommendation_candidate("too_far")
            return None

        reasons = [distance_reason(result.distance_miles)]
        if engineer.covers_region(destination):
            reasons.append("same region coverage")

        area = engineer.service_area_for(destination)
        if area:
            reasons.append(f"covers {area.postcode_area} service area")
            if (
                area.max_travel_time_minutes is not None
                and result.travel_minutes > area.max_travel_time_minutes
            ):
                reasons.append(
                    f"travel exceeds preferred {area.max_travel_time_minutes} minutes"
                )

        available = self.availability.is_available(engineer, day)
        workload = await self.availability.get_engineer_workload(
            engineer.id, day, exclude_job_id=job.id
        )
        if not available:
            reasons.append("not available")
        elif workload == 0:
            reasons.append("free schedule")
        elif workload < settings.max_jobs_per_day:
            reasons.append("light schedule")
        else:
            reasons.append("busy schedule")

        earliest = await self.availability.earliest_available_date(
            engineer, day, settings, exclude_job_id=job.id
        )

        record_recommendation_candidate("ranked")
        return EngineerSuggestion(
            engineer=engineer,
            distance_miles=result.distance_miles,
            travel_minutes=result.travel_minutes,
            score=score_for_distance(result.distance_miles),
            reasons=reasons,
            earliest_date=earliest,
            workload=workload,
            available=available,
            distance_method=result.method,
        )
