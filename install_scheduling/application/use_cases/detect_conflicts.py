"""Detect conflicts use case."""

from dataclasses import dataclass
from typing import List
from uuid import UUID

from install_scheduling.application.services.conflict_detector import ConflictDetector
from install_scheduling.domain.value_objects.conflict import (
    ConflictSeverity,
    SchedulingConflict,
)


@dataclass
class DetectConflictsResult:
    """Conflicts recomputed for a job."""

    job_id: UUID
    conflicts: List[SchedulingConflict]

    @property
    def has_high_severity(self) -> bool:
        return any(c.severity == ConflictSeverity.HIGH for c in self.conflicts)


class DetectConflictsUseCase:
    """Use case for recomputing a job's scheduling conflicts."""

    def __init__(self, detector: ConflictDetector):
        self.detector = detector

    async def execute(self, job_id: UUID) -> DetectConflictsResult:
        conflicts = await self.detector.detect_conflicts(job_id)
        return DetectConflictsResult(job_id=job_id, conflicts=conflicts)
