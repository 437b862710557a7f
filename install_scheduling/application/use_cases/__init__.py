"""
Use cases package.

This package contains the scheduling use cases that orchestrate
the application services and repositories.
"""

from .assign_engineer import AssignEngineerUseCase, AssignmentRequest, AssignmentResult
from .detect_conflicts import DetectConflictsResult, DetectConflictsUseCase
from .engineer_schedule import EngineerDayAvailability, EngineerScheduleUseCase
from .recommend_engineers import RecommendEngineersUseCase

__all__ = [
    "AssignEngineerUseCase",
    "AssignmentRequest",
    "AssignmentResult",
    "DetectConflictsResult",
    "DetectConflictsUseCase",
    "EngineerDayAvailability",
    "EngineerScheduleUseCase",
    "RecommendEngineersUseCase",
]
