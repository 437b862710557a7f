"""
Application services package.
"""

from .availability import AvailabilityService
from .conflict_detector import ConflictDetector
from .distance_cache import DistanceCache, InMemoryDistanceCache, RedisDistanceCache
from .distance_service import DistanceResult, DistanceService
from .recommendation_engine import (
    EngineerRecommendationEngine,
    EngineerSuggestion,
    RecommendationResult,
)
from .settings_provider import SchedulingSettingsProvider

__all__ = [
    "AvailabilityService",
    "ConflictDetector",
    "DistanceCache",
    "InMemoryDistanceCache",
    "RedisDistanceCache",
    "DistanceResult",
    "DistanceService",
    "EngineerRecommendationEngine",
    "EngineerSuggestion",
    "RecommendationResult",
    "SchedulingSettingsProvider",
]
