"""
Mapbox data models and unit conversions.
"""

from dataclasses import dataclass
from typing import List, Optional

METERS_PER_MILE = 1609.34


def meters_to_miles(meters: Optional[float]) -> Optional[float]:
    """Metres to miles rounded to one decimal; None for unreachable cells."""
    if meters is None:
        return None
    return round(meters / METERS_PER_MILE, 1)


def seconds_to_minutes(seconds: Optional[float]) -> Optional[float]:
    if seconds is None:
        return None
    return float(round(seconds / 60))


@dataclass(frozen=True)
class Coordinates:
    """Longitude/latitude pair as Mapbox expects it."""

    longitude: float
    latitude: float

    def as_param(self) -> str:
        return f"{self.longitude},{self.latitude}"


@dataclass
class MapboxRoute:
    """Single driving route from the Directions API."""

    distance_meters: float
    duration_seconds: float


@dataclass
class MapboxMatrix:
    """Directions Matrix API result, metres and seconds."""

    distances: List[List[Optional[float]]]
    durations: List[List[Optional[float]]]
