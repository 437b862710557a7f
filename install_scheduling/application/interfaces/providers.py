"""
Provider interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class DistanceMatrixRequest:
    """Request to a distance provider, postcodes in caller order."""

    origins: List[str]
    destinations: List[str]


@dataclass
class DistanceMatrix:
    """Driving distances (miles) and durations (minutes) per origin/destination."""

    distances: List[List[float]]
    durations: Optional[List[List[float]]] = None
    method: str = "distance_api"

    def distance_at(self, origin_index: int = 0, destination_index: int = 0) -> Optional[float]:
        """Distance cell, or None when the provider left it out."""
        try:
            value = self.distances[origin_index][destination_index]
        except (IndexError, KeyError, TypeError):
            return None
        return value

    def duration_at(self, origin_index: int = 0, destination_index: int = 0) -> Optional[float]:
        """Duration cell, or None when the provider left it out."""
        if not self.durations:
            return None
        try:
            return self.durations[origin_index][destination_index]
        except (IndexError, KeyError, TypeError):
            return None


class DistanceProviderInterface(ABC):
    """Base interface for geocode/distance providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    async def get_distance_matrix(self, request: DistanceMatrixRequest) -> DistanceMatrix:
        """Resolve driving distances between postcodes."""
        pass
