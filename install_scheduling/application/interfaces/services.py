"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CachedDistance:
    """Immutable distance cache entry."""

    distance_miles: float
    duration_minutes: Optional[float]
    method: str
    cached_at: datetime

    def to_dict(self) -> dict:
        return {
            "distance_miles": self.distance_miles,
            "duration_minutes": self.duration_minutes,
            "method": self.method,
            "cached_at": self.cached_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CachedDistance":
        return cls(
            distance_miles=float(data["distance_miles"]),
            duration_minutes=data.get("duration_minutes"),
            method=data["method"],
            cached_at=datetime.fromisoformat(data["cached_at"]),
        )


class DistanceCacheInterface(ABC):
    """Interface for distance cache backends. Entries are replaced wholesale."""

    @abstractmethod
    async def get(self, key: str) -> Optional[CachedDistance]:
        """Get an entry regardless of age."""
        pass

    @abstractmethod
    async def set(self, key: str, entry: CachedDistance) -> None:
        """Store or replace an entry."""
        pass

    @abstractmethod
    async def clear(self) -> int:
        """Remove every entry and return how many were removed."""
        pass
