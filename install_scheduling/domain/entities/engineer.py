"""
Engineer domain entity.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from install_scheduling.domain.value_objects.postcode import Postcode, normalize_postcode


@dataclass(frozen=True)
class WorkingHours:
    """Working hours for one day of the week (0 = Monday)."""

    day_of_week: int
    start_time: time
    end_time: time
    is_available: bool = True

    def __post_init__(self):
        if not 0 <= self.day_of_week <= 6:
            raise ValueError("day_of_week must be between 0 (Monday) and 6 (Sunday)")
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")


@dataclass(frozen=True)
class TimeOff:
    """Time-off request covering an inclusive date range."""

    start_date: date
    end_date: date
    status: str = "pending"  # pending, approved, rejected
    reason: Optional[str] = None

    @property
    def is_approved(self) -> bool:
        return self.status == "approved"

    def covers(self, day: date) -> bool:
        """Inclusive of both boundaries."""
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class ServiceArea:
    """Postcode area an engineer services, with a preferred travel limit."""

    postcode_area: str
    max_travel_time_minutes: Optional[int] = None

    def matches(self, postcode: str) -> bool:
        normalized = normalize_postcode(postcode)
        if not normalized:
            return False
        area = normalize_postcode(self.postcode_area)
        parsed = Postcode(normalized)
        return area in (parsed.outward_code, parsed.area)


@dataclass
class Engineer:
    """Installation engineer."""

    name: str
    starting_postcode: Optional[str]
    id: UUID = field(default_factory=uuid4)
    email: Optional[str] = None
    availability: bool = True
    region: Optional[str] = None
    working_hours: List[WorkingHours] = field(default_factory=list)
    time_off: List[TimeOff] = field(default_factory=list)
    service_areas: List[ServiceArea] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate engineer data."""
        if not self.name or not self.name.strip():
            raise ValueError("Engineer name is required")
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    def hours_for(self, day: date) -> Optional[WorkingHours]:
        """Working hours entry for the weekday of the given date."""
        for entry in self.working_hours:
            if entry.day_of_week == day.weekday():
                return entry
        return None

    def is_on_time_off(self, day: date) -> bool:
        """Check if an approved time-off interval covers the date."""
        return any(entry.is_approved and entry.covers(day) for entry in self.time_off)

    def is_available_on(self, day: date) -> bool:
        """General availability flag and no approved time off on the date."""
        return self.availability and not self.is_on_time_off(day)

    def service_area_for(self, postcode: str) -> Optional[ServiceArea]:
        """Service area covering the postcode, if any."""
        for area in self.service_areas:
            if area.matches(postcode):
                return area
        return None

    def covers_region(self, postcode: str) -> bool:
        """Check if the region tag mentions the postcode's outward code."""
        normalized = normalize_postcode(postcode)
        if not self.region or not normalized:
            return False
        return Postcode(normalized).outward_code.lower() in self.region.lower()

    def to_dict(self) -> dict:
        """Convert engineer to dictionary."""
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "starting_postcode": self.starting_postcode,
            "availability": self.availability,
            "region": self.region,
        }
