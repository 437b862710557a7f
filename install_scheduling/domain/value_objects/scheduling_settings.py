"""
Scheduling policy value object.
"""

from datetime import time
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator, model_validator


class SchedulingSettings(BaseModel):
    """Tunable scheduling policy, validated when loaded from storage."""

    hours_advance_notice: int = Field(48, ge=0)
    max_distance_miles: float = Field(90, gt=0)
    max_jobs_per_day: int = Field(3, ge=1)
    working_hours_start: str = "08:00"
    working_hours_end: str = "18:00"
    allow_weekend_bookings: bool = False
    allow_holiday_bookings: bool = False
    require_client_confirmation: bool = True

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("working_hours_start", "working_hours_end")
    @classmethod
    def validate_clock_time(cls, v: str) -> str:
        try:
            parsed = time.fromisoformat(v)
        except (TypeError, ValueError):
            raise ValueError(f"Working hours must be HH:MM, got {v!r}")
        return parsed.strftime("%H:%M")

    @model_validator(mode="after")
    def validate_working_day(self) -> "SchedulingSettings":
        if self.day_start >= self.day_end:
            raise ValueError("working_hours_start must be before working_hours_end")
        return self

    @property
    def day_start(self) -> time:
        return time.fromisoformat(self.working_hours_start)

    @property
    def day_end(self) -> time:
        return time.fromisoformat(self.working_hours_end)

    @classmethod
    def from_rules(
        cls, scheduling_rules: Dict[str, Any], booking_rules: Dict[str, Any]
    ) -> "SchedulingSettings":
        """Build settings from the stored rule blobs, ignoring null values."""
        merged = {
            key: value
            for key, value in {**(scheduling_rules or {}), **(booking_rules or {})}.items()
            if value is not None
        }
        return cls.model_validate(merged)


DEFAULT_SCHEDULING_SETTINGS = SchedulingSettings()
