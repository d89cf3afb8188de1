"""Conflict query/result value objects and the unified blocking record."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fleet_availability.schemas.resource_schema import ResourceType
from fleet_availability.schemas.schedule_schema import ScheduleEntry, UnavailabilityPeriod
from fleet_availability.utils import format_time_range, to_utc


class ConflictKind(str, Enum):
    """Which source a blocking record came from."""
    BOOKING = "booking"
    UNAVAILABILITY = "unavailability"


class ConflictRecord(BaseModel):
    """
    A blocking interval on a resource, tagged by its source.

    Schedule entries and unavailability periods are both projected into
    this shape so overlap checks and messages are written once.
    """
    kind: ConflictKind
    id: str
    resource_id: str
    resource_type: ResourceType
    start: datetime
    end: datetime
    label: str
    reason: Optional[str] = None
    booking_reference_id: Optional[str] = None

    @classmethod
    def from_schedule(cls, entry: ScheduleEntry) -> "ConflictRecord":
        return cls(
            kind=ConflictKind.BOOKING,
            id=entry.id,
            resource_id=entry.resource_id,
            resource_type=entry.resource_type,
            start=entry.start_at,
            end=entry.end_at,
            label=f"Booking #{entry.booking_reference_id}",
            booking_reference_id=entry.booking_reference_id,
        )

    @classmethod
    def from_unavailability(cls, period: UnavailabilityPeriod) -> "ConflictRecord":
        return cls(
            kind=ConflictKind.UNAVAILABILITY,
            id=period.id,
            resource_id=period.resource_id,
            resource_type=period.resource_type,
            start=period.start_at,
            end=period.end_at,
            label=f"Unavailable ({period.reason})",
            reason=period.reason,
        )

    def describe(self) -> str:
        """Short human label, e.g. ``Booking #1234 (14:00-15:30)``."""
        return f"{self.label} ({format_time_range(self.start, self.end)})"


class ConflictQuery(BaseModel):
    """Input to the conflict engine. Never persisted."""
    resource_id: str
    resource_type: ResourceType
    vendor_id: str
    start_at: datetime
    end_at: datetime

    @field_validator("start_at", "end_at", mode="before")
    @classmethod
    def coerce_utc(cls, value):
        return to_utc(value)


class ConflictResult(BaseModel):
    """Availability decision plus every record that blocks it."""
    available: bool
    conflicts: list[ConflictRecord] = Field(default_factory=list)


class ResourceAvailability(BaseModel):
    """Per-resource availability row used when choosing assignments."""
    resource_id: str
    resource_type: ResourceType
    display_name: str
    available: bool
    conflicts: list[ConflictRecord] = Field(default_factory=list)
