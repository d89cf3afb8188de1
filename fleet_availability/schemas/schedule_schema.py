"""Schedule entries and unavailability periods: the two blocking record types."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from fleet_availability.schemas.resource_schema import ResourceType
from fleet_availability.utils import to_utc


class ScheduleStatus(str, Enum):
    """Lifecycle of an assignment binding a resource to a booking."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    REJECTED = "rejected"


class _Window(BaseModel):
    """Shared half-open [start_at, end_at) window with UTC normalization."""
    start_at: datetime
    end_at: datetime

    @field_validator("start_at", "end_at", mode="before")
    @classmethod
    def coerce_utc(cls, value):
        return to_utc(value)

    @model_validator(mode="after")
    def check_order(self):
        if self.start_at >= self.end_at:
            raise ValueError("start_at must be before end_at")
        return self


class ScheduleEntry(_Window):
    """
    A resource bound to a booking for a time window.

    Written by the assignment workflow; read-only to conflict detection.
    """
    id: str
    resource_id: str
    resource_type: ResourceType
    vendor_id: str
    booking_reference_id: str
    status: ScheduleStatus = ScheduleStatus.ACCEPTED


class UnavailabilityPeriod(_Window):
    """Vendor-declared blackout for a resource (maintenance, leave, etc.)."""
    id: str
    resource_id: str
    resource_type: ResourceType
    vendor_id: str
    reason: str
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
