"""Calendar projection models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from fleet_availability.schemas.resource_schema import ResourceType


class CalendarEventKind(str, Enum):
    BOOKING = "booking"
    UNAVAILABLE = "unavailable"


class CalendarEvent(BaseModel):
    """Display-only event. Recomputed on every read, never persisted."""
    id: str
    title: str
    start: datetime
    end: datetime
    resource_id: str
    resource_type: ResourceType
    kind: CalendarEventKind
    color: str
    details: dict[str, Any] = Field(default_factory=dict)
