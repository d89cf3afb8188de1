from fleet_availability.schemas.availability_schema import (
    ConflictKind,
    ConflictQuery,
    ConflictRecord,
    ConflictResult,
    ResourceAvailability,
)
from fleet_availability.schemas.calendar_schema import CalendarEvent, CalendarEventKind
from fleet_availability.schemas.resource_schema import (
    Driver,
    Resource,
    ResourceType,
    Vehicle,
    VendorResources,
)
from fleet_availability.schemas.schedule_schema import (
    ScheduleEntry,
    ScheduleStatus,
    UnavailabilityPeriod,
)

__all__ = [
    "ConflictKind", "ConflictQuery", "ConflictRecord", "ConflictResult",
    "ResourceAvailability", "CalendarEvent", "CalendarEventKind",
    "Driver", "Resource", "ResourceType", "Vehicle", "VendorResources",
    "ScheduleEntry", "ScheduleStatus", "UnavailabilityPeriod",
]
