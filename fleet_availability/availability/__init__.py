from fleet_availability.availability.assignments import AssignmentWriter
from fleet_availability.availability.calendar import CalendarProjector
from fleet_availability.availability.engine import AvailabilityEngine

__all__ = ["AvailabilityEngine", "CalendarProjector", "AssignmentWriter"]
