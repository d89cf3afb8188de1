"""
Calendar projector: flattens bookings and blackouts into display events.

Display only. A missing event in a visible range says nothing about
availability; AvailabilityEngine looks beyond any range.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fleet_availability.config import settings
from fleet_availability.logging_context import get_request_logger
from fleet_availability.overlap import validate_window
from fleet_availability.schemas.calendar_schema import CalendarEvent, CalendarEventKind
from fleet_availability.schemas.schedule_schema import ScheduleEntry, UnavailabilityPeriod
from fleet_availability.stores.base import guarded_read
from fleet_availability.utils import DateTimeLike

if TYPE_CHECKING:
    from fleet_availability.stores.resources import ResourceRegistry
    from fleet_availability.stores.schedules import ScheduleStore
    from fleet_availability.stores.unavailability import UnavailabilityStore

logger = get_request_logger(__name__)


class CalendarProjector:
    """Builds CalendarEvent lists for a vendor and date range."""

    def __init__(
        self,
        registry: ResourceRegistry,
        schedules: ScheduleStore,
        unavailability: UnavailabilityStore,
    ) -> None:
        self._registry = registry
        self._schedules = schedules
        self._unavailability = unavailability

    async def project(
        self, vendor_id: str, range_start: DateTimeLike, range_end: DateTimeLike
    ) -> list[CalendarEvent]:
        """Booking events followed by blackout events, each in start order."""
        start, end = validate_window(range_start, range_end)

        entries = await guarded_read(
            self._schedules.get_vendor_schedules(vendor_id, start, end),
            "vendor schedules",
        )
        periods = await guarded_read(
            self._unavailability.get_vendor_unavailability(vendor_id, start, end),
            "vendor unavailability",
        )

        events: list[CalendarEvent] = []
        for entry in entries:
            events.append(await self._booking_event(entry))
        for period in periods:
            events.append(await self._blackout_event(period))

        logger.debug(
            "Projected %d booking and %d blackout event(s) for vendor %s",
            len(entries), len(periods), vendor_id,
        )
        return events

    async def _booking_event(self, entry: ScheduleEntry) -> CalendarEvent:
        name = await self._registry.display_name(entry.resource_id, entry.resource_type)
        return CalendarEvent(
            id=entry.id,
            title=f"Booking #{entry.booking_reference_id} - {name}",
            start=entry.start_at,
            end=entry.end_at,
            resource_id=entry.resource_id,
            resource_type=entry.resource_type,
            kind=CalendarEventKind.BOOKING,
            color=settings.calendar.booking_color,
            details={
                "booking_number": entry.booking_reference_id,
                "status": entry.status.value,
            },
        )

    async def _blackout_event(self, period: UnavailabilityPeriod) -> CalendarEvent:
        name = await self._registry.display_name(period.resource_id, period.resource_type)
        return CalendarEvent(
            id=period.id,
            title=f"{name} - {period.reason}",
            start=period.start_at,
            end=period.end_at,
            resource_id=period.resource_id,
            resource_type=period.resource_type,
            kind=CalendarEventKind.UNAVAILABLE,
            color=settings.calendar.unavailable_color,
            details={"reason": period.reason, "notes": period.notes},
        )
