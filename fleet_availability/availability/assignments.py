"""
Assignment write path: binds a vehicle and a driver to an accepted booking.

The availability check and the insert happen under the same per-resource
locks, so two acceptances racing for one resource cannot both commit.
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from fleet_availability.config import settings
from fleet_availability.errors import AssignmentNotFoundError, ResourceConflictError
from fleet_availability.logging_context import get_request_logger
from fleet_availability.overlap import validate_window
from fleet_availability.schemas.resource_schema import ResourceType
from fleet_availability.schemas.schedule_schema import ScheduleEntry, ScheduleStatus
from fleet_availability.utils import DateTimeLike, to_utc

if TYPE_CHECKING:
    from fleet_availability.availability.engine import AvailabilityEngine
    from fleet_availability.stores.locks import ResourceLockManager
    from fleet_availability.stores.schedules import ScheduleStore

logger = get_request_logger(__name__)


class AssignmentWriter:
    """Creates and retires schedule entries for booking assignments."""

    def __init__(
        self,
        engine: AvailabilityEngine,
        schedules: ScheduleStore,
        locks: ResourceLockManager,
    ) -> None:
        self._engine = engine
        self._schedules = schedules
        self._locks = locks

    async def accept_assignment(
        self,
        vendor_id: str,
        booking_reference_id: str,
        pickup_at: DateTimeLike,
        vehicle_id: str,
        driver_id: str,
        duration: Optional[timedelta] = None,
    ) -> list[ScheduleEntry]:
        """Accept a booking with one vehicle and one driver.

        The window runs from pickup for ``duration`` (default: the configured
        trip estimate).

        Raises:
            InvalidWindowError: duration is not positive.
            ResourceNotOwnedError: either resource belongs to another vendor.
            ResourceConflictError: either resource is blocked; nothing is written.
        """
        start = to_utc(pickup_at)
        trip = duration if duration is not None else timedelta(
            minutes=settings.availability.default_trip_minutes
        )
        start, end = validate_window(start, start + trip)

        resources = [(ResourceType.VEHICLE, vehicle_id), (ResourceType.DRIVER, driver_id)]
        for kind, resource_id in resources:
            await self._engine.require_owned(vendor_id, resource_id, kind)

        async with self._locks.hold(*resources):
            conflicts = []
            for kind, resource_id in resources:
                conflicts.extend(
                    await self._engine.get_conflicts(resource_id, kind, start, end)
                )
            if conflicts:
                logger.warning(
                    "Booking %s not accepted: %d conflict(s)",
                    booking_reference_id, len(conflicts),
                )
                raise ResourceConflictError(conflicts)

            entries = [
                ScheduleEntry(
                    id=f"SE-{uuid.uuid4().hex[:8].upper()}",
                    resource_id=resource_id,
                    resource_type=kind,
                    vendor_id=vendor_id,
                    start_at=start,
                    end_at=end,
                    booking_reference_id=booking_reference_id,
                    status=ScheduleStatus.ACCEPTED,
                )
                for kind, resource_id in resources
            ]
            await self._insert_all(entries)

        logger.info(
            "Booking %s accepted with vehicle %s and driver %s",
            booking_reference_id, vehicle_id, driver_id,
        )
        return entries

    async def complete_assignment(
        self, booking_reference_id: str, vendor_id: str
    ) -> list[ScheduleEntry]:
        """Mark a booking's live entries completed."""
        return await self._transition(
            booking_reference_id, vendor_id, ScheduleStatus.COMPLETED
        )

    async def release_assignment(
        self, booking_reference_id: str, vendor_id: str
    ) -> list[ScheduleEntry]:
        """Reject a booking's live entries, freeing its resources."""
        return await self._transition(
            booking_reference_id, vendor_id, ScheduleStatus.REJECTED
        )

    async def _transition(
        self, booking_reference_id: str, vendor_id: str, status: ScheduleStatus
    ) -> list[ScheduleEntry]:
        entries = [
            e for e in await self._schedules.get_booking_entries(booking_reference_id, vendor_id)
            if e.status is not ScheduleStatus.REJECTED
        ]
        if not entries:
            raise AssignmentNotFoundError(booking_reference_id)
        updated = [await self._schedules.set_status(e.id, status) for e in entries]
        logger.info("Booking %s entries now %s", booking_reference_id, status.value)
        return updated

    async def _insert_all(self, entries: list[ScheduleEntry]) -> None:
        """Insert entries all-or-nothing, undoing earlier inserts on failure."""
        written: list[ScheduleEntry] = []
        try:
            for entry in entries:
                written.append(await self._schedules.add(entry))
        except Exception:
            for entry in written:
                await self._schedules.remove(entry.id)
            raise
