"""
Vendor-facing availability actions.

These are the entry points the vendor portal calls: view resources and the
calendar, check a slot, mark a resource unavailable, remove a blackout, and
accept a booking with a vehicle and driver. Each returns an ActionResult
and is the one place domain errors become user-facing messages.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, Optional, Union

from pydantic import BaseModel, ValidationError

from fleet_availability.errors import (
    AssignmentNotFoundError,
    InvalidWindowError,
    ResourceConflictError,
    ResourceNotOwnedError,
    StorageError,
    UnavailabilityNotFoundError,
)
from fleet_availability.logging_context import get_request_logger, vendor_request
from fleet_availability.messages import (
    build_assignment_message,
    build_blackout_message,
    build_conflict_message,
)
from fleet_availability.schemas.availability_schema import ConflictQuery
from fleet_availability.schemas.resource_schema import ResourceType
from fleet_availability.utils import DateTimeLike, format_time_range

if TYPE_CHECKING:
    from fleet_availability.availability.assignments import AssignmentWriter
    from fleet_availability.availability.calendar import CalendarProjector
    from fleet_availability.availability.engine import AvailabilityEngine
    from fleet_availability.stores.resources import ResourceRegistry
    from fleet_availability.stores.unavailability import UnavailabilityStore

logger = get_request_logger(__name__)


class ActionResult(BaseModel):
    """Outcome of a vendor action, ready to show in the portal."""
    success: bool
    message: str
    data: Any = None


def _label(resource_type: Union[ResourceType, str]) -> str:
    return ResourceType(resource_type).value.capitalize()


class VendorAvailabilityActions:
    """Caller-facing facade over the registry, engine, stores, and writer."""

    def __init__(
        self,
        registry: ResourceRegistry,
        engine: AvailabilityEngine,
        unavailability: UnavailabilityStore,
        projector: CalendarProjector,
        writer: AssignmentWriter,
    ) -> None:
        self._registry = registry
        self._engine = engine
        self._unavailability = unavailability
        self._projector = projector
        self._writer = writer

    # ------------------------------------------------------------------ #
    # Read flows
    # ------------------------------------------------------------------ #

    @vendor_request
    async def get_vendor_resources(self, vendor_id: str) -> ActionResult:
        try:
            resources = await self._registry.list_resources(vendor_id)
        except StorageError as exc:
            return self._storage_failure(exc)
        return ActionResult(
            success=True,
            message=(
                f"{len(resources.vehicles)} vehicle(s) and "
                f"{len(resources.drivers)} driver(s)."
            ),
            data=resources,
        )

    @vendor_request
    async def get_calendar_events(
        self, vendor_id: str, range_start: DateTimeLike, range_end: DateTimeLike
    ) -> ActionResult:
        try:
            events = await self._projector.project(vendor_id, range_start, range_end)
        except InvalidWindowError as exc:
            return ActionResult(success=False, message=str(exc))
        except StorageError as exc:
            return self._storage_failure(exc)
        except ValueError as exc:
            return self._invalid_input(exc)
        return ActionResult(success=True, message=f"{len(events)} event(s).", data=events)

    @vendor_request
    async def check_resource_availability(
        self,
        vendor_id: str,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        start_at: DateTimeLike,
        end_at: DateTimeLike,
    ) -> ActionResult:
        """Availability plus the conflicting records that explain a refusal."""
        try:
            label = _label(resource_type)
            result = await self._engine.evaluate(
                ConflictQuery(
                    resource_id=resource_id,
                    resource_type=resource_type,
                    vendor_id=vendor_id,
                    start_at=start_at,
                    end_at=end_at,
                )
            )
        except (InvalidWindowError, ResourceNotOwnedError) as exc:
            return ActionResult(success=False, message=str(exc))
        except StorageError as exc:
            return self._storage_failure(exc)
        except ValueError as exc:
            return self._invalid_input(exc)
        return ActionResult(
            success=True,
            message=build_conflict_message(label, result.conflicts),
            data=result,
        )

    # ------------------------------------------------------------------ #
    # Write flows
    # ------------------------------------------------------------------ #

    @vendor_request
    async def mark_unavailable(
        self,
        vendor_id: str,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        start_at: DateTimeLike,
        end_at: DateTimeLike,
        reason: str,
        notes: Optional[str] = None,
    ) -> ActionResult:
        """Declare a blackout. The store checks window, ownership, then conflicts."""
        try:
            label = _label(resource_type)
            period = await self._unavailability.create(
                resource_id, resource_type, vendor_id, start_at, end_at, reason, notes
            )
        except ResourceConflictError as exc:
            return ActionResult(
                success=False,
                message=build_conflict_message(label, exc.conflicts),
                data=exc.conflicts,
            )
        except (InvalidWindowError, ResourceNotOwnedError) as exc:
            return ActionResult(success=False, message=str(exc))
        except StorageError as exc:
            return self._storage_failure(exc)
        except ValueError as exc:
            return self._invalid_input(exc)

        window = format_time_range(period.start_at, period.end_at)
        return ActionResult(
            success=True,
            message=build_blackout_message(label, reason, window, notes),
            data=period,
        )

    @vendor_request
    async def remove_unavailability(
        self, vendor_id: str, unavailability_id: str
    ) -> ActionResult:
        try:
            await self._unavailability.delete(unavailability_id, vendor_id)
        except (UnavailabilityNotFoundError, ResourceNotOwnedError):
            return ActionResult(
                success=False,
                message=f"Unavailability period {unavailability_id} not found.",
            )
        except StorageError as exc:
            return self._storage_failure(exc)
        return ActionResult(success=True, message="Unavailability removed.")

    @vendor_request
    async def accept_and_assign(
        self,
        vendor_id: str,
        booking_reference_id: str,
        pickup_at: DateTimeLike,
        vehicle_id: str,
        driver_id: str,
        duration: Optional[timedelta] = None,
    ) -> ActionResult:
        """Accept a booking, refusing with every conflict when blocked."""
        try:
            entries = await self._writer.accept_assignment(
                vendor_id, booking_reference_id, pickup_at, vehicle_id, driver_id, duration
            )
        except ResourceConflictError as exc:
            blocked = sorted({c.resource_type.value for c in exc.conflicts})
            label = " and ".join(_label(t) for t in blocked)
            return ActionResult(
                success=False,
                message=build_conflict_message(label, exc.conflicts),
                data=exc.conflicts,
            )
        except (InvalidWindowError, ResourceNotOwnedError) as exc:
            return ActionResult(success=False, message=str(exc))
        except StorageError as exc:
            return self._storage_failure(exc)
        except ValueError as exc:
            return self._invalid_input(exc)

        names = [
            await self._registry.display_name(e.resource_id, e.resource_type)
            for e in entries
        ]
        window = format_time_range(entries[0].start_at, entries[0].end_at)
        return ActionResult(
            success=True,
            message=build_assignment_message(booking_reference_id, window, names),
            data=entries,
        )

    @vendor_request
    async def complete_booking(
        self, vendor_id: str, booking_reference_id: str
    ) -> ActionResult:
        try:
            entries = await self._writer.complete_assignment(booking_reference_id, vendor_id)
        except AssignmentNotFoundError as exc:
            return ActionResult(success=False, message=str(exc))
        except StorageError as exc:
            return self._storage_failure(exc)
        return ActionResult(
            success=True,
            message=f"Booking #{booking_reference_id} completed.",
            data=entries,
        )

    @vendor_request
    async def reject_assignment(
        self, vendor_id: str, booking_reference_id: str
    ) -> ActionResult:
        try:
            entries = await self._writer.release_assignment(booking_reference_id, vendor_id)
        except AssignmentNotFoundError as exc:
            return ActionResult(success=False, message=str(exc))
        except StorageError as exc:
            return self._storage_failure(exc)
        return ActionResult(
            success=True,
            message=f"Booking #{booking_reference_id} released; resources are free.",
            data=entries,
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _invalid_input(exc: ValueError) -> ActionResult:
        if isinstance(exc, ValidationError):
            detail = "; ".join(error["msg"] for error in exc.errors())
        else:
            detail = str(exc)
        logger.warning("Rejected malformed request: %s", detail)
        return ActionResult(success=False, message=f"Invalid request: {detail}")

    @staticmethod
    def _storage_failure(exc: StorageError) -> ActionResult:
        logger.error("Storage failure: %s", exc)
        return ActionResult(
            success=False,
            message="Availability could not be confirmed right now. Please try again.",
        )
