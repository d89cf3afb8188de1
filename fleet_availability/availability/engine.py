"""
Conflict detection engine: the single authority on "is resource R free for W".

Algorithm:
1. Reject the window unless start < end (before any I/O).
2. Fetch every blocking schedule entry for the resource, unbounded in time.
3. Fetch every unavailability period for the resource, unbounded in time.
4. Project both into ConflictRecord and keep each one whose half-open
   window overlaps the query, without short-circuiting.
5. Available means the conflict list is empty.

Storage failures propagate. The engine never answers "available" on a
partial read.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional, Union

from fleet_availability.config import settings
from fleet_availability.errors import ResourceNotOwnedError
from fleet_availability.logging_context import get_request_logger
from fleet_availability.overlap import find_overlaps, validate_window
from fleet_availability.schemas.availability_schema import (
    ConflictQuery,
    ConflictRecord,
    ConflictResult,
    ResourceAvailability,
)
from fleet_availability.schemas.resource_schema import ResourceType
from fleet_availability.schemas.schedule_schema import ScheduleStatus
from fleet_availability.stores.base import guarded_read
from fleet_availability.utils import DateTimeLike

if TYPE_CHECKING:
    from fleet_availability.stores.resources import ResourceRegistry
    from fleet_availability.stores.schedules import ScheduleStore
    from fleet_availability.stores.unavailability import UnavailabilityStore

logger = get_request_logger(__name__)


def blocking_statuses() -> tuple[ScheduleStatus, ...]:
    """Schedule statuses that constitute a hard conflict."""
    return tuple(ScheduleStatus(s) for s in settings.availability.blocking_statuses)


async def collect_schedule_conflicts(
    schedules: ScheduleStore,
    resource_id: str,
    resource_type: Union[ResourceType, str],
    start_at: datetime,
    end_at: datetime,
) -> list[ConflictRecord]:
    """Schedule-only conflict check, shared by the engine and blackout creation."""
    entries = await guarded_read(
        schedules.get_resource_schedules(
            resource_id, resource_type, statuses=blocking_statuses()
        ),
        "resource schedules",
    )
    return find_overlaps(
        (ConflictRecord.from_schedule(e) for e in entries), start_at, end_at
    )


class AvailabilityEngine:
    """Reconciles schedule entries and blackouts into one availability answer."""

    def __init__(
        self,
        registry: ResourceRegistry,
        schedules: ScheduleStore,
        unavailability: UnavailabilityStore,
    ) -> None:
        self._registry = registry
        self._schedules = schedules
        self._unavailability = unavailability

    # ------------------------------------------------------------------ #
    # Decision API
    # ------------------------------------------------------------------ #

    async def check_availability(
        self,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        start_at: DateTimeLike,
        end_at: DateTimeLike,
        vendor_id: str,
    ) -> bool:
        """True when the vendor's resource has no conflicts in the window."""
        result = await self.evaluate(
            ConflictQuery(
                resource_id=resource_id,
                resource_type=resource_type,
                vendor_id=vendor_id,
                start_at=start_at,
                end_at=end_at,
            )
        )
        return result.available

    async def evaluate(self, query: ConflictQuery) -> ConflictResult:
        """Full decision: ownership guard, then every conflicting record.

        Raises:
            InvalidWindowError: query window is empty or inverted.
            ResourceNotOwnedError: resource does not belong to the vendor.
            StorageError: a read failed or timed out.
        """
        start, end = validate_window(query.start_at, query.end_at)
        await self.require_owned(query.vendor_id, query.resource_id, query.resource_type)
        conflicts = await self.get_conflicts(
            query.resource_id, query.resource_type, start, end
        )
        return ConflictResult(available=not conflicts, conflicts=conflicts)

    async def get_conflicts(
        self,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        start_at: DateTimeLike,
        end_at: DateTimeLike,
    ) -> list[ConflictRecord]:
        """Every blocking booking and blackout overlapping the window."""
        start, end = validate_window(start_at, end_at)
        kind = ResourceType(resource_type)

        booking_conflicts = await collect_schedule_conflicts(
            self._schedules, resource_id, kind, start, end
        )
        periods = await guarded_read(
            self._unavailability.get_resource_unavailability(resource_id, kind),
            "resource unavailability",
        )
        blackout_conflicts = find_overlaps(
            (ConflictRecord.from_unavailability(p) for p in periods), start, end
        )

        conflicts = booking_conflicts + blackout_conflicts
        logger.debug(
            "%s %s [%s, %s): %d conflict(s)",
            kind.value, resource_id, start.isoformat(), end.isoformat(), len(conflicts),
        )
        return conflicts

    async def get_schedule_conflicts(
        self,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        start_at: DateTimeLike,
        end_at: DateTimeLike,
    ) -> list[ConflictRecord]:
        """Blocking bookings only; blackouts are ignored."""
        start, end = validate_window(start_at, end_at)
        return await collect_schedule_conflicts(
            self._schedules, resource_id, resource_type, start, end
        )

    async def require_owned(
        self, vendor_id: str, resource_id: str, resource_type: Union[ResourceType, str]
    ) -> None:
        owned = await guarded_read(
            self._registry.owns_resource(vendor_id, resource_id, resource_type),
            "resource ownership",
        )
        if not owned:
            raise ResourceNotOwnedError(
                vendor_id, resource_id, ResourceType(resource_type).value
            )

    # ------------------------------------------------------------------ #
    # Fleet-wide views
    # ------------------------------------------------------------------ #

    async def find_available_resources(
        self,
        vendor_id: str,
        resource_type: Union[ResourceType, str],
        start_at: DateTimeLike,
        end_at: DateTimeLike,
    ) -> list[str]:
        """Ids of the vendor's bookable resources free for the whole window."""
        start, end = validate_window(start_at, end_at)
        candidates = await guarded_read(
            self._registry.list_bookable(vendor_id, resource_type), "bookable resources"
        )
        available: list[str] = []
        for resource in candidates:
            conflicts = await self.get_conflicts(
                resource.id, resource.resource_type, start, end
            )
            if not conflicts:
                available.append(resource.id)
        return available

    async def list_resource_availability(
        self,
        vendor_id: str,
        start_at: DateTimeLike,
        end_at: DateTimeLike,
        resource_type: Optional[Union[ResourceType, str]] = None,
    ) -> list[ResourceAvailability]:
        """Availability and conflicts for every vehicle and driver of a vendor.

        A resource the vendor has switched off is reported unavailable even
        when nothing overlaps.
        """
        start, end = validate_window(start_at, end_at)
        resources = await guarded_read(
            self._registry.list_resources(vendor_id), "vendor resources"
        )
        pool = [*resources.vehicles, *resources.drivers]
        if resource_type is not None:
            kind = ResourceType(resource_type)
            pool = [r for r in pool if r.resource_type is kind]

        rows: list[ResourceAvailability] = []
        for resource in pool:
            conflicts = await self.get_conflicts(
                resource.id, resource.resource_type, start, end
            )
            rows.append(
                ResourceAvailability(
                    resource_id=resource.id,
                    resource_type=resource.resource_type,
                    display_name=resource.display_name,
                    available=resource.is_bookable and not conflicts,
                    conflicts=conflicts,
                )
            )
        return rows
