"""
In-memory unavailability store: vendor-declared blackout periods.

Every read and write is scoped by vendor. Creation checks ownership, then
re-validates against blocking schedule entries and existing blackouts under
the resource's write lock. A booking commitment always wins over a
maintenance note, and blackouts for one resource never overlap.
"""

import uuid
from typing import Optional, Union

from fleet_availability.availability.engine import collect_schedule_conflicts
from fleet_availability.errors import (
    ResourceConflictError,
    ResourceNotOwnedError,
    UnavailabilityNotFoundError,
)
from fleet_availability.logging_context import get_request_logger
from fleet_availability.overlap import find_overlaps, validate_window
from fleet_availability.schemas.availability_schema import ConflictRecord
from fleet_availability.schemas.resource_schema import ResourceType
from fleet_availability.schemas.schedule_schema import UnavailabilityPeriod
from fleet_availability.stores.base import guarded_read, intersects_range, normalize_range
from fleet_availability.stores.locks import ResourceLockManager
from fleet_availability.stores.resources import ResourceRegistry
from fleet_availability.stores.schedules import ScheduleStore
from fleet_availability.utils import DateTimeLike

logger = get_request_logger(__name__)


class UnavailabilityStore:
    """CRUD for UnavailabilityPeriod, scoped to vendor ownership."""

    def __init__(
        self,
        registry: ResourceRegistry,
        schedules: ScheduleStore,
        locks: ResourceLockManager,
    ) -> None:
        self._registry = registry
        self._schedules = schedules
        self._locks = locks
        self._periods: dict[str, UnavailabilityPeriod] = {}

    async def get_vendor_unavailability(
        self,
        vendor_id: str,
        range_start: Optional[DateTimeLike] = None,
        range_end: Optional[DateTimeLike] = None,
    ) -> list[UnavailabilityPeriod]:
        start, end = normalize_range(range_start, range_end)
        return self._select(
            lambda p: p.vendor_id == vendor_id
            and intersects_range(p.start_at, p.end_at, start, end)
        )

    async def get_resource_unavailability(
        self,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        range_start: Optional[DateTimeLike] = None,
        range_end: Optional[DateTimeLike] = None,
    ) -> list[UnavailabilityPeriod]:
        kind = ResourceType(resource_type)
        start, end = normalize_range(range_start, range_end)
        return self._select(
            lambda p: p.resource_id == resource_id
            and p.resource_type is kind
            and intersects_range(p.start_at, p.end_at, start, end)
        )

    async def create(
        self,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        vendor_id: str,
        start_at: DateTimeLike,
        end_at: DateTimeLike,
        reason: str,
        notes: Optional[str] = None,
    ) -> UnavailabilityPeriod:
        """Insert a blackout period for a resource the vendor owns.

        Raises:
            InvalidWindowError: start_at >= end_at.
            ResourceNotOwnedError: the resource belongs to another vendor or
                does not exist.
            ResourceConflictError: the window overlaps a blocking schedule
                entry or another blackout for the same resource. Nothing is
                stored.
        """
        start, end = validate_window(start_at, end_at)
        kind = ResourceType(resource_type)
        owned = await guarded_read(
            self._registry.owns_resource(vendor_id, resource_id, kind),
            "resource ownership",
        )
        if not owned:
            logger.warning(
                "Vendor %s tried to block %s %s it does not own",
                vendor_id, kind.value, resource_id,
            )
            raise ResourceNotOwnedError(vendor_id, resource_id, kind.value)

        async with self._locks.hold((kind, resource_id)):
            bookings = await collect_schedule_conflicts(
                self._schedules, resource_id, kind, start, end
            )
            if bookings:
                logger.warning(
                    "Blackout for %s %s rejected: %d booking conflict(s)",
                    kind.value, resource_id, len(bookings),
                )
                raise ResourceConflictError(
                    bookings, "Resource has bookings during this period"
                )

            existing = await self.get_resource_unavailability(resource_id, kind)
            blackouts = find_overlaps(
                (ConflictRecord.from_unavailability(p) for p in existing), start, end
            )
            if blackouts:
                logger.warning(
                    "Blackout for %s %s rejected: overlaps %d existing blackout(s)",
                    kind.value, resource_id, len(blackouts),
                )
                raise ResourceConflictError(
                    blackouts, "Resource is already unavailable during this period"
                )

            period = UnavailabilityPeriod(
                id=f"UA-{uuid.uuid4().hex[:8].upper()}",
                resource_id=resource_id,
                resource_type=kind,
                vendor_id=vendor_id,
                start_at=start,
                end_at=end,
                reason=reason,
                notes=notes,
            )
            self._periods[period.id] = period

        logger.info(
            "Blackout %s created for %s %s (%s)",
            period.id, kind.value, resource_id, reason,
        )
        return period

    async def delete(self, unavailability_id: str, vendor_id: str) -> None:
        """Remove a blackout. Only the owning vendor may delete it."""
        period = self._periods.get(unavailability_id)
        if period is None:
            raise UnavailabilityNotFoundError(unavailability_id)
        if period.vendor_id != vendor_id:
            logger.warning(
                "Vendor %s tried to delete blackout %s owned by another vendor",
                vendor_id, unavailability_id,
            )
            raise ResourceNotOwnedError(
                vendor_id, period.resource_id, period.resource_type.value
            )
        del self._periods[unavailability_id]
        logger.info("Blackout %s removed by vendor %s", unavailability_id, vendor_id)

    def _select(self, predicate) -> list[UnavailabilityPeriod]:
        return sorted(
            (p for p in self._periods.values() if predicate(p)),
            key=lambda p: (p.start_at, p.id),
        )

    def reset(self) -> None:
        """Clear all periods. Used by test fixtures for isolation."""
        self._periods.clear()
