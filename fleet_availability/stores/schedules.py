"""
In-memory schedule source: booking assignments binding a resource to a window.

Entries are written only by the assignment workflow. Readers never see
rejected entries; a rejected assignment frees the resource.
"""

from typing import Iterable, Optional, Union

from fleet_availability.errors import StorageError
from fleet_availability.logging_context import get_request_logger
from fleet_availability.schemas.resource_schema import ResourceType
from fleet_availability.schemas.schedule_schema import ScheduleEntry, ScheduleStatus
from fleet_availability.stores.base import intersects_range, normalize_range
from fleet_availability.utils import DateTimeLike

logger = get_request_logger(__name__)


class ScheduleStore:
    """Read side for conflict detection, write side for assignments."""

    def __init__(self) -> None:
        self._entries: dict[str, ScheduleEntry] = {}

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    async def get_vendor_schedules(
        self,
        vendor_id: str,
        range_start: Optional[DateTimeLike] = None,
        range_end: Optional[DateTimeLike] = None,
    ) -> list[ScheduleEntry]:
        """Non-rejected entries for all of a vendor's resources.

        With no bounds every entry is returned, however far away.
        """
        start, end = normalize_range(range_start, range_end)
        return self._select(
            lambda e: e.vendor_id == vendor_id
            and intersects_range(e.start_at, e.end_at, start, end)
        )

    async def get_resource_schedules(
        self,
        resource_id: str,
        resource_type: Union[ResourceType, str],
        range_start: Optional[DateTimeLike] = None,
        range_end: Optional[DateTimeLike] = None,
        statuses: Optional[Iterable[Union[ScheduleStatus, str]]] = None,
    ) -> list[ScheduleEntry]:
        """Non-rejected entries for one resource, optionally status-filtered."""
        kind = ResourceType(resource_type)
        start, end = normalize_range(range_start, range_end)
        wanted = {ScheduleStatus(s) for s in statuses} if statuses is not None else None
        return self._select(
            lambda e: e.resource_id == resource_id
            and e.resource_type is kind
            and (wanted is None or e.status in wanted)
            and intersects_range(e.start_at, e.end_at, start, end)
        )

    async def get_booking_entries(
        self, booking_reference_id: str, vendor_id: str
    ) -> list[ScheduleEntry]:
        """Every entry (rejected included) a vendor holds for one booking."""
        return sorted(
            (
                e for e in self._entries.values()
                if e.booking_reference_id == booking_reference_id
                and e.vendor_id == vendor_id
            ),
            key=lambda e: (e.start_at, e.id),
        )

    def _select(self, predicate) -> list[ScheduleEntry]:
        return sorted(
            (
                e for e in self._entries.values()
                if e.status is not ScheduleStatus.REJECTED and predicate(e)
            ),
            key=lambda e: (e.start_at, e.id),
        )

    # ------------------------------------------------------------------ #
    # Writes (assignment workflow only)
    # ------------------------------------------------------------------ #

    async def add(self, entry: ScheduleEntry) -> ScheduleEntry:
        if entry.id in self._entries:
            raise StorageError(f"Schedule entry {entry.id} already exists")
        self._entries[entry.id] = entry
        logger.info(
            "Schedule entry stored: %s %s %s for booking %s (%s)",
            entry.id, entry.resource_type.value, entry.resource_id,
            entry.booking_reference_id, entry.status.value,
        )
        return entry

    async def set_status(self, entry_id: str, status: Union[ScheduleStatus, str]) -> ScheduleEntry:
        if entry_id not in self._entries:
            raise StorageError(f"Schedule entry {entry_id} not found")
        updated = self._entries[entry_id].model_copy(update={"status": ScheduleStatus(status)})
        self._entries[entry_id] = updated
        logger.info("Schedule entry %s now %s", entry_id, updated.status.value)
        return updated

    async def remove(self, entry_id: str) -> None:
        if self._entries.pop(entry_id, None) is None:
            raise StorageError(f"Schedule entry {entry_id} not found")
        logger.info("Schedule entry %s removed", entry_id)

    def reset(self) -> None:
        """Clear all entries. Used by test fixtures for isolation."""
        self._entries.clear()
