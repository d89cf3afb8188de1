"""Helpers shared by the in-memory stores and their readers."""

import asyncio
from datetime import datetime
from typing import Awaitable, Optional, TypeVar

from fleet_availability.config import settings
from fleet_availability.errors import InvalidWindowError, StorageError
from fleet_availability.utils import DateTimeLike, to_utc

T = TypeVar("T")


def normalize_range(
    range_start: Optional[DateTimeLike], range_end: Optional[DateTimeLike]
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Coerce optional range bounds to UTC; reject an inverted closed range."""
    start = to_utc(range_start) if range_start is not None else None
    end = to_utc(range_end) if range_end is not None else None
    if start is not None and end is not None and start >= end:
        raise InvalidWindowError(start, end)
    return start, end


def intersects_range(
    start_at: datetime,
    end_at: datetime,
    range_start: Optional[datetime],
    range_end: Optional[datetime],
) -> bool:
    """True when a record window intersects an optionally open-ended range."""
    if range_start is not None and end_at <= range_start:
        return False
    if range_end is not None and start_at >= range_end:
        return False
    return True


async def guarded_read(awaitable: Awaitable[T], what: str) -> T:
    """Await a storage read under the configured timeout.

    A timeout surfaces as StorageError. Cancellation propagates untouched.
    """
    try:
        return await asyncio.wait_for(
            awaitable, timeout=settings.availability.storage_timeout_sec
        )
    except asyncio.TimeoutError:
        raise StorageError(
            f"Timed out reading {what} after "
            f"{settings.availability.storage_timeout_sec}s"
        ) from None
