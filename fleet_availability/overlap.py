"""
Half-open interval overlap, written once for every blocking record type.

A window is ``[start, end)``: the end instant is excluded, so a booking that
ends at 11:30 does not conflict with one that starts at 11:30.
"""

from datetime import datetime
from typing import Iterable

from fleet_availability.errors import InvalidWindowError
from fleet_availability.schemas.availability_schema import ConflictRecord
from fleet_availability.utils import DateTimeLike, to_utc


def windows_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """True when ``[a_start, a_end)`` and ``[b_start, b_end)`` share an instant."""
    return a_start < b_end and b_start < a_end


def validate_window(start_at: DateTimeLike, end_at: DateTimeLike) -> tuple[datetime, datetime]:
    """Normalize a window to UTC and reject it unless start < end."""
    start = to_utc(start_at)
    end = to_utc(end_at)
    if start >= end:
        raise InvalidWindowError(start, end)
    return start, end


def find_overlaps(
    records: Iterable[ConflictRecord], start_at: datetime, end_at: datetime
) -> list[ConflictRecord]:
    """Return every record overlapping the window, in input order.

    Scans the full input; callers need the whole set to explain a refusal.
    """
    return [r for r in records if windows_overlap(r.start, r.end, start_at, end_at)]
