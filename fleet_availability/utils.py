"""Shared datetime utilities used across the availability engine."""

from datetime import date, datetime, timezone
from typing import Union

DateTimeLike = Union[datetime, date, str]


def to_utc(value: DateTimeLike) -> datetime:
    """Coerce a datetime, date, or ISO-8601 string to an aware UTC datetime.

    Naive values are taken to be UTC already. A bare date means midnight.

    Examples:
        >>> to_utc("2025-03-01T10:00").isoformat()
        '2025-03-01T10:00:00+00:00'
        >>> to_utc("2025-03-01T12:00:00+02:00").isoformat()
        '2025-03-01T10:00:00+00:00'
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid ISO-8601 datetime: {value!r}") from None
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_time_range(start: datetime, end: datetime) -> str:
    """Render a window compactly for user-facing messages.

    Same-day windows show only the times; multi-day windows show dates too.

    Examples:
        >>> format_time_range(datetime(2025, 3, 1, 14), datetime(2025, 3, 1, 15, 30))
        '14:00-15:30'
        >>> format_time_range(datetime(2025, 4, 1), datetime(2025, 4, 3))
        '2025-04-01 00:00 to 2025-04-03 00:00'
    """
    if start.date() == end.date():
        return f"{start:%H:%M}-{end:%H:%M}"
    return f"{start:%Y-%m-%d %H:%M} to {end:%Y-%m-%d %H:%M}"
