"""User-facing message construction for availability outcomes."""

from typing import Optional

from fleet_availability.schemas.availability_schema import ConflictRecord


def build_conflict_message(
    resource_label: str, conflicts: list[ConflictRecord], limit: int = 3
) -> str:
    """Explain why a resource is blocked.

    >>> build_conflict_message("Vehicle", [])
    'Vehicle is available.'
    """
    if not conflicts:
        return f"{resource_label} is available."
    described = [c.describe() for c in conflicts[:limit]]
    message = f"{resource_label} unavailable: conflicts with {', '.join(described)}"
    extra = len(conflicts) - limit
    if extra > 0:
        message += f" and {extra} more"
    return message + "."


def build_blackout_message(
    resource_label: str, reason: str, window: str, notes: Optional[str] = None
) -> str:
    """Confirmation text for a newly created blackout."""
    message = f"{resource_label} marked unavailable {window} ({reason})."
    if notes:
        message += f" Notes: {notes}"
    return message


def build_assignment_message(booking_reference_id: str, window: str, names: list[str]) -> str:
    """Confirmation text for an accepted assignment."""
    return f"Booking #{booking_reference_id} accepted for {window} with {' and '.join(names)}."
