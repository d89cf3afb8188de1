"""
Domain exceptions for availability and conflict detection.

Every error carries enough structure (kind plus offending records) for the
caller to render a precise message. None of them is ever converted into an
"available" answer.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fleet_availability.schemas.availability_schema import ConflictRecord


class AvailabilityError(Exception):
    """Base exception for all availability domain errors."""


class InvalidWindowError(AvailabilityError):
    """Raised when a window does not satisfy start < end."""

    def __init__(self, start_at: datetime, end_at: datetime) -> None:
        self.start_at = start_at
        self.end_at = end_at
        super().__init__(
            f"Invalid window: start {start_at.isoformat()} must be before "
            f"end {end_at.isoformat()}"
        )


class ResourceNotOwnedError(AvailabilityError):
    """Raised when a resource does not belong to the requesting vendor."""

    def __init__(self, vendor_id: str, resource_id: str, resource_type: str) -> None:
        self.vendor_id = vendor_id
        self.resource_id = resource_id
        self.resource_type = resource_type
        super().__init__(
            f"{resource_type} {resource_id} is not owned by vendor {vendor_id}"
        )


class ResourceConflictError(AvailabilityError):
    """Raised when a write would overlap existing blocking records."""

    def __init__(self, conflicts: list[ConflictRecord], message: str = "") -> None:
        self.conflicts = list(conflicts)
        super().__init__(
            message or f"Window overlaps {len(self.conflicts)} existing record(s)"
        )


class StorageError(AvailabilityError):
    """Raised when an underlying read or write dependency fails."""


class UnavailabilityNotFoundError(AvailabilityError):
    """Raised when an unavailability period is not visible to the vendor."""

    def __init__(self, unavailability_id: str) -> None:
        self.unavailability_id = unavailability_id
        super().__init__(f"Unavailability period {unavailability_id} not found")


class AssignmentNotFoundError(AvailabilityError):
    """Raised when a vendor has no live schedule entries for a booking."""

    def __init__(self, booking_reference_id: str) -> None:
        self.booking_reference_id = booking_reference_id
        super().__init__(f"No active assignment for booking {booking_reference_id}")
