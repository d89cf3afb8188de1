"""Shared test fixtures and helpers."""

import uuid
from datetime import datetime
from typing import Optional

import pytest

from fleet_availability.schemas.resource_schema import Driver, ResourceType, Vehicle
from fleet_availability.schemas.schedule_schema import ScheduleEntry, ScheduleStatus
from fleet_availability.service import AvailabilityServices, create_services
from fleet_availability.utils import to_utc

VENDOR_A = "VENDOR-A"
VENDOR_B = "VENDOR-B"


def at(value: str) -> datetime:
    """Shorthand for an aware UTC datetime from an ISO string."""
    return to_utc(value)


def make_vehicle(
    vehicle_id: str = "V-1",
    vendor_id: str = VENDOR_A,
    make: str = "Toyota",
    model: str = "Camry",
    registration_number: str = "ABC-123",
    is_available: bool = True,
) -> Vehicle:
    return Vehicle(
        id=vehicle_id,
        vendor_id=vendor_id,
        make=make,
        model=model,
        registration_number=registration_number,
        is_available=is_available,
    )


def make_driver(
    driver_id: str = "D-1",
    vendor_id: str = VENDOR_A,
    first_name: str = "Jane",
    last_name: str = "Doe",
    is_active: bool = True,
    is_available: bool = True,
) -> Driver:
    return Driver(
        id=driver_id,
        vendor_id=vendor_id,
        first_name=first_name,
        last_name=last_name,
        is_active=is_active,
        is_available=is_available,
    )


def make_entry(
    start: str,
    end: str,
    resource_id: str = "V-1",
    resource_type: ResourceType = ResourceType.VEHICLE,
    vendor_id: str = VENDOR_A,
    booking_reference_id: str = "1234",
    status: ScheduleStatus = ScheduleStatus.ACCEPTED,
    entry_id: Optional[str] = None,
) -> ScheduleEntry:
    """Helper to create a ScheduleEntry with sensible defaults."""
    return ScheduleEntry(
        id=entry_id or f"SE-{uuid.uuid4().hex[:8]}",
        resource_id=resource_id,
        resource_type=resource_type,
        vendor_id=vendor_id,
        start_at=start,
        end_at=end,
        booking_reference_id=booking_reference_id,
        status=status,
    )


def seed_fleet(services: AvailabilityServices) -> AvailabilityServices:
    """Vendor A: two vehicles (one switched off), two drivers (one inactive).
    Vendor B: one vehicle, one driver."""
    registry = services.registry
    registry.register_vehicle(make_vehicle("V-1"))
    registry.register_vehicle(
        make_vehicle("V-2", make="Ford", model="Transit",
                     registration_number="XYZ-789", is_available=False)
    )
    registry.register_driver(make_driver("D-1"))
    registry.register_driver(
        make_driver("D-2", first_name="Sam", last_name="Lee", is_active=False)
    )
    registry.register_vehicle(
        make_vehicle("V-9", vendor_id=VENDOR_B, make="Skoda", model="Superb",
                     registration_number="BBB-999")
    )
    registry.register_driver(
        make_driver("D-9", vendor_id=VENDOR_B, first_name="Bo", last_name="Berg")
    )
    return services


@pytest.fixture
def services() -> AvailabilityServices:
    return seed_fleet(create_services())
