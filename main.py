"""
Offline availability demo: seeds a sample vendor fleet and queries it.

Uses the real engine, stores, and projector. No database, no network.

Usage:
    python main.py resources
    python main.py check --resource V-100 --type vehicle --start 2025-03-01T11:00 --end 2025-03-01T12:00
    python main.py calendar --start 2025-03-01 --end 2025-03-08
"""

import argparse
import asyncio
import logging
import sys
from datetime import timedelta

from fleet_availability.config import settings
from fleet_availability.schemas.resource_schema import Driver, Vehicle
from fleet_availability.service import AvailabilityServices, create_services

logger = logging.getLogger(__name__)

DEMO_VENDOR = "VENDOR-DEMO"

BOLD = "\033[1m"
GREEN = "\033[92m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"


async def seed_demo_fleet(services: AvailabilityServices) -> None:
    """Two vehicles, two drivers, one accepted booking, one blackout."""
    registry = services.registry
    registry.register_vehicle(Vehicle(
        id="V-100", vendor_id=DEMO_VENDOR, make="Mercedes", model="V-Class",
        registration_number="TRF-100", year=2023, seats=7,
    ))
    registry.register_vehicle(Vehicle(
        id="V-200", vendor_id=DEMO_VENDOR, make="Toyota", model="Camry",
        registration_number="TRF-200", year=2022, seats=4,
    ))
    registry.register_driver(Driver(
        id="D-1", vendor_id=DEMO_VENDOR, first_name="Ana", last_name="Silva",
        phone="+351900000001",
    ))
    registry.register_driver(Driver(
        id="D-2", vendor_id=DEMO_VENDOR, first_name="Marco", last_name="Rossi",
        phone="+351900000002",
    ))

    await services.writer.accept_assignment(
        DEMO_VENDOR, "1234", "2025-03-01T10:00", "V-100", "D-1",
        duration=timedelta(minutes=90),
    )
    await services.unavailability.create(
        "V-200", "vehicle", DEMO_VENDOR, "2025-03-03", "2025-03-05",
        "maintenance", "Annual service",
    )


async def _run(args: argparse.Namespace) -> int:
    services = create_services()
    await seed_demo_fleet(services)
    actions = services.actions

    if args.command == "resources":
        result = await actions.get_vendor_resources(DEMO_VENDOR)
        print(f"{BOLD}{result.message}{RESET}")
        for vehicle in result.data.vehicles:
            print(f"  vehicle {vehicle.id}: {vehicle.display_name}")
        for driver in result.data.drivers:
            print(f"  driver  {driver.id}: {driver.display_name}")
        return 0

    if args.command == "check":
        result = await actions.check_resource_availability(
            DEMO_VENDOR, args.resource, args.type, args.start, args.end
        )
        if not result.success:
            print(f"{RED}{result.message}{RESET}")
            return 1
        colour = GREEN if result.data.available else RED
        print(f"{colour}{result.message}{RESET}")
        return 0

    if args.command == "calendar":
        result = await actions.get_calendar_events(DEMO_VENDOR, args.start, args.end)
        if not result.success:
            print(f"{RED}{result.message}{RESET}")
            return 1
        print(f"{BOLD}{result.message}{RESET}")
        for event in sorted(result.data, key=lambda e: e.start):
            print(
                f"  {event.start:%Y-%m-%d %H:%M} -> {event.end:%Y-%m-%d %H:%M}  "
                f"{event.title} {DIM}[{event.kind.value}]{RESET}"
            )
        return 0

    return 2


def main() -> None:
    parser = argparse.ArgumentParser(
        description=f"{settings.service_name}: query a seeded demo fleet."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("resources", help="List the demo vendor's vehicles and drivers.")

    check = sub.add_parser("check", help="Check one resource for a window.")
    check.add_argument("--resource", required=True, help="Resource id, e.g. V-100.")
    check.add_argument("--type", choices=["vehicle", "driver"], default="vehicle")
    check.add_argument("--start", required=True, help="ISO-8601 window start.")
    check.add_argument("--end", required=True, help="ISO-8601 window end.")

    calendar = sub.add_parser("calendar", help="Project calendar events for a range.")
    calendar.add_argument("--start", required=True, help="ISO-8601 range start.")
    calendar.add_argument("--end", required=True, help="ISO-8601 range end.")

    args = parser.parse_args()
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
