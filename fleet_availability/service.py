"""Composition root: wires stores, engine, projector, writer, and actions."""

from dataclasses import dataclass
from typing import Optional

from fleet_availability.actions.vendor_actions import VendorAvailabilityActions
from fleet_availability.availability.assignments import AssignmentWriter
from fleet_availability.availability.calendar import CalendarProjector
from fleet_availability.availability.engine import AvailabilityEngine
from fleet_availability.stores.locks import ResourceLockManager
from fleet_availability.stores.resources import ResourceRegistry
from fleet_availability.stores.schedules import ScheduleStore
from fleet_availability.stores.unavailability import UnavailabilityStore


@dataclass
class AvailabilityServices:
    """One consistent set of collaborators sharing the same stores and locks."""
    registry: ResourceRegistry
    schedules: ScheduleStore
    unavailability: UnavailabilityStore
    locks: ResourceLockManager
    engine: AvailabilityEngine
    projector: CalendarProjector
    writer: AssignmentWriter
    actions: VendorAvailabilityActions

    def reset(self) -> None:
        """Clear every store. Used by test fixtures for isolation."""
        self.registry.reset()
        self.schedules.reset()
        self.unavailability.reset()


def create_services(
    registry: Optional[ResourceRegistry] = None,
    schedules: Optional[ScheduleStore] = None,
) -> AvailabilityServices:
    """Build the full component graph, optionally around existing stores."""
    registry = registry or ResourceRegistry()
    schedules = schedules or ScheduleStore()
    locks = ResourceLockManager()
    unavailability = UnavailabilityStore(registry, schedules, locks)
    engine = AvailabilityEngine(registry, schedules, unavailability)
    projector = CalendarProjector(registry, schedules, unavailability)
    writer = AssignmentWriter(engine, schedules, locks)
    actions = VendorAvailabilityActions(registry, engine, unavailability, projector, writer)
    return AvailabilityServices(
        registry=registry,
        schedules=schedules,
        unavailability=unavailability,
        locks=locks,
        engine=engine,
        projector=projector,
        writer=writer,
        actions=actions,
    )
