"""
In-memory resource registry: which vehicles and drivers each vendor owns.

In production this reads the vehicles and vendor_drivers tables of the
hosted database. Ownership never transfers, so lookups are a plain scan.
"""

from typing import Optional, Union

from fleet_availability.logging_context import get_request_logger
from fleet_availability.schemas.resource_schema import (
    Driver,
    Resource,
    ResourceType,
    Vehicle,
    VendorResources,
)

logger = get_request_logger(__name__)


def _coerce_type(resource_type: Union[ResourceType, str]) -> Optional[ResourceType]:
    try:
        return ResourceType(resource_type)
    except ValueError:
        return None


class ResourceRegistry:
    """Resolves vendor ownership of vehicles and drivers."""

    def __init__(self) -> None:
        self._vehicles: dict[str, Vehicle] = {}
        self._drivers: dict[str, Driver] = {}

    def register_vehicle(self, vehicle: Vehicle) -> Vehicle:
        self._vehicles[vehicle.id] = vehicle
        logger.info("Vehicle registered: %s for vendor %s", vehicle.id, vehicle.vendor_id)
        return vehicle

    def register_driver(self, driver: Driver) -> Driver:
        self._drivers[driver.id] = driver
        logger.info("Driver registered: %s for vendor %s", driver.id, driver.vendor_id)
        return driver

    async def list_resources(self, vendor_id: str) -> VendorResources:
        """All vehicles and drivers owned by a vendor. No pagination."""
        vehicles = sorted(
            (v for v in self._vehicles.values() if v.vendor_id == vendor_id),
            key=lambda v: (v.make, v.model, v.id),
        )
        drivers = sorted(
            (d for d in self._drivers.values() if d.vendor_id == vendor_id),
            key=lambda d: (d.first_name, d.last_name, d.id),
        )
        return VendorResources(vehicles=vehicles, drivers=drivers)

    async def get_resource(
        self, resource_id: str, resource_type: Union[ResourceType, str]
    ) -> Optional[Resource]:
        kind = _coerce_type(resource_type)
        if kind is ResourceType.VEHICLE:
            return self._vehicles.get(resource_id)
        if kind is ResourceType.DRIVER:
            return self._drivers.get(resource_id)
        return None

    async def owns_resource(
        self, vendor_id: str, resource_id: str, resource_type: Union[ResourceType, str]
    ) -> bool:
        """Fails closed: an unknown resource or type is never owned."""
        resource = await self.get_resource(resource_id, resource_type)
        return resource is not None and resource.vendor_id == vendor_id

    async def list_bookable(
        self, vendor_id: str, resource_type: Union[ResourceType, str]
    ) -> list[Resource]:
        """Resources of one type the vendor has not switched off."""
        resources = await self.list_resources(vendor_id)
        kind = ResourceType(resource_type)
        pool: list[Resource] = list(
            resources.vehicles if kind is ResourceType.VEHICLE else resources.drivers
        )
        return [r for r in pool if r.is_bookable]

    async def display_name(
        self, resource_id: str, resource_type: Union[ResourceType, str]
    ) -> str:
        """Human label for a resource, falling back to its type name."""
        resource = await self.get_resource(resource_id, resource_type)
        if resource is None:
            return ResourceType(resource_type).value.capitalize()
        return resource.display_name

    def reset(self) -> None:
        """Clear all resources. Used by test fixtures for isolation."""
        self._vehicles.clear()
        self._drivers.clear()
