"""Vendor-owned resource models: vehicles and drivers."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class ResourceType(str, Enum):
    """The two kinds of schedulable resource."""
    VEHICLE = "vehicle"
    DRIVER = "driver"


class Vehicle(BaseModel):
    """Vehicle registered by a vendor."""
    id: str
    vendor_id: str
    make: str
    model: str
    registration_number: str
    year: Optional[int] = None
    seats: Optional[int] = None
    is_available: bool = True

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType.VEHICLE

    @property
    def display_name(self) -> str:
        return f"{self.make} {self.model} ({self.registration_number})"

    @property
    def is_bookable(self) -> bool:
        return self.is_available


class Driver(BaseModel):
    """Driver employed by a vendor."""
    id: str
    vendor_id: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    license_number: Optional[str] = None
    is_active: bool = True
    is_available: bool = True

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType.DRIVER

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_bookable(self) -> bool:
        return self.is_available and self.is_active


Resource = Union[Vehicle, Driver]


class VendorResources(BaseModel):
    """Everything a vendor owns, split by resource type."""
    vehicles: list[Vehicle] = Field(default_factory=list)
    drivers: list[Driver] = Field(default_factory=list)
