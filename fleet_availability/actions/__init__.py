from fleet_availability.actions.vendor_actions import ActionResult, VendorAvailabilityActions

__all__ = ["ActionResult", "VendorAvailabilityActions"]
