"""
Error taxonomy for the dashboard controller.

The transport raises a single opaque InventoryServiceError. The controller maps
it onto one of the user-facing failure kinds below, each carrying the fixed
message shown in the error banner.
"""

from typing import Optional


class InventoryServiceError(Exception):
    """Any failed round trip to the inventory service."""


class DashboardFailure(Exception):
    """Base class for failures surfaced through the view state."""

    message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class HealthCheckFailure(DashboardFailure):
    # Never shown to the user, only flips the status badge to DOWN.
    message = "Inventory service health check failed"


class FetchFailure(DashboardFailure):
    message = "Failed to fetch products"


class CreateFailure(DashboardFailure):
    message = "Failed to create product"


class DeleteFailure(DashboardFailure):
    message = "Failed to delete product"


class UpdateFailure(DashboardFailure):
    message = "Failed to update product"
