"""
Health monitor for the inventory service.

State machine:
- Starts in CHECKING
- One probe per mount: success moves to UP, any failure moves to DOWN
- Never returns to CHECKING; no retries and no periodic re-probing
"""

import logging

from app.client import InventoryClient
from app.exceptions import HealthCheckFailure, InventoryServiceError
from app.models import ApiStatus

logger = logging.getLogger(__name__)


class HealthMonitor:
    """
    Tracks service availability independently of data fetches.
    """

    def __init__(self, client: InventoryClient):
        self.client = client
        self.status = ApiStatus.CHECKING

    @property
    def settled(self) -> bool:
        return self.status != ApiStatus.CHECKING

    async def check(self) -> ApiStatus:
        """
        Run the liveness probe once.

        A transient failure is permanent for the session: later calls return
        the settled status without probing again.

        Returns:
            The settled ApiStatus
        """
        if self.settled:
            return self.status

        try:
            await self.client.probe_health()
        except InventoryServiceError as e:
            # Only flips the badge, never reaches the error banner.
            logger.warning(f"{HealthCheckFailure.message}: {str(e)}")
            self.status = ApiStatus.DOWN
        else:
            self.status = ApiStatus.UP

        logger.info(f"Inventory service status: {self.status.value.upper()}")
        return self.status
