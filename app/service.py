"""
Collection synchronizer - keeps the local product list consistent with the server.
Implements refetch-after-write: every successful mutation discards the local
list and re-reads the full collection instead of patching it in place.
"""

import logging
from typing import Callable, List, Optional

from app.client import InventoryClient, ProductId
from app.exceptions import (
    CreateFailure,
    DashboardFailure,
    DeleteFailure,
    FetchFailure,
    InventoryServiceError,
    UpdateFailure
)
from app.models import Product, ProductPayload, ViewState

logger = logging.getLogger(__name__)


class CollectionSynchronizer:
    """
    Owner of the local product snapshot and the loading/error view state.

    The snapshot is always either the exact list returned by the most recent
    applied fetch, or the previous snapshot while a fetch is in flight.
    """

    def __init__(self, client: InventoryClient):
        self.client = client
        self.products: List[Product] = []
        self.state = ViewState()
        # Sequence number of the latest fetch issued.
        self._issued = 0

    def _fail(self, failure: DashboardFailure) -> None:
        """
        Record a failure in the error banner.

        No operation clears the banner on success, so a previous error stays
        visible until a different failure overwrites it.
        """
        logger.error(failure.message)
        self.state.error = failure.message

    async def _fetch(self) -> bool:
        """
        Fetch the collection and replace the snapshot.

        Each fetch is tagged with a monotonic sequence number. A response,
        successful or not, whose number is not the latest issued is dropped,
        so overlapping refreshes resolve to the most recently issued one
        rather than the last one to arrive.

        Returns:
            True if the snapshot was replaced
        """
        self._issued += 1
        seq = self._issued

        try:
            products = await self.client.list_products()
        except InventoryServiceError:
            if seq != self._issued:
                logger.info(f"Ignoring failed fetch #{seq}, superseded by #{self._issued}")
                return False
            self._fail(FetchFailure())
            return False

        if seq != self._issued:
            logger.info(f"Discarding stale fetch #{seq}, superseded by #{self._issued}")
            return False

        self.products = products
        logger.info(f"Fetch #{seq} applied: {len(products)} products")
        return True

    async def initial_load(self) -> None:
        """
        First fetch on mount. Clears the loading flag once it settles,
        whether it succeeded or failed.
        """
        await self._fetch()
        self.state.loading = False

    async def refresh(self) -> bool:
        """
        Refetch after a mutation. Leaves the loading flag alone.

        Returns:
            True if the snapshot was replaced
        """
        return await self._fetch()

    async def create(
        self,
        payload: ProductPayload,
        on_created: Optional[Callable[[], None]] = None
    ) -> bool:
        """
        Create a product, then refetch.

        Args:
            payload: Coerced draft values
            on_created: Called once the server accepted the product, before
                the refresh is issued

        Returns:
            True if the server accepted the product. On failure the stale
            snapshot is kept and no refresh is issued.
        """
        try:
            await self.client.create_product(payload)
        except InventoryServiceError:
            self._fail(CreateFailure())
            return False

        logger.info(f"Created product '{payload.name}'")
        if on_created is not None:
            on_created()
        await self.refresh()
        return True

    async def update(self, product_id: ProductId, payload: ProductPayload) -> bool:
        """Update a product, then refetch."""
        try:
            await self.client.update_product(product_id, payload)
        except InventoryServiceError:
            self._fail(UpdateFailure())
            return False

        logger.info(f"Updated product {product_id}")
        await self.refresh()
        return True

    async def remove(self, product_id: ProductId) -> bool:
        """
        Delete a product, then refetch.

        The deleted product disappears from the snapshot only through the
        refresh, never by local removal.
        """
        try:
            await self.client.delete_product(product_id)
        except InventoryServiceError:
            self._fail(DeleteFailure())
            return False

        logger.info(f"Deleted product {product_id}")
        await self.refresh()
        return True
