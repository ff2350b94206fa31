"""
Dashboard Controller.
Owns the whole client-side state of one dashboard session and forwards user
intents from the router into the draft controller and the synchronizer.
"""

import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import HTTPException

from app.client import InventoryClient, ProductId
from app.draft import DraftController, build_payload
from app.health import HealthMonitor
from app.models import DashboardResponse, ProductDraft
from app.service import CollectionSynchronizer
from app.views.dashboard_view import DashboardView

logger = logging.getLogger(__name__)


class DashboardController:
    """
    Controller for the dashboard.

    Lifecycle: mount() corresponds to a page load and unmount() to a page
    unload. Every state field has a single writer:
    - api_status: HealthMonitor.check
    - products, loading, error: CollectionSynchronizer
    - draft, form visibility: DraftController
    """

    def __init__(self, client: Optional[InventoryClient] = None):
        self.client = client or InventoryClient()
        self.health = HealthMonitor(self.client)
        self.synchronizer = CollectionSynchronizer(self.client)
        self.drafts = DraftController(self.synchronizer)
        self._mount_task: Optional[asyncio.Task] = None

    async def mount(self) -> None:
        """
        Probe the service and load the collection, concurrently.
        The two share no state, so neither waits on the other.
        """
        logger.info(f"Mounting dashboard against {self.client.base_url}")
        await asyncio.gather(
            self.health.check(),
            self.synchronizer.initial_load()
        )

    def start(self) -> asyncio.Task:
        """
        Schedule mount() without waiting for it, so the dashboard renders in
        its loading/checking state while the requests are outstanding.
        """
        self._mount_task = asyncio.create_task(self.mount())
        return self._mount_task

    async def unmount(self) -> None:
        """Cancel an unfinished mount and close the client."""
        if self._mount_task is not None and not self._mount_task.done():
            self._mount_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._mount_task
        await self.client.aclose()
        logger.info("Dashboard unmounted")

    def render(self) -> DashboardResponse:
        return DashboardView.render(
            api_status=self.health.status,
            state=self.synchronizer.state,
            products=self.synchronizer.products,
            show_form=self.drafts.visible,
            draft=self.drafts.draft
        )

    def toggle_form(self) -> DashboardResponse:
        self.drafts.toggle()
        return self.render()

    def update_draft(self, field: str, value: str) -> DashboardResponse:
        """
        Handle a single draft field edit.

        Raises:
            HTTPException: If the form is closed or the field is unknown
        """
        self._require_form()
        try:
            self.drafts.update_field(field, value)
        except ValueError as e:
            logger.warning(str(e))
            raise HTTPException(
                status_code=400,
                detail={
                    "error": "Invalid draft field",
                    "detail": str(e),
                    "received": field
                }
            )
        return self.render()

    async def submit_draft(self) -> DashboardResponse:
        """
        Handle the submit-form intent.

        A rejected submission is not an HTTP error: it shows up in the
        rendered error banner with the draft left intact.
        """
        self._require_form()
        await self.drafts.submit()
        return self.render()

    async def delete_product(self, product_id: ProductId) -> DashboardResponse:
        await self.synchronizer.remove(product_id)
        return self.render()

    async def update_product(self, product_id: ProductId, draft: ProductDraft) -> DashboardResponse:
        """Handle an edit of an existing product, coerced like a draft."""
        await self.synchronizer.update(product_id, build_payload(draft))
        return self.render()

    def _require_form(self) -> None:
        if not self.drafts.visible:
            raise HTTPException(
                status_code=400,
                detail={
                    "error": "Form is not open",
                    "detail": "Open the product form before editing or submitting a draft"
                }
            )
