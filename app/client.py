"""
HTTP client for the remote inventory service.

Pure transport: every method is a single request/response round trip with no
retry. Every failure (network error, non-2xx status, timeout, undecodable
body) is raised as InventoryServiceError; the cause is only logged.
"""

import asyncio
import logging
from typing import List, Optional, Union
from urllib.parse import quote

import httpx

from app.config import settings
from app.exceptions import InventoryServiceError
from app.models import Product, ProductPayload

logger = logging.getLogger(__name__)

ProductId = Union[int, str]


def _product_path(product_id: ProductId) -> str:
    # Ids are opaque: "?", "#" and "/" must not change which record is addressed.
    return f"/products/{quote(str(product_id), safe='')}"


class InventoryClient:
    """
    Async client for the /health and /products endpoints.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        health_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        Args:
            base_url: Inventory service base URL (default: API_URL setting)
            health_timeout: Bound for the liveness probe in seconds (default: 5)
            transport: Optional httpx transport, used to swap the network out
        """
        self.base_url = base_url or settings.api_url
        self.health_timeout = health_timeout if health_timeout is not None else settings.health_timeout
        # Data operations carry no client-side timeout.
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=None,
            transport=transport
        )

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the underlying connection pool."""
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {str(e)}")
            raise InventoryServiceError(f"{method} {path} failed") from e

    async def probe_health(self) -> None:
        """
        Liveness probe against GET /health.

        Raises:
            InventoryServiceError: On any non-success, including the probe
                running past the health timeout
        """
        try:
            await asyncio.wait_for(self._request("GET", "/health"), timeout=self.health_timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"GET /health timed out after {self.health_timeout}s")
            raise InventoryServiceError("GET /health timed out") from e

    async def list_products(self) -> List[Product]:
        """
        Fetch the full product collection.

        Returns:
            Products in the order the server returned them
        """
        response = await self._request("GET", "/products")
        try:
            return [Product.model_validate(item) for item in response.json()]
        except (ValueError, TypeError) as e:
            logger.warning(f"GET /products returned an unreadable body: {str(e)}")
            raise InventoryServiceError("GET /products returned an unreadable body") from e

    async def get_product(self, product_id: ProductId) -> Product:
        """
        Fetch a single product by id.

        Mirrors GET /products/{id} of the inventory API. The dashboard itself
        only reads the full collection, so nothing in the controller calls it.
        """
        response = await self._request("GET", _product_path(product_id))
        try:
            return Product.model_validate(response.json())
        except ValueError as e:
            logger.warning(f"GET /products/{product_id} returned an unreadable body: {str(e)}")
            raise InventoryServiceError(f"GET /products/{product_id} returned an unreadable body") from e

    async def create_product(self, payload: ProductPayload) -> None:
        """
        Create a product. The created record in the response is not used.
        """
        await self._request("POST", "/products", json=payload.model_dump(mode="json"))

    async def update_product(self, product_id: ProductId, payload: ProductPayload) -> None:
        """Replace the editable fields of an existing product."""
        await self._request("PUT", _product_path(product_id), json=payload.model_dump(mode="json"))

    async def delete_product(self, product_id: ProductId) -> None:
        """Delete a product by id."""
        await self._request("DELETE", _product_path(product_id))
