import asyncio
import json
from urllib.parse import unquote

import httpx
import pytest

from app.client import InventoryClient

BASE_URL = "http://inventory.test/api"

SEED_PRODUCTS = [
    {"id": 1, "name": "Widget", "description": "A fine widget", "price": 10.0, "quantity": 2},
    {"id": 2, "name": "Gadget", "description": None, "price": 5.0, "quantity": 3},
]


class FakeInventoryService:
    """In-memory stand-in for the inventory API, served through httpx.MockTransport."""

    def __init__(self, products=None):
        self.products = [dict(p) for p in (products if products is not None else SEED_PRODUCTS)]
        self.next_id = max([p["id"] for p in self.products], default=0) + 1
        self.health_status = 200
        self.health_delay = 0.0
        # (method, "products" | "product" | "health") pairs answered with a 500
        self.failing = set()
        self.requests = []

    def _find(self, product_id):
        for product in self.products:
            if str(product["id"]) == product_id:
                return product
        return None

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Split the still-escaped path so an escaped "/" stays inside the id segment.
        raw_path = request.url.raw_path.decode().split("?", 1)[0]
        parts = raw_path.split("/api/", 1)[1].split("/")
        kind = "health" if parts[0] == "health" else ("products" if len(parts) == 1 else "product")

        if (request.method, kind) in self.failing:
            return httpx.Response(500, json={"error": "boom"})

        if kind == "health":
            if self.health_delay:
                await asyncio.sleep(self.health_delay)
            return httpx.Response(self.health_status, json={"status": "UP", "service": "java-api"})

        if kind == "products":
            if request.method == "GET":
                return httpx.Response(200, json=self.products)
            body = json.loads(request.content)
            product = {"id": self.next_id, **body}
            self.next_id += 1
            self.products.append(product)
            return httpx.Response(200, json=product)

        product = self._find(unquote(parts[1]))
        if product is None:
            return httpx.Response(404)
        if request.method == "GET":
            return httpx.Response(200, json=product)
        if request.method == "PUT":
            product.update(json.loads(request.content))
            return httpx.Response(200, json=product)
        self.products.remove(product)
        return httpx.Response(200)


@pytest.fixture
def inventory():
    return FakeInventoryService()


@pytest.fixture
def make_client(inventory):
    def factory(handler=None, health_timeout=0.2):
        return InventoryClient(
            base_url=BASE_URL,
            health_timeout=health_timeout,
            transport=httpx.MockTransport(handler or inventory.handler)
        )
    return factory
