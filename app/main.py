"""
FastAPI application entry point.
"""

from typing import Optional

from fastapi import FastAPI
import logging
from app.client import InventoryClient
from app.config import settings
from app.controllers.dashboard_controller import DashboardController
from app.routers import dashboard

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(client: Optional[InventoryClient] = None) -> FastAPI:
    """
    Build the dashboard application.

    Args:
        client: Inventory client to use (default: one built from settings)

    Returns:
        FastAPI app whose startup mounts a single dashboard session
    """
    app = FastAPI(
        title="Inventory Dashboard",
        version="1.0.0",
        docs_url="/docs"
    )

    # Dashboard session lifecycle
    @app.on_event("startup")
    async def startup_event():
        """Create the controller and start the health probe and initial fetch."""
        app.state.dashboard = DashboardController(client)
        app.state.dashboard.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        """Close the inventory client on shutdown."""
        await app.state.dashboard.unmount()

    app.include_router(dashboard.router)

    @app.get("/")
    async def root():
        """
        Root endpoint - API information.
        """
        return {
            "service": "Inventory Dashboard",
            "version": "1.0.0",
            "inventory_api": settings.api_url,
            "endpoints": {
                "dashboard": "/dashboard",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint.
        """
        return {
            "status": "healthy",
            "service": "inventory-dashboard"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
