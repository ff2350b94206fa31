"""
Runtime configuration for the inventory dashboard.

Configuration is loaded from environment variables:
- API_URL: Base URL of the inventory service (default: http://localhost:8080/api)
"""

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080/api"

# Liveness probe bound, in seconds. Data operations are unbounded.
HEALTH_TIMEOUT_SECONDS = 5.0


class Settings:
    """Settings resolved once from the process environment."""

    def __init__(self):
        self.api_url = os.getenv("API_URL", DEFAULT_API_URL).rstrip("/")
        self.health_timeout = HEALTH_TIMEOUT_SECONDS
        logger.info(f"Inventory service configured: {self.api_url}")


settings = Settings()
