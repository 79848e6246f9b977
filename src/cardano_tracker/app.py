"""Application wiring: one client, cache and repository per process."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from .clients.transport import Transport
from .clients.vespr_client import VesprClient
from .config import AppConfig, get_config
from .repository import VesprRepository
from .tools import ToolResult, get_ada_price, get_supported_currencies, get_wallet_balance
from .utils.cache import CacheManager

logger = logging.getLogger(__name__)


class Application:
    """Holds the explicitly constructed collaborators the query handlers use."""

    def __init__(self, config: AppConfig, transport: Transport | None = None):
        self.config = config
        self.client = VesprClient(config.vespr, transport=transport)
        self.cache_manager = CacheManager(config.cache)
        self.repository = VesprRepository(self.client, self.cache_manager)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def wallet_balance(self, address: str, currency: str | None = None) -> ToolResult:
        return await get_wallet_balance(self.repository, address, currency)

    async def ada_price(self, currency: str) -> ToolResult:
        return await get_ada_price(self.repository, currency)

    def supported_currencies(self) -> ToolResult:
        return get_supported_currencies()

    async def health_check(self) -> dict[str, bool]:
        return await self.cache_manager.health_check()

    async def collect_metrics(self) -> dict[str, Any]:
        return {
            "vespr_client": self.client.get_stats(),
            "cache": await self.cache_manager.get_stats(),
        }

    async def close(self) -> None:
        await self.repository.close()
        logger.info("application_closed")


@asynccontextmanager
async def create_application(
    config: AppConfig | None = None,
    transport: Transport | None = None,
) -> AsyncIterator[Application]:
    """Create an application and close it on exit."""
    app = Application(config or get_config(), transport=transport)
    try:
        yield app
    finally:
        await app.close()
