"""Cache manager for the tracker's cached lookups."""

import logging
from typing import Any

from ...config import CacheConfig
from .interface import CacheInterface
from .memory_cache import MemoryCache

logger = logging.getLogger(__name__)


class CacheManager:
    """Owns the cache instances used by the repository.

    Only spot prices are cached; wallet details are always fetched fresh.
    """

    def __init__(self, config: CacheConfig):
        self.config = config
        self._price_cache: CacheInterface | None = None

    def get_price_cache(self) -> CacheInterface:
        if self._price_cache is None:
            self._price_cache = MemoryCache(
                default_ttl=self.config.ttl_prices,
                max_entries=self.config.max_entries,
                key_prefix="price:",
            )
        return self._price_cache

    async def get_price(self, currency: str) -> Any:
        return await self.get_price_cache().get(currency.upper())

    async def set_price(self, currency: str, value: Any) -> bool:
        return await self.get_price_cache().set(currency.upper(), value, ttl=self.config.ttl_prices)

    async def health_check(self) -> dict[str, bool]:
        health = {}
        if self._price_cache is not None:
            health["price_cache"] = await self._price_cache.health_check()
        return health

    async def get_stats(self) -> dict[str, Any]:
        stats = {}
        if self._price_cache is not None:
            stats["price_cache"] = self._price_cache.get_stats()
        return stats

    async def close(self) -> None:
        if self._price_cache is not None:
            await self._price_cache.close()
            logger.info("cache_manager_closed")
