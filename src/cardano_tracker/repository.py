"""Repository in front of the VESPR client, caching spot prices."""

import logging
from enum import Enum

from .clients.vespr_client import VesprClient
from .clients.vespr_types import AdaSpotPriceResponse, WalletDetailedResponse
from .currency import CryptoCurrency, SupportedCurrency
from .utils.cache import CacheManager

logger = logging.getLogger(__name__)

# ADA priced in ADA
ADA_SELF_PRICE = AdaSpotPriceResponse(
    currency=CryptoCurrency.ADA.value,
    spot="1",
    spot_1h_ago=None,
    spot_24h_ago=None,
)


class VesprRepository:
    """Data access for query handlers.

    Spot prices are cached for the configured TTL; wallet details are always
    fetched fresh. Failed lookups are never cached.
    """

    def __init__(self, client: VesprClient, cache_manager: CacheManager):
        self.client = client
        self.cache_manager = cache_manager

    async def get_ada_spot_price(self, currency: SupportedCurrency | str) -> AdaSpotPriceResponse:
        code = (currency.value if isinstance(currency, Enum) else currency).upper()
        if code == CryptoCurrency.ADA.value:
            return ADA_SELF_PRICE

        cached = await self.cache_manager.get_price(code)
        if cached is not None:
            logger.debug("price_cache_hit", extra={"currency": code})
            return cached

        spot_price = await self.client.get_ada_spot_price(code)
        await self.cache_manager.set_price(code, spot_price)
        return spot_price

    async def get_detailed_wallet(self, address: str) -> WalletDetailedResponse:
        return await self.client.fetch_wallet_detailed(address)

    async def close(self) -> None:
        await self.cache_manager.close()
        await self.client.close()
