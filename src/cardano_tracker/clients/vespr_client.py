"""VESPR wallet and price API client."""

import logging
from enum import Enum
from typing import Any

from ..config import VesprConfig
from ..currency import SupportedCurrency
from .api_client import ApiClient
from .transport import AiohttpTransport, Transport
from .vespr_types import AdaSpotPriceResponse, WalletDetailedResponse

logger = logging.getLogger(__name__)

WALLET_DETAILED_PATH = "/v7/wallet/detailed"
ADA_SPOT_PATH = "/v5/ada/spot"


def _truncate(value: str, length: int = 15) -> str:
    return f"{value[:length]}..." if len(value) > length else value


class VesprClient:
    """Client for the VESPR API with timeouts, retries and response validation."""

    def __init__(self, config: VesprConfig, transport: Transport | None = None):
        """Initialize VESPR client.

        Args:
            config: API location, credentials and resilience settings
            transport: Transport to use instead of an aiohttp one (tests)
        """
        self.config = config
        self._own_transport = transport is None
        self.transport: Transport = transport or AiohttpTransport(
            base_url=config.api_url,
            headers={
                "Content-Type": "application/json",
                "User-Agent": config.user_agent,
                "x-digest": config.api_key,
            },
            timeout_ms=config.request_timeout_ms,
            rate_limit=config.rate_limit,
        )
        self.api = ApiClient(
            self.transport,
            max_retries=config.max_retries,
            retry_base_delay_ms=config.retry_base_delay_ms,
        )

        self._stats = {
            "wallet_requests": 0,
            "price_requests": 0,
            "api_errors": 0,
        }

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def fetch_wallet_detailed(self, address: str) -> WalletDetailedResponse:
        """Fetch balances, tokens and handles for every address of a wallet.

        Args:
            address: Cardano wallet address (bech32 format)

        Raises:
            VesprApiError: if the request fails after retries
        """
        self._stats["wallet_requests"] += 1
        try:
            return await self.api.post(
                WALLET_DETAILED_PATH,
                WalletDetailedResponse,
                context=f"wallet({_truncate(address)})",
                body={"address": address},
            )
        except Exception:
            self._stats["api_errors"] += 1
            raise

    async def get_ada_spot_price(self, currency: SupportedCurrency | str) -> AdaSpotPriceResponse:
        """Fetch the current ADA price in ``currency``."""
        code = currency.value if isinstance(currency, Enum) else currency
        self._stats["price_requests"] += 1
        try:
            return await self.api.get(
                ADA_SPOT_PATH,
                AdaSpotPriceResponse,
                context=f"ada-spot({code})",
                params={"currency": code},
            )
        except Exception:
            self._stats["api_errors"] += 1
            raise

    def get_stats(self) -> dict[str, Any]:
        """Get client statistics."""
        return {
            **self._stats,
            "max_retries": self.config.max_retries,
            "request_timeout_ms": self.config.request_timeout_ms,
            "rate_limit": self.config.rate_limit,
        }

    async def close(self) -> None:
        """Close the underlying transport if this client created it."""
        if self._own_transport and isinstance(self.transport, AiohttpTransport):
            await self.transport.close()
            logger.info("vespr_client_closed")
