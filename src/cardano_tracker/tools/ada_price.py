"""get_ada_price and get_supported_currencies query handlers."""

import logging

from ..currency import (
    SUPPORTED_CRYPTO_CURRENCIES,
    SUPPORTED_FIAT_CURRENCIES,
    parse_currency,
)
from ..repository import VesprRepository
from .base import ToolResult, error_result

logger = logging.getLogger(__name__)


def _format_change(now: str, before: str | None) -> str:
    if before is None:
        return "n/a"
    try:
        previous = float(before)
        if previous == 0:
            return "n/a"
        return f"{(float(now) - previous) / previous * 100:+.2f}%"
    except ValueError:
        return "n/a"


async def get_ada_price(repository: VesprRepository, currency: str) -> ToolResult:
    """Current ADA spot price in ``currency`` with 1h and 24h history."""
    try:
        code = parse_currency(currency)
    except ValueError as e:
        return ToolResult.error(str(e))

    try:
        spot = await repository.get_ada_spot_price(code)
    except Exception as e:
        logger.warning("tool_failed", extra={"tool": "get_ada_price", "error": str(e)})
        return error_result(e)

    output = {
        "currency": spot.currency,
        "spot": spot.spot,
        "spot_1h_ago": spot.spot_1h_ago,
        "spot_24h_ago": spot.spot_24h_ago,
    }
    text = "\n".join(
        [
            f"ADA Price: {spot.spot} {spot.currency}",
            f"1h Change: {_format_change(spot.spot, spot.spot_1h_ago)}",
            f"24h Change: {_format_change(spot.spot, spot.spot_24h_ago)}",
        ]
    )
    return ToolResult(text=text, structured=output)


def get_supported_currencies() -> ToolResult:
    """Fiat and crypto currencies the price lookups accept."""
    output = {
        "fiat": list(SUPPORTED_FIAT_CURRENCIES),
        "crypto": list(SUPPORTED_CRYPTO_CURRENCIES),
    }
    text = "\n".join(
        [
            f"Supported Fiat Currencies ({len(SUPPORTED_FIAT_CURRENCIES)}): {', '.join(SUPPORTED_FIAT_CURRENCIES)}",
            "",
            f"Supported Crypto Currencies ({len(SUPPORTED_CRYPTO_CURRENCIES)}): "
            f"{', '.join(SUPPORTED_CRYPTO_CURRENCIES)}",
        ]
    )
    return ToolResult(text=text, structured=output)
