"""get_wallet_balance query handler."""

import asyncio
import logging
from decimal import Decimal, localcontext

from ..clients.vespr_types import (
    VALUE_CONTEXT,
    AdaSpotPriceResponse,
    WalletDetailedResponse,
    calculate_token_value,
    format_token_amount,
    is_valid_cardano_address,
    lovelace_to_ada,
    to_finite_decimal,
)
from ..currency import CryptoCurrency, parse_currency
from ..repository import VesprRepository
from ..utils.formatting import format_with_commas
from .base import ToolResult, error_result

logger = logging.getLogger(__name__)

INVALID_ADDRESS_MESSAGE = "Invalid Cardano address. Address should be a valid bech32 Shelley Era Wallet address."

FIAT_PLACES = Decimal("0.01")
CRYPTO_PLACES = Decimal("0.000001")


def build_wallet_summary(wallet: WalletDetailedResponse, spot: AdaSpotPriceResponse | None = None) -> dict:
    """Convert a wallet response to display units.

    Tokens without an ADA rate get a null ``ada_value`` and do not count
    towards the portfolio total. The portfolio is only valued in ``spot``'s
    currency when the spot price is a finite number.
    """
    with localcontext(VALUE_CONTEXT):
        return _build_wallet_summary(wallet, spot)


def _build_wallet_summary(wallet: WalletDetailedResponse, spot: AdaSpotPriceResponse | None) -> dict:
    ada_balance = lovelace_to_ada(wallet.lovelace)
    staking_rewards = lovelace_to_ada(wallet.rewards_lovelace)

    total_ada = Decimal(ada_balance) + Decimal(staking_rewards)
    tokens = []
    for token in wallet.tokens:
        amount = format_token_amount(token.quantity, token.decimals)
        value = calculate_token_value(amount, token.ada_per_unit)
        if value is not None:
            total_ada += value
        tokens.append(
            {
                "name": token.name or token.hex_asset_name,
                "ticker": token.ticker,
                "amount": amount,
                "ada_value": str(value.quantize(CRYPTO_PLACES)) if value is not None else None,
            }
        )

    summary = {
        "ada_balance": ada_balance,
        "staking_rewards": staking_rewards,
        "tokens": tokens,
        "handles": list(wallet.handles),
        "total_ada_value": str(total_ada.quantize(CRYPTO_PLACES)),
    }

    price = to_finite_decimal(spot.spot) if spot is not None else None
    if price is not None:
        places = CRYPTO_PLACES if spot.currency in (c.value for c in CryptoCurrency) else FIAT_PLACES
        summary["currency"] = spot.currency
        summary["portfolio_value"] = str((total_ada * price).quantize(places))

    return summary


def render_wallet_summary(summary: dict) -> str:
    token_count = len(summary["tokens"])
    handles = summary["handles"]
    lines = [
        f"ADA Balance: {format_with_commas(summary['ada_balance'])} ADA",
        f"Staking Rewards: {format_with_commas(summary['staking_rewards'])} ADA",
        f"Tokens: {token_count} token{'s' if token_count != 1 else ''}",
        f"Handles: {', '.join(handles) if handles else 'none'}",
    ]
    if "portfolio_value" in summary:
        lines.append(f"Portfolio Value: {format_with_commas(summary['portfolio_value'])} {summary['currency']}")
    return "\n".join(lines)


async def get_wallet_balance(
    repository: VesprRepository,
    address: str,
    currency: str | None = None,
) -> ToolResult:
    """Query a Cardano wallet's ADA, rewards, native tokens and handles.

    Includes the balance of every address associated with the wallet, not only
    the one provided. When ``currency`` is given the portfolio is also valued
    in it.
    """
    if not is_valid_cardano_address(address):
        return ToolResult.error(INVALID_ADDRESS_MESSAGE)

    address = address.strip()
    price_currency = None
    if currency:
        try:
            price_currency = parse_currency(currency)
        except ValueError as e:
            return ToolResult.error(str(e))

    try:
        if price_currency is None:
            wallet = await repository.get_detailed_wallet(address)
            spot = None
        else:
            results = await asyncio.gather(
                repository.get_detailed_wallet(address),
                repository.get_ada_spot_price(price_currency),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            wallet, spot = results

        summary = build_wallet_summary(wallet, spot)
    except Exception as e:
        logger.warning("tool_failed", extra={"tool": "get_wallet_balance", "error": str(e)})
        return error_result(e)

    return ToolResult(text=render_wallet_summary(summary), structured=summary)
