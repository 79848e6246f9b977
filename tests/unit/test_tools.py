"""Tests for the query handlers."""

from unittest.mock import AsyncMock

import pytest
from conftest import SPOT_PAYLOAD, VALID_ADDRESS, WALLET_PAYLOAD, FakeTransport, http_failure, json_success

from cardano_tracker.clients.errors import VesprApiError
from cardano_tracker.clients.transport import NetworkFailure
from cardano_tracker.clients.vespr_client import VesprClient
from cardano_tracker.clients.vespr_types import AdaSpotPriceResponse, WalletDetailedResponse
from cardano_tracker.config import CacheConfig, VesprConfig
from cardano_tracker.repository import VesprRepository
from cardano_tracker.tools import (
    ToolResult,
    build_wallet_summary,
    error_result,
    get_ada_price,
    get_supported_currencies,
    get_wallet_balance,
)
from cardano_tracker.utils.cache import CacheManager


def make_repository(transport: FakeTransport, vespr_config: VesprConfig) -> VesprRepository:
    return VesprRepository(VesprClient(vespr_config, transport=transport), CacheManager(CacheConfig()))


class RoutingTransport(FakeTransport):
    """Returns outcomes by request path."""

    def __init__(self, routes):
        super().__init__([])
        self.routes = routes

    async def send(self, request):
        self.requests.append(request)
        return self.routes[request.path]


class TestGetWalletBalance:
    """Test the wallet balance handler."""

    @pytest.mark.asyncio
    async def test_converts_units(self, vespr_config: VesprConfig) -> None:
        """Test balances are converted from lovelace and base units."""
        transport = FakeTransport([json_success(WALLET_PAYLOAD)])

        result = await get_wallet_balance(make_repository(transport, vespr_config), VALID_ADDRESS)

        assert result.is_error is False
        assert result.structured is not None
        assert result.structured["ada_balance"] == "5000.000000"
        assert result.structured["staking_rewards"] == "100.000000"
        assert result.structured["handles"] == ["$myhandle"]
        assert result.structured["tokens"] == [
            {"name": "TestToken", "ticker": "TEST", "amount": "1.000000", "ada_value": None}
        ]
        assert "ADA Balance: 5,000.000000 ADA" in result.text
        assert "Staking Rewards: 100.000000 ADA" in result.text
        assert "Tokens: 1 token\n" in result.text
        assert "Handles: $myhandle" in result.text

    @pytest.mark.asyncio
    async def test_invalid_address_skips_api(self, vespr_config: VesprConfig) -> None:
        transport = FakeTransport([json_success(WALLET_PAYLOAD)])

        result = await get_wallet_balance(make_repository(transport, vespr_config), "addr1tooshort")

        assert result.is_error is True
        assert result.text.startswith("Error: Invalid Cardano address")
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_api_error_is_rendered(self, vespr_config: VesprConfig) -> None:
        transport = FakeTransport([http_failure(404)])

        result = await get_wallet_balance(make_repository(transport, vespr_config), VALID_ADDRESS)

        assert result == ToolResult(text="Error: Wallet not found. Verify the address is correct.", is_error=True)

    @pytest.mark.asyncio
    async def test_network_error_is_rendered(self, vespr_config: VesprConfig) -> None:
        transport = FakeTransport([NetworkFailure(elapsed_ms=1, cause=OSError("unreachable"))])

        result = await get_wallet_balance(make_repository(transport, vespr_config), VALID_ADDRESS)

        assert result.is_error is True
        assert result.text == "Error: Unable to connect to VESPR API. Check your internet connection."

    @pytest.mark.asyncio
    async def test_portfolio_valued_in_currency(self, vespr_config: VesprConfig) -> None:
        """Test wallet and price are fetched and combined."""
        payload = {
            "lovelace": "10000000",
            "rewards_lovelace": "0",
            "tokens": [
                {"policy": "p1", "hex_asset_name": "aa", "quantity": "4000000", "decimals": 6, "ada_per_unit": "0.5"},
                {"policy": "p2", "hex_asset_name": "bb", "quantity": "7", "decimals": 0},
            ],
        }
        transport = RoutingTransport(
            {
                "/v7/wallet/detailed": json_success(payload),
                "/v5/ada/spot": json_success({"currency": "USD", "spot": "0.50"}),
            }
        )

        result = await get_wallet_balance(make_repository(transport, vespr_config), VALID_ADDRESS, "usd")

        assert result.is_error is False
        summary = result.structured
        # 10 ADA + 4 tokens at 0.5 ADA; the unpriced token is left out
        assert summary["total_ada_value"] == "12.000000"
        assert summary["portfolio_value"] == "6.00"
        assert summary["currency"] == "USD"
        assert summary["tokens"][0]["ada_value"] == "2.000000"
        assert summary["tokens"][1] == {"name": "bb", "ticker": None, "amount": "7", "ada_value": None}
        assert "Portfolio Value: 6.00 USD" in result.text
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_price_failure_fails_the_call(self, vespr_config: VesprConfig, no_backoff: AsyncMock) -> None:
        transport = RoutingTransport(
            {
                "/v7/wallet/detailed": json_success(WALLET_PAYLOAD),
                "/v5/ada/spot": http_failure(429),
            }
        )

        result = await get_wallet_balance(make_repository(transport, vespr_config), VALID_ADDRESS, "EUR")

        assert result.is_error is True
        assert "Rate limited" in result.text

    @pytest.mark.asyncio
    async def test_unsupported_currency(self, vespr_config: VesprConfig) -> None:
        transport = FakeTransport([json_success(WALLET_PAYLOAD)])

        result = await get_wallet_balance(make_repository(transport, vespr_config), VALID_ADDRESS, "XYZ")

        assert result.is_error is True
        assert "Unsupported currency" in result.text
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_empty_wallet_text(self, vespr_config: VesprConfig) -> None:
        transport = FakeTransport([json_success({"lovelace": "0"})])

        result = await get_wallet_balance(make_repository(transport, vespr_config), VALID_ADDRESS)

        assert "Tokens: 0 tokens" in result.text
        assert "Handles: none" in result.text


class TestWalletSummary:
    def test_name_falls_back_to_hex_asset_name(self) -> None:
        wallet = WalletDetailedResponse.model_validate(
            {"lovelace": "1", "tokens": [{"policy": "p", "hex_asset_name": "4e4654", "name": ""}]}
        )

        summary = build_wallet_summary(wallet)

        assert summary["tokens"][0]["name"] == "4e4654"
        assert "portfolio_value" not in summary

    def test_non_finite_rate_is_unpriced(self) -> None:
        token = {"policy": "p", "hex_asset_name": "aa", "quantity": "5", "ada_per_unit": "Infinity"}
        wallet = WalletDetailedResponse.model_validate({"lovelace": "1000000", "tokens": [token]})

        summary = build_wallet_summary(wallet)

        assert summary["tokens"][0]["ada_value"] is None
        assert summary["total_ada_value"] == "1.000000"

    def test_values_beyond_default_decimal_precision(self) -> None:
        quantity = "1" + "0" * 30
        token = {"policy": "p", "hex_asset_name": "aa", "quantity": quantity, "ada_per_unit": "1"}
        wallet = WalletDetailedResponse.model_validate({"lovelace": "1", "tokens": [token]})
        spot = AdaSpotPriceResponse(currency="USD", spot="2")

        summary = build_wallet_summary(wallet, spot)

        assert summary["tokens"][0]["ada_value"] == quantity + ".000000"
        assert summary["total_ada_value"] == quantity + ".000001"
        assert summary["portfolio_value"] == "2" + "0" * 30 + ".00"

    def test_non_finite_spot_is_not_valued(self) -> None:
        wallet = WalletDetailedResponse.model_validate({"lovelace": "1000000"})

        summary = build_wallet_summary(wallet, AdaSpotPriceResponse(currency="USD", spot="Infinity"))

        assert summary["total_ada_value"] == "1.000000"
        assert "portfolio_value" not in summary


class TestGetAdaPrice:
    """Test the ADA price handler."""

    @pytest.mark.asyncio
    async def test_price_with_changes(self, vespr_config: VesprConfig) -> None:
        transport = FakeTransport([json_success(SPOT_PAYLOAD)])

        result = await get_ada_price(make_repository(transport, vespr_config), "USD")

        assert result.structured == {
            "currency": "USD",
            "spot": "0.45",
            "spot_1h_ago": "0.44",
            "spot_24h_ago": "0.50",
        }
        assert "ADA Price: 0.45 USD" in result.text
        assert "1h Change: +2.27%" in result.text
        assert "24h Change: -10.00%" in result.text

    @pytest.mark.asyncio
    async def test_ada_in_ada(self, vespr_config: VesprConfig) -> None:
        transport = FakeTransport([json_success(SPOT_PAYLOAD)])

        result = await get_ada_price(make_repository(transport, vespr_config), "ADA")

        assert result.structured["spot"] == "1"
        assert "1h Change: n/a" in result.text
        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_error_rendered(self, vespr_config: VesprConfig, no_backoff: AsyncMock) -> None:
        transport = FakeTransport([http_failure(500)])

        result = await get_ada_price(make_repository(transport, vespr_config), "USD")

        assert result.is_error is True
        assert result.text == "Error: VESPR API is temporarily unavailable. Try again later."
        assert transport.call_count == 3


class TestSupportedCurrencies:
    def test_lists_fiat_and_crypto(self) -> None:
        result = get_supported_currencies()

        assert "USD" in result.structured["fiat"]
        assert "ADA" in result.structured["crypto"]
        assert result.text.startswith("Supported Fiat Currencies (")


class TestErrorResult:
    def test_api_error(self) -> None:
        assert error_result(VesprApiError("Request timed out. Try again.")).text == "Error: Request timed out. Try again."

    def test_unexpected_error(self) -> None:
        result = error_result(RuntimeError("boom"))

        assert result.is_error is True
        assert result.text == "Error: An unexpected error occurred. boom"
