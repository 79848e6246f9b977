"""Tests for application wiring and the command line."""

import json
from unittest.mock import patch

import pytest
from conftest import SPOT_PAYLOAD, VALID_ADDRESS, WALLET_PAYLOAD, FakeTransport, json_success

from cardano_tracker.app import Application, create_application
from cardano_tracker.cli import build_parser, main
from cardano_tracker.config import AppConfig
from cardano_tracker.tools import ToolResult


class TestApplication:
    """Test the explicitly constructed application."""

    @pytest.mark.asyncio
    async def test_handlers_share_one_repository(self, app_config: AppConfig) -> None:
        transport = FakeTransport([json_success(SPOT_PAYLOAD)])

        async with create_application(app_config, transport=transport) as app:
            first = await app.ada_price("USD")
            second = await app.ada_price("USD")
            metrics = await app.collect_metrics()

        assert first == second
        assert transport.call_count == 1
        assert metrics["vespr_client"]["price_requests"] == 1
        assert metrics["cache"]["price_cache"]["hits"] == 1

    @pytest.mark.asyncio
    async def test_wallet_balance(self, app_config: AppConfig) -> None:
        transport = FakeTransport([json_success(WALLET_PAYLOAD)])

        async with create_application(app_config, transport=transport) as app:
            result = await app.wallet_balance(VALID_ADDRESS)

        assert result.structured["ada_balance"] == "5000.000000"

    @pytest.mark.asyncio
    async def test_close_releases_cache(self, app_config: AppConfig) -> None:
        app = Application(app_config, transport=FakeTransport([json_success(SPOT_PAYLOAD)]))
        await app.ada_price("USD")

        await app.close()

        assert await app.health_check() == {"price_cache": False}


class TestCli:
    """Test the command line entry point."""

    @pytest.fixture
    def api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VESPR_API_KEY", "test-key")

    def test_parser(self) -> None:
        args = build_parser().parse_args(["--json", "wallet", VALID_ADDRESS, "--currency", "EUR"])

        assert args.command == "wallet"
        assert args.address == VALID_ADDRESS
        assert args.currency == "EUR"
        assert args.json is True

    def test_currencies_command(self, api_key: None, capsys: pytest.CaptureFixture) -> None:
        with patch("cardano_tracker.cli.setup_logging"):
            exit_code = main(["--json", "currencies"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert "USD" in output["fiat"]

    def test_error_exit_code(self, api_key: None, capsys: pytest.CaptureFixture) -> None:
        async def fake_run(args, config):
            return ToolResult.error("Wallet not found. Verify the address is correct.")

        with patch("cardano_tracker.cli.setup_logging"), patch("cardano_tracker.cli.run", new=fake_run):
            exit_code = main(["wallet", VALID_ADDRESS])

        assert exit_code == 1
        assert capsys.readouterr().err.strip() == "Error: Wallet not found. Verify the address is correct."

    def test_missing_api_key(self, capsys: pytest.CaptureFixture) -> None:
        with patch("cardano_tracker.cli.setup_logging") as setup, patch("cardano_tracker.cli.run") as run:
            exit_code = main(["currencies"])

        assert exit_code == 1
        assert capsys.readouterr().err.startswith("Error: Invalid configuration. ")
        setup.assert_not_called()
        run.assert_not_called()
