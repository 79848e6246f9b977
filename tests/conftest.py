"""Shared test fixtures."""

import json
from collections.abc import Iterable
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from cardano_tracker.clients.transport import (
    HttpStatusFailure,
    RequestDescriptor,
    Success,
    TransportOutcome,
)
from cardano_tracker.config import AppConfig, CacheConfig, VesprConfig, reset_config

VALID_ADDRESS = (
    "addr1qy8ac7qqy0vtulyl7wntmsxc6wex80gvcyjy33qffrhm7sh927ysx5sftuw0dlft05dz3c7revpf7jx0xnlcjz3g69mq4afdhv"
)

WALLET_PAYLOAD: dict[str, Any] = {
    "lovelace": "5000000000",
    "rewards_lovelace": "100000000",
    "handles": ["$myhandle"],
    "tokens": [
        {
            "policy": "abc123",
            "hex_asset_name": "546f6b656e",
            "name": "TestToken",
            "ticker": "TEST",
            "quantity": "1000000",
            "decimals": 6,
        }
    ],
}

SPOT_PAYLOAD: dict[str, Any] = {
    "currency": "USD",
    "spot": "0.45",
    "spot1hAgo": "0.44",
    "spot24hAgo": "0.50",
}


def json_success(payload: Any, status: int = 200) -> Success:
    return Success(status=status, body=json.dumps(payload).encode(), elapsed_ms=5)


def http_failure(status: int) -> HttpStatusFailure:
    return HttpStatusFailure(status=status, elapsed_ms=5)


class FakeTransport:
    """Transport returning scripted outcomes; the last one repeats."""

    def __init__(self, outcomes: Iterable[TransportOutcome]):
        self.outcomes = list(outcomes)
        self.requests: list[RequestDescriptor] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def send(self, request: RequestDescriptor) -> TransportOutcome:
        self.requests.append(request)
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep tests independent of the developer's environment and `.env`."""
    monkeypatch.chdir(tmp_path)
    for key in ("VESPR_API_URL", "VESPR_API_KEY", "VESPR_MAX_RETRIES", "VESPR_REQUEST_TIMEOUT_MS"):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def no_backoff():
    """Skip retry delays, recording the requested sleeps."""
    with patch("cardano_tracker.clients.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.fixture
def vespr_config() -> VesprConfig:
    return VesprConfig(
        api_url="https://api.test.vespr.xyz",
        api_key="test-key",
        request_timeout_ms=100,
        max_retries=3,
        retry_base_delay_ms=10,
    )


@pytest.fixture
def app_config(vespr_config: VesprConfig) -> AppConfig:
    return AppConfig(vespr=vespr_config, cache=CacheConfig(ttl_prices=600, max_entries=100))
