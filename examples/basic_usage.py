"""Basic usage examples for the Cardano Wallet Tracker.

This file demonstrates:
- Querying a wallet balance
- Looking up the ADA spot price (cached)
- Handling API errors
- Inspecting client and cache metrics

VESPR_API_KEY is required; set it (and optionally VESPR_API_URL) in the environment or a
.env file before running.
"""

import asyncio
import logging

from cardano_tracker import VesprApiError, create_application, get_config
from cardano_tracker.utils.log import setup_logging

logger = logging.getLogger(__name__)

EXAMPLE_ADDRESS = (
    "addr1qy8ac7qqy0vtulyl7wntmsxc6wex80gvcyjy33qffrhm7sh927ysx5sftuw0dlft05dz3c7revpf7jx0xnlcjz3g69mq4afdhv"
)


async def example_1_wallet_balance():
    """Example 1: Query a wallet's ADA, rewards, tokens and handles."""
    print("Example 1: Wallet Balance")
    print("=" * 50)

    async with create_application() as app:
        result = await app.wallet_balance(EXAMPLE_ADDRESS, currency="USD")
        print(result.text)
        return result.structured


async def example_2_spot_price_cache():
    """Example 2: The second lookup within ten minutes is served from cache."""
    print("\nExample 2: Cached Spot Price")
    print("=" * 50)

    async with create_application() as app:
        for _ in range(2):
            result = await app.ada_price("EUR")
            print(result.text)

        metrics = await app.collect_metrics()
        print(f"API price requests: {metrics['vespr_client']['price_requests']}")
        print(f"Cache hits: {metrics['cache']['price_cache']['hits']}")
        return metrics


async def example_3_error_handling():
    """Example 3: Failures arrive as VesprApiError with an optional status code."""
    print("\nExample 3: Error Handling")
    print("=" * 50)

    async with create_application() as app:
        try:
            await app.repository.get_detailed_wallet("addr1" + "x" * 60)
        except VesprApiError as e:
            print(f"API error: {e.message} (status: {e.status_code})")

        # Handlers never raise, they render the error instead
        result = await app.wallet_balance("not-an-address")
        print(result.text)


async def run_all_examples():
    config = get_config()
    setup_logging(config.log_level, "text")

    examples = [example_1_wallet_balance, example_2_spot_price_cache, example_3_error_handling]
    for example in examples:
        try:
            await example()
        except Exception as e:
            print(f"{example.__name__} failed: {e}")


if __name__ == "__main__":
    asyncio.run(run_all_examples())
