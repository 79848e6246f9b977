"""Command line entry point."""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from .app import create_application
from .clients.validation import format_validation_issues
from .config import AppConfig, get_config
from .tools import ToolResult
from .utils.log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cardano-tracker",
        description="Query Cardano wallet balances and ADA prices from the VESPR API.",
    )
    parser.add_argument("--json", action="store_true", help="print the structured result as JSON")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    wallet = subparsers.add_parser("wallet", help="wallet balance, tokens and handles")
    wallet.add_argument("address", help="Cardano wallet address (bech32, addr1...)")
    wallet.add_argument("--currency", default=None, help="value the portfolio in this currency")

    price = subparsers.add_parser("price", help="ADA spot price")
    price.add_argument("currency", help="currency code, e.g. USD")

    subparsers.add_parser("currencies", help="list supported currencies")
    return parser


async def run(args: argparse.Namespace, config: AppConfig) -> ToolResult:
    async with create_application(config) as app:
        if args.command == "wallet":
            return await app.wallet_balance(args.address, args.currency)
        elif args.command == "price":
            return await app.ada_price(args.currency)
        else:
            return app.supported_currencies()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = get_config()
    except ValidationError as e:
        print(f"Error: Invalid configuration. {format_validation_issues(e)}", file=sys.stderr)
        return 1

    setup_logging(args.log_level or config.log_level, config.log_format.value)

    result = asyncio.run(run(args, config))

    output = result.to_json() if args.json and not result.is_error else result.text
    print(output, file=sys.stderr if result.is_error else sys.stdout)
    return 1 if result.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
