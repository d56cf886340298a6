"""Command-line interface for crypto-client."""
from __future__ import annotations

import argparse
import asyncio
import sys
import time
from datetime import date
from typing import TextIO

from .coinbase import CoinbaseClient
from .config import load_config
from .errors import CoinbaseError
from .logging_setup import configure_logging
from .presentation import (
    accounts_table,
    exchange_rates_table,
    overview_summary,
    overview_table,
    profile_block,
    transactions_table,
)
from .services import PortfolioService

COINBASE_DESCRIPTION = """\
Interact with the Coinbase API.

Create an API key and secret at https://www.coinbase.com/settings/api with
read access, then export them before running this command:

    export COINBASE_KEY="API_KEY"
    export COINBASE_SECRET="API_SECRET"

Without flags an overview of every funded wallet is printed: current
prices, sell-out value, invested amount, inflation rewards and return.
"""


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date (expected YYYY-MM-DD): {value}"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="crypto-client",
        description="Interact with crypto currency service providers",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: ./config.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command")

    cb = sub.add_parser(
        "coinbase",
        help="Interact with the Coinbase API",
        description=COINBASE_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    cb.add_argument(
        "-t",
        "--list-transactions",
        action="store_true",
        help="list all your accounts transactions",
    )
    cb.add_argument(
        "-a",
        "--list-accounts",
        action="store_true",
        help="list all your accounts",
    )
    cb.add_argument(
        "-r",
        "--exchange-rates",
        action="store_true",
        help="list exchange rates for your native currency",
    )
    cb.add_argument(
        "--on-date",
        type=_parse_date,
        default=None,
        metavar="YYYY-MM-DD",
        help="with --list-accounts, value balances at that day's spot price",
    )

    return parser


async def run_coinbase(
    service: PortfolioService, args: argparse.Namespace, out: TextIO
) -> None:
    """Run the selected Coinbase modes and write their tables to ``out``.

    With both --list-transactions and --list-accounts, transactions are
    listed first, then accounts.
    """
    if args.list_transactions:
        entries = await service.list_transactions()
        transactions_table(entries).print(out)

    if args.list_accounts:
        valuations = await service.list_accounts(args.on_date)
        accounts_table(valuations).print(out)

    if args.exchange_rates:
        rates = await service.exchange_rates()
        exchange_rates_table(rates).print(out)

    if not (args.list_transactions or args.list_accounts or args.exchange_rates):
        overview = await service.overview()
        out.write(profile_block(overview.profile) + "\n")
        overview_table(overview).print(out)
        out.write("\n".join(overview_summary(overview)) + "\n")


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    config = load_config(args.config)
    client = CoinbaseClient(config.credentials, config.api)
    service = PortfolioService(client)

    start = time.monotonic()
    await run_coinbase(service, args, sys.stdout)
    print()
    print(f"Elapsed Run Time: {time.monotonic() - start:.3f}s")


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.on_date is not None and not args.list_accounts:
        parser.error("--on-date requires --list-accounts")

    configure_logging(args.log_level)
    try:
        asyncio.run(_run(args))
    except (CoinbaseError, FileNotFoundError, ValueError) as e:
        print(e, file=sys.stderr)
        sys.exit(1)
