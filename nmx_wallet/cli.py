"""Command-line interface for chain inspection and balance watching."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from .balance import BalanceSynchronizer
from .chain.rest import QueryClient
from .config import AppConfig, load_config
from .errors import WalletError
from .logging_setup import configure_logging
from .models import Account, BalanceSnapshot
from .registrar import build_chain_info
from .units import from_base_units, to_base_units


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="nmx-wallet",
        description="NoMercyChain wallet client tools",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: environment only)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("chain-info", help="Print the suggest-chain payload as JSON")

    balance_parser = sub.add_parser("balance", help="Fetch an account balance once")
    balance_parser.add_argument("address", help="Account address")

    watch_parser = sub.add_parser("watch", help="Poll an account balance")
    watch_parser.add_argument("address", help="Account address")
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Poll interval in seconds (overrides config)",
    )

    to_base = sub.add_parser("to-base", help="Convert a display amount to base units")
    to_base.add_argument("amount")

    from_base = sub.add_parser("from-base", help="Convert base units to a display amount")
    from_base.add_argument("amount")

    return parser


def _format_snapshot(snapshot: BalanceSnapshot, config: AppConfig) -> str:
    amount = snapshot.display_amount(config.chain.decimal_places)
    line = f"{snapshot.address}: {amount} {config.chain.display_denom}"
    if snapshot.stale:
        line += " (unavailable)"
    return line


async def _watch(config: AppConfig, address: str, interval: float | None) -> None:
    synchronizer = BalanceSynchronizer(
        QueryClient(config.chain),
        config.chain,
        poll_interval=interval or config.balance.poll_interval_seconds,
        on_update=lambda s: print(_format_snapshot(s, config), flush=True),
    )
    synchronizer.start(Account(address=address))
    try:
        await asyncio.Event().wait()
    finally:
        synchronizer.stop()


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "chain-info":
        print(json.dumps(build_chain_info(config.chain), indent=2))
    elif args.command == "balance":
        synchronizer = BalanceSynchronizer(QueryClient(config.chain), config.chain)
        snapshot = await synchronizer.refresh_once(Account(address=args.address))
        print(_format_snapshot(snapshot, config))
    elif args.command == "watch":
        await _watch(config, args.address, args.interval)
    elif args.command == "to-base":
        print(to_base_units(args.amount, config.chain.decimal_places))
    elif args.command == "from-base":
        print(from_base_units(args.amount, config.chain.decimal_places))
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except (WalletError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
