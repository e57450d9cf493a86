"""
Entry point for running trading_bot as a module.

Usage:
    python -m trading_bot [global options] <command> [options]

Commands:
    fetch-markets           List all markets
    fetch-order-book        Fetch order book for a market
    place-order             Place a new order
    cancel-order            Cancel an existing order
    list-active-orders      List active orders
    get-order               Get details of a single order

Global options:
    --info              Display build/version information
    --license           Display license information
    --env ENV           Configuration environment (loads <env>.yaml overrides)
    --log-level LEVEL   Override the configured log level
"""

from __future__ import annotations

import argparse
import asyncio
import sys


def build_parser(default_exchange: str = "foxbit", default_depth: int = 10) -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per use case."""
    parser = argparse.ArgumentParser(
        prog="trading-bot",
        description="Exchange trading CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--info", action="store_true", help="Display build/version information")
    parser.add_argument("--license", action="store_true", help="Display license information")
    parser.add_argument("--env", default=None, help="Configuration environment (default: TRADING_BOT_ENV or development)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="Override the configured log level",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        cmd = sub.add_parser(name, help=help_text, description=help_text)
        cmd.add_argument(
            "--exchange",
            default=default_exchange,
            help=f"Exchange adapter (default: {default_exchange})",
        )
        return cmd

    add_command("fetch-markets", "List all markets")

    cmd = add_command("fetch-order-book", "Fetch order book for a market")
    cmd.add_argument("--market", required=True, help="Market symbol, e.g. BTCBRL")
    cmd.add_argument("--depth", type=int, default=default_depth, help=f"Order book depth (default: {default_depth})")

    cmd = add_command("place-order", "Place a new order")
    cmd.add_argument("--market", required=True, help="Market symbol, e.g. BTCBRL")
    cmd.add_argument("--quantity", required=True, help="Order quantity (decimal)")
    cmd.add_argument("--price", default="", help="Order price (decimal, required for limit orders)")
    cmd.add_argument("--side", default="buy", help="Order side: buy|sell (default: buy)")
    cmd.add_argument("--type", dest="order_type", default="limit", help="Order type: limit|market (default: limit)")

    cmd = add_command("cancel-order", "Cancel an existing order")
    cmd.add_argument("--order-id", required=True, help="Order ID to cancel")

    cmd = add_command("list-active-orders", "List active orders")
    cmd.add_argument("--market", default="", help="Market symbol filter (default: all markets)")

    cmd = add_command("get-order", "Get details of a single order")
    cmd.add_argument("--order-id", required=True, help="Order ID")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    # Import here to avoid slow startup for --help
    from trading_bot.app import run
    from trading_bot.build_info import LICENSE_TEXT, get_build_info
    from trading_bot.config.settings import get_settings
    from trading_bot.observability.logging import setup_logging

    pre = build_parser().parse_known_args(argv)[0]
    if pre.info:
        print("\n".join(get_build_info().lines()))
        return 0
    if pre.license:
        print(LICENSE_TEXT)
        return 0

    settings = get_settings(pre.env)
    setup_logging(settings, level=pre.log_level)

    parser = build_parser(settings.cli.default_exchange, settings.cli.default_depth)
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        return 1

    try:
        if args.command == "fetch-markets":
            coro = run.run_fetch_markets(args.exchange, settings=settings)
        elif args.command == "fetch-order-book":
            coro = run.run_fetch_order_book(args.market, args.depth, args.exchange, settings=settings)
        elif args.command == "place-order":
            coro = run.run_place_order(
                args.market,
                args.side,
                args.quantity,
                args.price,
                args.order_type,
                args.exchange,
                settings=settings,
            )
        elif args.command == "cancel-order":
            coro = run.run_cancel_order(args.order_id, args.exchange, settings=settings)
        elif args.command == "list-active-orders":
            coro = run.run_list_active_orders(args.market, args.exchange, settings=settings)
        elif args.command == "get-order":
            coro = run.run_get_order(args.order_id, args.exchange, settings=settings)
        else:
            parser.print_help(sys.stderr)
            return 1
        return asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
