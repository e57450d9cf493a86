"""
Entry points for CLI commands.

Each command builds the selected exchange adapter, runs one use case,
renders the result and returns a process exit code.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

# Load .env file BEFORE importing settings
from dotenv import load_dotenv

for env_path in [
    Path.cwd() / ".env",  # Current working directory
    Path(__file__).parent.parent.parent.parent / ".env",  # Project root
]:
    if env_path.exists():
        load_dotenv(env_path)
        break
else:
    load_dotenv()  # Fallback: search default locations

from trading_bot.adapters.exchanges import create_exchange  # noqa: E402
from trading_bot.application.use_cases import (  # noqa: E402
    CancelOrder,
    FetchMarkets,
    FetchOrderBook,
    GetOrder,
    ListActiveOrders,
    PlaceOrder,
)
from trading_bot.config.settings import Settings, get_settings  # noqa: E402
from trading_bot.domain.errors import DomainError, ValidationError  # noqa: E402
from trading_bot.domain.models import Order, OrderType, Side  # noqa: E402
from trading_bot.observability.logging import get_logger  # noqa: E402
from trading_bot.ports.exchange import ExchangePort  # noqa: E402
from trading_bot.ui.display import (  # noqa: E402
    display_cancel,
    display_markets,
    display_order_book,
    display_orders,
)
from trading_bot.ui.errors import display_error  # noqa: E402
from trading_bot.utils.decimals import is_decimal_text  # noqa: E402

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def build_order(
    market: str,
    side: str,
    quantity: str,
    price: str = "",
    order_type: str = "limit",
) -> Order:
    """
    Validate CLI input and build an unsent order.

    Raises:
        ValidationError: unknown side/type, missing or non-decimal price/quantity.
    """
    if not market:
        raise ValidationError("market is required")

    try:
        parsed_side = Side.from_string(side)
    except ValueError as e:
        raise ValidationError("invalid side, use buy or sell", symbol=market) from e

    parsed_type = OrderType.parse(order_type)
    if not isinstance(parsed_type, OrderType):
        raise ValidationError(f"invalid order type: {order_type}, use limit or market", symbol=market)

    if not quantity or not is_decimal_text(quantity):
        raise ValidationError(f"quantity must be a decimal number, got {quantity!r}", symbol=market)

    if parsed_type is OrderType.LIMIT and not price:
        raise ValidationError("price is required for limit orders", symbol=market)
    if price and not is_decimal_text(price):
        raise ValidationError(f"price must be a decimal number, got {price!r}", symbol=market)

    return Order(
        market_symbol=market,
        side=parsed_side,
        order_type=parsed_type,
        quantity=quantity,
        price=price,
    )


async def _run(
    exchange_name: str,
    action: Callable[[ExchangePort], Awaitable[None]],
    *,
    settings: Settings | None,
    exchange: ExchangePort | None,
) -> int:
    """Build the adapter, run ``action`` against it and map errors to an exit code."""
    settings = settings or get_settings()
    try:
        ex = exchange or create_exchange(exchange_name, settings)
    except DomainError as e:
        display_error(e)
        return EXIT_ERROR

    try:
        async with ex:
            await action(ex)
    except DomainError as e:
        # "message" is a reserved LogRecord attribute
        fields = {k: v for k, v in e.to_dict().items() if k != "message"}
        fields["exchange"] = fields["exchange"] or ex.name
        logger.debug(f"{ex.name}: {e.error_code}: {e.message}", extra=fields)
        display_error(e)
        return EXIT_ERROR
    return EXIT_OK


async def run_fetch_markets(
    exchange_name: str = "foxbit",
    *,
    settings: Settings | None = None,
    exchange: ExchangePort | None = None,
) -> int:
    async def action(ex: ExchangePort) -> None:
        display_markets(await FetchMarkets(ex).execute())

    return await _run(exchange_name, action, settings=settings, exchange=exchange)


async def run_fetch_order_book(
    market: str,
    depth: int = 10,
    exchange_name: str = "foxbit",
    *,
    settings: Settings | None = None,
    exchange: ExchangePort | None = None,
) -> int:
    async def action(ex: ExchangePort) -> None:
        display_order_book(await FetchOrderBook(ex).execute(market.upper(), depth))

    return await _run(exchange_name, action, settings=settings, exchange=exchange)


async def run_place_order(
    market: str,
    side: str,
    quantity: str,
    price: str = "",
    order_type: str = "limit",
    exchange_name: str = "foxbit",
    *,
    settings: Settings | None = None,
    exchange: ExchangePort | None = None,
) -> int:
    try:
        order = build_order(market, side, quantity, price, order_type)
    except ValidationError as e:
        display_error(f"error: {e.message}")
        return EXIT_ERROR

    async def action(ex: ExchangePort) -> None:
        created = await PlaceOrder(ex).execute(order)
        display_orders([created])

    return await _run(exchange_name, action, settings=settings, exchange=exchange)


async def run_cancel_order(
    order_id: str,
    exchange_name: str = "foxbit",
    *,
    settings: Settings | None = None,
    exchange: ExchangePort | None = None,
) -> int:
    async def action(ex: ExchangePort) -> None:
        await CancelOrder(ex).execute(order_id)
        display_cancel(order_id)

    return await _run(exchange_name, action, settings=settings, exchange=exchange)


async def run_list_active_orders(
    market: str = "",
    exchange_name: str = "foxbit",
    *,
    settings: Settings | None = None,
    exchange: ExchangePort | None = None,
) -> int:
    async def action(ex: ExchangePort) -> None:
        display_orders(await ListActiveOrders(ex).execute(market))

    return await _run(exchange_name, action, settings=settings, exchange=exchange)


async def run_get_order(
    order_id: str,
    exchange_name: str = "foxbit",
    *,
    settings: Settings | None = None,
    exchange: ExchangePort | None = None,
) -> int:
    async def action(ex: ExchangePort) -> None:
        display_orders([await GetOrder(ex).execute(order_id)])

    return await _run(exchange_name, action, settings=settings, exchange=exchange)
