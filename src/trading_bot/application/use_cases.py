"""
Application use cases.

One use case per ExchangePort operation. Each returns the port result
unchanged; they give the CLI a stable call surface and are the place for
cross-cutting concerns such as logging.
"""

from __future__ import annotations

from trading_bot.domain.models import Market, Order, OrderBook
from trading_bot.observability.logging import get_logger
from trading_bot.ports.exchange import ExchangePort

logger = get_logger(__name__)


class FetchMarkets:
    def __init__(self, exchange: ExchangePort):
        self.exchange = exchange

    async def execute(self) -> list[Market]:
        logger.debug(f"fetch-markets on {self.exchange.name}")
        return await self.exchange.get_markets()


class FetchOrderBook:
    def __init__(self, exchange: ExchangePort):
        self.exchange = exchange

    async def execute(self, market: str, depth: int) -> OrderBook:
        logger.debug(f"fetch-order-book on {self.exchange.name}: market={market} depth={depth}")
        return await self.exchange.get_order_book(market, depth)


class PlaceOrder:
    """Send a new order and return it annotated with the venue-assigned ID."""

    def __init__(self, exchange: ExchangePort):
        self.exchange = exchange

    async def execute(self, order: Order) -> Order:
        logger.debug(
            f"place-order on {self.exchange.name}: {order.side.value} {order.quantity} "
            f"{order.market_symbol} @ {order.price or 'market'}"
        )
        return await self.exchange.create_order(order)


class ListActiveOrders:
    def __init__(self, exchange: ExchangePort):
        self.exchange = exchange

    async def execute(self, market: str) -> list[Order]:
        logger.debug(f"list-active-orders on {self.exchange.name}: market={market or '*'}")
        return await self.exchange.get_active_orders(market)


class GetOrder:
    def __init__(self, exchange: ExchangePort):
        self.exchange = exchange

    async def execute(self, order_id: str) -> Order:
        logger.debug(f"get-order on {self.exchange.name}: id={order_id}")
        return await self.exchange.get_order_by_id(order_id)


class CancelOrder:
    def __init__(self, exchange: ExchangePort):
        self.exchange = exchange

    async def execute(self, order_id: str) -> None:
        logger.debug(f"cancel-order on {self.exchange.name}: id={order_id}")
        await self.exchange.cancel_order(order_id)
