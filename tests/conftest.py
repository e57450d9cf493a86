"""Shared fixtures: a local fake venue and an in-memory exchange."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from trading_bot.config.settings import ExchangeSettings, Settings
from trading_bot.domain.models import Market, Order, OrderBook, PriceLevel
from trading_bot.ports.exchange import ExchangePort

API_KEY = "test-api-key"
API_SECRET = "test-api-secret"


@dataclass
class RecordedRequest:
    method: str
    raw_path: str
    path: str
    query_string: str
    headers: Any
    body: bytes


@dataclass
class FakeVenue:
    """Records every request and answers from a (method, raw path) table."""

    base_url: str = ""
    requests: list[RecordedRequest] = field(default_factory=list)
    responses: dict[tuple[str, str], tuple[int, bytes]] = field(default_factory=dict)

    def respond(self, method: str, raw_path: str, body: str = "", status: int = 200) -> None:
        self.responses[(method, raw_path)] = (status, body.encode("utf-8"))

    @property
    def last(self) -> RecordedRequest:
        assert self.requests, "no request reached the venue"
        return self.requests[-1]

    async def handle(self, request: web.Request) -> web.Response:
        raw_path = request.raw_path.split("?", 1)[0]
        self.requests.append(
            RecordedRequest(
                method=request.method,
                raw_path=raw_path,
                path=request.path,
                query_string=request.rel_url.raw_query_string,
                headers=request.headers.copy(),
                body=await request.read(),
            )
        )
        status, body = self.responses.get((request.method, raw_path), (404, b'{"error":{"message":"no route","code":0}}'))
        return web.Response(status=status, body=body, content_type="application/json")


@pytest_asyncio.fixture
async def venue():
    fake = FakeVenue()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)
    server = TestServer(app)
    await server.start_server()
    fake.base_url = str(server.make_url("/")).rstrip("/")
    try:
        yield fake
    finally:
        await server.close()


@pytest.fixture
def settings():
    return Settings(
        foxbit=ExchangeSettings(
            api_key=API_KEY,
            api_secret=API_SECRET,
            base_url="http://127.0.0.1:9",
        )
    )


class InMemoryExchange(ExchangePort):
    """Port implementation with canned data, for use-case and CLI tests."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.closed = False
        self.error: Exception | None = None
        self.markets = [Market(symbol="BTCBRL", price_min="0.01", price_increment="0.01", price_precision=2)]
        self.book = OrderBook(
            bids=(PriceLevel("300000.123", "0.5"),),
            asks=(PriceLevel("300100.5", "0.00000001"),),
        )
        self.orders: dict[str, Order] = {}

    @property
    def name(self) -> str:
        return "memory"

    def _record(self, *call) -> None:
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    async def get_markets(self) -> list[Market]:
        self._record("get_markets")
        return list(self.markets)

    async def get_order_book(self, market: str, depth: int) -> OrderBook:
        self._record("get_order_book", market, depth)
        return self.book

    async def create_order(self, order: Order) -> Order:
        self._record("create_order", order)
        created = order.with_id(f"mem-{len(self.orders) + 1}")
        self.orders[created.id] = created
        return created

    async def get_active_orders(self, market: str) -> list[Order]:
        self._record("get_active_orders", market)
        return [o for o in self.orders.values() if not market or o.market_symbol == market]

    async def get_order_by_id(self, order_id: str) -> Order:
        self._record("get_order_by_id", order_id)
        return self.orders[order_id]

    async def cancel_order(self, order_id: str) -> None:
        self._record("cancel_order", order_id)
        self.orders.pop(order_id, None)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def memory_exchange():
    return InMemoryExchange()
