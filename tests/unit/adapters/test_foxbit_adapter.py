"""
Unit tests for the Foxbit REST v3 adapter.

Runs the adapter against a local fake venue and checks the exact paths,
query strings and JSON bodies on the wire plus the decoded domain models.
"""

from __future__ import annotations

import json

import aiohttp
import pytest
import pytest_asyncio

from trading_bot.adapters.exchanges.foxbit.adapter import FoxbitAdapter, OrderDefaults
from trading_bot.adapters.http.signed_request import HEADER_ACCESS_KEY
from trading_bot.domain.errors import DecodeError, HTTPStatusError
from trading_bot.domain.models import Order, OrderType, Side, TimeInForce

API_KEY = "test-api-key"
API_SECRET = "test-api-secret"


@pytest_asyncio.fixture
async def adapter(venue):
    ex = FoxbitAdapter(API_KEY, API_SECRET, base_url=venue.base_url)
    try:
        yield ex
    finally:
        await ex.close()


@pytest.mark.asyncio
class TestMarketData:
    async def test_get_markets_unwraps_data_envelope(self, venue, adapter):
        venue.respond(
            "GET",
            "/rest/v3/markets",
            json.dumps(
                {
                    "data": [
                        {
                            "symbol": "btcbrl",
                            "price_min": "0.00000001",
                            "price_increment": "0.01",
                            "price_precision": 2,
                            "quantity_min": "0.00001",
                            "quantity_increment": "0.00000001",
                            "quantity_precision": 8,
                        }
                    ]
                }
            ),
        )

        markets = await adapter.get_markets()

        assert venue.last.method == "GET"
        assert venue.last.query_string == ""
        assert venue.last.headers[HEADER_ACCESS_KEY] == API_KEY
        assert len(markets) == 1
        assert markets[0].symbol == "btcbrl"
        assert markets[0].price_min == "0.00000001"
        assert markets[0].quantity_precision == 8

    async def test_get_markets_numeric_bounds_stay_exact(self, venue, adapter):
        venue.respond(
            "GET",
            "/rest/v3/markets",
            '{"data":[{"symbol":"ETHBRL","price_min":0.00000001,"quantity_min":10,'
            '"price_precision":2,"quantity_precision":4}]}',
        )

        (market,) = await adapter.get_markets()

        assert market.price_min == "0.00000001"
        assert market.quantity_min == "10"

    async def test_get_order_book(self, venue, adapter):
        venue.respond(
            "GET",
            "/rest/v3/markets/BTCBRL/orderbook",
            '{"sequence_id":1,"bids":[["300000.00","0.5"],["299999.99","1"]],"asks":[["300100.10","0.25"]]}',
        )

        book = await adapter.get_order_book("BTCBRL", 5)

        assert venue.last.method == "GET"
        assert venue.last.query_string == "depth=5"
        assert "BTCBRL" in venue.last.raw_path
        assert [(lvl.price, lvl.quantity) for lvl in book.bids] == [("300000.00", "0.5"), ("299999.99", "1")]
        assert [(lvl.price, lvl.quantity) for lvl in book.asks] == [("300100.10", "0.25")]

    async def test_market_symbol_is_path_escaped(self, venue, adapter):
        venue.respond("GET", "/rest/v3/markets/BTC%2FBRL%20X/orderbook", '{"bids":[],"asks":[]}')

        book = await adapter.get_order_book("BTC/BRL X", 1)

        assert venue.last.raw_path == "/rest/v3/markets/BTC%2FBRL%20X/orderbook"
        assert book.bids == () and book.asks == ()


@pytest.mark.asyncio
class TestOrders:
    async def test_create_order_returns_input_with_generated_id(self, venue, adapter):
        venue.respond("POST", "/rest/v3/orders", '{"id":"abc123"}')
        order = Order(
            market_symbol="BTCBRL",
            side=Side.BUY,
            order_type=OrderType.LIMIT,
            quantity="0.01",
            price="300000.00",
        )

        created = await adapter.create_order(order)

        assert created.id == "abc123"
        assert created == order.with_id("abc123")
        assert order.id == ""
        assert json.loads(venue.last.body) == {
            "side": "BUY",
            "type": "LIMIT",
            "market_symbol": "BTCBRL",
            "quantity": "0.01",
            "price": "300000.00",
            "post_only": True,
            "time_in_force": "GTC",
        }

    async def test_create_order_uses_configured_defaults(self, venue):
        venue.respond("POST", "/rest/v3/orders", '{"id":7}')
        ex = FoxbitAdapter(
            API_KEY,
            API_SECRET,
            base_url=venue.base_url,
            order_defaults=OrderDefaults(post_only=False, time_in_force=TimeInForce.IOC),
        )
        try:
            created = await ex.create_order(
                Order(market_symbol="BTCBRL", side=Side.SELL, order_type=OrderType.MARKET, quantity="0.5")
            )
        finally:
            await ex.close()

        payload = json.loads(venue.last.body)
        assert created.id == "7"
        assert payload["post_only"] is False
        assert payload["time_in_force"] == "IOC"
        assert "price" not in payload

    async def test_create_order_without_id_is_decode_error(self, venue, adapter):
        venue.respond("POST", "/rest/v3/orders", "{}")

        with pytest.raises(DecodeError):
            await adapter.create_order(
                Order(market_symbol="BTCBRL", side=Side.BUY, order_type=OrderType.LIMIT, quantity="1", price="1")
            )

    async def test_get_active_orders_without_market(self, venue, adapter):
        venue.respond("GET", "/rest/v3/orders", '{"data":[]}')

        orders = await adapter.get_active_orders("")

        assert orders == []
        assert venue.last.query_string == "state=ACTIVE"

    async def test_get_active_orders_with_market(self, venue, adapter):
        venue.respond(
            "GET",
            "/rest/v3/orders",
            '{"data":[{"id":"1","market_symbol":"BTCBRL","side":"SELL","type":"LIMIT",'
            '"price":"310000.00","quantity":"0.002","state":"ACTIVE"}]}',
        )

        orders = await adapter.get_active_orders("BTCBRL")

        assert venue.last.query_string == "market_symbol=BTCBRL&state=ACTIVE"
        assert orders == [
            Order(
                id="1",
                market_symbol="BTCBRL",
                side=Side.SELL,
                order_type=OrderType.LIMIT,
                price="310000.00",
                quantity="0.002",
                state="ACTIVE",
            )
        ]

    async def test_get_order_by_id_round_trips_decimal_strings(self, venue, adapter):
        sent = {
            "id": "a/b 1",
            "market_symbol": "BTCBRL",
            "side": "BUY",
            "type": "STOP_LIMIT",
            "price": "300000.10000000",
            "quantity": "0.00000001",
            "state": "FILLED",
        }
        venue.respond("GET", "/rest/v3/orders/by-order-id/a%2Fb%201", json.dumps(sent))

        order = await adapter.get_order_by_id("a/b 1")

        assert venue.last.raw_path == "/rest/v3/orders/by-order-id/a%2Fb%201"
        assert order.id == "a/b 1"
        assert order.price == "300000.10000000"
        assert order.quantity == "0.00000001"
        assert order.order_type == "STOP_LIMIT"
        assert order.state == "FILLED"

    async def test_order_id_keeps_segment_sub_delimiters(self, venue, adapter):
        venue.respond(
            "GET",
            "/rest/v3/orders/by-order-id/a:b@c+d$e=f&g%2Ch%3Bi%3Fj",
            '{"id":"x","market_symbol":"BTCBRL","side":"BUY","type":"LIMIT"}',
        )

        await adapter.get_order_by_id("a:b@c+d$e=f&g,h;i?j")

        assert venue.last.raw_path == "/rest/v3/orders/by-order-id/a:b@c+d$e=f&g%2Ch%3Bi%3Fj"

    async def test_cancel_order(self, venue, adapter):
        venue.respond("PUT", "/rest/v3/orders/cancel", "")

        result = await adapter.cancel_order("xyz")

        assert result is None
        assert venue.last.method == "PUT"
        assert venue.last.body == b'{"type":"ID","id":"xyz"}'

    async def test_http_error_propagates_unchanged(self, venue, adapter):
        body = '{"error":{"message":"not found","code":4,"details":[]}}'
        venue.respond("GET", "/rest/v3/orders/by-order-id/missing", body, status=404)

        with pytest.raises(HTTPStatusError) as exc_info:
            await adapter.get_order_by_id("missing")

        assert exc_info.value.status == 404
        assert exc_info.value.body == body

    async def test_wrong_envelope_is_decode_error(self, venue, adapter):
        venue.respond("GET", "/rest/v3/orders", '{"data":{"id":"1"}}')

        with pytest.raises(DecodeError):
            await adapter.get_active_orders("")


@pytest.mark.asyncio
class TestLifecycle:
    async def test_close_releases_owned_session(self, venue):
        venue.respond("GET", "/rest/v3/markets", '{"data":[]}')
        ex = FoxbitAdapter(API_KEY, API_SECRET, base_url=venue.base_url)

        await ex.get_markets()
        session = ex._http_session
        await ex.close()

        assert session is not None and session.closed

    async def test_injected_session_is_left_open(self, venue):
        venue.respond("GET", "/rest/v3/markets", '{"data":[]}')
        async with aiohttp.ClientSession() as session:
            async with FoxbitAdapter(API_KEY, API_SECRET, base_url=venue.base_url, session=session) as ex:
                await ex.get_markets()
            assert not session.closed


def test_from_settings(settings):
    settings.foxbit.post_only = False
    ex = FoxbitAdapter.from_settings(settings)

    assert ex.name == "foxbit"
    assert ex.order_defaults == OrderDefaults(post_only=False, time_in_force=TimeInForce.GTC)
