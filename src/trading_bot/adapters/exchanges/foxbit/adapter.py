"""
Foxbit Exchange Adapter.

Implements ExchangePort using the Foxbit REST v3 API.
Every call is one signed request; responses are mapped to domain types.

API: https://docs.foxbit.com.br/rest/v3/
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import aiohttp

from trading_bot.adapters.http.signed_request import RequestParams, do_request
from trading_bot.config.settings import FOXBIT_BASE_URL, Settings
from trading_bot.domain.errors import DecodeError
from trading_bot.domain.models import Market, Order, OrderBook, TimeInForce
from trading_bot.observability.logging import get_logger
from trading_bot.ports.exchange import ExchangePort

logger = get_logger(__name__)

API_PREFIX = "/rest/v3"


@dataclass(frozen=True, slots=True)
class OrderDefaults:
    """Order policy fields sent with every created order."""

    post_only: bool = True
    time_in_force: TimeInForce = TimeInForce.GTC


def _escape_segment(value: str) -> str:
    """Percent-escape a caller-supplied value for use as one URL path segment.

    Sub-delimiters that are legal inside a segment stay literal; "/", "?", ";"
    and "," are escaped.
    """
    return quote(value, safe="$&+=:@")


def _unwrap_list(payload: Any, model: str) -> list[Any]:
    """Extract the ``data`` list from a ``{"data": [...]}`` envelope."""
    if not isinstance(payload, Mapping):
        raise DecodeError(f"{model}: expected JSON object envelope, got {type(payload).__name__}")
    data = payload.get("data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(f"{model}: 'data' must be a list")
    return data


class FoxbitAdapter(ExchangePort):
    """
    Foxbit REST v3 adapter.

    Holds only immutable credentials and one reusable HTTP session.
    """

    def __init__(
        self,
        api_key: str,
        secret: str,
        *,
        base_url: str = FOXBIT_BASE_URL,
        timeout_seconds: float = 10.0,
        order_defaults: OrderDefaults | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self._api_key = api_key
        self._secret = secret
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._order_defaults = order_defaults or OrderDefaults()

        # HTTP session (lazy init unless injected)
        self._http_session = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, settings: Settings) -> FoxbitAdapter:
        """Build an adapter from the ``foxbit`` settings block."""
        cfg = settings.foxbit
        return cls(
            cfg.api_key,
            cfg.api_secret,
            base_url=cfg.base_url,
            timeout_seconds=cfg.timeout_seconds,
            order_defaults=OrderDefaults(
                post_only=cfg.post_only,
                time_in_force=cfg.time_in_force,
            ),
        )

    @property
    def name(self) -> str:
        return "foxbit"

    @property
    def order_defaults(self) -> OrderDefaults:
        return self._order_defaults

    # =========================================================================
    # Transport
    # =========================================================================

    def _get_session(self) -> aiohttp.ClientSession:
        if self._http_session is None or self._http_session.closed:
            self._http_session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._http_session

    async def close(self) -> None:
        if self._http_session is not None and self._owns_session and not self._http_session.closed:
            await self._http_session.close()
        self._http_session = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        query: dict[str, str] | None = None,
        body: Any = None,
        decode: bool = True,
    ) -> Any:
        logger.debug(f"Foxbit {method} {path} query={query or {}}")
        return await do_request(
            self._get_session(),
            RequestParams(
                method=method,
                base_url=self._base_url,
                path=API_PREFIX + path,
                api_key=self._api_key,
                secret=self._secret,
                query=query,
                body=body,
                decode=decode,
            ),
        )

    # =========================================================================
    # Market Data
    # =========================================================================

    async def get_markets(self) -> list[Market]:
        reply = await self._request("GET", "/markets")
        return [Market.from_dict(item) for item in _unwrap_list(reply, "markets")]

    async def get_order_book(self, market: str, depth: int) -> OrderBook:
        reply = await self._request(
            "GET",
            f"/markets/{_escape_segment(market)}/orderbook",
            query={"depth": str(depth)},
        )
        return OrderBook.from_dict(reply)

    # =========================================================================
    # Orders
    # =========================================================================

    def _order_payload(self, order: Order) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "side": order.side.value,
            "type": str(getattr(order.order_type, "value", order.order_type)),
            "market_symbol": order.market_symbol,
        }
        # Market orders may leave price and/or quantity unset.
        if order.quantity:
            payload["quantity"] = order.quantity
        if order.price:
            payload["price"] = order.price
        payload["post_only"] = self._order_defaults.post_only
        payload["time_in_force"] = self._order_defaults.time_in_force.value
        return payload

    async def create_order(self, order: Order) -> Order:
        reply = await self._request("POST", "/orders", body=self._order_payload(order))
        order_id = reply.get("id") if isinstance(reply, Mapping) else None
        if order_id is None or str(order_id) == "":
            raise DecodeError(
                "create order: response carries no order id",
                symbol=order.market_symbol,
                exchange=self.name,
            )
        logger.info(f"Foxbit order created: id={order_id} {order.side.value} {order.market_symbol}")
        return order.with_id(str(order_id))

    async def get_active_orders(self, market: str) -> list[Order]:
        query = {"state": "ACTIVE"}
        if market:
            query["market_symbol"] = market
        reply = await self._request("GET", "/orders", query=query)
        return [Order.from_dict(item) for item in _unwrap_list(reply, "orders")]

    async def get_order_by_id(self, order_id: str) -> Order:
        reply = await self._request("GET", f"/orders/by-order-id/{_escape_segment(order_id)}")
        return Order.from_dict(reply)

    async def cancel_order(self, order_id: str) -> None:
        await self._request(
            "PUT",
            "/orders/cancel",
            body={"type": "ID", "id": order_id},
            decode=False,
        )
        logger.info(f"Foxbit order cancelled: id={order_id}")
