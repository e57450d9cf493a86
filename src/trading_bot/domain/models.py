"""
Canonical Domain Models.

Prices and quantities are decimal text (``str``), never floats.
These models are the single source of truth - venue payloads are mapped to these.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from trading_bot.domain.errors import DecodeError
from trading_bot.utils.decimals import decimal_text

# =============================================================================
# ENUMS
# =============================================================================


class Side(str, Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def from_string(cls, value: str) -> Side:
        """Parse side from various string formats."""
        normalized = value.upper().strip()
        if normalized in ("BUY", "B"):
            return cls.BUY
        if normalized in ("SELL", "S"):
            return cls.SELL
        raise ValueError(f"Unknown side: {value}")


class OrderType(str, Enum):
    """Order types every venue understands."""

    LIMIT = "LIMIT"
    MARKET = "MARKET"

    @classmethod
    def parse(cls, value: str) -> OrderType | str:
        """Return the enum member, or the raw upper-cased value for venue-specific types."""
        normalized = value.upper().strip()
        try:
            return cls(normalized)
        except ValueError:
            return normalized


class TimeInForce(str, Enum):
    """Time in force options."""

    GTC = "GTC"  # Good till cancelled
    IOC = "IOC"  # Immediate or cancel
    FOK = "FOK"  # Fill or kill


# =============================================================================
# DECODING HELPERS
# =============================================================================


def _require(payload: Any, key: str, model: str) -> Any:
    if not isinstance(payload, Mapping):
        raise DecodeError(f"{model}: expected JSON object, got {type(payload).__name__}")
    if key not in payload or payload[key] is None:
        raise DecodeError(f"{model}: missing field '{key}'")
    return payload[key]


def _text(value: Any, key: str, model: str) -> str:
    try:
        return decimal_text(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"{model}: invalid value for '{key}': {e}") from e


def _int(value: Any, key: str, model: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise DecodeError(f"{model}: invalid integer for '{key}': {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"{model}: invalid integer for '{key}': {value!r}") from e


# =============================================================================
# VALUE OBJECTS & MODELS
# =============================================================================


@dataclass(frozen=True, slots=True)
class Market:
    """Trading pair and its price/quantity formatting rules."""

    symbol: str
    price_min: str = ""
    price_increment: str = ""
    price_precision: int = 0
    quantity_min: str = ""
    quantity_increment: str = ""
    quantity_precision: int = 0

    @classmethod
    def from_dict(cls, payload: Any) -> Market:
        name = cls.__name__
        symbol = str(_require(payload, "symbol", name))
        return cls(
            symbol=symbol,
            price_min=_text(payload.get("price_min"), "price_min", name),
            price_increment=_text(payload.get("price_increment"), "price_increment", name),
            price_precision=_int(payload.get("price_precision"), "price_precision", name),
            quantity_min=_text(payload.get("quantity_min"), "quantity_min", name),
            quantity_increment=_text(payload.get("quantity_increment"), "quantity_increment", name),
            quantity_precision=_int(payload.get("quantity_precision"), "quantity_precision", name),
        )


@dataclass(frozen=True, slots=True)
class Order:
    """
    Trading order.

    Built locally with an empty ``id`` for a create request; ``id`` and
    ``state`` come from the venue. Never mutated - re-fetch for fresh state.
    """

    market_symbol: str
    side: Side
    order_type: OrderType | str
    price: str = ""
    quantity: str = ""
    id: str = ""
    state: str = ""

    @property
    def is_assigned(self) -> bool:
        """True once the venue has given this order an ID."""
        return bool(self.id)

    def with_id(self, order_id: str) -> Order:
        """Return a copy annotated with the venue-assigned ID."""
        return replace(self, id=order_id)

    @classmethod
    def from_dict(cls, payload: Any) -> Order:
        name = cls.__name__
        raw_side = str(_require(payload, "side", name))
        try:
            side = Side.from_string(raw_side)
        except ValueError as e:
            raise DecodeError(f"{name}: {e}") from e
        raw_id = payload.get("id")
        return cls(
            id="" if raw_id is None else str(raw_id),
            market_symbol=str(_require(payload, "market_symbol", name)),
            side=side,
            order_type=OrderType.parse(str(_require(payload, "type", name))),
            price=_text(payload.get("price"), "price", name),
            quantity=_text(payload.get("quantity"), "quantity", name),
            state=str(payload.get("state") or ""),
        )


@dataclass(frozen=True, slots=True)
class PriceLevel:
    """One order book row."""

    price: str
    quantity: str


@dataclass(frozen=True, slots=True)
class OrderBook:
    """Bids and asks, best to worst, exactly as the venue returned them."""

    bids: tuple[PriceLevel, ...] = field(default_factory=tuple)
    asks: tuple[PriceLevel, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, payload: Any) -> OrderBook:
        name = cls.__name__
        if not isinstance(payload, Mapping):
            raise DecodeError(f"{name}: expected JSON object, got {type(payload).__name__}")
        return cls(
            bids=cls._levels(payload.get("bids"), "bids"),
            asks=cls._levels(payload.get("asks"), "asks"),
        )

    @staticmethod
    def _levels(rows: Any, key: str) -> tuple[PriceLevel, ...]:
        if rows is None:
            return ()
        if not isinstance(rows, list):
            raise DecodeError(f"OrderBook: '{key}' must be a list")
        levels = []
        for row in rows:
            if not isinstance(row, list) or len(row) < 2:
                raise DecodeError(f"OrderBook: malformed {key} entry: {row!r}")
            levels.append(
                PriceLevel(
                    price=_text(row[0], key, "OrderBook"),
                    quantity=_text(row[1], key, "OrderBook"),
                )
            )
        return tuple(levels)
