"""
Domain Layer: Core business entities, value objects, and errors.

This layer has NO external dependencies (no HTTP types, no venue payloads).
All types here are canonical and used throughout the application.
"""

from trading_bot.domain.errors import (
    ConfigurationError,
    DecodeError,
    DomainError,
    ExchangeError,
    HTTPStatusError,
    SerializationError,
    TransportError,
    UnknownExchangeError,
    ValidationError,
)
from trading_bot.domain.models import (
    Market,
    Order,
    OrderBook,
    OrderType,
    PriceLevel,
    Side,
    TimeInForce,
)

__all__ = [
    # Enums
    "Side",
    "OrderType",
    "TimeInForce",
    # Models
    "Market",
    "Order",
    "OrderBook",
    "PriceLevel",
    # Errors
    "DomainError",
    "ValidationError",
    "ConfigurationError",
    "UnknownExchangeError",
    "ExchangeError",
    "SerializationError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
]
