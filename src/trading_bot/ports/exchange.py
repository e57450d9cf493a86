"""
Exchange Port: Abstract interface for exchange adapters.

All exchange-specific implementations (Foxbit, ...) must implement this interface.
The interface uses only domain types - no HTTP or venue payload types leak through.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from trading_bot.domain.models import Market, Order, OrderBook


class ExchangePort(ABC):
    """
    Abstract interface for exchange operations.

    All methods are async, use domain types and perform at most one HTTP
    round trip. Implementations never retry; errors propagate unchanged.
    """

    @property
    def name(self) -> str:
        """Return the exchange identifier."""
        return type(self).__name__

    # =========================================================================
    # Market Data
    # =========================================================================

    @abstractmethod
    async def get_markets(self) -> list[Market]:
        """List all tradable markets."""
        ...

    @abstractmethod
    async def get_order_book(self, market: str, depth: int) -> OrderBook:
        """
        Get the order book for a market.

        Args:
            market: Market symbol, e.g. "BTCBRL".
            depth: Number of levels per side requested from the venue.
        """
        ...

    # =========================================================================
    # Orders
    # =========================================================================

    @abstractmethod
    async def create_order(self, order: Order) -> Order:
        """
        Place an order.

        Returns:
            The input order annotated with the venue-assigned ID.
        """
        ...

    @abstractmethod
    async def get_active_orders(self, market: str) -> list[Order]:
        """
        List active orders.

        An empty ``market`` means no market filter.
        """
        ...

    @abstractmethod
    async def get_order_by_id(self, order_id: str) -> Order:
        """Fetch a single order by its venue ID."""
        ...

    @abstractmethod
    async def cancel_order(self, order_id: str) -> None:
        """Cancel an order. Returns nothing on success; raises on failure."""
        ...

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def close(self) -> None:
        """
        Close connections and cleanup resources.

        Default implementation does nothing.
        """
        return

    async def __aenter__(self) -> ExchangePort:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
