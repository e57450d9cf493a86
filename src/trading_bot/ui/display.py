"""
Table output for CLI commands.

Values are printed as the exchange sent them, except order book rows:
those are converted to float here, for display only, and shown with
2 decimals for price and 8 for quantity.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from trading_bot.domain.models import Market, Order, OrderBook

console = Console()


def _display_number(value: str, places: int) -> str:
    try:
        return f"{float(value):.{places}f}"
    except ValueError:
        return value


def format_price(value: str) -> str:
    return _display_number(value, 2)


def format_quantity(value: str) -> str:
    return _display_number(value, 8)


def _table(*columns: str, right: Iterable[str] = ()) -> Table:
    right_aligned = set(right)
    t = Table(box=box.SIMPLE, show_edge=False, pad_edge=False)
    for name in columns:
        t.add_column(name, justify="right" if name in right_aligned else "left", no_wrap=True)
    return t


def _add_row(t: Table, *cells: str) -> None:
    # Venue text is literal, never console markup.
    t.add_row(*(Text(cell) for cell in cells))


def markets_table(markets: Iterable[Market]) -> Table:
    t = _table(
        "SYMBOL",
        "PRICE_MIN",
        "PRICE_INCREMENT",
        "PRICE_PRECISION",
        "QUANTITY_MIN",
        "QUANTITY_INCREMENT",
        "QUANTITY_PRECISION",
        right=("PRICE_PRECISION", "QUANTITY_PRECISION"),
    )
    for m in markets:
        _add_row(
            t,
            m.symbol,
            m.price_min,
            m.price_increment,
            str(m.price_precision),
            m.quantity_min,
            m.quantity_increment,
            str(m.quantity_precision),
        )
    return t


def order_book_table(book: OrderBook) -> Table:
    t = _table("SIDE", "PRICE", "QUANTITY", right=("PRICE", "QUANTITY"))
    for level in book.bids:
        _add_row(t, "BID", format_price(level.price), format_quantity(level.quantity))
    for level in book.asks:
        _add_row(t, "ASK", format_price(level.price), format_quantity(level.quantity))
    return t


def orders_table(orders: Iterable[Order]) -> Table:
    t = _table("ID", "MARKET", "SIDE", "TYPE", "PRICE", "QUANTITY", "STATE")
    for o in orders:
        _add_row(
            t,
            o.id,
            o.market_symbol,
            o.side.value,
            str(getattr(o.order_type, "value", o.order_type)),
            o.price,
            o.quantity,
            o.state,
        )
    return t


def cancel_table(order_id: str) -> Table:
    t = _table("ORDER_ID", "STATUS")
    _add_row(t, order_id, "CANCELLED")
    return t


def display_markets(markets: Iterable[Market], out: Console | None = None) -> None:
    (out or console).print(markets_table(markets))


def display_order_book(book: OrderBook, out: Console | None = None) -> None:
    (out or console).print(order_book_table(book))


def display_orders(orders: Iterable[Order], out: Console | None = None) -> None:
    (out or console).print(orders_table(orders))


def display_cancel(order_id: str, out: Console | None = None) -> None:
    (out or console).print(cancel_table(order_id))
