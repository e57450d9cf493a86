from .use_cases import (
    CancelOrder,
    FetchMarkets,
    FetchOrderBook,
    GetOrder,
    ListActiveOrders,
    PlaceOrder,
)

__all__ = [
    "FetchMarkets",
    "FetchOrderBook",
    "PlaceOrder",
    "ListActiveOrders",
    "GetOrder",
    "CancelOrder",
]
