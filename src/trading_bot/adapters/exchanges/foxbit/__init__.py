"""Foxbit REST v3 exchange adapter."""

from trading_bot.adapters.exchanges.foxbit.adapter import FoxbitAdapter, OrderDefaults

__all__ = ["FoxbitAdapter", "OrderDefaults"]
