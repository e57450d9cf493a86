"""Shared utility helpers."""

from trading_bot.utils.decimals import decimal_text, is_decimal_text
from trading_bot.utils.json_parser import dumps as json_dumps
from trading_bot.utils.json_parser import loads as json_loads

__all__ = ["decimal_text", "is_decimal_text", "json_loads", "json_dumps"]
