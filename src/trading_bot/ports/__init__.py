"""
Ports: Abstract interfaces for external dependencies.

This follows the Ports & Adapters (Hexagonal) architecture pattern.
Use cases depend only on these interfaces, not on concrete implementations.
"""

from trading_bot.ports.exchange import ExchangePort

__all__ = ["ExchangePort"]
