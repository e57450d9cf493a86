"""Exchange adapters and the name-based adapter registry."""

from __future__ import annotations

from collections.abc import Callable

from trading_bot.adapters.exchanges.foxbit.adapter import FoxbitAdapter
from trading_bot.config.settings import Settings
from trading_bot.domain.errors import ConfigurationError, UnknownExchangeError
from trading_bot.ports.exchange import ExchangePort

_FACTORIES: dict[str, Callable[[Settings], ExchangePort]] = {
    "foxbit": FoxbitAdapter.from_settings,
}


def available_exchanges() -> list[str]:
    """Names accepted by ``create_exchange``."""
    return sorted(_FACTORIES)


def create_exchange(name: str, settings: Settings, *, require_credentials: bool = True) -> ExchangePort:
    """
    Build the adapter registered under ``name`` (case-insensitive).

    Raises:
        UnknownExchangeError: no adapter has that name.
        ConfigurationError: credentials are missing and ``require_credentials`` is set.
    """
    key = name.strip().lower()
    factory = _FACTORIES.get(key)
    if factory is None:
        raise UnknownExchangeError(
            f"Unknown exchange: {name} (available: {', '.join(available_exchanges())})",
            exchange=name,
        )

    if require_credentials:
        errors = settings.exchange(key).validate_credentials(key)
        if errors:
            raise ConfigurationError("; ".join(errors), exchange=key, details={"errors": errors})

    return factory(settings)


__all__ = ["FoxbitAdapter", "available_exchanges", "create_exchange"]
