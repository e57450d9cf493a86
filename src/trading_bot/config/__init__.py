"""Configuration: YAML defaults with environment overrides."""

from trading_bot.config.settings import (
    CLISettings,
    ExchangeSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = ["Settings", "ExchangeSettings", "LoggingSettings", "CLISettings", "get_settings"]
