"""
Settings management using Pydantic.

Loads configuration from YAML files and environment variables.
Environment variables override YAML values.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from trading_bot.domain.models import TimeInForce

logger = logging.getLogger(__name__)

FOXBIT_BASE_URL = "https://api.foxbit.com.br"


class ExchangeSettings(BaseModel):
    """Settings for a single exchange."""

    api_key: str = Field(default="", description="API key for exchange authentication")
    api_secret: str = Field(default="", description="Shared secret for HMAC request signing")
    base_url: str = FOXBIT_BASE_URL
    timeout_seconds: float = Field(default=10.0, gt=0, description="Per-request timeout")

    # Order policy sent with every created order
    post_only: bool = True
    time_in_force: TimeInForce = TimeInForce.GTC

    def validate_credentials(self, exchange_name: str) -> list[str]:
        """
        Validate that credentials and endpoint are present.

        Returns a list of validation errors. Empty list means validation passed.
        """
        errors = []

        if not self.base_url:
            errors.append(f"{exchange_name}: base_url is required")
        if not self.api_key:
            errors.append(f"{exchange_name}: api_key is required (set FOXBIT_API_KEY)")
        if not self.api_secret:
            errors.append(f"{exchange_name}: api_secret is required (set FOXBIT_API_SECRET)")

        return errors


class LoggingSettings(BaseModel):
    """Logging settings."""

    level: str = "WARNING"
    json_enabled: bool = False
    json_file: str = "logs/trading_bot_json.jsonl"


class CLISettings(BaseModel):
    """Defaults for command-line options."""

    default_exchange: str = "foxbit"
    default_depth: int = Field(default=10, ge=1)


class Settings(BaseSettings):
    """
    Main settings container.

    Loads from YAML file based on environment, then applies env var overrides.
    """

    # Environment
    env: str = Field(default="development", alias="TRADING_BOT_ENV")

    # Sub-settings
    foxbit: ExchangeSettings = Field(default_factory=ExchangeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLISettings = Field(default_factory=CLISettings)

    model_config = {
        "env_prefix": "TRADING_BOT_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def exchange(self, name: str) -> ExchangeSettings:
        """Return the settings block for an exchange by name."""
        block = getattr(self, name.lower(), None)
        if not isinstance(block, ExchangeSettings):
            raise KeyError(name)
        return block

    @classmethod
    def from_yaml(cls, env: str = "development", config_dir: Path | None = None) -> Settings:
        """
        Load settings from config.yaml, then ``<env>.yaml`` overrides.

        Environment variables win over both files.
        """
        config_dir = config_dir or Path(__file__).parent
        base_file = config_dir / "config.yaml"
        env_file = config_dir / f"{env}.yaml"

        data: dict = {}
        if base_file.exists():
            with open(base_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

        if env_file.exists():
            with open(env_file, encoding="utf-8") as f:
                env_data = yaml.safe_load(f) or {}
            data = _deep_merge(data, env_data)

        # Foxbit credentials from env
        if "foxbit" not in data or not isinstance(data["foxbit"], dict):
            data["foxbit"] = {}
        if os.getenv("FOXBIT_API_KEY"):
            data["foxbit"]["api_key"] = os.getenv("FOXBIT_API_KEY")
        if os.getenv("FOXBIT_API_SECRET"):
            data["foxbit"]["api_secret"] = os.getenv("FOXBIT_API_SECRET")
        if os.getenv("FOXBIT_BASE_URL"):
            data["foxbit"]["base_url"] = os.getenv("FOXBIT_BASE_URL")

        if os.getenv("TRADING_BOT_LOG_LEVEL"):
            data.setdefault("logging", {})
            data["logging"]["level"] = os.getenv("TRADING_BOT_LOG_LEVEL")

        data["env"] = env

        # Warn about unknown keys before creating model (helps catch typos in config.yaml)
        _warn_unknown_keys(data, cls)

        return cls(**data)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts, override wins on conflicts."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _collect_all_keys(data: dict, prefix: str = "") -> set[str]:
    """
    Recursively collect all keys from a nested dict.

    Returns keys in dot-notation format (e.g., "foxbit.timeout_seconds").
    """
    keys = set()
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else key
        keys.add(full_key)
        if isinstance(value, dict):
            keys.update(_collect_all_keys(value, full_key))
    return keys


def _collect_model_fields(model_class: type[BaseModel], prefix: str = "") -> set[str]:
    """
    Recursively collect all field names from a Pydantic model.

    Returns field names in dot-notation format.
    """
    fields = set()
    for field_name, field_info in model_class.model_fields.items():
        full_key = f"{prefix}.{field_name}" if prefix else field_name
        fields.add(full_key)

        annotation = field_info.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            fields.update(_collect_model_fields(annotation, full_key))

    return fields


def _warn_unknown_keys(data: dict, model_class: type[BaseModel]) -> None:
    """Warn about unknown keys in YAML config that don't match model fields."""
    unknown_keys = _collect_all_keys(data) - _collect_model_fields(model_class)

    if unknown_keys:
        logger.warning(
            f"Unknown configuration keys found (will be ignored): {sorted(unknown_keys)}. "
            f"This may indicate typos in config.yaml or outdated config keys."
        )


@lru_cache(maxsize=4)
def get_settings(env: str | None = None) -> Settings:
    """Get cached settings instance."""
    resolved_env = env or os.getenv("TRADING_BOT_ENV", "development")
    return Settings.from_yaml(env=resolved_env)
