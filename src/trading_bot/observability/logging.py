"""
Structured logging setup.

Provides text console logging and optional JSON logging with sensitive data masking.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any

from trading_bot.config.settings import Settings

__all__ = [
    "setup_logging",
    "get_logger",
    "SensitiveDataFilter",
    "JSONFormatter",
    "CLILogFormatter",
]


class SensitiveDataFilter(logging.Filter):
    """Filter that masks sensitive data (API keys, secrets, signatures) in log messages."""

    SENSITIVE_PATTERNS = [
        (
            re.compile(r"(['\"]?X-FB-ACCESS-(?:KEY|SIGNATURE)['\"]?:\s*['\"]?)([^'\"\s,}]+)(['\"]?)", re.IGNORECASE),
            r"\1***MASKED***\3",
        ),
        (re.compile(r"(api[_-]?key['\"]?\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-]{16,})(['\"]?)", re.IGNORECASE), r"\1***MASKED***\3"),
        (
            re.compile(r"((?:api[_-]?)?secret['\"]?\s*[:=]\s*['\"]?)([a-zA-Z0-9_\-]{16,})(['\"]?)", re.IGNORECASE),
            r"\1***MASKED***\3",
        ),
        (re.compile(r"(signature['\"]?\s*[:=]\s*['\"]?)([a-fA-F0-9]{32,})(['\"]?)", re.IGNORECASE), r"\1***MASKED***\3"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        original_msg = str(record.getMessage())
        masked_msg = original_msg

        for pattern, replacement in self.SENSITIVE_PATTERNS:
            masked_msg = pattern.sub(replacement, masked_msg)

        if masked_msg != original_msg:
            record.msg = masked_msg
            record.args = ()

        return True


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder for Decimal and other types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if hasattr(obj, "__dict__"):
            return str(obj)
        return super().default(obj)


class JSONFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields if present
        for key in ["error_code", "exchange", "symbol", "order_id", "method", "path", "status", "details"]:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, cls=DecimalEncoder)


class CLILogFormatter(logging.Formatter):
    """
    Console formatter with one colour per level.

    Output goes to stderr so it never mixes with table output on stdout.
    """

    # ANSI Colors
    RESET = "\033[0m"
    GREY = "\033[90m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BOLD_RED = "\033[1;91m"

    def __init__(self, use_color: bool = True):
        super().__init__(datefmt="%H:%M:%S")
        colors = {
            "DEBUG": self.GREY,
            "INFO": self.GREEN,
            "WARNING": self.YELLOW,
            "ERROR": self.RED,
            "CRITICAL": self.BOLD_RED,
        }
        self._formatters: dict[str, logging.Formatter] = {}
        for level, color in colors.items():
            if use_color:
                fmt = f"{color}%(asctime)s [{level}]{self.RESET} %(name)s: %(message)s"
            else:
                fmt = f"%(asctime)s [{level}] %(name)s: %(message)s"
            self._formatters[level] = logging.Formatter(fmt, datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        formatter_key = record.levelname if record.levelname in self._formatters else "INFO"
        return self._formatters[formatter_key].format(record)


def setup_logging(settings: Settings | None = None, level: str | None = None) -> logging.Logger:
    """
    Set up logging with a console handler and an optional JSON file handler.

    Returns the root logger.
    """
    if settings is None:
        from trading_bot.config.settings import get_settings

        settings = get_settings()

    level_name = (level or settings.logging.level).upper()
    resolved_level = getattr(logging, level_name, logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    sensitive_filter = SensitiveDataFilter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(resolved_level)
    console_handler.setFormatter(CLILogFormatter(use_color=sys.stderr.isatty()))
    console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)

    if settings.logging.json_enabled:
        json_path = Path(settings.logging.json_file)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_handler = logging.FileHandler(json_path, encoding="utf-8")
        json_handler.setLevel(resolved_level)
        json_handler.setFormatter(JSONFormatter())
        json_handler.addFilter(sensitive_filter)
        root_logger.addHandler(json_handler)

    # Reduce noise from verbose libraries
    for lib in ["aiohttp", "asyncio", "urllib3"]:
        logging.getLogger(lib).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)
