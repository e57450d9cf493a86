"""
Domain Error Taxonomy.

All domain-specific exceptions with clear categorization.
Exchange request failures are split by the stage that failed
(serialization, transport, HTTP status, decoding) and are propagated
unchanged from the request builder to the CLI.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """
    Base class for all domain errors.

    Includes structured error info for logging and debugging.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        *,
        symbol: str | None = None,
        exchange: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.symbol = symbol
        self.exchange = exchange
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "symbol": self.symbol,
            "exchange": self.exchange,
            "details": self.details,
        }


# =============================================================================
# Validation & Configuration Errors
# =============================================================================


class ValidationError(DomainError):
    """Invalid input or state."""

    error_code = "VALIDATION_ERROR"


class ConfigurationError(DomainError):
    """Missing or invalid configuration (credentials, base URL, ...)."""

    error_code = "CONFIGURATION_ERROR"


class UnknownExchangeError(ConfigurationError):
    """No adapter registered under the requested name."""

    error_code = "UNKNOWN_EXCHANGE"


# =============================================================================
# Exchange/API Errors
# =============================================================================


class ExchangeError(DomainError):
    """Error from exchange API."""

    error_code = "EXCHANGE_ERROR"


class SerializationError(ExchangeError):
    """Request body could not be encoded as JSON."""

    error_code = "SERIALIZATION_ERROR"


class TransportError(ExchangeError):
    """Network, DNS or timeout failure while sending the request."""

    error_code = "TRANSPORT_ERROR"


class HTTPStatusError(ExchangeError):
    """
    Exchange answered with status >= 400.

    The raw response body is kept verbatim in ``body`` and in ``str(err)``
    so callers can pull an embedded JSON error object out of it.
    """

    error_code = "HTTP_ERROR"

    def __init__(self, status: int, body: str, **kwargs: Any):
        super().__init__(f"status {status}: {body}", **kwargs)
        self.status = status
        self.body = body
        self.details["status"] = status


class DecodeError(ExchangeError):
    """Response body is not valid JSON or does not have the expected shape."""

    error_code = "DECODE_ERROR"
