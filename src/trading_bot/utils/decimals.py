"""
Decimal helpers.

Prices and quantities travel as decimal text. These helpers normalise
JSON values into that text without ever going through binary floats.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any


def decimal_text(value: Any) -> str:
    """Return ``value`` as decimal text.

    Strings pass through untouched so the exchange's exact formatting is kept.
    ``None`` becomes an empty string. Floats are rejected: by the time a float
    exists the precision is already gone.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise TypeError(f"expected decimal value, got bool: {value!r}")
    if isinstance(value, Decimal):
        if value.is_nan() or value.is_infinite():
            raise ValueError(f"non-finite decimal: {value}")
        # Fixed-point: str() would give "1E-8" for 0.00000001
        return format(value, "f")
    if isinstance(value, int):
        return str(value)
    raise TypeError(f"expected decimal value, got {type(value).__name__}: {value!r}")


def is_decimal_text(value: str) -> bool:
    """Check that ``value`` parses as a finite decimal number."""
    try:
        parsed = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return False
    return parsed.is_finite()
