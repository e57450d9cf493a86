"""
Error output for CLI commands.

Exchange errors carry the raw response body. When that body holds a
``{"error": {"message", "code", "details"}}`` object it is shown as a
TYPE | CODE | MESSAGE | DETAIL table; anything else is printed verbatim.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

err_console = Console(stderr=True)


@dataclass(frozen=True, slots=True)
class ApiErrorInfo:
    """Structured error object embedded in an exchange error response."""

    message: str
    code: int
    details: tuple[str, ...] = field(default_factory=tuple)


def extract_api_error(text: str) -> ApiErrorInfo | None:
    """
    Locate and parse the JSON error object inside ``text``.

    Returns None when there is no JSON, the JSON is malformed, or it does
    not have the ``error`` shape.
    """
    start = text.find("{")
    if start < 0:
        return None

    try:
        payload = json.loads(text[start:])
    except ValueError:
        return None

    error = payload.get("error") if isinstance(payload, Mapping) else None
    if not isinstance(error, Mapping):
        return None

    details = error.get("details") or []
    if not isinstance(details, list):
        details = [details]

    try:
        code = int(error.get("code", 0))
    except (TypeError, ValueError):
        return None

    return ApiErrorInfo(
        message=str(error.get("message", "")),
        code=code,
        details=tuple(str(d) for d in details),
    )


def error_table(info: ApiErrorInfo) -> Table:
    """One row per detail, or a single row with an empty detail."""
    t = Table(box=box.SIMPLE, show_edge=False, pad_edge=False)
    t.add_column("TYPE", no_wrap=True)
    t.add_column("CODE", no_wrap=True)
    t.add_column("MESSAGE")
    t.add_column("DETAIL")
    for detail in info.details or ("",):
        t.add_row(Text("ERROR"), Text(str(info.code)), Text(info.message), Text(detail))
    return t


def display_error(err: BaseException | str, out: Console | None = None) -> None:
    """Print an error to stderr, as a table when it embeds an exchange error object."""
    out = out or err_console
    raw = str(err)
    info = extract_api_error(raw)
    if info is None:
        out.print(raw, markup=False, highlight=False)
        return
    out.print(error_table(info))
