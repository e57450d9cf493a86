"""
Signed REST requests.

Builds, signs and sends one authenticated HTTP request:

    prehash   = timestamp + METHOD + path + canonical_query + body
    signature = hex(HMAC-SHA256(secret, prehash))

The timestamp is read from the clock once per request and used for both the
signature and the timestamp header. Query parameters are sorted by name so
the signed string does not depend on insertion order, and the body bytes
that are signed are the exact bytes sent.
"""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import aiohttp
from yarl import URL

from trading_bot.domain.errors import (
    DecodeError,
    HTTPStatusError,
    SerializationError,
    TransportError,
)
from trading_bot.observability.logging import get_logger
from trading_bot.utils import json_dumps, json_loads

logger = get_logger(__name__)

HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCESS_KEY = "X-FB-ACCESS-KEY"
HEADER_ACCESS_TIMESTAMP = "X-FB-ACCESS-TIMESTAMP"
HEADER_ACCESS_SIGNATURE = "X-FB-ACCESS-SIGNATURE"

CONTENT_TYPE_JSON = "application/json"


@dataclass(slots=True)
class RequestParams:
    """All inputs needed to build, sign and send one request."""

    method: str
    base_url: str
    path: str
    api_key: str
    secret: str
    query: Mapping[str, Any] | None = None
    body: Any = None
    decode: bool = True


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """A fully-formed request, ready for the wire."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    timestamp: str = ""
    query_string: str = ""
    prehash: bytes = b""
    signature: str = ""


def now_ms() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def canonical_query(query: Mapping[str, Any] | None) -> str:
    """Encode query parameters sorted by name (form encoding)."""
    if not query:
        return ""
    return urlencode([(name, str(query[name])) for name in sorted(query)])


def serialize_body(body: Any) -> bytes:
    """Serialize ``body`` to compact JSON bytes; ``None`` is an empty body."""
    if body is None:
        return b""
    try:
        return json_dumps(body).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"failed to marshal body: {e}") from e


def prehash(timestamp: str, method: str, path: str, query_string: str, body: bytes) -> bytes:
    """Concatenate the signed fields in their fixed order."""
    return f"{timestamp}{method.upper()}{path}{query_string}".encode() + body


def sign(secret: str, message: bytes) -> str:
    """Hex-encoded HMAC-SHA256 of ``message`` keyed by ``secret``."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def build_signed_request(params: RequestParams, timestamp_ms: int) -> SignedRequest:
    """Build the signed request for ``params`` at the given timestamp."""
    method = params.method.upper()
    query_string = canonical_query(params.query)
    body = serialize_body(params.body)

    timestamp = str(timestamp_ms)
    message = prehash(timestamp, method, params.path, query_string, body)
    signature = sign(params.secret, message)

    url = params.base_url.rstrip("/") + params.path
    if query_string:
        url += "?" + query_string

    headers = {
        HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
        HEADER_ACCESS_KEY: params.api_key,
        HEADER_ACCESS_TIMESTAMP: timestamp,
        HEADER_ACCESS_SIGNATURE: signature,
    }
    return SignedRequest(
        method=method,
        url=url,
        headers=headers,
        body=body,
        timestamp=timestamp,
        query_string=query_string,
        prehash=message,
        signature=signature,
    )


async def do_request(
    session: aiohttp.ClientSession,
    params: RequestParams,
    *,
    clock: Callable[[], int] = now_ms,
) -> Any:
    """
    Sign and send a request, then decode its JSON response.

    Returns:
        The decoded JSON payload, or None when ``params.decode`` is false
        or the response body is empty.

    Raises:
        SerializationError: body could not be encoded.
        TransportError: network/DNS/timeout failure.
        HTTPStatusError: status >= 400 (raw body preserved).
        DecodeError: response body is not valid JSON.
    """
    signed = build_signed_request(params, clock())

    # The URL is already percent-encoded and signed; yarl must not re-quote it.
    url = URL(signed.url, encoded=True)
    try:
        async with session.request(
            signed.method,
            url,
            data=signed.body or None,
            headers=signed.headers,
        ) as resp:
            status = resp.status
            raw = await resp.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransportError(f"request failed: {signed.method} {params.path}: {e!r}") from e

    logger.debug(f"{signed.method} {params.path} -> {status} ({len(raw)} bytes)")

    if status >= 400:
        raise HTTPStatusError(status, raw.decode("utf-8", errors="replace"))

    if not params.decode or not raw.strip():
        return None

    try:
        return json_loads(raw)
    except ValueError as e:
        raise DecodeError(f"failed to unmarshal response: {e}") from e
