"""Authenticated HTTP transport shared by exchange adapters."""

from trading_bot.adapters.http.signed_request import (
    RequestParams,
    SignedRequest,
    build_signed_request,
    canonical_query,
    do_request,
    serialize_body,
    sign,
)

__all__ = [
    "RequestParams",
    "SignedRequest",
    "build_signed_request",
    "canonical_query",
    "do_request",
    "serialize_body",
    "sign",
]
