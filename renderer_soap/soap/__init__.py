"""SOAP envelope encoding and response decoding."""

from .dispatcher import ResponseDecoder, ScanState, decode_response, log_unknown_element
from .envelope import (
    BODY_TAG,
    ENVELOPE_TAG,
    FAULT_TAG,
    build_request_envelope,
    encode_request,
    serialize_envelope,
)
from .routing import NO_CONTENT, RESPONSE_ROUTES, Route, RouteKind, decode_as, lookup_route

__all__ = [
    "BODY_TAG",
    "ENVELOPE_TAG",
    "FAULT_TAG",
    "NO_CONTENT",
    "RESPONSE_ROUTES",
    "ResponseDecoder",
    "Route",
    "RouteKind",
    "ScanState",
    "build_request_envelope",
    "decode_as",
    "decode_response",
    "encode_request",
    "log_unknown_element",
    "lookup_route",
    "serialize_envelope",
]
