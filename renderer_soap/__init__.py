"""SOAP envelope codec for UPnP media renderer control."""

from .adapters import MediaRendererClient, SoapTransport
from .core import ActionRequest, BodyKind, Fault, ResponseBody, UnknownElement
from .errors import (
    ConstructionError,
    DecodeError,
    ProtocolFaultError,
    RendererSoapError,
    TransportError,
)
from .soap import build_request_envelope, decode_response, serialize_envelope

__version__ = "0.1.0"

__all__ = [
    "ActionRequest",
    "BodyKind",
    "ConstructionError",
    "DecodeError",
    "Fault",
    "MediaRendererClient",
    "ProtocolFaultError",
    "RendererSoapError",
    "ResponseBody",
    "SoapTransport",
    "TransportError",
    "UnknownElement",
    "build_request_envelope",
    "decode_response",
    "serialize_envelope",
]
