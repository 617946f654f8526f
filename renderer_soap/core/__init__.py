"""Core primitives for renderer-soap."""

from .models import (
    ActionRequest,
    BodyKind,
    Fault,
    ResponseBody,
    UnknownElement,
    UpnpError,
)
from .protocols import DiagnosticCallback, Payload, SoapSender
from .utils import child_text, local_name, qualify, split_qname

__all__ = [
    "ActionRequest",
    "BodyKind",
    "DiagnosticCallback",
    "Fault",
    "Payload",
    "ResponseBody",
    "SoapSender",
    "UnknownElement",
    "UpnpError",
    "child_text",
    "local_name",
    "qualify",
    "split_qname",
]
