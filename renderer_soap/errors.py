"""Exception hierarchy for renderer-soap."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .core.models import Fault


class RendererSoapError(RuntimeError):
    """Base class for every failure raised by this package."""


class ConstructionError(RendererSoapError):
    """Raised when a request URL or envelope cannot be assembled."""


class TransportError(RendererSoapError):
    """Raised when the HTTP round trip fails or returns a non-200 status.

    ``status`` is the HTTP status code when a response was received and
    ``body`` holds its raw bytes, so callers can still inspect what the device
    sent back.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        body: Optional[bytes] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class DecodeError(RendererSoapError):
    """Raised when a response envelope cannot be decoded.

    ``element`` names the offending element in ``{namespace}local`` form when
    the failure can be pinned to one.
    """

    def __init__(self, message: str, *, element: Optional[str] = None) -> None:
        super().__init__(message)
        self.element = element


class ProtocolFaultError(RendererSoapError):
    """Raised by the convenience client when a device answers with a Fault."""

    def __init__(self, fault: "Fault") -> None:
        detail = fault.string or fault.code or "unspecified fault"
        upnp_error = fault.upnp_error()
        if upnp_error is not None:
            detail = f"{detail} (UPnP error {upnp_error.code})"
        super().__init__(f"Device returned SOAP fault: {detail}")
        self.fault = fault
