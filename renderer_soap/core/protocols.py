"""Protocol definitions for payloads, transports and diagnostic reporters."""

from __future__ import annotations

from typing import Any, Callable, Protocol
from xml.etree.ElementTree import Element

from .models import ResponseBody, UnknownElement


DiagnosticCallback = Callable[[UnknownElement], None]


class Payload(Protocol):
    """Anything that can be placed as the sole child of a request Body."""

    namespace: str
    element: str

    def to_element(self) -> Element:
        """Render the payload as an XML element."""
        ...


class SoapSender(Protocol):
    """Minimal contract for components that deliver SOAP actions."""

    async def send(
        self,
        base_url: str,
        path_suffix: str,
        namespace: str,
        action: str,
        payload: Any,
    ) -> ResponseBody:
        """POST one action envelope and decode the device's answer."""
        ...

    async def aclose(self) -> None:
        """Close any underlying resources."""
        ...
