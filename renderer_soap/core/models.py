"""Envelope, body and fault models exchanged with renderer devices."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional
from xml.etree.ElementTree import Element

from .utils import child_text, local_name


class BodyKind(str, Enum):
    FAULT = "fault"
    CONTENT = "content"
    EMPTY = "empty"


@dataclass(slots=True, frozen=True)
class UnknownElement:
    """Diagnostic for a body element that no route recognises."""

    namespace: str
    name: str


@dataclass(slots=True, frozen=True)
class UpnpError:
    code: int
    description: Optional[str] = None


@dataclass(slots=True)
class Fault:
    """SOAP fault returned in place of a normal action response.

    ``detail`` is kept as the raw element; its meaning depends on the service
    that raised the fault.
    """

    code: Optional[str] = None
    string: Optional[str] = None
    actor: Optional[str] = None
    detail: Optional[Element] = None

    @classmethod
    def from_element(cls, element: Element) -> "Fault":
        detail = None
        for child in element:
            if local_name(child.tag) == "detail":
                detail = child
                break
        return cls(
            code=child_text(element, "faultcode"),
            string=child_text(element, "faultstring"),
            actor=child_text(element, "faultactor"),
            detail=detail,
        )

    def upnp_error(self) -> Optional[UpnpError]:
        """Extract the UPnP ``errorCode``/``errorDescription`` pair, if any."""

        if self.detail is None:
            return None
        for child in self.detail:
            if local_name(child.tag) != "UPnPError":
                continue
            code_text = child_text(child, "errorCode")
            if not code_text:
                return None
            try:
                code = int(code_text)
            except ValueError:
                return None
            return UpnpError(code=code, description=child_text(child, "errorDescription"))
        return None


@dataclass(slots=True)
class ResponseBody:
    """Decoded response body: a fault, a typed content value, or nothing.

    At most one of ``fault`` and ``content`` is populated. ``diagnostics``
    lists the elements that were skipped because no route knew them.
    """

    fault: Optional[Fault] = None
    content: Optional[Any] = None
    diagnostics: List[UnknownElement] = field(default_factory=list)

    @property
    def kind(self) -> BodyKind:
        if self.fault is not None:
            return BodyKind.FAULT
        if self.content is not None:
            return BodyKind.CONTENT
        return BodyKind.EMPTY


@dataclass(slots=True, frozen=True)
class ActionRequest:
    """A remote action: service namespace, action name and typed payload."""

    namespace: str
    action: str
    payload: Any

    @classmethod
    def for_payload(cls, payload: Any) -> "ActionRequest":
        return cls(namespace=payload.namespace, action=payload.element, payload=payload)

    @property
    def soap_action(self) -> str:
        return f"{self.namespace}#{self.action}"
