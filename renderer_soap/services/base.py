"""Dataclass-backed XML payloads shared by the UPnP services.

Each payload is a dataclass whose fields map onto the unqualified argument
elements of one qualified action element, e.g.::

    <u:GetVolume xmlns:u="urn:schemas-upnp-org:service:RenderingControl:1">
        <InstanceID>0</InstanceID>
        <Channel>Master</Channel>
    </u:GetVolume>

Fields are emitted in declaration order, which is the argument order UPnP
devices expect.
"""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Optional, TypeVar, get_type_hints
from xml.etree.ElementTree import Element, SubElement

from ..core.utils import local_name, qualify

_TRUE_VALUES = frozenset({"1", "true", "yes"})

PayloadT = TypeVar("PayloadT", bound="XmlPayload")


def xml_field(name: str, default: Any = dataclasses.MISSING) -> Any:
    """Declare a dataclass field serialized as the ``name`` child element."""

    return dataclasses.field(default=default, metadata={"xml": name})


class XmlPayload:
    """Mixin giving dataclass payloads an XML encoding and decoding."""

    __slots__ = ()

    namespace: ClassVar[str]
    element: ClassVar[str]

    @classmethod
    def tag(cls) -> str:
        return qualify(cls.namespace, cls.element)

    def to_element(self) -> Element:
        element = Element(self.tag())
        for item in dataclasses.fields(self):
            child = SubElement(element, item.metadata.get("xml", item.name))
            child.text = _format_value(getattr(self, item.name))
        return element

    @classmethod
    def from_element(cls: type[PayloadT], element: Element) -> PayloadT:
        """Build the payload from its element.

        Raises:
            ValueError: If the element has the wrong name, lacks a required
                argument, or an argument cannot be converted.
        """
        if element.tag != cls.tag():
            raise ValueError(f"expected <{cls.tag()}>, got <{element.tag}>")

        hints = get_type_hints(cls)
        texts = {local_name(child.tag): child.text or "" for child in element}
        values: dict[str, Any] = {}
        for item in dataclasses.fields(cls):
            name = item.metadata.get("xml", item.name)
            if name not in texts:
                if item.default is dataclasses.MISSING:
                    raise ValueError(f"<{cls.element}> is missing <{name}>")
                continue
            values[item.name] = _parse_value(hints[item.name], texts[name], name)
        return cls(**values)


def parse_hms(value: str) -> Optional[int]:
    """Convert an ``H:MM:SS`` duration to seconds.

    Devices report ``NOT_IMPLEMENTED`` or an empty string when the value is
    unknown; both yield None. Fractional seconds are dropped.
    """
    parts = value.strip().split(":")
    if len(parts) != 3:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
        seconds = int(float(parts[2]))
    except ValueError:
        return None
    return hours * 3600 + minutes * 60 + seconds


def format_hms(seconds: int) -> str:
    if seconds < 0:
        raise ValueError("Duration cannot be negative")
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if value is None:
        return ""
    return str(value)


def _parse_value(hint: Any, text: str, name: str) -> Any:
    if hint is bool:
        return text.strip().lower() in _TRUE_VALUES
    if hint is int:
        try:
            return int(text.strip())
        except ValueError:
            raise ValueError(f"<{name}> is not an integer: {text!r}") from None
    return text
