"""Outbound request envelope construction and serialization."""

from __future__ import annotations

import copy
from typing import Union
from xml.etree import ElementTree
from xml.etree.ElementTree import Element, SubElement

from ..constants import SOAP_ENCODING_NS, SOAP_ENVELOPE_NS
from ..core.protocols import Payload
from ..core.utils import qualify
from ..errors import ConstructionError

ENVELOPE_TAG = qualify(SOAP_ENVELOPE_NS, "Envelope")
BODY_TAG = qualify(SOAP_ENVELOPE_NS, "Body")
FAULT_TAG = qualify(SOAP_ENVELOPE_NS, "Fault")
ENCODING_STYLE_ATTR = qualify(SOAP_ENVELOPE_NS, "encodingStyle")

ElementTree.register_namespace("s", SOAP_ENVELOPE_NS)


def build_request_envelope(payload: Union[Payload, Element]) -> Element:
    """Wrap ``payload`` as the only child of a SOAP Body.

    ``payload`` is either an :class:`~xml.etree.ElementTree.Element` or an
    object exposing ``to_element()``. Its contents are not validated.

    Raises:
        ConstructionError: If the payload cannot be rendered as an element.
    """
    if isinstance(payload, Element):
        child = payload
    else:
        to_element = getattr(payload, "to_element", None)
        if to_element is None:
            raise ConstructionError(
                f"Payload of type {type(payload).__name__} cannot be serialized"
            )
        child = to_element()
        if not isinstance(child, Element):
            raise ConstructionError(
                f"{type(payload).__name__}.to_element() did not return an element"
            )

    envelope = Element(ENVELOPE_TAG, {ENCODING_STYLE_ATTR: SOAP_ENCODING_NS})
    body = SubElement(envelope, BODY_TAG)
    body.append(child)
    return envelope


def serialize_envelope(envelope: Element) -> bytes:
    """Render the envelope as UTF-8 XML with stable tab indentation."""

    tree = copy.deepcopy(envelope)
    ElementTree.indent(tree, space="\t")
    return ElementTree.tostring(tree, encoding="utf-8", xml_declaration=True)


def encode_request(payload: Union[Payload, Element]) -> bytes:
    return serialize_envelope(build_request_envelope(payload))
