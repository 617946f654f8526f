"""Core utility functions shared across modules."""

from __future__ import annotations

from typing import Optional, Tuple
from xml.etree.ElementTree import Element


def split_qname(tag: str) -> Tuple[str, str]:
    """Split an ElementTree ``{namespace}local`` tag into its two parts.

    Unqualified tags yield an empty namespace.

    Examples:
        >>> split_qname("{urn:x}GetVolumeResponse")
        ("urn:x", "GetVolumeResponse")
        >>> split_qname("faultcode")
        ("", "faultcode")
    """
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def qualify(namespace: str, local: str) -> str:
    return f"{{{namespace}}}{local}" if namespace else local


def local_name(tag: str) -> str:
    return split_qname(tag)[1]


def child_text(element: Element, name: str) -> Optional[str]:
    """Return the stripped text of the first child whose local name matches.

    Children are matched regardless of namespace because devices disagree on
    whether fault and argument elements are qualified.
    """
    for child in element:
        if local_name(child.tag) == name:
            return (child.text or "").strip()
    return None
