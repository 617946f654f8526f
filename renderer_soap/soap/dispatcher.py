"""Streaming decoder for SOAP response envelopes.

The decoder walks ``start``/``end`` events from defusedxml's ``iterparse`` and
classifies every direct child of the Body by ``(namespace, local-name)``:

- ``{soap-env}Fault`` is decoded into :class:`~renderer_soap.core.Fault`;
- rows of the routing table are either decoded into their typed shape or, for
  acknowledgement-only responses, skipped;
- anything else is reported as an :class:`~renderer_soap.core.UnknownElement`
  and skipped.

Scanning stops at the Body's own end event, which is the only successful
termination. Skipped elements are tracked with a two-state machine
(``SCANNING`` / ``PENDING_IGNORE``); while an element is pending, its
descendants are counted so that an arbitrarily deep subtree is consumed
before the next sibling is classified. Direct children of the Body therefore
never nest inside a pending element.
"""

from __future__ import annotations

import io
import logging
from enum import Enum
from typing import Iterator, Mapping, Optional, Tuple
from xml.etree.ElementTree import Element

import defusedxml
import defusedxml.ElementTree as DET

from ..core import DiagnosticCallback, Fault, ResponseBody, UnknownElement, split_qname
from ..errors import DecodeError
from .envelope import BODY_TAG, ENVELOPE_TAG, FAULT_TAG
from .routing import RESPONSE_ROUTES, Route, RouteKey, RouteKind, lookup_route

LOGGER = logging.getLogger(__name__)

Event = Tuple[str, Element]


class ScanState(Enum):
    SCANNING = "scanning"
    PENDING_IGNORE = "pending_ignore"


def log_unknown_element(diagnostic: UnknownElement) -> None:
    LOGGER.warning(
        "Unknown payload: '%s' - '%s'", diagnostic.namespace, diagnostic.name
    )


class ResponseDecoder:
    """Decode raw response bytes into a :class:`ResponseBody`.

    ``reporter`` receives every unknown-element diagnostic; by default they
    are logged as warnings. ``routes`` replaces the routing table, mostly for
    tests.
    """

    def __init__(
        self,
        *,
        reporter: Optional[DiagnosticCallback] = None,
        routes: Mapping[RouteKey, Route] = RESPONSE_ROUTES,
    ) -> None:
        self._reporter = reporter or log_unknown_element
        self._routes = routes

    def decode(self, data: bytes) -> ResponseBody:
        """Parse a whole response envelope.

        Raises:
            DecodeError: On malformed XML, a truncated stream, an unexpected
                end element, or a body element whose typed decode fails.
        """
        events: Iterator[Event] = DET.iterparse(
            io.BytesIO(data), events=("start", "end")
        )
        try:
            return self._decode_envelope(events)
        except DET.ParseError as exc:
            raise DecodeError(f"could not parse response: {exc}") from exc
        except defusedxml.DefusedXmlException as exc:
            raise DecodeError(f"refusing unsafe response: {exc}") from exc

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _decode_envelope(self, events: Iterator[Event]) -> ResponseBody:
        first = next(events, None)
        if first is None:
            raise DecodeError("response is empty")
        _, root = first
        if root.tag != ENVELOPE_TAG:
            raise DecodeError(
                f"unexpected root element: {root.tag}", element=root.tag
            )

        for event, element in events:
            if event == "end":
                break
            if element.tag == BODY_TAG:
                return self._decode_body(events, element)
            # Header and any other envelope-level extras
            _consume_subtree(events, element)

        raise DecodeError("response envelope has no Body", element=BODY_TAG)

    def _decode_body(self, events: Iterator[Event], body: Element) -> ResponseBody:
        result = ResponseBody()
        state = ScanState.SCANNING
        pending: Optional[Element] = None
        depth = 0

        for event, element in events:
            if state is ScanState.PENDING_IGNORE:
                if event == "start":
                    depth += 1
                elif depth:
                    depth -= 1
                elif element is pending:
                    state, pending = ScanState.SCANNING, None
                else:
                    raise DecodeError(
                        f"unknown end element: {element.tag}", element=element.tag
                    )
                continue

            if event == "end":
                if element is body:
                    return result
                raise DecodeError(
                    f"unknown end element: {element.tag}", element=element.tag
                )

            if element.tag == FAULT_TAG:
                _consume_subtree(events, element)
                self._record_fault(result, Fault.from_element(element))
                continue

            namespace, name = split_qname(element.tag)
            route = lookup_route(namespace, name, self._routes)

            if route is not None and route.kind is RouteKind.DECODE:
                _consume_subtree(events, element)
                self._record_content(result, self._decode_content(route, element))
                continue

            if route is None:
                diagnostic = UnknownElement(namespace=namespace, name=name)
                result.diagnostics.append(diagnostic)
                self._reporter(diagnostic)

            state, pending, depth = ScanState.PENDING_IGNORE, element, 0

        raise DecodeError(
            "response ended before the closing Body tag", element=BODY_TAG
        )

    @staticmethod
    def _decode_content(route: Route, element: Element) -> object:
        try:
            return route.decoder(element)
        except DecodeError:
            raise
        except Exception as exc:
            namespace, name = split_qname(element.tag)
            raise DecodeError(
                f"could not decode '{name}' ({namespace}): {exc}", element=element.tag
            ) from exc

    @staticmethod
    def _record_fault(result: ResponseBody, fault: Fault) -> None:
        if result.content is not None:
            LOGGER.warning(
                "Discarding %s decoded alongside a SOAP fault",
                type(result.content).__name__,
            )
            result.content = None
        result.fault = fault

    @staticmethod
    def _record_content(result: ResponseBody, content: object) -> None:
        if result.fault is not None:
            LOGGER.warning(
                "Discarding %s decoded alongside a SOAP fault",
                type(content).__name__,
            )
            return
        if result.content is not None:
            LOGGER.warning(
                "Response carried more than one payload; replacing %s with %s",
                type(result.content).__name__,
                type(content).__name__,
            )
        result.content = content


def _consume_subtree(events: Iterator[Event], element: Element) -> None:
    """Advance ``events`` past the end event matching ``element``'s start."""

    depth = 0
    for event, _ in events:
        if event == "start":
            depth += 1
        elif depth:
            depth -= 1
        else:
            return
    raise DecodeError(
        f"response ended inside {element.tag}", element=element.tag
    )


def decode_response(
    data: bytes, *, reporter: Optional[DiagnosticCallback] = None
) -> ResponseBody:
    """Decode ``data`` with the default routing table."""

    return ResponseDecoder(reporter=reporter).decode(data)
