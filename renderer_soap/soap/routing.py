"""Static routing table from response element names to decode strategies.

The table is closed: supporting another response means adding a row here,
never changing the dispatcher. Pairs without a row are unknown and are skipped
with a diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple
from xml.etree.ElementTree import Element

from ..constants import AV_TRANSPORT_NS, RENDERING_CONTROL_NS
from ..services import (
    MediaInfoResponse,
    PlaybackStateResponse,
    PositionInfoResponse,
    VolumeResponse,
    XmlPayload,
)

RouteKey = Tuple[str, str]


class RouteKind(Enum):
    DECODE = "decode"
    NO_CONTENT = "no_content"


@dataclass(slots=True, frozen=True)
class Route:
    kind: RouteKind
    decoder: Optional[Callable[[Element], Any]] = None

    def __post_init__(self) -> None:
        if self.kind is RouteKind.DECODE and self.decoder is None:
            raise ValueError("A DECODE route requires a decoder")


NO_CONTENT = Route(RouteKind.NO_CONTENT)


def decode_as(shape: type[XmlPayload]) -> Route:
    return Route(RouteKind.DECODE, shape.from_element)


def _row(shape: type[XmlPayload]) -> tuple[RouteKey, Route]:
    return (shape.namespace, shape.element), decode_as(shape)


RESPONSE_ROUTES: Mapping[RouteKey, Route] = MappingProxyType(
    dict(
        [
            ((RENDERING_CONTROL_NS, "SetVolumeResponse"), NO_CONTENT),
            _row(VolumeResponse),
            ((AV_TRANSPORT_NS, "PauseResponse"), NO_CONTENT),
            ((AV_TRANSPORT_NS, "PlayResponse"), NO_CONTENT),
            ((AV_TRANSPORT_NS, "SetAVTransportURIResponse"), NO_CONTENT),
            ((AV_TRANSPORT_NS, "SeekResponse"), NO_CONTENT),
            _row(PlaybackStateResponse),
            _row(PositionInfoResponse),
            _row(MediaInfoResponse),
        ]
    )
)


def lookup_route(
    namespace: str,
    name: str,
    routes: Mapping[RouteKey, Route] = RESPONSE_ROUTES,
) -> Optional[Route]:
    return routes.get((namespace, name))
