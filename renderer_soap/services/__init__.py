"""Typed payloads for the RenderingControl and AVTransport services."""

from .av_transport import (
    GetMediaInfo,
    GetPositionInfo,
    GetTransportInfo,
    MediaInfoResponse,
    Pause,
    Play,
    PlaybackStateResponse,
    PositionInfoResponse,
    Seek,
    SeekUnit,
    SetAVTransportURI,
    TransportState,
)
from .base import XmlPayload, format_hms, parse_hms, xml_field
from .rendering_control import GetVolume, SetVolume, VolumeResponse

__all__ = [
    "GetMediaInfo",
    "GetPositionInfo",
    "GetTransportInfo",
    "GetVolume",
    "MediaInfoResponse",
    "Pause",
    "Play",
    "PlaybackStateResponse",
    "PositionInfoResponse",
    "Seek",
    "SeekUnit",
    "SetAVTransportURI",
    "SetVolume",
    "TransportState",
    "VolumeResponse",
    "XmlPayload",
    "format_hms",
    "parse_hms",
    "xml_field",
]
