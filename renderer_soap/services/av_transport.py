"""AVTransport service payloads.

Request payloads carry the ``InstanceID`` first, as every AVTransport action
expects; response payloads tolerate missing optional arguments because
firmware versions differ in what they report.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from ..constants import AV_TRANSPORT_NS, DEFAULT_INSTANCE_ID
from .base import XmlPayload, parse_hms, xml_field


class TransportState(str, Enum):
    PLAYING = "PLAYING"
    PAUSED_PLAYBACK = "PAUSED_PLAYBACK"
    STOPPED = "STOPPED"
    TRANSITIONING = "TRANSITIONING"
    NO_MEDIA_PRESENT = "NO_MEDIA_PRESENT"


class SeekUnit(str, Enum):
    TRACK_NR = "TRACK_NR"
    REL_TIME = "REL_TIME"
    TIME_DELTA = "TIME_DELTA"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True, kw_only=True)
class Play(XmlPayload):
    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "Play"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)
    speed: str = xml_field("Speed", "1")


@dataclass(slots=True, frozen=True, kw_only=True)
class Pause(XmlPayload):
    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "Pause"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)


@dataclass(slots=True, frozen=True, kw_only=True)
class Seek(XmlPayload):
    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "Seek"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)
    unit: str = xml_field("Unit", SeekUnit.REL_TIME.value)
    target: str = xml_field("Target")


@dataclass(slots=True, frozen=True, kw_only=True)
class SetAVTransportURI(XmlPayload):
    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "SetAVTransportURI"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)
    current_uri: str = xml_field("CurrentURI")
    current_uri_metadata: str = xml_field("CurrentURIMetaData", "")


@dataclass(slots=True, frozen=True, kw_only=True)
class GetTransportInfo(XmlPayload):
    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "GetTransportInfo"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)


@dataclass(slots=True, frozen=True, kw_only=True)
class GetPositionInfo(XmlPayload):
    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "GetPositionInfo"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)


@dataclass(slots=True, frozen=True, kw_only=True)
class GetMediaInfo(XmlPayload):
    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "GetMediaInfo"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True, kw_only=True)
class PlaybackStateResponse(XmlPayload):
    """Decoded ``GetTransportInfoResponse``."""

    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "GetTransportInfoResponse"

    current_transport_state: str = xml_field("CurrentTransportState")
    current_transport_status: str = xml_field("CurrentTransportStatus", "OK")
    current_speed: str = xml_field("CurrentSpeed", "1")

    @property
    def transport_state(self) -> Optional[TransportState]:
        try:
            return TransportState(self.current_transport_state)
        except ValueError:
            return None

    @property
    def is_playing(self) -> bool:
        return self.transport_state is TransportState.PLAYING


@dataclass(slots=True, frozen=True, kw_only=True)
class PositionInfoResponse(XmlPayload):
    """Decoded ``GetPositionInfoResponse``."""

    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "GetPositionInfoResponse"

    track: int = xml_field("Track")
    track_duration: str = xml_field("TrackDuration", "")
    track_metadata: str = xml_field("TrackMetaData", "")
    track_uri: str = xml_field("TrackURI", "")
    rel_time: str = xml_field("RelTime", "")
    abs_time: str = xml_field("AbsTime", "")
    rel_count: int = xml_field("RelCount", 0)
    abs_count: int = xml_field("AbsCount", 0)

    @property
    def position_seconds(self) -> Optional[int]:
        return parse_hms(self.rel_time)

    @property
    def duration_seconds(self) -> Optional[int]:
        return parse_hms(self.track_duration)


@dataclass(slots=True, frozen=True, kw_only=True)
class MediaInfoResponse(XmlPayload):
    """Decoded ``GetMediaInfoResponse``."""

    namespace: ClassVar[str] = AV_TRANSPORT_NS
    element: ClassVar[str] = "GetMediaInfoResponse"

    nr_tracks: int = xml_field("NrTracks")
    media_duration: str = xml_field("MediaDuration", "")
    current_uri: str = xml_field("CurrentURI", "")
    current_uri_metadata: str = xml_field("CurrentURIMetaData", "")
    next_uri: str = xml_field("NextURI", "")
    next_uri_metadata: str = xml_field("NextURIMetaData", "")
    play_medium: str = xml_field("PlayMedium", "")
    record_medium: str = xml_field("RecordMedium", "")
    write_status: str = xml_field("WriteStatus", "")
