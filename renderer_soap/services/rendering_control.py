"""RenderingControl service payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..constants import DEFAULT_CHANNEL, DEFAULT_INSTANCE_ID, RENDERING_CONTROL_NS
from .base import XmlPayload, xml_field

MIN_VOLUME = 0
MAX_VOLUME = 100


@dataclass(slots=True, frozen=True, kw_only=True)
class GetVolume(XmlPayload):
    namespace: ClassVar[str] = RENDERING_CONTROL_NS
    element: ClassVar[str] = "GetVolume"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)
    channel: str = xml_field("Channel", DEFAULT_CHANNEL)


@dataclass(slots=True, frozen=True, kw_only=True)
class SetVolume(XmlPayload):
    namespace: ClassVar[str] = RENDERING_CONTROL_NS
    element: ClassVar[str] = "SetVolume"

    instance_id: int = xml_field("InstanceID", DEFAULT_INSTANCE_ID)
    channel: str = xml_field("Channel", DEFAULT_CHANNEL)
    desired_volume: int = xml_field("DesiredVolume")

    def __post_init__(self) -> None:
        if not MIN_VOLUME <= self.desired_volume <= MAX_VOLUME:
            raise ValueError(
                f"Volume must be between {MIN_VOLUME} and {MAX_VOLUME}, got {self.desired_volume}"
            )


@dataclass(slots=True, frozen=True, kw_only=True)
class VolumeResponse(XmlPayload):
    """Decoded ``GetVolumeResponse``."""

    namespace: ClassVar[str] = RENDERING_CONTROL_NS
    element: ClassVar[str] = "GetVolumeResponse"

    current_volume: int = xml_field("CurrentVolume")
