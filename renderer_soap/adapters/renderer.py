"""Typed client for the RenderingControl and AVTransport services."""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from ..config import DeviceConfig
from ..core import ActionRequest, ResponseBody, SoapSender
from ..errors import DecodeError, ProtocolFaultError
from ..services import (
    GetMediaInfo,
    GetPositionInfo,
    GetTransportInfo,
    GetVolume,
    MediaInfoResponse,
    Pause,
    Play,
    PlaybackStateResponse,
    PositionInfoResponse,
    Seek,
    SeekUnit,
    SetAVTransportURI,
    SetVolume,
    VolumeResponse,
    XmlPayload,
    format_hms,
)
from .transport import SoapTransport

LOGGER = logging.getLogger(__name__)

ContentT = TypeVar("ContentT")


class MediaRendererClient:
    """Issue control actions against one media renderer.

    Every method performs exactly one round trip. A SOAP fault is raised as
    :class:`ProtocolFaultError`; use :meth:`request` to receive the raw
    :class:`ResponseBody` instead.
    """

    def __init__(
        self,
        config: DeviceConfig,
        *,
        transport: Optional[SoapSender] = None,
    ) -> None:
        self.config = config
        self._base_url = config.url.rstrip("/")
        self._transport: SoapSender = transport or SoapTransport(
            timeout=config.request_timeout_seconds
        )
        self._owns_transport = transport is None

    async def __aenter__(self) -> "MediaRendererClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def request(self, path_suffix: str, request: ActionRequest) -> ResponseBody:
        return await self._transport.send(
            self._base_url,
            path_suffix,
            request.namespace,
            request.action,
            request.payload,
        )

    async def get_volume(self) -> int:
        payload = GetVolume(instance_id=self.config.instance_id, channel=self.config.channel)
        content = await self._call(self.config.rendering_control_path, payload)
        return _expect(content, VolumeResponse, payload).current_volume

    async def set_volume(self, volume: int) -> None:
        """Set the channel volume (0-100).

        Raises:
            ValueError: If the volume is out of range.
        """
        payload = SetVolume(
            instance_id=self.config.instance_id,
            channel=self.config.channel,
            desired_volume=volume,
        )
        await self._call(self.config.rendering_control_path, payload)

    async def play(self, speed: str = "1") -> None:
        await self._call(
            self.config.av_transport_path,
            Play(instance_id=self.config.instance_id, speed=speed),
        )

    async def pause(self) -> None:
        await self._call(
            self.config.av_transport_path, Pause(instance_id=self.config.instance_id)
        )

    async def seek(self, target: str, unit: SeekUnit = SeekUnit.REL_TIME) -> None:
        """Seek within the current queue or track.

        ``target`` is an ``H:MM:SS`` position for ``REL_TIME`` and a 1-based
        queue index for ``TRACK_NR``.
        """
        if not target or not target.strip():
            raise ValueError("Seek target cannot be empty")

        payload = Seek(
            instance_id=self.config.instance_id,
            unit=SeekUnit(unit).value,
            target=target.strip(),
        )
        await self._call(self.config.av_transport_path, payload)

    async def seek_to(self, seconds: int) -> None:
        await self.seek(format_hms(seconds), SeekUnit.REL_TIME)

    async def set_av_transport_uri(self, uri: str, metadata: str = "") -> None:
        if not uri or not uri.strip():
            raise ValueError("URI cannot be empty")

        payload = SetAVTransportURI(
            instance_id=self.config.instance_id,
            current_uri=uri.strip(),
            current_uri_metadata=metadata,
        )
        await self._call(self.config.av_transport_path, payload)

    async def get_transport_info(self) -> PlaybackStateResponse:
        payload = GetTransportInfo(instance_id=self.config.instance_id)
        content = await self._call(self.config.av_transport_path, payload)
        return _expect(content, PlaybackStateResponse, payload)

    async def get_position_info(self) -> PositionInfoResponse:
        payload = GetPositionInfo(instance_id=self.config.instance_id)
        content = await self._call(self.config.av_transport_path, payload)
        return _expect(content, PositionInfoResponse, payload)

    async def get_media_info(self) -> MediaInfoResponse:
        payload = GetMediaInfo(instance_id=self.config.instance_id)
        content = await self._call(self.config.av_transport_path, payload)
        return _expect(content, MediaInfoResponse, payload)

    async def aclose(self) -> None:
        if self._owns_transport:
            await self._transport.aclose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    async def _call(self, path_suffix: str, payload: XmlPayload) -> Any:
        body = await self.request(path_suffix, ActionRequest.for_payload(payload))
        if body.fault is not None:
            LOGGER.debug(
                "%s returned fault %s: %s",
                payload.element,
                body.fault.code,
                body.fault.string,
            )
            raise ProtocolFaultError(body.fault)
        return body.content


def _expect(content: Any, shape: type[ContentT], payload: XmlPayload) -> ContentT:
    if not isinstance(content, shape):
        raise DecodeError(
            f"{payload.element} response carried no {shape.__name__}",
            element=payload.tag(),
        )
    return content
