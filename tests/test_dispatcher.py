"""Tests for the streaming response body decoder."""

import logging

import pytest

from renderer_soap.core import BodyKind, UnknownElement
from renderer_soap.errors import DecodeError
from renderer_soap.services import (
    MediaInfoResponse,
    PlaybackStateResponse,
    PositionInfoResponse,
    VolumeResponse,
)
from renderer_soap.soap import RESPONSE_ROUTES, ResponseDecoder, Route, RouteKind, decode_response

RC = "urn:schemas-upnp-org:service:RenderingControl:1"
AVT = "urn:schemas-upnp-org:service:AVTransport:1"

FAULT_CODE = "<faultcode>s:Client</faultcode>"
FAULT_STRING = "<faultstring>UPnPError</faultstring>"
FAULT_DETAIL = (
    "<detail>"
    '<UPnPError xmlns="urn:schemas-upnp-org:control-1-0">'
    "<errorCode>402</errorCode>"
    "<errorDescription>Invalid Args</errorDescription>"
    "</UPnPError>"
    "</detail>"
)


def _fault(*children: str) -> str:
    return "<s:Fault>" + "".join(children) + "</s:Fault>"


class _Recorder:
    def __init__(self) -> None:
        self.diagnostics: list[UnknownElement] = []

    def __call__(self, diagnostic: UnknownElement) -> None:
        self.diagnostics.append(diagnostic)


@pytest.mark.parametrize(
    "children",
    [
        (FAULT_CODE, FAULT_STRING, FAULT_DETAIL),
        (FAULT_DETAIL, FAULT_STRING, FAULT_CODE),
        (FAULT_STRING, FAULT_DETAIL, FAULT_CODE),
    ],
)
def test_fault_decodes_regardless_of_child_order(soap_envelope, children):
    result = decode_response(soap_envelope(_fault(*children)))

    assert result.kind is BodyKind.FAULT
    assert result.content is None
    assert result.fault.code == "s:Client"
    assert result.fault.string == "UPnPError"
    assert result.fault.actor is None
    upnp_error = result.fault.upnp_error()
    assert upnp_error is not None
    assert upnp_error.code == 402
    assert upnp_error.description == "Invalid Args"


def test_fault_without_detail_has_no_upnp_error(soap_envelope):
    result = decode_response(soap_envelope(_fault(FAULT_CODE)))

    assert result.fault.code == "s:Client"
    assert result.fault.string is None
    assert result.fault.detail is None
    assert result.fault.upnp_error() is None


def test_get_volume_response_decodes_to_volume(soap_envelope):
    body = f'<u:GetVolumeResponse xmlns:u="{RC}"><CurrentVolume>42</CurrentVolume></u:GetVolumeResponse>'

    result = decode_response(soap_envelope(body))

    assert result.kind is BodyKind.CONTENT
    assert result.fault is None
    assert result.content == VolumeResponse(current_volume=42)
    assert result.diagnostics == []


@pytest.mark.parametrize(
    "namespace,name",
    [
        (RC, "SetVolumeResponse"),
        (AVT, "PlayResponse"),
        (AVT, "PauseResponse"),
        (AVT, "SeekResponse"),
        (AVT, "SetAVTransportURIResponse"),
    ],
)
def test_no_content_responses_decode_empty(soap_envelope, namespace, name):
    recorder = _Recorder()
    body = f'<u:{name} xmlns:u="{namespace}"></u:{name}>'

    result = ResponseDecoder(reporter=recorder).decode(soap_envelope(body))

    assert result.kind is BodyKind.EMPTY
    assert result.fault is None
    assert result.content is None
    assert recorder.diagnostics == []


def test_self_closing_no_content_response(soap_envelope):
    result = decode_response(soap_envelope(f'<u:SetVolumeResponse xmlns:u="{RC}"/>'))

    assert result.kind is BodyKind.EMPTY


def test_empty_body_decodes_empty(soap_envelope):
    result = decode_response(soap_envelope(""))

    assert result.kind is BodyKind.EMPTY
    assert result.diagnostics == []


def test_unknown_namespace_is_reported_and_skipped(soap_envelope):
    recorder = _Recorder()
    body = '<x:Surprise xmlns:x="urn:example:vendor"><Value>1</Value></x:Surprise>'

    result = ResponseDecoder(reporter=recorder).decode(soap_envelope(body))

    expected = UnknownElement(namespace="urn:example:vendor", name="Surprise")
    assert result.kind is BodyKind.EMPTY
    assert result.diagnostics == [expected]
    assert recorder.diagnostics == [expected]


def test_unlisted_action_in_known_namespace_is_unknown(soap_envelope):
    recorder = _Recorder()
    body = f'<u:GetMuteResponse xmlns:u="{RC}"><CurrentMute>0</CurrentMute></u:GetMuteResponse>'

    result = ResponseDecoder(reporter=recorder).decode(soap_envelope(body))

    assert result.kind is BodyKind.EMPTY
    assert recorder.diagnostics == [UnknownElement(namespace=RC, name="GetMuteResponse")]


def test_default_reporter_logs_unknown_element(soap_envelope, caplog):
    body = '<x:Surprise xmlns:x="urn:example:vendor"/>'

    with caplog.at_level(logging.WARNING, logger="renderer_soap.soap.dispatcher"):
        decode_response(soap_envelope(body))

    assert "urn:example:vendor" in caplog.text
    assert "Surprise" in caplog.text


def test_deeply_nested_unknown_element_is_skipped(soap_envelope):
    recorder = _Recorder()
    body = (
        '<x:Extra xmlns:x="urn:example:vendor">'
        "<Level1><Level2><Level3>deep</Level3></Level2><Level2/></Level1>"
        "</x:Extra>"
        f'<u:GetVolumeResponse xmlns:u="{RC}"><CurrentVolume>7</CurrentVolume></u:GetVolumeResponse>'
    )

    result = ResponseDecoder(reporter=recorder).decode(soap_envelope(body))

    assert result.content == VolumeResponse(current_volume=7)
    assert recorder.diagnostics == [UnknownElement(namespace="urn:example:vendor", name="Extra")]


def test_unknown_sibling_order_does_not_change_fault(soap_envelope):
    unknown = '<x:Noise xmlns:x="urn:example:vendor"><Inner><More/></Inner></x:Noise>'
    fault = _fault(FAULT_CODE, FAULT_STRING, FAULT_DETAIL)

    before = decode_response(soap_envelope(unknown + fault), reporter=lambda _: None)
    after = decode_response(soap_envelope(fault + unknown), reporter=lambda _: None)

    for result in (before, after):
        assert result.kind is BodyKind.FAULT
        assert result.diagnostics == [UnknownElement("urn:example:vendor", "Noise")]
    assert (before.fault.code, before.fault.string, before.fault.actor) == (
        after.fault.code,
        after.fault.string,
        after.fault.actor,
    )
    assert before.fault.upnp_error() == after.fault.upnp_error()


def test_fault_wins_over_content(soap_envelope):
    body = (
        f'<u:GetVolumeResponse xmlns:u="{RC}"><CurrentVolume>5</CurrentVolume></u:GetVolumeResponse>'
        + _fault(FAULT_CODE)
    )

    result = decode_response(soap_envelope(body))

    assert result.kind is BodyKind.FAULT
    assert result.content is None


def test_transport_info_response(soap_envelope):
    body = (
        f'<u:GetTransportInfoResponse xmlns:u="{AVT}">'
        "<CurrentTransportState>PLAYING</CurrentTransportState>"
        "<CurrentTransportStatus>OK</CurrentTransportStatus>"
        "<CurrentSpeed>1</CurrentSpeed>"
        "</u:GetTransportInfoResponse>"
    )

    result = decode_response(soap_envelope(body))

    assert isinstance(result.content, PlaybackStateResponse)
    assert result.content.is_playing


def test_position_info_response(soap_envelope):
    body = (
        f'<u:GetPositionInfoResponse xmlns:u="{AVT}">'
        "<Track>3</Track>"
        "<TrackDuration>0:04:10</TrackDuration>"
        "<TrackMetaData>&lt;DIDL-Lite/&gt;</TrackMetaData>"
        "<TrackURI>x-file-cifs://nas/music/song.flac</TrackURI>"
        "<RelTime>0:01:05</RelTime>"
        "<AbsTime>NOT_IMPLEMENTED</AbsTime>"
        "<RelCount>2147483647</RelCount>"
        "<AbsCount>2147483647</AbsCount>"
        "</u:GetPositionInfoResponse>"
    )

    result = decode_response(soap_envelope(body))

    position = result.content
    assert isinstance(position, PositionInfoResponse)
    assert position.track == 3
    assert position.track_metadata == "<DIDL-Lite/>"
    assert position.position_seconds == 65
    assert position.duration_seconds == 250
    assert position.abs_time == "NOT_IMPLEMENTED"


def test_media_info_response_tolerates_missing_optional_arguments(soap_envelope):
    body = (
        f'<u:GetMediaInfoResponse xmlns:u="{AVT}">'
        "<NrTracks>12</NrTracks>"
        "<CurrentURI>x-rincon-queue:RINCON_000E58#0</CurrentURI>"
        "</u:GetMediaInfoResponse>"
    )

    result = decode_response(soap_envelope(body))

    assert result.content == MediaInfoResponse(
        nr_tracks=12, current_uri="x-rincon-queue:RINCON_000E58#0"
    )


def test_header_is_skipped(soap_envelope):
    data = (
        '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
        "<s:Header><Session><Id>1</Id></Session></s:Header>"
        f'<s:Body><u:GetVolumeResponse xmlns:u="{RC}"><CurrentVolume>9</CurrentVolume></u:GetVolumeResponse></s:Body>'
        "</s:Envelope>"
    ).encode()

    result = decode_response(data)

    assert result.content == VolumeResponse(current_volume=9)


def test_truncated_body_raises_decode_error(soap_envelope):
    body = f'<u:SetVolumeResponse xmlns:u="{RC}"></u:SetVolumeResponse>'
    data = soap_envelope(body)
    truncated = data[: data.index(b"</s:Body>")]

    with pytest.raises(DecodeError):
        decode_response(truncated)


def test_stream_cut_inside_content_raises_decode_error(soap_envelope):
    data = soap_envelope(
        f'<u:GetVolumeResponse xmlns:u="{RC}"><CurrentVolume>42</CurrentVolume></u:GetVolumeResponse>'
    )
    truncated = data[: data.index(b"</CurrentVolume>")]

    with pytest.raises(DecodeError):
        decode_response(truncated)


def test_invalid_typed_value_raises_decode_error(soap_envelope):
    body = f'<u:GetVolumeResponse xmlns:u="{RC}"><CurrentVolume>loud</CurrentVolume></u:GetVolumeResponse>'

    with pytest.raises(DecodeError) as excinfo:
        decode_response(soap_envelope(body))

    assert excinfo.value.element == f"{{{RC}}}GetVolumeResponse"
    assert "GetVolumeResponse" in str(excinfo.value)


def test_missing_required_argument_raises_decode_error(soap_envelope):
    body = f'<u:GetVolumeResponse xmlns:u="{RC}"></u:GetVolumeResponse>'

    with pytest.raises(DecodeError, match="CurrentVolume"):
        decode_response(soap_envelope(body))


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"not xml at all",
        b"<s:Envelope xmlns:s='http://schemas.xmlsoap.org/soap/envelope/'><s:Body>",
        b"<Envelope><Body/></Envelope>",
        b"<s:Envelope xmlns:s='http://schemas.xmlsoap.org/soap/envelope/'/>",
    ],
)
def test_malformed_envelopes_raise_decode_error(data):
    with pytest.raises(DecodeError):
        decode_response(data)


def test_entity_declarations_are_refused():
    data = (
        b'<?xml version="1.0"?>'
        b'<!DOCTYPE s:Envelope [<!ENTITY boom "boom">]>'
        b"<s:Envelope xmlns:s='http://schemas.xmlsoap.org/soap/envelope/'>"
        b"<s:Body>&boom;</s:Body></s:Envelope>"
    )

    with pytest.raises(DecodeError):
        decode_response(data)


def test_decode_route_requires_decoder():
    with pytest.raises(ValueError, match="decoder"):
        Route(RouteKind.DECODE)


@pytest.mark.parametrize("error", [KeyError("CurrentVolume"), AttributeError("text")])
def test_failing_custom_decoder_raises_decode_error(soap_envelope, error):
    def broken(element):
        raise error

    routes = dict(RESPONSE_ROUTES)
    routes[(RC, "GetVolumeResponse")] = Route(RouteKind.DECODE, broken)
    body = f'<u:GetVolumeResponse xmlns:u="{RC}"><CurrentVolume>1</CurrentVolume></u:GetVolumeResponse>'

    with pytest.raises(DecodeError) as excinfo:
        ResponseDecoder(routes=routes).decode(soap_envelope(body))

    assert excinfo.value.element == f"{{{RC}}}GetVolumeResponse"
    assert excinfo.value.__cause__ is error
