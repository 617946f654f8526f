"""Constants used across the renderer-soap package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "renderer-soap"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / DEFAULT_CONFIG_FILENAME

DEFAULT_DEVICE_HOST = "192.168.1.20"
DEFAULT_DEVICE_PORT = 1400

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENCODING_NS = "http://schemas.xmlsoap.org/soap/encoding/"
SOAP_CONTENT_TYPE = 'text/xml; charset="utf-8"'

RENDERING_CONTROL_NS = "urn:schemas-upnp-org:service:RenderingControl:1"
AV_TRANSPORT_NS = "urn:schemas-upnp-org:service:AVTransport:1"

RENDERING_CONTROL_PATH = "MediaRenderer/RenderingControl/Control"
AV_TRANSPORT_PATH = "MediaRenderer/AVTransport/Control"

DEFAULT_INSTANCE_ID = 0
DEFAULT_CHANNEL = "Master"
