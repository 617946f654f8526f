"""Adapter modules for external integrations."""

from .renderer import MediaRendererClient
from .transport import SoapTransport, build_url

__all__ = [
    "MediaRendererClient",
    "SoapTransport",
    "build_url",
]
