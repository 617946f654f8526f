from dataclasses import dataclass
from typing import Callable, Mapping

import pytest
import pytest_asyncio
from aiohttp import web

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
RENDERING_CONTROL_NS = "urn:schemas-upnp-org:service:RenderingControl:1"
AV_TRANSPORT_NS = "urn:schemas-upnp-org:service:AVTransport:1"


def build_envelope(body: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<s:Envelope xmlns:s="{SOAP_ENVELOPE_NS}" '
        's:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/">'
        f"<s:Body>{body}</s:Body>"
        "</s:Envelope>"
    ).encode("utf-8")


@pytest.fixture
def soap_envelope() -> Callable[[str], bytes]:
    """Wrap a body fragment in a device-style response envelope."""
    return build_envelope


@dataclass
class RecordedRequest:
    path: str
    headers: Mapping[str, str]
    body: bytes


@pytest_asyncio.fixture
async def soap_server(unused_tcp_port_factory):
    """Control endpoint replaying queued replies and recording requests."""
    received: list[RecordedRequest] = []
    replies: list[tuple[int, bytes]] = []

    async def control_handler(request: web.Request):
        body = await request.read()
        received.append(
            RecordedRequest(path=request.path, headers=request.headers.copy(), body=body)
        )
        status, payload = replies.pop(0) if replies else (200, build_envelope(""))
        return web.Response(status=status, body=payload, content_type="text/xml")

    app = web.Application()
    app.router.add_post("/{path:.*}", control_handler)

    runner = web.AppRunner(app)
    await runner.setup()

    port = unused_tcp_port_factory()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()

    class _Server:
        def __init__(self, server_port: int):
            self._port = server_port

        def make_url(self, path: str = "/") -> str:
            if not path.startswith("/"):
                path = "/" + path
            return f"http://127.0.0.1:{self._port}{path}"

        @property
        def requests(self) -> list[RecordedRequest]:
            return received

        def reply(self, body: bytes, status: int = 200) -> None:
            replies.append((status, body))

        def reply_body(self, fragment: str, status: int = 200) -> None:
            replies.append((status, build_envelope(fragment)))

    try:
        yield _Server(port)
    finally:
        await runner.cleanup()
