"""SOAP-over-HTTP transport for renderer control endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from yarl import URL

from ..constants import SOAP_CONTENT_TYPE
from ..core import ActionRequest, DiagnosticCallback, ResponseBody
from ..errors import ConstructionError, TransportError
from ..soap import ResponseDecoder, encode_request

LOGGER = logging.getLogger(__name__)

_DETAIL_LIMIT = 200


def build_url(base_url: str, path_suffix: str) -> str:
    """Join a device base URL and a control path.

    Raises:
        ConstructionError: If the result is not an absolute http(s) URL with
            a valid host and port.
    """
    joined = f"{base_url.rstrip('/')}/{path_suffix.lstrip('/')}"
    try:
        url = URL(joined)
        host, _ = url.host, url.port
    except ValueError as exc:
        raise ConstructionError(
            f"unable to construct request URL from {base_url!r}: {exc}"
        ) from exc
    if url.scheme not in ("http", "https") or not host:
        raise ConstructionError(f"unable to construct request URL from {base_url!r}")
    return joined


class SoapTransport:
    """Single-attempt SOAP POST followed by response decoding.

    One instance may serve any number of devices; nothing but the optional
    aiohttp session is shared between calls.
    """

    def __init__(
        self,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None,
        reporter: Optional[DiagnosticCallback] = None,
    ) -> None:
        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None
        self._timeout = timeout
        self._decoder = ResponseDecoder(reporter=reporter)

    async def __aenter__(self) -> "SoapTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def send(
        self,
        base_url: str,
        path_suffix: str,
        namespace: str,
        action: str,
        payload: Any,
    ) -> ResponseBody:
        """POST ``payload`` as the ``namespace#action`` action.

        Raises:
            ConstructionError: If the URL or envelope cannot be built.
            TransportError: If the request fails or the status is not 200.
            DecodeError: If the response envelope cannot be decoded.
        """
        request = ActionRequest(namespace=namespace, action=action, payload=payload)
        return await self.execute(base_url, path_suffix, request)

    async def execute(
        self, base_url: str, path_suffix: str, request: ActionRequest
    ) -> ResponseBody:
        url = build_url(base_url, path_suffix)
        body = encode_request(request.payload)
        headers = {
            "soapaction": request.soap_action,
            "Content-Type": SOAP_CONTENT_TYPE,
        }

        session = await self._ensure_session()
        LOGGER.debug("POST %s (soapaction=%s)", url, request.soap_action)

        try:
            async with session.post(url, data=body, headers=headers) as response:
                if response.status != 200:
                    detail = await response.read()
                    LOGGER.debug(
                        "Request to %s failed with status %d: %s",
                        url,
                        response.status,
                        detail[:_DETAIL_LIMIT].decode("utf-8", errors="replace"),
                    )
                    raise TransportError(
                        f"request failure: {response.status}",
                        status=response.status,
                        body=detail,
                    )
                data = await response.read()
        except aiohttp.InvalidURL as exc:
            raise ConstructionError(f"unable to construct request URL: {exc}") from exc
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            raise TransportError(f"unable to make request: {exc}") from exc

        return self._decoder.decode(data)

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            if self._timeout is not None:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self._timeout)
                )
            else:
                self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session
