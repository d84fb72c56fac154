"""Asynchronous transport backed by ``httpx.AsyncClient``.

Install the optional dependency:
    pip install figiclient[async]
"""

from __future__ import annotations

import logging
from typing import Any

from figiclient.config import DEFAULT_TIMEOUT_SECONDS
from figiclient.errors import FigiError, FigiErrorCode, TransportError
from figiclient.transports.base import AsyncBaseTransport, RawResponse, lower_headers

try:
    import httpx
    _HTTPX_AVAILABLE = True
except ImportError:
    _HTTPX_AVAILABLE = False

logger = logging.getLogger(__name__)


class HttpxTransport(AsyncBaseTransport):
    """Send requests through a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: Any = None,
    ) -> None:
        if not _HTTPX_AVAILABLE:
            raise FigiError(
                "httpx is not installed. Run: pip install figiclient[async]",
                code=FigiErrorCode.TRANSPORT,
            )
        self.timeout_seconds = timeout_seconds
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def send(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        try:
            resp = await self.client.request(
                method,
                url,
                json=json_body,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {url} timed out after {self.timeout_seconds}s",
                code=FigiErrorCode.TIMEOUT,
                url=url,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            body: str | None = resp.text
        except (httpx.HTTPError, UnicodeDecodeError) as exc:
            logger.debug("Could not read response body from %s: %s", url, exc)
            body = None

        return RawResponse(
            status=resp.status_code,
            headers=lower_headers(resp.headers),
            body=body,
            url=url,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
