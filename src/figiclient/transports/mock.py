"""Scripted in-memory transports for testing and CI. No network required."""

from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Union

from figiclient.errors import TransportError
from figiclient.transports.base import AsyncBaseTransport, BaseTransport, RawResponse

Scripted = Union[RawResponse, BaseException]


@dataclass(frozen=True)
class RecordedRequest:
    """One call made through a mock transport."""

    method: str
    url: str
    json_body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


class _Script:
    """Queue of scripted responses shared by the sync and async mocks."""

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self.timeout_seconds = timeout_seconds
        self._queue: deque[Scripted] = deque()
        self._routes: dict[str, RawResponse] = {}
        self.requests: list[RecordedRequest] = []

    # --- Pre-load helpers ---

    def add_response(
        self,
        status: int = 200,
        json_body: Any = None,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Queue a response; ``json_body`` is serialized unless ``body`` is given."""
        if body is None and json_body is not None:
            body = json.dumps(json_body)
        self._queue.append(RawResponse(
            status=status,
            headers={k.lower(): v for k, v in (headers or {}).items()},
            body=body if body is not None else "",
        ))

    def add_exception(self, exc: BaseException) -> None:
        """Queue an exception to raise instead of returning a response."""
        self._queue.append(exc)

    def set_route(
        self,
        url_suffix: str,
        status: int = 200,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Answer every call whose URL ends with ``url_suffix`` once the queue is empty."""
        self._routes[url_suffix] = RawResponse(
            status=status,
            headers={k.lower(): v for k, v in (headers or {}).items()},
            body=json.dumps(json_body) if json_body is not None else "",
        )

    @property
    def last_request(self) -> RecordedRequest | None:
        return self.requests[-1] if self.requests else None

    @property
    def pending(self) -> int:
        return len(self._queue)

    def _next(
        self,
        method: str,
        url: str,
        json_body: Any,
        headers: dict[str, str] | None,
    ) -> RawResponse:
        self.requests.append(RecordedRequest(method, url, json_body, dict(headers or {})))
        if self._queue:
            item = self._queue.popleft()
            if isinstance(item, BaseException):
                raise item
            return RawResponse(item.status, item.headers, item.body, url)
        for suffix, resp in self._routes.items():
            if url.endswith(suffix):
                return RawResponse(resp.status, resp.headers, resp.body, url)
        raise TransportError(f"No mocked response for {method} {url}", url=url)


class MockTransport(_Script, BaseTransport):
    """Synchronous scripted transport.

    Queue responses with ``add_response`` / ``add_exception`` (served in
    order), or register fallbacks with ``set_route``. Every call is
    recorded in ``requests``.
    """

    def send(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        return self._next(method, url, json_body, headers)


class AsyncMockTransport(_Script, AsyncBaseTransport):
    """Asynchronous scripted transport with the same helpers as ``MockTransport``."""

    async def send(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        return self._next(method, url, json_body, headers)
