"""Abstract base classes for HTTP transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawResponse:
    """HTTP response as seen by the client, before any parsing.

    Attributes:
        status: HTTP status code.
        headers: Response headers with lower-cased names.
        body: Response text, or ``None`` if it could not be read.
        url: Final request URL.
    """

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = ""
    url: str = ""


def lower_headers(headers: Any) -> dict[str, str]:
    return {str(k).lower(): str(v) for k, v in dict(headers or {}).items()}


class BaseTransport(ABC):
    """Synchronous transport: one HTTP exchange per ``send`` call.

    Implementations raise ``TransportError`` when no response is received
    at all and return every HTTP response, whatever its status.
    Retry and backoff, if any, belong here and not in the client.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        """Perform one HTTP request.

        Args:
            method: "GET" or "POST".
            url: Absolute request URL.
            json_body: JSON-serializable body, or ``None`` for no body.
            headers: Extra request headers.
        """
        ...

    def close(self) -> None:
        """Release pooled connections."""

    def __enter__(self) -> BaseTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class AsyncBaseTransport(ABC):
    """Asynchronous counterpart of ``BaseTransport``."""

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        ...

    async def aclose(self) -> None:
        """Release pooled connections."""

    async def __aenter__(self) -> AsyncBaseTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
