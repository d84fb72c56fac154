"""Synchronous transport backed by ``requests.Session``."""

from __future__ import annotations

import logging
import threading
from typing import Any

import requests

from figiclient.config import DEFAULT_TIMEOUT_SECONDS
from figiclient.errors import FigiErrorCode, TransportError
from figiclient.transports.base import BaseTransport, RawResponse, lower_headers

logger = logging.getLogger(__name__)


class RequestsTransport(BaseTransport):
    """Send requests through pooled ``requests.Session`` objects.

    ``requests.Session`` is not thread-safe, so by default each thread
    gets its own session (and connection pool), created on first use and
    reused after that. An injected ``session`` is used by every thread
    as-is; pass one only if you also serialize access to it, or to
    configure retries, proxies or certificates for single-threaded use.
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._injected = session
        self._local = threading.local()
        self._lock = threading.Lock()
        self._owned: list[requests.Session] = []

    @property
    def session(self) -> requests.Session:
        """The session used by the calling thread."""
        if self._injected is not None:
            return self._injected
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._owned.append(session)
        return session

    def send(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RawResponse:
        try:
            resp = self.session.request(
                method,
                url,
                json=json_body,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.Timeout as exc:
            raise TransportError(
                f"Request to {url} timed out after {self.timeout_seconds}s",
                code=FigiErrorCode.TIMEOUT,
                url=url,
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            body: str | None = resp.text
        except (requests.RequestException, UnicodeDecodeError) as exc:
            logger.debug("Could not read response body from %s: %s", url, exc)
            body = None

        return RawResponse(
            status=resp.status_code,
            headers=lower_headers(resp.headers),
            body=body,
            url=url,
        )

    def close(self) -> None:
        """Close every session this transport created; an injected one is left open."""
        with self._lock:
            owned, self._owned = self._owned, []
            self._local = threading.local()
        for session in owned:
            session.close()
