"""FigiClient / AsyncFigiClient: validate -> serialize -> send -> reconcile."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Iterator, Sequence, Union
from urllib.parse import quote, urlsplit

from figiclient.config import (
    API_KEY_HEADER,
    ENDPOINT_FILTER,
    ENDPOINT_MAPPING,
    ENDPOINT_MAPPING_VALUES,
    ENDPOINT_SEARCH,
    FigiClientConfig,
)
from figiclient.errors import FigiError, FigiValidationError, StatusError, TransportError
from figiclient.models.figi_record import FigiRecord
from figiclient.models.requests import FilterRequest, MappingRequest, SearchRequest
from figiclient.models.responses import BatchResult, FilterData, MappingData, SearchData
from figiclient.reconcile import expect_single, parse_batch, parse_single, parse_values
from figiclient.transports import create_async_transport, create_transport
from figiclient.transports.base import AsyncBaseTransport, BaseTransport, RawResponse
from figiclient.validation import check_batch_size

logger = logging.getLogger(__name__)

RawRequest = Union[MappingRequest, Sequence[MappingRequest], SearchRequest, FilterRequest]


def normalize_base_url(base_url: str) -> str:
    """Return ``base_url`` with exactly one trailing slash.

    Raises:
        TransportError: the URL is not an absolute http(s) URL.
    """
    parts = urlsplit(base_url or "")
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise TransportError(
            f"Invalid base URL: {base_url!r}", url=base_url, retryable=False,
        )
    return base_url.rstrip("/") + "/"


class _ClientCore:
    """State and request plumbing shared by the sync and async clients."""

    def __init__(self, config: FigiClientConfig) -> None:
        self.config = config
        self.base_url = normalize_base_url(config.base_url)

    @property
    def has_api_key(self) -> bool:
        return self.config.has_api_key

    def url(self, endpoint: str) -> str:
        return self.base_url + endpoint.lstrip("/")

    def headers(self, with_body: bool = True) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self.config.user_agent}
        if with_body:
            headers["Content-Type"] = "application/json"
        if self.config.api_key:
            headers[API_KEY_HEADER] = self.config.api_key
        return headers

    def mapping_body(self, requests: Sequence[MappingRequest]) -> list[dict[str, Any]]:
        """Check the batch policy, then every job, and serialize the array."""
        check_batch_size(len(requests), self.has_api_key)
        for request in requests:
            request.validate()
        return [request.to_dict() for request in requests]

    def prepare(self, request: RawRequest) -> tuple[str, Any]:
        """Validate ``request`` and return its endpoint URL and JSON body.

        A single ``MappingRequest`` is sent as a one-job batch.
        """
        if isinstance(request, SearchRequest):
            request.validate()
            return self.url(ENDPOINT_SEARCH), request.to_dict()
        if isinstance(request, FilterRequest):
            request.validate()
            return self.url(ENDPOINT_FILTER), request.to_dict()
        if isinstance(request, MappingRequest):
            request = [request]
        if isinstance(request, Sequence) and all(isinstance(r, MappingRequest) for r in request):
            return self.url(ENDPOINT_MAPPING), self.mapping_body(request)
        raise TypeError(f"Cannot send {type(request).__name__} to OpenFIGI")

    def values_url(self, key: str) -> str:
        if not isinstance(key, str) or not key.strip():
            raise FigiValidationError("key must be a non-empty string", field="key")
        return self.url(ENDPOINT_MAPPING_VALUES.format(key=quote(key.strip(), safe="")))

    @staticmethod
    def log_failure(exc: FigiError) -> None:
        if isinstance(exc, StatusError):
            logger.warning("OpenFIGI request failed (HTTP %d): %s", exc.status, exc.message)


class FigiClient(_ClientCore):
    """Synchronous OpenFIGI client.

    Usage::

        from figiclient import FigiClient, MappingRequest, IdType
        client = FigiClient()
        req = MappingRequest.builder().id_type(IdType.ID_ISIN).id_value("US4592001014").build()
        data = client.map(req)
        print(data.data[0].figi)

    The client is an immutable handle: it may be shared across threads as
    long as the transport is. The default ``RequestsTransport`` keeps one
    session per thread; ``MockTransport`` and a transport built around an
    injected ``requests.Session`` are not safe to share. ``with_api_key``
    returns a new client that shares the same transport.
    """

    def __init__(
        self,
        config: FigiClientConfig | None = None,
        transport: BaseTransport | None = None,
    ) -> None:
        super().__init__(config or FigiClientConfig())
        self.transport: BaseTransport = transport or create_transport(
            self.config.transport, timeout_seconds=self.config.timeout_seconds,
        )

    def with_api_key(self, api_key: str | None) -> FigiClient:
        return FigiClient(self.config.with_api_key(api_key), transport=self.transport)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> FigiClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------ internals

    def _send(self, method: str, url: str, body: Any = None) -> RawResponse:
        logger.debug("%s %s", method, url)
        return self.transport.send(
            method, url, json_body=body, headers=self.headers(with_body=body is not None),
        )

    # -------------------------------------------------------------- mapping

    def map(self, request: MappingRequest) -> MappingData:
        """Map one identifier.

        Sent as a one-job batch; an item-level error is raised as
        ``ApiItemError``.
        """
        return expect_single(self.map_many([request]))

    def map_many(self, requests: Sequence[MappingRequest]) -> BatchResult[MappingData]:
        """Map a batch of identifiers.

        Returns one ``BatchItem`` per job, in submission order. Item-level
        errors are kept in the result; only transport or status failures
        raise.
        """
        body = self.mapping_body(requests)
        url = self.url(ENDPOINT_MAPPING)
        logger.debug("Sending %d mapping job(s)", len(body))
        resp = self._send("POST", url, body)
        try:
            return parse_batch(resp.body, resp.status, MappingData, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    def get_mapping_values(self, key: str) -> list[str]:
        """List the accepted values of a mapping field, e.g. ``"exchCode"``."""
        url = self.values_url(key)
        resp = self._send("GET", url)
        try:
            return parse_values(resp.body, resp.status, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    def send_raw(self, request: RawRequest) -> RawResponse:
        """Validate and send ``request``, returning the unparsed response.

        Accepts a ``MappingRequest`` (or a batch of them), a
        ``SearchRequest`` or a ``FilterRequest``. Non-2xx statuses are
        returned, not raised; transport failures still raise
        ``TransportError``.
        """
        url, body = self.prepare(request)
        return self._send("POST", url, body)

    # ------------------------------------------------------- search / filter

    def search(self, request: SearchRequest) -> SearchData:
        """Fetch one page of keyword search results."""
        request.validate()
        url = self.url(ENDPOINT_SEARCH)
        resp = self._send("POST", url, request.to_dict())
        try:
            return parse_single(resp.body, resp.status, SearchData, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    def filter(self, request: FilterRequest) -> FilterData:
        """Fetch one page of filter results, with the total match count."""
        request.validate()
        url = self.url(ENDPOINT_FILTER)
        resp = self._send("POST", url, request.to_dict())
        try:
            return parse_single(resp.body, resp.status, FilterData, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    def iter_search(
        self, request: SearchRequest, max_pages: int | None = None,
    ) -> Iterator[FigiRecord]:
        """Yield records across pages, following ``next`` into ``start``."""
        pages = 0
        while True:
            page = self.search(request)
            pages += 1
            yield from page.data
            if page.next is None or (max_pages is not None and pages >= max_pages):
                return
            request = request.with_start(page.next)

    def iter_filter(
        self, request: FilterRequest, max_pages: int | None = None,
    ) -> Iterator[FigiRecord]:
        """Like ``iter_search`` for the filter endpoint."""
        pages = 0
        while True:
            page = self.filter(request)
            pages += 1
            yield from page.data
            if page.next is None or (max_pages is not None and pages >= max_pages):
                return
            request = request.with_start(page.next)


class AsyncFigiClient(_ClientCore):
    """Asynchronous OpenFIGI client backed by ``httpx`` by default.

    Each call awaits exactly one transport request; validation and
    parsing run synchronously around it.
    """

    def __init__(
        self,
        config: FigiClientConfig | None = None,
        transport: AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config or FigiClientConfig())
        self.transport: AsyncBaseTransport = transport or create_async_transport(
            self.config.transport, timeout_seconds=self.config.timeout_seconds,
        )

    def with_api_key(self, api_key: str | None) -> AsyncFigiClient:
        return AsyncFigiClient(self.config.with_api_key(api_key), transport=self.transport)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> AsyncFigiClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def _send(self, method: str, url: str, body: Any = None) -> RawResponse:
        logger.debug("%s %s", method, url)
        return await self.transport.send(
            method, url, json_body=body, headers=self.headers(with_body=body is not None),
        )

    async def map(self, request: MappingRequest) -> MappingData:
        return expect_single(await self.map_many([request]))

    async def map_many(self, requests: Sequence[MappingRequest]) -> BatchResult[MappingData]:
        body = self.mapping_body(requests)
        url = self.url(ENDPOINT_MAPPING)
        logger.debug("Sending %d mapping job(s)", len(body))
        resp = await self._send("POST", url, body)
        try:
            return parse_batch(resp.body, resp.status, MappingData, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    async def get_mapping_values(self, key: str) -> list[str]:
        url = self.values_url(key)
        resp = await self._send("GET", url)
        try:
            return parse_values(resp.body, resp.status, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    async def send_raw(self, request: RawRequest) -> RawResponse:
        url, body = self.prepare(request)
        return await self._send("POST", url, body)

    async def search(self, request: SearchRequest) -> SearchData:
        request.validate()
        url = self.url(ENDPOINT_SEARCH)
        resp = await self._send("POST", url, request.to_dict())
        try:
            return parse_single(resp.body, resp.status, SearchData, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    async def filter(self, request: FilterRequest) -> FilterData:
        request.validate()
        url = self.url(ENDPOINT_FILTER)
        resp = await self._send("POST", url, request.to_dict())
        try:
            return parse_single(resp.body, resp.status, FilterData, resp.headers, url)
        except FigiError as exc:
            self.log_failure(exc)
            raise

    async def iter_search(
        self, request: SearchRequest, max_pages: int | None = None,
    ) -> AsyncIterator[FigiRecord]:
        pages = 0
        while True:
            page = await self.search(request)
            pages += 1
            for record in page.data:
                yield record
            if page.next is None or (max_pages is not None and pages >= max_pages):
                return
            request = request.with_start(page.next)

    async def iter_filter(
        self, request: FilterRequest, max_pages: int | None = None,
    ) -> AsyncIterator[FigiRecord]:
        pages = 0
        while True:
            page = await self.filter(request)
            pages += 1
            for record in page.data:
                yield record
            if page.next is None or (max_pages is not None and pages >= max_pages):
                return
            request = request.with_start(page.next)
