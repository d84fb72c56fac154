"""Tests for AsyncFigiClient over the httpx transport, mocked with respx."""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from figiclient import (
    AsyncFigiClient,
    FigiClientConfig,
    FilterRequest,
    IdType,
    MappingRequest,
    SearchRequest,
)
from figiclient.config import API_KEY_HEADER
from figiclient.errors import (
    ApiItemError,
    FigiErrorCode,
    FigiValidationError,
    StatusError,
    TransportError,
)
from figiclient.transports.httpx_transport import HttpxTransport
from figiclient.transports.mock import AsyncMockTransport

BASE_URL = "https://api.openfigi.com/v3"


def _isin(value: str = "US4592001014") -> MappingRequest:
    return MappingRequest.builder().id_type(IdType.ID_ISIN).id_value(value).build()


def _client(api_key: str | None = None) -> AsyncFigiClient:
    cfg = FigiClientConfig(base_url=BASE_URL, api_key=api_key)
    return AsyncFigiClient(cfg, transport=HttpxTransport(timeout_seconds=5.0))


@pytest.mark.asyncio
async def test_single_mapping_success() -> None:
    async with _client() as client:
        with respx.mock:
            route = respx.post(f"{BASE_URL}/mapping").mock(
                return_value=httpx.Response(
                    200, json=[{"data": [{"figi": "BBG000BLNNH6", "ticker": "IBM"}]}],
                )
            )
            data = await client.map(_isin())
            assert route.called
            assert data.data[0].figi == "BBG000BLNNH6"
            sent = route.calls.last.request
            assert json.loads(sent.content) == [{"idType": "ID_ISIN", "idValue": "US4592001014"}]
            assert API_KEY_HEADER not in sent.headers


@pytest.mark.asyncio
async def test_api_key_header_sent() -> None:
    async with _client(api_key="secret") as client:
        with respx.mock:
            route = respx.post(f"{BASE_URL}/mapping").mock(
                return_value=httpx.Response(200, json=[{"data": []}] * 6)
            )
            batch = await client.map_many([_isin()] * 6)
            assert len(batch) == 6
            assert route.calls.last.request.headers[API_KEY_HEADER] == "secret"


@pytest.mark.asyncio
async def test_item_error_batch_and_single() -> None:
    async with _client() as client:
        with respx.mock:
            respx.post(f"{BASE_URL}/mapping").mock(
                return_value=httpx.Response(200, json=[{"error": "Invalid idValue format."}])
            )
            batch = await client.map_many([_isin("bad")])
            assert len(batch) == 1
            assert batch[0].error.message == "Invalid idValue format."
            with pytest.raises(ApiItemError, match="Invalid idValue format."):
                await client.map(_isin("bad"))


@pytest.mark.asyncio
async def test_rate_limit_headers_in_message() -> None:
    async with _client() as client:
        with respx.mock:
            respx.post(f"{BASE_URL}/mapping").mock(
                return_value=httpx.Response(429, headers={"RateLimit-Reset": "30"}, text="")
            )
            with pytest.raises(StatusError) as exc_info:
                await client.map(_isin())
            assert exc_info.value.code == FigiErrorCode.RATE_LIMITED
            assert "30" in exc_info.value.message
            assert exc_info.value.retry_after == 30.0


@pytest.mark.asyncio
async def test_bulk_size_rejected_without_network() -> None:
    async with _client() as client:
        with respx.mock(assert_all_called=False):
            route = respx.post(f"{BASE_URL}/mapping")
            with pytest.raises(FigiValidationError):
                await client.map_many([_isin()] * 6)
            assert not route.called


@pytest.mark.asyncio
async def test_timeout_maps_to_transport_error() -> None:
    async with _client() as client:
        with respx.mock:
            respx.post(f"{BASE_URL}/search").mock(side_effect=httpx.ReadTimeout("slow"))
            with pytest.raises(TransportError) as exc_info:
                await client.search(SearchRequest("IBM"))
            assert exc_info.value.code == FigiErrorCode.TIMEOUT
            assert exc_info.value.retryable


@pytest.mark.asyncio
async def test_connect_error_maps_to_transport_error() -> None:
    async with _client() as client:
        with respx.mock:
            respx.get(f"{BASE_URL}/mapping/values/currency").mock(
                side_effect=httpx.ConnectError("refused")
            )
            with pytest.raises(TransportError) as exc_info:
                await client.get_mapping_values("currency")
            assert exc_info.value.code == FigiErrorCode.TRANSPORT


@pytest.mark.asyncio
async def test_iter_search_async() -> None:
    async with _client() as client:
        with respx.mock:
            respx.post(f"{BASE_URL}/search").mock(side_effect=[
                httpx.Response(200, json={"data": [{"figi": "A"}], "next": "p2"}),
                httpx.Response(200, json={"data": [{"figi": "B"}]}),
            ])
            figis = [r.figi async for r in client.iter_search(SearchRequest("IBM"))]
            assert figis == ["A", "B"]


@pytest.mark.asyncio
async def test_async_mock_transport() -> None:
    transport = AsyncMockTransport()
    transport.set_route("/filter", json_body={"data": [], "total": 0})
    client = AsyncFigiClient(FigiClientConfig(base_url=BASE_URL), transport=transport)
    page = await client.filter(FilterRequest(query="IBM"))
    assert page.total == 0
    assert transport.last_request.json_body == {"query": "IBM"}


@pytest.mark.asyncio
async def test_send_raw_returns_error_status() -> None:
    async with _client() as client:
        with respx.mock:
            route = respx.post(f"{BASE_URL}/mapping").mock(
                return_value=httpx.Response(503, text="Service Unavailable")
            )
            raw = await client.send_raw(_isin())
            assert raw.status == 503
            assert raw.body == "Service Unavailable"
            assert json.loads(route.calls.last.request.content) == [
                {"idType": "ID_ISIN", "idValue": "US4592001014"},
            ]
