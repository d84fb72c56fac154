"""Live integration test against the public OpenFIGI API.

Opt-in: set OPENFIGI_LIVE_TESTS=1 (and optionally OPENFIGI_API_KEY).
Run: python -m pytest tests/test_integration_openfigi.py -v -s
"""

import os

import pytest

from figiclient import (
    FilterRequest,
    IdType,
    MappingRequest,
    SearchRequest,
    TransportType,
    create_client_from_env,
)

pytestmark = pytest.mark.skipif(
    os.getenv("OPENFIGI_LIVE_TESTS") != "1",
    reason="OPENFIGI_LIVE_TESTS not set",
)

ISINS = ["US4592001014", "US0378331005", "US5949181045"]


@pytest.fixture(scope="module")
def live_client():
    client = create_client_from_env(transport=TransportType.REQUESTS)
    yield client
    client.close()


def test_map_known_isins(live_client):
    reqs = [MappingRequest.builder().id_type(IdType.ID_ISIN).id_value(i).build() for i in ISINS]
    batch = live_client.map_many(reqs)
    assert len(batch) == len(ISINS)
    assert all(item.is_success for item in batch)
    assert "BBG000BLNNH6" in batch[0].value.figis


def test_unknown_isin_is_item_error(live_client):
    req = MappingRequest.builder().id_type(IdType.ID_ISIN).id_value("XX0000000000").build()
    batch = live_client.map_many([req])
    assert len(batch) == 1
    assert batch[0].is_error


def test_search_and_filter_pages(live_client):
    page = live_client.search(SearchRequest.builder().query("IBM").exch_code("US").build())
    assert page.data
    filtered = live_client.filter(FilterRequest.builder().query("IBM").currency("USD").build())
    assert filtered.total is None or filtered.total >= len(filtered.data)


def test_mapping_values(live_client):
    assert "ID_ISIN" in live_client.get_mapping_values("idType")
