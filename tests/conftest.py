"""Shared fixtures for figiclient tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from figiclient.client import FigiClient
from figiclient.config import FigiClientConfig, TransportType
from figiclient.transports.mock import MockTransport

BASE_URL = "https://api.openfigi.com/v3/"

IBM_RECORD = {
    "figi": "BBG000BLNNH6",
    "securityType": "Common Stock",
    "marketSector": "Equity",
    "ticker": "IBM",
    "name": "INTL BUSINESS MACHINES CORP",
    "exchCode": "US",
    "shareClassFIGI": "BBG001S5S399",
    "compositeFIGI": "BBG000BLNNH6",
    "securityType2": "Common Stock",
    "securityDescription": "IBM",
}


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def config() -> FigiClientConfig:
    return FigiClientConfig(base_url=BASE_URL, transport=TransportType.MOCK)


@pytest.fixture
def client(config, mock_transport) -> FigiClient:
    """Client without an API key (batch limit 5)."""
    return FigiClient(config, transport=mock_transport)


@pytest.fixture
def keyed_client(config, mock_transport) -> FigiClient:
    """Client with an API key (batch limit 100)."""
    return FigiClient(config.with_api_key("test-key"), transport=mock_transport)


@pytest.fixture
def ibm_record() -> dict:
    return dict(IBM_RECORD)
