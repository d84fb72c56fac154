"""figiclient: typed client for the OpenFIGI v3 API.

Client-side request validation, exact wire serialization, batch mapping
with per-item results, and structured HTTP error classification.

Quick start::

    from figiclient import create_client_from_env, MappingRequest, IdType
    client = create_client_from_env()
    req = MappingRequest.builder().id_type(IdType.ID_ISIN).id_value("US4592001014").build()
    print(client.map(req).data[0].figi)
"""

from __future__ import annotations

import logging

from figiclient.client import AsyncFigiClient, FigiClient
from figiclient.config import FigiClientConfig, TransportType
from figiclient.errors import (
    ApiItemError,
    FigiError,
    FigiErrorCode,
    FigiValidationError,
    ResponseFormatError,
    StatusError,
    TransportError,
)
from figiclient.models.enums import (
    Currency,
    ExchCode,
    IdType,
    MarketSecDesc,
    MicCode,
    OptionType,
    SecurityType,
    SecurityType2,
    StateCode,
)
from figiclient.models.figi_record import FigiRecord
from figiclient.models.filter_set import FilterSet
from figiclient.models.requests import FilterRequest, MappingRequest, SearchRequest
from figiclient.models.responses import (
    BatchItem,
    BatchResult,
    FilterData,
    MappingData,
    SearchData,
)
from figiclient.transports.base import RawResponse

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Clients
    "FigiClient",
    "AsyncFigiClient",
    "create_client_from_env",
    "create_async_client_from_env",
    # Config
    "FigiClientConfig",
    "TransportType",
    # Errors
    "FigiError",
    "FigiErrorCode",
    "FigiValidationError",
    "TransportError",
    "StatusError",
    "ApiItemError",
    "ResponseFormatError",
    # Requests
    "FilterSet",
    "MappingRequest",
    "SearchRequest",
    "FilterRequest",
    # Responses
    "FigiRecord",
    "MappingData",
    "SearchData",
    "FilterData",
    "BatchItem",
    "BatchResult",
    "RawResponse",
    # Enums
    "IdType",
    "ExchCode",
    "MicCode",
    "Currency",
    "MarketSecDesc",
    "SecurityType",
    "SecurityType2",
    "OptionType",
    "StateCode",
]


def create_client_from_env(**overrides) -> FigiClient:
    """Zero-config factory: reads the API key and settings from env vars.

    Environment variables:
        OPENFIGI_API_KEY: OpenFIGI API key (optional; raises the batch limit to 100).
        OPENFIGI_BASE_URL: API root (default: "https://api.openfigi.com/v3/").
        OPENFIGI_TIMEOUT: Request timeout in seconds (default: 30).
        OPENFIGI_TRANSPORT: "requests" or "mock" (default: "requests").
    """
    return FigiClient(FigiClientConfig.from_env(**overrides))


def create_async_client_from_env(**overrides) -> AsyncFigiClient:
    """Async variant of ``create_client_from_env``; needs ``figiclient[async]``."""
    return AsyncFigiClient(FigiClientConfig.from_env(**overrides))
