"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum

DEFAULT_BASE_URL = "https://api.openfigi.com/v3/"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "figiclient/0.1.0"

API_KEY_HEADER = "X-OPENFIGI-APIKEY"

ENDPOINT_MAPPING = "mapping"
ENDPOINT_SEARCH = "search"
ENDPOINT_FILTER = "filter"
ENDPOINT_MAPPING_VALUES = "mapping/values/{key}"

# Server-side job limits for the mapping endpoint.
MAX_JOBS_WITH_KEY = 100
MAX_JOBS_WITHOUT_KEY = 5


class TransportType(Enum):
    """Supported HTTP transport backends."""

    REQUESTS = "requests"
    HTTPX = "httpx"
    MOCK = "mock"


@dataclass(frozen=True)
class FigiClientConfig:
    """Configuration for FigiClient / AsyncFigiClient.

    Resolved once when the client is built; nothing re-reads the
    environment afterwards.

    Attributes:
        base_url: API root, joined with the endpoint paths.
        api_key: Optional OpenFIGI key sent as ``X-OPENFIGI-APIKEY``.
        timeout_seconds: Per-request timeout handed to the transport.
        transport: Backend used when no transport instance is injected.
        user_agent: Value of the ``User-Agent`` header.
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    transport: TransportType = TransportType.REQUESTS
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def max_batch_size(self) -> int:
        return MAX_JOBS_WITH_KEY if self.has_api_key else MAX_JOBS_WITHOUT_KEY

    def with_api_key(self, api_key: str | None) -> FigiClientConfig:
        return replace(self, api_key=api_key)

    @classmethod
    def from_env(cls, **overrides) -> FigiClientConfig:
        """Build a config from environment variables.

        Environment variables:
            OPENFIGI_API_KEY: API key (optional).
            OPENFIGI_BASE_URL: API root (default: the public v3 endpoint).
            OPENFIGI_TIMEOUT: Request timeout in seconds (default: 30).
            OPENFIGI_TRANSPORT: "requests", "httpx" or "mock" (default: "requests").

        Keyword overrides win over the environment.
        """
        values = {
            "base_url": os.getenv("OPENFIGI_BASE_URL") or DEFAULT_BASE_URL,
            "api_key": os.getenv("OPENFIGI_API_KEY") or None,
            "timeout_seconds": float(
                os.getenv("OPENFIGI_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
            ),
            "transport": TransportType(
                os.getenv("OPENFIGI_TRANSPORT", TransportType.REQUESTS.value).strip().lower()
            ),
        }
        values.update(overrides)
        return cls(**values)
