"""HTTP transport registry."""

from __future__ import annotations

from figiclient.config import TransportType
from figiclient.transports.base import AsyncBaseTransport, BaseTransport, RawResponse

# Lazy registry: classes are imported on demand so the optional httpx
# dependency is only needed when the async transport is used.
TRANSPORT_CLASSES: dict[TransportType, str] = {
    TransportType.REQUESTS: "figiclient.transports.requests_transport.RequestsTransport",
    TransportType.MOCK: "figiclient.transports.mock.MockTransport",
}

ASYNC_TRANSPORT_CLASSES: dict[TransportType, str] = {
    TransportType.HTTPX: "figiclient.transports.httpx_transport.HttpxTransport",
    TransportType.MOCK: "figiclient.transports.mock.AsyncMockTransport",
}


def _load(dotted: str) -> type:
    import importlib

    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, cls_name)


def create_transport(
    transport_type: TransportType,
    **kwargs,
) -> BaseTransport:
    """Instantiate a sync transport; ``httpx`` falls back to ``requests``."""
    if transport_type not in TRANSPORT_CLASSES:
        transport_type = TransportType.REQUESTS
    return _load(TRANSPORT_CLASSES[transport_type])(**kwargs)


def create_async_transport(
    transport_type: TransportType,
    **kwargs,
) -> AsyncBaseTransport:
    """Instantiate an async transport; ``requests`` has no async variant."""
    if transport_type not in ASYNC_TRANSPORT_CLASSES:
        transport_type = TransportType.HTTPX
    return _load(ASYNC_TRANSPORT_CLASSES[transport_type])(**kwargs)


__all__ = [
    "AsyncBaseTransport",
    "BaseTransport",
    "RawResponse",
    "TRANSPORT_CLASSES",
    "ASYNC_TRANSPORT_CLASSES",
    "create_transport",
    "create_async_transport",
]
