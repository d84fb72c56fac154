"""Turn raw HTTP responses into typed payloads and ordered batch results.

A 2xx body is either a single tagged object (``{"data": ...}`` on success,
``{"error": "..."}`` or ``{"warning": "..."}`` on an item-level failure) or,
for the mapping endpoint, a JSON array of such objects. Non-2xx responses
never reach the body parser; they go to ``classify``.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Protocol, TypeVar

from figiclient.classify import classify
from figiclient.errors import (
    ApiItemError,
    FigiErrorCode,
    ResponseFormatError,
    TransportError,
)
from figiclient.models.responses import BatchItem, BatchResult

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class PayloadType(Protocol[T_co]):
    def from_dict(self, payload: dict[str, Any]) -> T_co: ...


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


def _decode(body: str | None, status: int, url: str) -> Any:
    if body is None:
        raise TransportError(f"Failed to read response body from {url}", url=url)
    try:
        return json.loads(body)
    except ValueError as exc:
        raise ResponseFormatError(
            f"Invalid JSON in response from {url}: {exc}", status=status, body=body,
        ) from exc


def _check_status(
    body: str | None, status: int, headers: Mapping[str, str] | None, url: str,
) -> None:
    if not is_success_status(status):
        raise classify(status, headers, body, url)


def _item(
    obj: Any,
    payload_cls: PayloadType[T],
    status: int,
    index: int | None,
    body: str,
) -> BatchItem[T]:
    where = "" if index is None else f" at index {index}"
    if not isinstance(obj, dict):
        raise ResponseFormatError(
            f"Expected a JSON object{where}, got {type(obj).__name__}",
            status=status, body=body,
        )
    if "error" in obj:
        return BatchItem(
            index=index or 0,
            error=ApiItemError(str(obj["error"]), status=status, index=index),
        )
    if "warning" in obj and "data" not in obj:
        return BatchItem(
            index=index or 0,
            error=ApiItemError(
                str(obj["warning"]), status=status, index=index,
                code=FigiErrorCode.NO_MATCH,
            ),
        )
    if "data" not in obj:
        raise ResponseFormatError(
            f"Response object{where} has neither 'data' nor 'error'",
            status=status, body=body,
        )
    try:
        value = payload_cls.from_dict(obj)
    except ValueError as exc:
        raise ResponseFormatError(
            f"Malformed response object{where}: {exc}", status=status, body=body,
        ) from exc
    return BatchItem(index=index or 0, value=value)


def parse_single(
    body: str | None,
    status: int,
    payload_cls: PayloadType[T],
    headers: Mapping[str, str] | None = None,
    url: str = "",
) -> T:
    """Parse a single-object response.

    Raises:
        StatusError: non-2xx status.
        ApiItemError: the 2xx body is an error or warning object.
        ResponseFormatError: the body is not JSON of a known shape.
    """
    _check_status(body, status, headers, url)
    obj = _decode(body, status, url)
    return _item(obj, payload_cls, status, None, body or "").unwrap()


def parse_batch(
    body: str | None,
    status: int,
    payload_cls: PayloadType[T],
    headers: Mapping[str, str] | None = None,
    url: str = "",
) -> BatchResult[T]:
    """Parse a batch response into one ``BatchItem`` per array element.

    Item-level errors stay inside the result; only a non-2xx status or a
    body that is not an array of objects fails the whole call.
    """
    _check_status(body, status, headers, url)
    array = _decode(body, status, url)
    if not isinstance(array, list):
        raise ResponseFormatError(
            f"Expected a JSON array from {url}, got {type(array).__name__}",
            status=status, body=body or "",
        )
    return BatchResult([
        _item(obj, payload_cls, status, index, body or "")
        for index, obj in enumerate(array)
    ])


def expect_single(batch: BatchResult[T]) -> T:
    """Unwrap the only item of a one-job batch.

    Raises:
        ResponseFormatError: the batch does not hold exactly one item.
        ApiItemError: the item is an error.
    """
    if len(batch) != 1:
        raise ResponseFormatError(
            f"Expected 1 result for single mapping, but got {len(batch)}",
        )
    return batch[0].unwrap()


def parse_values(
    body: str | None,
    status: int,
    headers: Mapping[str, str] | None = None,
    url: str = "",
) -> list[str]:
    """Parse a ``mapping/values/{key}`` response into its value list."""
    _check_status(body, status, headers, url)
    obj = _decode(body, status, url)
    if isinstance(obj, dict) and "error" in obj:
        raise ApiItemError(str(obj["error"]), status=status)
    values = obj.get("values") if isinstance(obj, dict) else None
    if not isinstance(values, list):
        raise ResponseFormatError(
            f"Expected an object with a 'values' array from {url}",
            status=status, body=body or "",
        )
    return [str(v) for v in values]
