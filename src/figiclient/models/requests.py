"""Request models for the mapping, search and filter endpoints.

Each request is an immutable value with the FilterSet flattened into its
own JSON object on the wire::

    MappingRequest.builder().id_type(IdType.ID_ISIN).id_value("US4592001014").build()
    SearchRequest.builder().query("IBM").exch_code("US").build()
    FilterRequest.builder().security_type2("Common Stock").currency("USD").build()

``build()`` checks required fields first (``FigiErrorCode.MISSING_FIELD``),
then the filter rules and the request's own invariant
(``FigiErrorCode.VALIDATION_FAILED``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

from figiclient.errors import FigiErrorCode, FigiValidationError
from figiclient.models.enums import IdType, coerce_enum
from figiclient.models.filter_set import FIELD_NAMES, FilterBuilder, FilterSet
from figiclient.validation import (
    validate_filter_request,
    validate_mapping_request,
    validate_search_request,
)

IdValue = Union[str, int, float]


@dataclass(frozen=True)
class MappingRequest:
    """One mapping job: an identifier plus optional filters.

    Attributes:
        id_type: Kind of identifier in ``id_value``.
        id_value: The identifier itself (string or number).
        filters: Additional constraints on the returned instruments.
    """

    id_type: IdType
    id_value: IdValue
    filters: FilterSet = field(default_factory=FilterSet)

    def __post_init__(self) -> None:
        for name in ("id_type", "id_value"):
            if getattr(self, name) is None:
                raise FigiValidationError(
                    f"{name} is required", code=FigiErrorCode.MISSING_FIELD, field=name,
                )
        object.__setattr__(self, "id_type", coerce_enum(IdType, self.id_type, "id_type"))
        object.__setattr__(self, "id_value", _id_value(self.id_value))

    @staticmethod
    def builder() -> MappingRequestBuilder:
        return MappingRequestBuilder()

    def validate(self) -> None:
        validate_mapping_request(self)

    def to_dict(self) -> dict[str, Any]:
        return {"idType": self.id_type.value, "idValue": self.id_value, **self.filters.to_wire()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> MappingRequest:
        _reject_unknown(payload, {"idType", "idValue"})
        if payload.get("idType") is None:
            raise FigiValidationError(
                "id_type is required", code=FigiErrorCode.MISSING_FIELD, field="id_type",
            )
        if payload.get("idValue") is None:
            raise FigiValidationError(
                "id_value is required", code=FigiErrorCode.MISSING_FIELD, field="id_value",
            )
        return cls(
            id_type=coerce_enum(IdType, payload["idType"], "id_type"),
            id_value=_id_value(payload["idValue"]),
            filters=FilterSet.from_wire(payload),
        )


@dataclass(frozen=True)
class SearchRequest:
    """Free-text search with an optional pagination cursor."""

    query: str
    start: str | None = None
    filters: FilterSet = field(default_factory=FilterSet)

    @staticmethod
    def builder() -> SearchRequestBuilder:
        return SearchRequestBuilder()

    def validate(self) -> None:
        validate_search_request(self)

    def with_start(self, start: str | None) -> SearchRequest:
        return SearchRequest(query=self.query, start=start, filters=self.filters)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"query": self.query}
        if self.start is not None:
            out["start"] = self.start
        out.update(self.filters.to_wire())
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SearchRequest:
        _reject_unknown(payload, {"query", "start"})
        if payload.get("query") is None:
            raise FigiValidationError(
                "query is required", code=FigiErrorCode.MISSING_FIELD, field="query",
            )
        return cls(
            query=payload["query"],
            start=payload.get("start"),
            filters=FilterSet.from_wire(payload),
        )


@dataclass(frozen=True)
class FilterRequest:
    """Criteria-based listing; needs a query or at least one filter."""

    query: str | None = None
    start: str | None = None
    filters: FilterSet = field(default_factory=FilterSet)

    @staticmethod
    def builder() -> FilterRequestBuilder:
        return FilterRequestBuilder()

    def validate(self) -> None:
        validate_filter_request(self)

    def with_start(self, start: str | None) -> FilterRequest:
        return FilterRequest(query=self.query, start=start, filters=self.filters)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.query is not None:
            out["query"] = self.query
        if self.start is not None:
            out["start"] = self.start
        out.update(self.filters.to_wire())
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> FilterRequest:
        _reject_unknown(payload, {"query", "start"})
        return cls(
            query=payload.get("query"),
            start=payload.get("start"),
            filters=FilterSet.from_wire(payload),
        )


Request = Union[MappingRequest, SearchRequest, FilterRequest]


class RequestKind(Enum):
    MAPPING = "mapping"
    SEARCH = "search"
    FILTER = "filter"


@dataclass(frozen=True)
class _KindSpec:
    cls: type
    required: tuple[str, ...]
    validate: Callable[[Any], None]


_KINDS: dict[RequestKind, _KindSpec] = {
    RequestKind.MAPPING: _KindSpec(MappingRequest, ("id_type", "id_value"), validate_mapping_request),
    RequestKind.SEARCH: _KindSpec(SearchRequest, ("query",), validate_search_request),
    RequestKind.FILTER: _KindSpec(FilterRequest, (), validate_filter_request),
}


def build_request(kind: RequestKind, values: dict[str, Any], filters: FilterSet) -> Request:
    """Assemble and validate a request of the given kind.

    Missing required fields are reported before any filter rule runs.
    """
    spec = _KINDS[kind]
    for name in spec.required:
        if values.get(name) is None:
            raise FigiValidationError(
                f"{name} is required", code=FigiErrorCode.MISSING_FIELD, field=name,
            )
    request = spec.cls(**values, filters=filters)
    spec.validate(request)
    return request


class MappingRequestBuilder(FilterBuilder):
    def __init__(self) -> None:
        super().__init__()
        self._id_type: IdType | None = None
        self._id_value: IdValue | None = None

    def id_type(self, value: IdType | str) -> MappingRequestBuilder:
        self._id_type = coerce_enum(IdType, value, "id_type")
        return self

    def id_value(self, value: IdValue) -> MappingRequestBuilder:
        self._id_value = _id_value(value)
        return self

    def build(self) -> MappingRequest:
        return build_request(
            RequestKind.MAPPING,
            {"id_type": self._id_type, "id_value": self._id_value},
            self.build_filters(),
        )


class SearchRequestBuilder(FilterBuilder):
    def __init__(self) -> None:
        super().__init__()
        self._query: str | None = None
        self._start: str | None = None

    def query(self, value: str) -> SearchRequestBuilder:
        self._query = value
        return self

    def start(self, value: str | None) -> SearchRequestBuilder:
        self._start = value
        return self

    def build(self) -> SearchRequest:
        return build_request(
            RequestKind.SEARCH,
            {"query": self._query, "start": self._start},
            self.build_filters(),
        )


class FilterRequestBuilder(FilterBuilder):
    def __init__(self) -> None:
        super().__init__()
        self._query: str | None = None
        self._start: str | None = None

    def query(self, value: str) -> FilterRequestBuilder:
        self._query = value
        return self

    def start(self, value: str | None) -> FilterRequestBuilder:
        self._start = value
        return self

    def build(self) -> FilterRequest:
        return build_request(
            RequestKind.FILTER,
            {"query": self._query, "start": self._start},
            self.build_filters(),
        )


def _id_value(value: Any) -> IdValue:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise FigiValidationError(
            "id_value must be a string or a number", field="id_value",
        )
    return value


def _reject_unknown(payload: dict[str, Any], own_keys: set[str]) -> None:
    unknown = sorted(k for k in payload if k not in own_keys and k not in FIELD_NAMES)
    if unknown:
        raise FigiValidationError(
            f"Unknown request fields: {', '.join(unknown)}", field=unknown[0],
        )
