"""OpenFIGI request and response models."""

from figiclient.models.enums import (
    Currency,
    ExchCode,
    IdType,
    MarketSecDesc,
    MicCode,
    OpenCodeEnum,
    OptionType,
    SecurityType,
    SecurityType2,
    StateCode,
)
from figiclient.models.figi_record import FigiRecord
from figiclient.models.filter_set import FilterBuilder, FilterSet
from figiclient.models.requests import (
    FilterRequest,
    FilterRequestBuilder,
    MappingRequest,
    MappingRequestBuilder,
    SearchRequest,
    SearchRequestBuilder,
)
from figiclient.models.responses import (
    BatchItem,
    BatchResult,
    FilterData,
    MappingData,
    SearchData,
)

__all__ = [
    "Currency",
    "ExchCode",
    "IdType",
    "MarketSecDesc",
    "MicCode",
    "OpenCodeEnum",
    "OptionType",
    "SecurityType",
    "SecurityType2",
    "StateCode",
    "FigiRecord",
    "FilterBuilder",
    "FilterSet",
    "FilterRequest",
    "FilterRequestBuilder",
    "MappingRequest",
    "MappingRequestBuilder",
    "SearchRequest",
    "SearchRequestBuilder",
    "BatchItem",
    "BatchResult",
    "FilterData",
    "MappingData",
    "SearchData",
]
