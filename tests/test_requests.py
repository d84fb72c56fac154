"""Tests for request builders and wire serialization."""

import json
from datetime import date, datetime

import pytest

from figiclient.errors import FigiErrorCode, FigiValidationError
from figiclient.models.enums import (
    Currency,
    ExchCode,
    IdType,
    MicCode,
    OptionType,
    SecurityType2,
    coerce_enum,
)
from figiclient.models.filter_set import FilterSet
from figiclient.models.requests import (
    FilterRequest,
    MappingRequest,
    SearchRequest,
)


class TestMappingRequestBuilder:
    def test_minimal(self):
        req = MappingRequest.builder().id_type(IdType.ID_ISIN).id_value("US4592001014").build()
        assert req.id_type == IdType.ID_ISIN
        assert req.to_dict() == {"idType": "ID_ISIN", "idValue": "US4592001014"}

    def test_accepts_raw_strings(self):
        req = (
            MappingRequest.builder()
            .id_type("TICKER")
            .id_value("IBM")
            .exch_code("US")
            .currency("USD")
            .build()
        )
        assert req.filters.exch_code == ExchCode.US
        assert req.filters.currency == Currency.USD

    def test_unknown_enum_value(self):
        with pytest.raises(FigiValidationError, match="not a valid ExchCode"):
            MappingRequest.builder().exch_code("no such exchange")

    def test_numeric_id_value(self):
        req = MappingRequest.builder().id_type(IdType.ID_BB_SEC_NUM_DES).id_value(12345).build()
        assert req.to_dict()["idValue"] == 12345

    def test_missing_id_type(self):
        with pytest.raises(FigiValidationError) as exc_info:
            MappingRequest.builder().id_value("US4592001014").build()
        assert exc_info.value.code == FigiErrorCode.MISSING_FIELD
        assert exc_info.value.field == "id_type"

    def test_missing_field_reported_before_filter_rules(self):
        builder = MappingRequest.builder().exch_code("US").mic_code("XNYS")
        with pytest.raises(FigiValidationError) as exc_info:
            builder.build()
        assert exc_info.value.code == FigiErrorCode.MISSING_FIELD

    def test_build_runs_filter_rules(self):
        builder = (
            MappingRequest.builder()
            .id_type(IdType.TICKER)
            .id_value("IBM")
            .exch_code(ExchCode.US)
            .mic_code(MicCode.XNYS)
        )
        with pytest.raises(FigiValidationError, match="Cannot set both"):
            builder.build()

    def test_base_ticker_requires_security_type2(self):
        with pytest.raises(FigiValidationError, match="securityType2 is required"):
            MappingRequest.builder().id_type(IdType.BASE_TICKER).id_value("IBM").build()


class TestSerialization:
    def test_unset_fields_omitted(self):
        req = SearchRequest.builder().query("IBM").build()
        assert req.to_dict() == {"query": "IBM"}
        assert "null" not in req.to_json()

    def test_filters_flattened_camel_case(self):
        req = (
            MappingRequest.builder()
            .id_type(IdType.TICKER)
            .id_value("AAPL")
            .exch_code(ExchCode.US)
            .security_type2(SecurityType2.OPTION)
            .option_type(OptionType.CALL)
            .strike(100, None)
            .expiration(date(2024, 1, 1), "2024-06-30")
            .include_unlisted_equities()
            .build()
        )
        assert req.to_dict() == {
            "idType": "TICKER",
            "idValue": "AAPL",
            "exchCode": "US",
            "securityType2": "Option",
            "optionType": "Call",
            "strike": [100.0, None],
            "expiration": ["2024-01-01", "2024-06-30"],
            "includeUnlistedEquities": True,
        }
        assert "filters" not in req.to_dict()

    def test_to_json_is_valid_json(self):
        req = FilterRequest.builder().security_type2("Common Stock").currency("USD").build()
        assert json.loads(req.to_json()) == {"securityType2": "Common Stock", "currency": "USD"}


class TestRoundTrip:
    @pytest.mark.parametrize("req", [
        MappingRequest(IdType.ID_ISIN, "US4592001014"),
        MappingRequest(
            IdType.ID_CUSIP, "459200101",
            FilterSet(exch_code=ExchCode.US, coupon=(1.5, 4.0)),
        ),
        SearchRequest("IBM", start="QW9wYWdl", filters=FilterSet(currency=Currency.USD)),
        FilterRequest(filters=FilterSet(
            security_type2=SecurityType2.POOL,
            maturity=(date(2024, 1, 1), date(2024, 12, 31)),
        )),
    ])
    def test_from_dict_reproduces_value(self, req):
        data = req.to_dict()
        assert all(v is not None for v in data.values())
        assert type(req).from_dict(data) == req
        assert type(req).from_dict(json.loads(req.to_json())) == req

    def test_unknown_key_rejected(self):
        with pytest.raises(FigiValidationError, match="Unknown request fields: bogus"):
            SearchRequest.from_dict({"query": "IBM", "bogus": 1})

    def test_from_dict_missing_required(self):
        with pytest.raises(FigiValidationError) as exc_info:
            MappingRequest.from_dict({"idType": "ID_ISIN"})
        assert exc_info.value.code == FigiErrorCode.MISSING_FIELD


class TestFilterRequestBuilder:
    def test_empty_filter_request_fails(self):
        with pytest.raises(FigiValidationError, match="At least one field must be set"):
            FilterRequest.builder().build()

    def test_single_filter_is_enough(self):
        req = FilterRequest.builder().exch_code("US").build()
        assert req.query is None
        assert not req.filters.is_empty()

    def test_with_start(self):
        req = FilterRequest.builder().query("IBM").build().with_start("abc")
        assert req.to_dict() == {"query": "IBM", "start": "abc"}

    def test_filters_replaces_state(self):
        fs = FilterSet(currency=Currency.USD)
        req = SearchRequest.builder().query("IBM").exch_code("US").filters(fs).build()
        assert req.filters == fs


class TestServerMaintainedCodes:
    def test_non_us_mic_builds(self):
        req = SearchRequest.builder().query("Toyota").mic_code("XTKS").build()
        assert req.filters.mic_code is MicCode.XTKS
        assert req.to_dict() == {"query": "Toyota", "micCode": "XTKS"}

    def test_non_us_exchange_and_currency(self):
        req = SearchRequest.builder().query("Toyota").exch_code("JT").currency("JPY").build()
        assert req.filters.exch_code is ExchCode.JT
        assert req.filters.currency is Currency.JPY
        assert Currency("ZAc").is_listed

    def test_unlisted_well_formed_code_admitted(self):
        mic = MicCode("XQQQ")
        assert not mic.is_listed
        assert mic is MicCode("XQQQ")
        req = FilterRequest.builder().mic_code("XQQQ").build()
        assert req.to_dict() == {"micCode": "XQQQ"}
        assert FilterRequest.from_dict(req.to_dict()) == req

    def test_unlisted_security_type_admitted(self):
        req = FilterRequest.builder().security_type("Dutch Cert").build()
        assert req.to_dict() == {"securityType": "Dutch Cert"}

    @pytest.mark.parametrize("enum_cls,value", [
        (ExchCode, "jt"),
        (MicCode, "XTK"),
        (MicCode, "XTKSX"),
        (Currency, "US1"),
        (SecurityType2, " Option"),
        (SecurityType2, ""),
    ])
    def test_malformed_codes_rejected(self, enum_cls, value):
        with pytest.raises(FigiValidationError, match=f"not a valid {enum_cls.__name__}"):
            coerce_enum(enum_cls, value, "field")

    def test_closed_sets_stay_closed(self):
        with pytest.raises(FigiValidationError, match="not a valid IdType"):
            coerce_enum(IdType, "ID_NOPE", "id_type")
        with pytest.raises(FigiValidationError, match="not a valid OptionType"):
            coerce_enum(OptionType, "Straddle", "option_type")


class TestDirectConstruction:
    def test_search_request_with_raw_filter_values(self):
        req = SearchRequest("IBM", filters=FilterSet(exch_code="US"))
        assert req.filters.exch_code is ExchCode.US
        assert req.to_dict() == {"query": "IBM", "exchCode": "US"}

    def test_mapping_request_with_raw_id_type(self):
        req = MappingRequest(id_type="ID_ISIN", id_value="US4592001014")
        assert req.id_type is IdType.ID_ISIN
        assert req.to_dict() == {"idType": "ID_ISIN", "idValue": "US4592001014"}

    def test_datetime_bounds_become_dates(self):
        fs = FilterSet(
            security_type2="Option",
            expiration=(datetime(2024, 1, 1, 9, 30), date(2024, 6, 1)),
        )
        assert fs.expiration == (date(2024, 1, 1), date(2024, 6, 1))
        fs.validate()

    def test_string_dates_and_int_bounds(self):
        fs = FilterSet(maturity=["2024-01-01", None], strike=(1, 2))
        assert fs.maturity == (date(2024, 1, 1), None)
        assert fs.strike == (1.0, 2.0)
        assert fs.to_wire() == {"strike": [1.0, 2.0], "maturity": ["2024-01-01", None]}

    def test_invalid_raw_values_rejected(self):
        with pytest.raises(FigiValidationError, match="not a valid MarketSecDesc"):
            FilterSet(market_sec_des="Stocks")
        with pytest.raises(FigiValidationError, match="bounds must be dates"):
            FilterSet(expiration=("soon", None))
        with pytest.raises(FigiValidationError, match="not a valid IdType"):
            MappingRequest(id_type="ID_NOPE", id_value="x")
        with pytest.raises(FigiValidationError, match="string or a number"):
            MappingRequest(IdType.ID_ISIN, ["US4592001014"])

    def test_missing_id_type(self):
        with pytest.raises(FigiValidationError) as exc_info:
            MappingRequest(id_type=None, id_value="US4592001014")
        assert exc_info.value.code == FigiErrorCode.MISSING_FIELD
        assert exc_info.value.field == "id_type"
