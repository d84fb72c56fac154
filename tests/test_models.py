"""Tests for response data models."""

import pytest

from figiclient.errors import ApiItemError
from figiclient.models.figi_record import FigiRecord
from figiclient.models.filter_set import FilterSet
from figiclient.models.responses import (
    BatchItem,
    BatchResult,
    FilterData,
    MappingData,
    SearchData,
)


class TestFigiRecord:
    def test_from_dict(self, ibm_record):
        rec = FigiRecord.from_dict(ibm_record)
        assert rec.figi == "BBG000BLNNH6"
        assert rec.ticker == "IBM"
        assert rec.share_class_figi == "BBG001S5S399"
        assert rec.has_composite_figi
        assert rec.has_share_class_figi

    def test_to_dict_round_trip(self, ibm_record):
        assert FigiRecord.from_dict(ibm_record).to_dict() == ibm_record

    def test_minimal_record(self):
        rec = FigiRecord.from_dict({"figi": "BBG000BLNNH6", "extra": "ignored"})
        assert rec.to_dict() == {"figi": "BBG000BLNNH6"}
        assert not rec.has_composite_figi

    def test_missing_figi(self):
        with pytest.raises(ValueError, match="figi"):
            FigiRecord.from_dict({"ticker": "IBM"})

    def test_display_name_fallbacks(self):
        assert FigiRecord("F", name="Name", ticker="T").display_name == "Name"
        assert FigiRecord("F", ticker="T").display_name == "T"
        assert FigiRecord("F").display_name == "F"


class TestPayloads:
    def test_mapping_data(self, ibm_record):
        data = MappingData.from_dict({"data": [ibm_record]})
        assert data.figis == ["BBG000BLNNH6"]

    def test_search_data_cursor(self, ibm_record):
        page = SearchData.from_dict({"data": [ibm_record], "next": "QW9wYWdl"})
        assert page.next_page == "QW9wYWdl"
        assert SearchData.from_dict({"data": []}).next_page is None

    def test_filter_data_total(self):
        page = FilterData.from_dict({"data": [], "total": 42})
        assert page.total == 42
        assert page.next is None

    def test_filter_data_bad_total(self):
        with pytest.raises(ValueError):
            FilterData.from_dict({"data": [], "total": "many"})

    def test_data_must_be_array(self):
        with pytest.raises(ValueError):
            MappingData.from_dict({"data": {"figi": "X"}})


class TestBatchResult:
    def _batch(self) -> BatchResult:
        return BatchResult([
            BatchItem(0, value=MappingData()),
            BatchItem(1, error=ApiItemError("No identifier found.", index=1)),
            BatchItem(2, value=MappingData()),
        ])

    def test_sequence_protocol(self):
        batch = self._batch()
        assert len(batch) == 3
        assert [item.index for item in batch] == [0, 1, 2]
        assert batch[1].is_error
        assert len(batch[:2]) == 2

    def test_partitions(self):
        batch = self._batch()
        assert [i.index for i in batch.successes()] == [0, 2]
        assert [i.index for i in batch.errors()] == [1]
        assert batch.values()[1] is None
        assert not batch.all_succeeded

    def test_unwrap(self):
        batch = self._batch()
        assert batch[0].unwrap() == MappingData()
        with pytest.raises(ApiItemError, match="No identifier found."):
            batch[1].unwrap()

    def test_empty(self):
        assert len(BatchResult()) == 0
        assert BatchResult().all_succeeded


class TestFilterSet:
    def test_empty(self):
        assert FilterSet().is_empty()
        assert FilterSet().to_wire() == {}

    def test_from_wire_ignores_request_keys(self):
        fs = FilterSet.from_wire({"query": "IBM", "exchCode": "US", "strike": [1, None]})
        assert fs.to_wire() == {"exchCode": "US", "strike": [1.0, None]}
