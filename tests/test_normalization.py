"""Tests for value flattening."""

import pytest

from jkl.normalization import Composite, Scalar, Sequence, filter_by_type, normalize_value


def test_composite_is_sorted_by_field_name():
    raw = Composite({"used": "75", "max": "200", "init": "50", "committed": "100"})

    records = normalize_value("app:type=Memory", "HeapMemoryUsage", raw)

    assert [r.sub_key for r in records] == ["committed", "init", "max", "used"]
    assert [r.value for r in records] == ["100", "50", "200", "75"]
    assert all(r.bean_name == "app:type=Memory" for r in records)
    assert all(r.attribute_name == "HeapMemoryUsage" for r in records)


def test_composite_sort_ignores_source_order():
    first = normalize_value("b", "a", Composite({"b": "2", "a": "1", "C": "3"}))
    second = normalize_value("b", "a", Composite({"C": "3", "a": "1", "b": "2"}))

    assert first == second
    assert [r.sub_key for r in first] == ["C", "a", "b"]


def test_sequence_keeps_position_and_uses_index_as_key():
    records = normalize_value("b", "a", Sequence(["z", "y", "x"]))

    assert [r.sub_key for r in records] == ["0", "1", "2"]
    assert [r.value for r in records] == ["z", "y", "x"]


def test_scalar_yields_one_record_without_sub_key():
    records = normalize_value("b", "a", Scalar("42"))

    assert len(records) == 1
    assert records[0].sub_key is None
    assert records[0].value == "42"


def test_null_scalar_keeps_literal_rendering():
    records = normalize_value("b", "a", Scalar("null"))

    assert records[0].value == "null"


def test_empty_compound_values_yield_no_records():
    assert normalize_value("b", "a", Composite({})) == []
    assert normalize_value("b", "a", Sequence([])) == []


def test_unsupported_raw_value_raises():
    with pytest.raises(TypeError):
        normalize_value("b", "a", "plain string")


def test_filter_by_type_matches_sub_key_exactly():
    records = normalize_value("b", "a", Composite({"max": "1", "maxx": "2"}))

    assert [r.value for r in filter_by_type(records, "max")] == ["1"]
    assert filter_by_type(records, "bogus") == []
