from __future__ import annotations

from jsonkit.io.normalize import (
    drop_null_values_deep,
    replace_field,
    sort_fields,
    sort_fields_dropping_nulls,
)
from tests.helpers import sample_ledger


def test_sort_fields_dropping_nulls_orders_and_filters_top_level() -> None:
    result = sort_fields_dropping_nulls({"b": 1, "a": 2, "c": None})

    assert result == {"a": 2, "b": 1}
    assert list(result) == ["a", "b"]


def test_shallow_and_deep_null_dropping_differ_on_nested_nulls() -> None:
    nested = {"x": {"y": None, "z": 1}}

    assert drop_null_values_deep(nested) == {"x": {"z": 1}}
    assert sort_fields_dropping_nulls(nested) == {"x": {"y": None, "z": 1}}


def test_sort_fields_uses_code_point_order_and_stays_top_level() -> None:
    obj = {"b": 1, "a": {"d": 1, "c": 2}, "B": 3, "_": 4}

    result = sort_fields(obj)

    assert list(result) == ["B", "_", "a", "b"]
    assert list(result["a"]) == ["d", "c"]
    assert result["B"] == 3


def test_sort_fields_keeps_nulls() -> None:
    assert sort_fields({"b": None, "a": 1}) == {"a": 1, "b": None}


def test_normalization_is_idempotent() -> None:
    ledger = sample_ledger()

    once = sort_fields(ledger)
    assert list(sort_fields(once)) == list(once)

    deep = drop_null_values_deep(ledger)
    assert drop_null_values_deep(deep) == deep


def test_drop_null_values_deep_recurses_through_arrays() -> None:
    value = {"rows": [{"a": None, "b": 1}, None, [{"c": None}]], "d": None}

    assert drop_null_values_deep(value) == {"rows": [{"b": 1}, None, [{}]]}


def test_drop_null_values_deep_passes_scalars_through() -> None:
    assert drop_null_values_deep(5) == 5
    assert drop_null_values_deep(None) is None


def test_normalization_does_not_mutate_input() -> None:
    ledger = sample_ledger()
    before = sample_ledger()

    sort_fields(ledger)
    sort_fields_dropping_nulls(ledger)
    drop_null_values_deep(ledger)
    replace_field("closed", ledger, False)

    assert ledger == before
    assert list(ledger) == list(before)


def test_replace_field_moves_the_field_to_the_end() -> None:
    result = replace_field("a", {"a": 1, "b": 2}, 10)

    assert result == {"a": 10, "b": 2}
    assert list(result) == ["b", "a"]


def test_replace_field_adds_missing_fields() -> None:
    assert replace_field("c", {"a": 1}, None) == {"a": 1, "c": None}
