"""
Unit tests for projection, sorting and the row cap.
"""

from report_builder.catalog.schemas import ValueKind
from report_builder.query.projection import limit_rows, project, sort_rows
from report_builder.query.schemas import SortDefinition, SortDirection


def test_project_selects_columns_in_order():
    rows = [{"a": 1, "b": 2, "c": 3}, {"a": 4, "c": 6}]
    assert project(rows, ["c", "a"]) == [{"c": 3, "a": 1}, {"c": 6, "a": 4}]


def test_project_keeps_absent_values_absent():
    assert project([{"a": 1}], ["a", "b"]) == [{"a": 1, "b": None}]


def test_no_sort_attribute_keeps_order():
    rows = [{"n": 3}, {"n": 1}]
    assert sort_rows(rows, SortDefinition(), ValueKind.NUMERIC) == rows


def test_numeric_sort_compares_numbers_not_text():
    rows = [{"n": 10}, {"n": 9}, {"n": "100"}]
    result = sort_rows(rows, SortDefinition(attribute="n"), ValueKind.NUMERIC)
    assert [r["n"] for r in result] == [9, 10, "100"]


def test_desc_numeric_sort_is_non_increasing():
    rows = [{"n": v} for v in (3, -1, 7, 7, 0, 2.5)]
    result = sort_rows(rows, SortDefinition(attribute="n", direction=SortDirection.DESC), ValueKind.NUMERIC)
    values = [r["n"] for r in result]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_text_sort_is_lexicographic():
    rows = [{"s": "b"}, {"s": "B"}, {"s": "a"}]
    result = sort_rows(rows, SortDefinition(attribute="s"), ValueKind.TEXT)
    assert [r["s"] for r in result] == ["B", "a", "b"]


def test_missing_values_always_go_last():
    rows = [{"n": None}, {"n": 2}, {}, {"n": "x"}, {"n": 1}]
    asc = sort_rows(rows, SortDefinition(attribute="n"), ValueKind.NUMERIC)
    desc = sort_rows(rows, SortDefinition(attribute="n", direction=SortDirection.DESC), ValueKind.NUMERIC)
    assert [r.get("n") for r in asc] == [1, 2, None, None, "x"]
    assert [r.get("n") for r in desc] == [2, 1, None, None, "x"]


def test_sort_is_stable_for_equal_keys():
    rows = [{"k": 1, "id": "first"}, {"k": 0, "id": "x"}, {"k": 1, "id": "second"}]
    asc = sort_rows(rows, SortDefinition(attribute="k"), ValueKind.NUMERIC)
    desc = sort_rows(rows, SortDefinition(attribute="k", direction=SortDirection.DESC), ValueKind.NUMERIC)
    assert [r["id"] for r in asc] == ["x", "first", "second"]
    assert [r["id"] for r in desc] == ["first", "second", "x"]


def test_limit_keeps_first_rows():
    rows = [{"n": i} for i in range(10)]
    assert limit_rows(rows, 3) == [{"n": 0}, {"n": 1}, {"n": 2}]
    assert limit_rows(rows, 50) == rows
