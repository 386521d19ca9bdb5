from __future__ import annotations

from nicetable.data_table.config import ColumnConfig, RowModel
from nicetable.data_table.sort_engine import (
    SortDirection,
    SortState,
    natural_key,
    next_sort,
    sort_indicator,
    sort_rows,
)


def _rows(values, field: str):
    return [RowModel(i, {field: v}) for i, v in enumerate(values)]


def _values(rows, field: str):
    return [r.original[field] for r in rows]


def test_next_sort_cycles_asc_desc_none() -> None:
    s1 = next_sort(None, "daily_rate")
    s2 = next_sort(s1, "daily_rate")
    s3 = next_sort(s2, "daily_rate")

    assert s1 == SortState("daily_rate", SortDirection.ASC)
    assert s2 == SortState("daily_rate", SortDirection.DESC)
    assert s3 is None


def test_next_sort_other_column_starts_ascending() -> None:
    current = SortState("daily_rate", SortDirection.DESC)
    assert next_sort(current, "first_name") == SortState("first_name", SortDirection.ASC)


def test_sort_indicator() -> None:
    current = SortState("daily_rate", SortDirection.DESC)
    assert sort_indicator(current, "daily_rate") == "desc"
    assert sort_indicator(current, "first_name") == "none"
    assert sort_indicator(None, "daily_rate") == "none"


def test_numeric_sort_and_three_toggles_restore_order() -> None:
    col = ColumnConfig("daily_rate")
    rows = _rows([300, 25, 1200, 25.5], "daily_rate")

    state = next_sort(None, "daily_rate")
    assert _values(sort_rows(rows, col, state.direction), "daily_rate") == [25, 25.5, 300, 1200]

    state = next_sort(state, "daily_rate")
    assert _values(sort_rows(rows, col, state.direction), "daily_rate") == [1200, 300, 25.5, 25]

    state = next_sort(state, "daily_rate")
    assert state is None
    # unsorted: rows keep data order
    assert _values(rows, "daily_rate") == [300, 25, 1200, 25.5]


def test_date_sort_is_chronological() -> None:
    col = ColumnConfig("employment_date")
    rows = _rows(["2023-01-15", "2019-07-01", "2021-03-15T10:00:00Z"], "employment_date")
    ordered = sort_rows(rows, col, SortDirection.ASC)
    assert _values(ordered, "employment_date") == ["2019-07-01", "2021-03-15T10:00:00Z", "2023-01-15"]


def test_text_sort_is_natural_and_case_insensitive() -> None:
    col = ColumnConfig("code")
    rows = _rows(["item10", "Item2", "item1"], "code")
    assert _values(sort_rows(rows, col, SortDirection.ASC), "code") == ["item1", "Item2", "item10"]
    assert natural_key("a2") < natural_key("a10")


def test_missing_values_sort_last_both_directions() -> None:
    col = ColumnConfig("daily_rate")
    rows = _rows([None, 5, "n/a", 1], "daily_rate")

    assert _values(sort_rows(rows, col, SortDirection.ASC), "daily_rate") == [1, 5, None, "n/a"]
    assert _values(sort_rows(rows, col, SortDirection.DESC), "daily_rate") == [5, 1, None, "n/a"]


def test_sort_is_stable_for_equal_keys() -> None:
    col = ColumnConfig("daily_rate")
    rows = [RowModel(i, {"daily_rate": 10, "n": i}) for i in range(4)]
    assert [r.original["n"] for r in sort_rows(rows, col, SortDirection.ASC)] == [0, 1, 2, 3]


def test_custom_sort_key_overrides_type() -> None:
    col = ColumnConfig("first_name", sort_key=len)
    rows = _rows(["Maria", "Jo", "Ana"], "first_name")
    assert _values(sort_rows(rows, col, SortDirection.ASC), "first_name") == ["Jo", "Ana", "Maria"]
