from __future__ import annotations

from typing import Any

import pandas as pd
import pytest

from nicetable.data_table.config import ColumnConfig, RowModel, TableConfig
from nicetable.data_table.selection import HeaderCheckState
from nicetable.data_table.table_model import DataTableModel, convert_input_to_rows
from nicetable.utils.formatters import format_currency

ROWS = [
    {"id": 1, "first_name": "John", "last_name": "Smith", "employment_date": "2023-01-15", "daily_rate": 250},
    {"id": 2, "first_name": "Jane", "last_name": "Doe", "employment_date": "2021-06-01", "daily_rate": 300},
    {"id": 3, "first_name": "Mark", "last_name": "SMITHERS", "employment_date": "2020-02-20", "daily_rate": 325},
]


def _columns() -> list[ColumnConfig]:
    return [
        ColumnConfig("first_name", "First Name"),
        ColumnConfig("last_name", "Last Name", formatter=lambda v: str(v).title()),
        ColumnConfig("employment_date", "Employment Date"),
        ColumnConfig("daily_rate", "Daily Rate", formatter=format_currency),
    ]


def _model(selectable: bool = True, **kwargs: Any) -> DataTableModel:
    return DataTableModel(_columns(), ROWS, TableConfig(enable_row_selection=selectable), **kwargs)


def _ids(rows: list[RowModel]) -> list[int]:
    return [r.original["id"] for r in rows]


def _apply_text(model: DataTableModel, column_id: str, text: str) -> None:
    model.select_filter_column(column_id)
    model.set_pending_text(text)
    assert model.apply_filter() is not None


# ----------------------------------------------------------------------
# Construction and input
# ----------------------------------------------------------------------

def test_duplicate_column_ids_raise() -> None:
    with pytest.raises(ValueError):
        DataTableModel([ColumnConfig("a"), ColumnConfig("a")], [])


def test_convert_input_to_rows() -> None:
    df = pd.DataFrame(ROWS)
    assert convert_input_to_rows(df)[0]["first_name"] == "John"
    assert convert_input_to_rows(tuple(ROWS)) == ROWS
    with pytest.raises(TypeError):
        convert_input_to_rows("not rows")


def test_model_accepts_pandas_dataframe() -> None:
    model = DataTableModel(_columns(), pd.DataFrame(ROWS))
    assert len(model.rows) == 3
    assert model.row_count_text() == "3 of 3 row(s)"


# ----------------------------------------------------------------------
# Filtering
# ----------------------------------------------------------------------

def test_global_filter_matches_formatted_values() -> None:
    model = _model()
    model.set_global_filter("smith")
    # "SMITHERS" is displayed as "Smithers"
    assert _ids(model.row_model()) == [1, 3]

    model.set_global_filter("₱300")
    assert _ids(model.row_model()) == [2]


def test_apply_filter_resets_pending_and_lists_chip() -> None:
    model = _model()
    model.select_filter_column("daily_rate")
    assert model.can_apply_filter() is False
    model.set_pending_range(200, 300)
    assert model.can_apply_filter() is True

    applied = model.apply_filter()

    assert applied is not None and applied.value == "200:300"
    assert model.state.pending.column_id == ""
    assert [text for _, text in model.filter_chips()] == ["Daily Rate: 200 - 300"]
    assert _ids(model.row_model()) == [1, 2]
    assert model.row_count_text() == "2 of 3 row(s)"


def test_apply_invalid_filter_returns_none() -> None:
    model = _model()
    model.select_filter_column("first_name")
    model.set_pending_text("   ")
    assert model.apply_filter() is None
    assert model.state.applied_filters == []


def test_filters_only_on_filterable_columns() -> None:
    actions = ColumnConfig("actions", header_slot='<q-th :props="props">Actions</q-th>', accessor=lambda r: "edit")
    model = DataTableModel(_columns() + [actions], ROWS)
    changes: list[int] = []
    model.on_pending_change(lambda: changes.append(1))

    for column_id in ("actions", "ghost"):
        assert model.select_filter_column(column_id) is False
        model.set_pending_text("edit")
        assert model.can_apply_filter() is False
        assert model.apply_filter() is None

    assert model.state.applied_filters == []
    assert model.filter_chips() == []
    assert _ids(model.row_model()) == [1, 2, 3]
    # only the two set_pending_text calls notified
    assert len(changes) == 2


def test_clear_filters_restores_all_rows() -> None:
    model = _model()
    _apply_text(model, "first_name", "j")
    _apply_text(model, "last_name", "smith")
    assert _ids(model.row_model()) == [1]

    model.clear_filters()

    assert model.state.applied_filters == []
    assert _ids(model.row_model()) == [1, 2, 3]


def test_remove_filter_via_chip() -> None:
    model = _model()
    _apply_text(model, "first_name", "jo")
    (applied, _text), = model.filter_chips()

    model.remove_filter(applied)

    assert model.filter_chips() == []
    assert len(model.row_model()) == 3


# ----------------------------------------------------------------------
# Sorting
# ----------------------------------------------------------------------

def test_toggle_sort_three_times_returns_to_data_order() -> None:
    model = _model()
    model.toggle_sort("daily_rate")
    assert _ids(model.row_model()) == [1, 2, 3]
    assert model.sort_indicator("daily_rate") == "asc"
    model.toggle_sort("daily_rate")
    assert _ids(model.row_model()) == [3, 2, 1]
    model.toggle_sort("daily_rate")
    assert model.state.sort is None
    assert _ids(model.row_model()) == [1, 2, 3]


def test_toggle_sort_ignores_unsortable_and_unknown_columns() -> None:
    cols = [ColumnConfig("first_name", sortable=False), ColumnConfig("daily_rate")]
    model = DataTableModel(cols, ROWS)
    model.toggle_sort("first_name")
    model.toggle_sort("nope")
    assert model.state.sort is None


def test_sort_applies_after_filter() -> None:
    model = _model()
    model.toggle_sort("employment_date")
    _apply_text(model, "first_name", "j")
    assert _ids(model.row_model()) == [2, 1]


# ----------------------------------------------------------------------
# Selection
# ----------------------------------------------------------------------

def test_selection_persists_while_filtered() -> None:
    payloads: list[list[int]] = []
    model = _model(on_row_selection_change=lambda rows: payloads.append([r["id"] for r in rows]))

    model.toggle_row_selected(2)  # Mark
    _apply_text(model, "first_name", "jo")
    assert _ids(model.row_model()) == [1]
    assert model.visible_selected_count() == 0
    assert [r["id"] for r in model.selected_rows()] == [3]

    model.clear_filters()

    assert model.is_selected(2) is True
    assert payloads == [[3]]


def test_selection_callback_only_on_real_change() -> None:
    payloads: list[list[Any]] = []
    model = _model(on_row_selection_change=payloads.append)

    model.set_row_selected(0, True)
    model.set_row_selected(0, True)
    model.set_global_filter("x")
    model.clear_selection()
    model.clear_selection()

    assert len(payloads) == 2
    assert payloads[-1] == []


def test_toggle_all_visible_only_touches_visible_rows() -> None:
    model = _model()
    model.toggle_row_selected(1)  # Jane, hidden below
    _apply_text(model, "last_name", "smith")

    model.toggle_all_visible()
    assert model.header_check_state() is HeaderCheckState.ALL
    assert [r["id"] for r in model.selected_rows()] == [1, 2, 3]

    model.toggle_all_visible()
    assert model.header_check_state() is HeaderCheckState.NONE
    # hidden selection survives deselecting the visible rows
    assert [r["id"] for r in model.selected_rows()] == [2]


def test_selection_disabled_ignores_toggles() -> None:
    payloads: list[list[Any]] = []
    model = _model(selectable=False, on_row_selection_change=payloads.append)
    model.toggle_row_selected(0)
    model.toggle_all_visible()
    assert model.selected_rows() == []
    assert payloads == []


def test_set_data_resets_selection_keeps_filters() -> None:
    payloads: list[list[Any]] = []
    model = _model(on_row_selection_change=payloads.append)
    model.toggle_row_selected(0)
    _apply_text(model, "first_name", "j")

    model.set_data(ROWS[:2])

    assert model.selected_rows() == []
    assert payloads[-1] == []
    assert len(model.state.applied_filters) == 1
    assert model.row_count_text() == "2 of 2 row(s)"


# ----------------------------------------------------------------------
# Row click and change handlers
# ----------------------------------------------------------------------

def test_click_row_forwards_and_does_not_select() -> None:
    clicked: list[RowModel] = []
    model = _model(on_row_click=clicked.append)
    row = model.row_model()[1]

    model.click_row(row)

    assert clicked == [row]
    assert model.selected_rows() == []
    assert model.has_row_click is True


def test_handler_errors_are_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    def _boom(*_args: Any) -> None:
        raise RuntimeError("boom")

    model = _model(on_row_click=_boom, on_row_selection_change=_boom)
    model.on_change(_boom)

    model.click_row(model.row_model()[0])
    model.toggle_row_selected(0)

    assert model.is_selected(0) is True
    assert "Error in row_click handler" in caplog.text


def test_on_change_called_for_each_transition() -> None:
    calls: list[int] = []
    model = _model()
    model.on_change(lambda: calls.append(1))

    model.set_global_filter("j")
    model.set_global_filter("j")  # unchanged
    model.toggle_sort("first_name")
    model.toggle_row_selected(0)

    assert len(calls) == 3


def test_pending_input_notifies_pending_handlers_only() -> None:
    changes: list[int] = []
    pending: list[int] = []
    model = _model()
    model.on_change(lambda: changes.append(1))
    model.on_pending_change(lambda: pending.append(1))

    model.select_filter_column("daily_rate")
    model.set_pending_range(200, None)
    model.set_pending_range(200, 300)
    assert changes == []
    assert len(pending) == 3

    model.apply_filter()
    assert len(changes) == 1


def test_filtered_rows_computed_once_per_state_change() -> None:
    calls: list[Any] = []

    def _counting(value: Any) -> str:
        calls.append(value)
        return str(value)

    columns = [ColumnConfig("first_name", "First Name", formatter=_counting), ColumnConfig("daily_rate", "Daily Rate")]
    model = DataTableModel(columns, ROWS, TableConfig(enable_row_selection=True))
    model.set_global_filter("j")

    assert len(model.row_model()) == 2
    calls.clear()
    model.row_count_text()
    model.visible_selected_count()
    model.header_check_state()
    model.row_model()
    assert calls == []

    model.set_global_filter("ja")
    assert len(model.row_model()) == 1
    assert calls
