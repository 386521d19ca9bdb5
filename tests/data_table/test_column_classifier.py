from __future__ import annotations

import pytest

from nicetable.data_table.column_classifier import classify, filterable_columns, is_card_column
from nicetable.data_table.config import ColumnConfig, ColumnType

ACTIONS_HEADER = '<q-th :props="props"><q-icon name="more_vert" /></q-th>'


@pytest.mark.parametrize(
    "column_id, expected",
    [
        ("employment_date", ColumnType.DATE),
        ("startDate", ColumnType.DATE),
        ("daily_rate", ColumnType.NUMBER),
        ("amount_due", ColumnType.NUMBER),
        ("unit_price", ColumnType.NUMBER),
        ("salary", ColumnType.NUMBER),
        ("first_name", ColumnType.TEXT),
        ("DATE", ColumnType.TEXT),
        # date wins over number keywords
        ("rate_update_date", ColumnType.DATE),
        # substring heuristic: "update_note" contains "date"
        ("update_note", ColumnType.DATE),
    ],
)
def test_classify(column_id: str, expected: ColumnType) -> None:
    assert classify(column_id) is expected


def test_column_config_derives_type_from_field() -> None:
    assert ColumnConfig("employment_date").column_type is ColumnType.DATE
    assert ColumnConfig("daily_rate").column_type is ColumnType.NUMBER
    assert ColumnConfig("last_name").column_type is ColumnType.TEXT


def test_filterable_columns_skip_select_and_custom_headers() -> None:
    cols = [
        ColumnConfig("select"),
        ColumnConfig("first_name", "First Name"),
        ColumnConfig("actions", header_slot=ACTIONS_HEADER),
        ColumnConfig("daily_rate", "Daily Rate"),
        ColumnConfig("notes"),
    ]

    result = filterable_columns(cols)

    assert [c.id for c in result] == ["first_name", "daily_rate", "notes"]
    assert [c.header for c in result] == ["First Name", "Daily Rate", "notes"]
    assert result[1].type is ColumnType.NUMBER


def test_is_card_column() -> None:
    assert is_card_column(ColumnConfig("first_name", "First Name")) is True
    assert is_card_column(ColumnConfig("select")) is False
    assert is_card_column(ColumnConfig("", "Blank")) is False
    assert is_card_column(ColumnConfig("actions", header_slot=ACTIONS_HEADER)) is False
