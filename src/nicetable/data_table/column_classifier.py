"""Column classification: infer a column type from its id and pick filterable columns.

The classification is a substring heuristic on the column id. A column id that
happens to contain a trigger word (e.g. "update_note" contains "date") is
classified by that word; callers rename the column if that is wrong.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from nicetable.data_table.config import SELECT_COLUMN_ID, ColumnConfig, ColumnType

# Checked in order: date keywords win over number keywords.
DATE_KEYWORDS = ("date", "Date")
NUMBER_KEYWORDS = ("rate", "amount", "price", "salary")


@dataclass(frozen=True)
class FilterableColumn:
    """A column offered in the "choose column to filter" menu."""
    id: str
    header: str
    type: ColumnType


def classify(column_id: str) -> ColumnType:
    """Return the ColumnType for a column id (case-sensitive substring match)."""
    if any(k in column_id for k in DATE_KEYWORDS):
        return ColumnType.DATE
    if any(k in column_id for k in NUMBER_KEYWORDS):
        return ColumnType.NUMBER
    return ColumnType.TEXT


def is_card_column(column: ColumnConfig) -> bool:
    """True if the column has an id, no custom header and is not the selection column."""
    return bool(column.field) and column.header_slot is None and column.field != SELECT_COLUMN_ID


def filterable_columns(columns: Iterable[ColumnConfig]) -> list[FilterableColumn]:
    """Return the columns a user can add a per-column filter on, in display order."""
    return [
        FilterableColumn(id=col.field, header=col.label, type=col.column_type)
        for col in columns
        if is_card_column(col)
    ]
