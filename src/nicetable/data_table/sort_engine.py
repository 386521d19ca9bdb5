"""Single-column sorting for DataTable.

Header clicks cycle a column through ascending, descending and unsorted.
Choosing another column replaces the previous sort.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from nicetable.data_table.config import ColumnConfig, ColumnType, RowModel
from nicetable.data_table.filter_engine import to_number, to_timestamp

_DIGITS = re.compile(r"(\d+)")


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortState:
    column_id: str
    direction: SortDirection


def next_sort(current: Optional[SortState], column_id: str) -> Optional[SortState]:
    """Return the sort state after clicking the header of column_id.

    Same column: asc -> desc -> none. Other column: asc.
    """
    if current is None or current.column_id != column_id:
        return SortState(column_id, SortDirection.ASC)
    if current.direction is SortDirection.ASC:
        return SortState(column_id, SortDirection.DESC)
    return None


def sort_indicator(current: Optional[SortState], column_id: str) -> str:
    """'asc', 'desc' or 'none' for the header icon of column_id."""
    if current is None or current.column_id != column_id:
        return "none"
    return current.direction.value


def natural_key(value: Any) -> tuple:
    """Case-insensitive key that orders embedded numbers numerically ('a2' < 'a10')."""
    parts = _DIGITS.split(str(value).lower())
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in parts if p != "")


def _key_function(column: ColumnConfig) -> Callable[[Any], Any]:
    if column.sort_key is not None:
        return column.sort_key
    if column.column_type is ColumnType.DATE:
        return to_timestamp
    if column.column_type is ColumnType.NUMBER:
        return to_number
    return lambda v: None if v is None or v == "" else natural_key(v)


def sort_rows(
    rows: Sequence[RowModel],
    column: ColumnConfig,
    direction: SortDirection,
) -> list[RowModel]:
    """Return rows ordered by column (stable). Missing values go last in both directions."""
    key_fn = _key_function(column)
    keyed: list[tuple[Any, RowModel]] = []
    missing: list[RowModel] = []
    for row in rows:
        try:
            key = key_fn(column.raw_value(row.original))
        except Exception:
            key = None
        if key is None:
            missing.append(row)
        else:
            keyed.append((key, row))

    try:
        keyed.sort(key=lambda kr: kr[0], reverse=direction is SortDirection.DESC)
    except TypeError:
        # mixed key types from a custom sort_key, fall back to text order
        keyed.sort(key=lambda kr: natural_key(kr[0]), reverse=direction is SortDirection.DESC)
    return [row for _, row in keyed] + missing
