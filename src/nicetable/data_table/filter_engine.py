"""Per-column and global filtering for DataTable.

Applied filters are stored as plain strings whose encoding depends on the
column type:

- text:   the substring to look for (case-insensitive)
- date:   ``yyyy-MM-dd``, compared by calendar day
- number: ``"<min>:<max>"`` where an empty side means unbounded

Every predicate here is total: a value that cannot be read or parsed excludes
the row (fails closed) and never raises.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional, Sequence

import pandas as pd

from nicetable.data_table.column_classifier import FilterableColumn
from nicetable.data_table.config import ColumnConfig, ColumnType
from nicetable.utils.logging import get_logger

logger = get_logger(__name__)

DATE_VALUE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class AppliedFilter:
    """A committed per-column filter shown as a removable chip."""
    column_id: str
    value: str
    label: str
    type: ColumnType


@dataclass(frozen=True)
class PendingFilter:
    """In-progress filter input, not yet applied."""
    column_id: str = ""
    text: str = ""
    date: Optional[dt.date] = None
    min: Optional[float] = None
    max: Optional[float] = None


# ----------------------------------------------------------------------
# Value coercion
# ----------------------------------------------------------------------

def to_number(value: Any) -> Optional[float]:
    """Coerce a raw value to float; None for missing, NaN or non-numeric values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if not pd.api.types.is_scalar(value):
        return None
    try:
        num = pd.to_numeric(value, errors="coerce")
    except (TypeError, ValueError):
        return None
    if pd.isna(num):
        return None
    return float(num)


def to_date(value: Any) -> Optional[dt.date]:
    """Coerce a raw value (str, date, datetime, Timestamp) to a calendar day.

    The day is taken in the value's own offset; the time of day is dropped.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not pd.api.types.is_scalar(value):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.date()


def to_timestamp(value: Any) -> Optional[float]:
    """Coerce a raw value to a POSIX timestamp for date sorting."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if not pd.api.types.is_scalar(value):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return float(ts.timestamp())


# ----------------------------------------------------------------------
# Pending input
# ----------------------------------------------------------------------

def select_column(column_id: str) -> PendingFilter:
    """Start a new pending filter on column_id; previous input is discarded."""
    return PendingFilter(column_id=column_id)


def set_pending_text(pending: PendingFilter, text: Optional[str]) -> PendingFilter:
    return replace(pending, text=text or "")


def set_pending_date(pending: PendingFilter, value: Any) -> PendingFilter:
    return replace(pending, date=to_date(value))


def set_pending_range(pending: PendingFilter, min_value: Any, max_value: Any) -> PendingFilter:
    return replace(pending, min=to_number(min_value), max=to_number(max_value))


def is_pending_valid(pending: PendingFilter, column_type: ColumnType) -> bool:
    """True when the pending input can become an applied filter."""
    if not pending.column_id:
        return False
    if column_type is ColumnType.DATE:
        return pending.date is not None
    if column_type is ColumnType.NUMBER:
        return pending.min is not None or pending.max is not None
    return pending.text.strip() != ""


def _format_bound(value: Optional[float]) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def encode_pending(
    pending: PendingFilter,
    columns: Sequence[FilterableColumn],
) -> Optional[AppliedFilter]:
    """Build the AppliedFilter for a valid pending input, None otherwise.

    A column id missing from ``columns`` (unknown or not filterable) never
    produces a filter.
    """
    column = next((c for c in columns if c.id == pending.column_id), None)
    if column is None:
        return None
    column_type = column.type
    label = column.header

    if not is_pending_valid(pending, column_type):
        return None

    if column_type is ColumnType.DATE:
        value = pending.date.strftime(DATE_VALUE_FORMAT)  # type: ignore[union-attr]
    elif column_type is ColumnType.NUMBER:
        value = f"{_format_bound(pending.min)}:{_format_bound(pending.max)}"
    else:
        value = pending.text.strip()

    return AppliedFilter(column_id=pending.column_id, value=value, label=label, type=column_type)


# ----------------------------------------------------------------------
# Applied filter list
# ----------------------------------------------------------------------

def add_filter(filters: Sequence[AppliedFilter], new: AppliedFilter) -> list[AppliedFilter]:
    """Return filters with ``new`` applied.

    An identical (column_id, value) filter makes this a no-op. Otherwise the
    filter already on that column is replaced in place, or ``new`` is appended.
    """
    result = list(filters)
    if any(f.column_id == new.column_id and f.value == new.value for f in result):
        return result
    for i, f in enumerate(result):
        if f.column_id == new.column_id:
            result[i] = new
            return result
    result.append(new)
    return result


def remove_filter(filters: Sequence[AppliedFilter], target: AppliedFilter) -> list[AppliedFilter]:
    """Return filters without the one matching target's column_id and value."""
    return [f for f in filters if not (f.column_id == target.column_id and f.value == target.value)]


# ----------------------------------------------------------------------
# Predicates
# ----------------------------------------------------------------------

def parse_number_range(value: str) -> tuple[Optional[float], Optional[float]]:
    """Parse ``"<min>:<max>"``; an empty or unparseable side is None (unbounded)."""
    lo, _, hi = (value or "").partition(":")
    return to_number(lo), to_number(hi)


def matches_text(display: str, value: str) -> bool:
    return value.lower() in (display or "").lower()


def matches_date(raw: Any, value: str) -> bool:
    cell_day = to_date(raw)
    if cell_day is None:
        return False
    return cell_day == to_date(value)


def matches_number_range(raw: Any, value: str) -> bool:
    num = to_number(raw)
    if num is None:
        return False
    lo, hi = parse_number_range(value)
    if lo is not None and num < lo:
        return False
    if hi is not None and num > hi:
        return False
    return True


def matches_filter(row: Any, column: ColumnConfig, applied: AppliedFilter) -> bool:
    """Evaluate one applied filter against one row.

    Date and number filters read the raw value; text filters read the
    display value.
    """
    try:
        if applied.type is ColumnType.DATE:
            return matches_date(column.raw_value(row), applied.value)
        if applied.type is ColumnType.NUMBER:
            return matches_number_range(column.raw_value(row), applied.value)
        return matches_text(column.display_value(row), applied.value)
    except Exception:
        # runs per row on every refresh
        logger.debug("filter on column %r failed; row excluded", column.field, exc_info=True)
        return False


def matches_global(row: Any, columns: Iterable[ColumnConfig], text: str) -> bool:
    """True if any column's display value contains text (case-insensitive)."""
    if not text:
        return True
    needle = text.lower()
    for col in columns:
        try:
            if needle in col.display_value(row).lower():
                return True
        except Exception:
            logger.debug("display value of column %r failed", col.field, exc_info=True)
    return False


def row_passes(
    row: Any,
    columns_by_id: dict[str, ColumnConfig],
    filters: Sequence[AppliedFilter],
    global_filter: str,
) -> bool:
    """AND of all applied filters plus the global filter.

    A filter on a column that is not in ``columns_by_id`` excludes the row.
    """
    for f in filters:
        col = columns_by_id.get(f.column_id)
        if col is None:
            return False
        if not matches_filter(row, col, f):
            return False
    return matches_global(row, columns_by_id.values(), global_filter)


# ----------------------------------------------------------------------
# Chips
# ----------------------------------------------------------------------

def format_filter_value(applied: AppliedFilter) -> str:
    """Human readable filter value: 'Jan 15, 2023', '200 - 300', '≥ 200', '≤ 300'."""
    if applied.type is ColumnType.DATE:
        day = to_date(applied.value)
        if day is None:
            return applied.value
        return day.strftime("%b %d, %Y")
    if applied.type is ColumnType.NUMBER:
        lo, _, hi = applied.value.partition(":")
        if lo and hi:
            return f"{lo} - {hi}"
        if lo:
            return f"≥ {lo}"
        if hi:
            return f"≤ {hi}"
        return applied.value
    return applied.value


def format_filter_chip(applied: AppliedFilter) -> str:
    return f"{applied.label}: {format_filter_value(applied)}"
