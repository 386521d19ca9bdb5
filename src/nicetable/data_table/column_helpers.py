"""Factories for common formatted columns.

Each helper returns a ColumnConfig with a display formatter and a sort key on
the raw value, so a column sorts by number/date even when its id does not
classify it as one.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from nicetable.data_table.config import ColumnConfig
from nicetable.data_table.filter_engine import to_number, to_timestamp
from nicetable.utils.formatters import (
    DEFAULT_CURRENCY,
    format_currency,
    format_date,
    format_number,
    format_percentage,
)


def text_column(
    field: str,
    header: Optional[str] = None,
    transform: Optional[Callable[[Any], str]] = None,
    *,
    sortable: bool = True,
) -> ColumnConfig:
    """Plain text column; ``transform`` optionally maps the raw value to display text."""
    return ColumnConfig(field=field, header=header, formatter=transform, sortable=sortable)


def date_column(field: str, header: Optional[str] = None, *, sortable: bool = True) -> ColumnConfig:
    """Long-date column ('January 15, 2023'), sorted chronologically."""
    return ColumnConfig(
        field=field,
        header=header,
        formatter=format_date,
        sortable=sortable,
        sort_key=to_timestamp,
    )


def currency_column(
    field: str,
    header: Optional[str] = None,
    currency: str = DEFAULT_CURRENCY,
    *,
    sortable: bool = True,
) -> ColumnConfig:
    return ColumnConfig(
        field=field,
        header=header,
        formatter=lambda v: format_currency(v, currency),
        sortable=sortable,
        sort_key=to_number,
    )


def number_column(
    field: str,
    header: Optional[str] = None,
    decimals: int = 2,
    *,
    sortable: bool = True,
) -> ColumnConfig:
    return ColumnConfig(
        field=field,
        header=header,
        formatter=lambda v: format_number(v, decimals),
        sortable=sortable,
        sort_key=to_number,
    )


def percentage_column(
    field: str,
    header: Optional[str] = None,
    decimals: int = 1,
    *,
    sortable: bool = True,
) -> ColumnConfig:
    """Fraction shown as a percentage (0.125 -> '12.5%')."""
    return ColumnConfig(
        field=field,
        header=header,
        formatter=lambda v: format_percentage(v, decimals),
        sortable=sortable,
        sort_key=to_number,
    )
