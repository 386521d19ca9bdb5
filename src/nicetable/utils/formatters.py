"""Display formatters for table cells.

Formatters turn raw row values into the text shown in a cell. The same text is
what the global search and the text column filters match against.
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd

DEFAULT_CURRENCY = "₱"


def _as_number(value: Any) -> Optional[float]:
    """Coerce value to float, None for missing or non-numeric values."""
    if value is None or isinstance(value, bool) or not pd.api.types.is_scalar(value):
        return None
    try:
        num = pd.to_numeric(value, errors="coerce")
    except (TypeError, ValueError):
        return None
    if pd.isna(num):
        return None
    return float(num)


def format_number(value: Any, decimals: int = 2) -> str:
    """Format a number with thousands separators, e.g. 1234.5 -> '1,234.50'.

    Missing or non-numeric values render as zero.
    """
    num = _as_number(value)
    if num is None:
        num = 0.0
    return f"{num:,.{decimals}f}"


def format_currency(value: Any, currency: str = DEFAULT_CURRENCY) -> str:
    """Format a number as currency, e.g. 250 -> '₱250.00'."""
    return f"{currency}{format_number(value, 2)}"


def format_percentage(value: Any, decimals: int = 1) -> str:
    """Format a fraction as a percentage, e.g. 0.125 -> '12.5%'."""
    num = _as_number(value)
    if num is None:
        num = 0.0
    return f"{num * 100:,.{decimals}f}%"


def format_date(value: Any) -> str:
    """Format a date-like value as a long date, e.g. 'January 15, 2023'.

    Returns 'N/A' for empty values and 'Invalid Date' when the value
    cannot be parsed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return "N/A"
    if not pd.api.types.is_scalar(value):
        return "Invalid Date"
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return "Invalid Date"
    if ts is None or pd.isna(ts):
        return "Invalid Date"
    return f"{ts:%B} {ts.day}, {ts.year}"
