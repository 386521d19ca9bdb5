from __future__ import annotations

import datetime as dt

import pytest

from nicetable.utils.formatters import format_currency, format_date, format_number, format_percentage


@pytest.mark.parametrize(
    "value, decimals, expected",
    [
        (1234.5, 2, "1,234.50"),
        (0, 2, "0.00"),
        ("1500", 0, "1,500"),
        (None, 2, "0.00"),
        ("abc", 2, "0.00"),
    ],
)
def test_format_number(value, decimals: int, expected: str) -> None:
    assert format_number(value, decimals) == expected


def test_format_currency() -> None:
    assert format_currency(250) == "₱250.00"
    assert format_currency(1234.567, "$") == "$1,234.57"
    assert format_currency(None) == "₱0.00"


def test_format_percentage() -> None:
    assert format_percentage(0.125) == "12.5%"
    assert format_percentage(1, 0) == "100%"
    assert format_percentage(None) == "0.0%"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2023-01-15", "January 15, 2023"),
        ("2023-01-05T08:00:00Z", "January 5, 2023"),
        (dt.date(2020, 12, 31), "December 31, 2020"),
        (None, "N/A"),
        ("", "N/A"),
        ("not a date", "Invalid Date"),
    ],
)
def test_format_date(value, expected: str) -> None:
    assert format_date(value) == expected
