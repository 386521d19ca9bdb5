"""Column definitions for the employees table."""

from __future__ import annotations

from nicetable.data_table import ColumnConfig, currency_column, date_column, text_column


def employee_columns() -> list[ColumnConfig]:
    return [
        text_column("first_name", "First Name"),
        text_column("last_name", "Last Name"),
        date_column("employment_date", "Employment Date"),
        currency_column("daily_rate", "Daily Rate"),
    ]
