"""Employee rows for the demo app.

Rows come from a CSV (columns: id, first_name, last_name, employment_date,
daily_rate) when a path is given or NICETABLE_EMPLOYEES_CSV is set; otherwise
the built-in sample is used.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from nicetable.utils.logging import get_logger

logger = get_logger(__name__)

EMPLOYEES_CSV_ENV = "NICETABLE_EMPLOYEES_CSV"

EMPLOYEE_FIELDS = ("id", "first_name", "last_name", "employment_date", "daily_rate")

SAMPLE_EMPLOYEES: list[dict[str, Any]] = [
    {"id": 1, "first_name": "Maria", "last_name": "Santos", "employment_date": "2021-03-15", "daily_rate": 850.0},
    {"id": 2, "first_name": "Jose", "last_name": "Reyes", "employment_date": "2019-07-01", "daily_rate": 1200.0},
    {"id": 3, "first_name": "Ana", "last_name": "Cruz", "employment_date": "2023-01-15", "daily_rate": 650.5},
    {"id": 4, "first_name": "Juan", "last_name": "Dela Cruz", "employment_date": "2020-11-02", "daily_rate": 975.0},
    {"id": 5, "first_name": "Carmen", "last_name": "Garcia", "employment_date": "2022-05-20", "daily_rate": 1500.0},
    {"id": 6, "first_name": "Miguel", "last_name": "Bautista", "employment_date": "2018-09-10", "daily_rate": 2100.0},
    {"id": 7, "first_name": "Liza", "last_name": "Mendoza", "employment_date": "2023-08-28", "daily_rate": 700.0},
    {"id": 8, "first_name": "Paolo", "last_name": "Villanueva", "employment_date": "2021-12-06", "daily_rate": 1100.0},
    {"id": 9, "first_name": "Grace", "last_name": "Ramos", "employment_date": "2017-04-03", "daily_rate": 1800.0},
    {"id": 10, "first_name": "Ramon", "last_name": "Aquino", "employment_date": "2024-02-12", "daily_rate": 600.0},
    {"id": 11, "first_name": "Teresa", "last_name": "Flores", "employment_date": "2020-06-30", "daily_rate": 925.75},
    {"id": 12, "first_name": "Andres", "last_name": "Castillo", "employment_date": "2022-10-17", "daily_rate": 1350.0},
]


def load_employees(csv_path: Optional[str | Path] = None) -> pd.DataFrame:
    """Return employees as a DataFrame.

    Args:
        csv_path: CSV to read. Defaults to $NICETABLE_EMPLOYEES_CSV, then the
            built-in sample.

    Raises:
        FileNotFoundError: csv_path (or the env path) does not exist.
        ValueError: the CSV lacks one of the employee columns.
    """
    path = csv_path or os.getenv(EMPLOYEES_CSV_ENV)
    if not path:
        return pd.DataFrame(SAMPLE_EMPLOYEES, columns=list(EMPLOYEE_FIELDS))

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Employees CSV not found: {path}")

    df = pd.read_csv(path)
    missing = [c for c in EMPLOYEE_FIELDS if c not in df.columns]
    if missing:
        raise ValueError(f"Employees CSV {path} is missing columns: {missing}")

    logger.info("Loaded %s employees from %s", len(df), path)
    return df[list(EMPLOYEE_FIELDS)]
