"""Employees app: standalone NiceGUI page with the employees DataTable.

Runs in native or web mode via env vars. Uses @ui.page("/") pattern.

Run:
    uv run python -m nicetable.employees_app.app

Env vars:
    NICETABLE_GUI_NATIVE: 1/0 (default 0)
    NICETABLE_GUI_RELOAD: 1/0 (default 0)
    NICETABLE_EMPLOYEES_CSV: optional CSV with employee rows
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import os
from typing import Any

from nicegui import ui

from nicetable.data_table import DataTable, RowModel, TableConfig
from nicetable.employees_app.columns import employee_columns
from nicetable.employees_app.sample_data import load_employees
from nicetable.utils import format_currency, setUpGuiDefaults
from nicetable.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

configure_logging()


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def employee_label(row: Any) -> str:
    """'First Last' for a row dict."""
    return f"{row.get('first_name', '')} {row.get('last_name', '')}".strip()


def _on_row_click(row: RowModel) -> None:
    employee = row.original
    ui.notify(f"{employee_label(employee)}: {format_currency(employee.get('daily_rate'))} / day")


def _on_selection_change(rows: list[Any]) -> None:
    logger.info("selected employees: %s", [employee_label(r) for r in rows])


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: header + employees table."""

    setUpGuiDefaults()

    ui.page_title("Employees")

    with ui.header().classes("items-center justify-between").props("dense"):
        ui.label("Employees").classes("text-lg font-semibold")

    with ui.column().classes("w-full gap-4 p-4"):
        try:
            df = load_employees()
        except (FileNotFoundError, ValueError) as e:
            logger.exception("Failed to load employees: %s", e)
            ui.label(f"Failed to load employees: {e}").classes("text-negative")
            return

        ui.label(f"{len(df)} employees total").classes("text-gray-500")

        DataTable(
            employee_columns(),
            df,
            TableConfig(
                search_placeholder="Search employees...",
                empty_message="No employees found.",
                enable_row_selection=True,
            ),
            on_row_click=_on_row_click,
            on_row_selection_change=_on_selection_change,
        )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the employees application.

    Env vars (used when arg is None):
      - NICETABLE_GUI_NATIVE: 1/0
      - NICETABLE_GUI_RELOAD: 1/0
      - HOST: bind host
      - PORT: bind port
    """
    native_bool = _env_bool("NICETABLE_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("NICETABLE_GUI_RELOAD", False) if reload is None else reload

    if native_bool:
        from nicegui import native as native_module
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info("Starting Employees app: host=%s port=%s reload=%s native=%s", host, port, reload, native_bool)

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "title": "Employees",
    }
    if native_bool:
        run_kwargs["window_size"] = (1200, 800)
    ui.run(**run_kwargs)


if __name__ in {"__main__", "__mp_main__"}:
    main()
