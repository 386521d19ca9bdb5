"""Utility functions for nicetable."""

from .formatters import format_currency, format_date, format_number, format_percentage
from .gui_defaults import setUpGuiDefaults
from .logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "format_currency",
    "format_date",
    "format_number",
    "format_percentage",
    "get_logger",
    "setUpGuiDefaults",
]
