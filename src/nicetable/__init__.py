"""
nicetable: Filterable, sortable, selectable data tables for NiceGUI.

This package provides:
- DataTable: search, typed column filters, sorting and row selection,
  rendered as a grid on desktop and as cards on narrow viewports
- Column helpers and display formatters (currency, date, number, percentage)
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from nicetable.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library (imported by other applications), logging is
automatically handled by the parent application's configuration.
"""

import logging

from nicetable.utils.logging import configure_logging, get_logger

from nicetable.data_table import ColumnConfig, DataTable, DataTableModel, TableConfig

# NullHandler so nicetable logs don't reach root until an app configures logging.
_logger = logging.getLogger("nicetable")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ColumnConfig",
    "DataTable",
    "DataTableModel",
    "TableConfig",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
