"""DataTable - filterable, sortable, selectable table for NiceGUI."""

from .config import ColumnConfig, ColumnType, RowModel, TableConfig
from .column_helpers import currency_column, date_column, number_column, percentage_column, text_column
from .data_table import DataTable
from .table_model import DataTableModel
from .views import RenderStrategy

__all__ = [
    "ColumnConfig",
    "ColumnType",
    "DataTable",
    "DataTableModel",
    "RenderStrategy",
    "RowModel",
    "TableConfig",
    "currency_column",
    "date_column",
    "number_column",
    "percentage_column",
    "text_column",
]
