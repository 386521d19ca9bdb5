# src/nicetable/data_table/config.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Literal, Optional, TypeVar

T = TypeVar("T")

RenderMode = Literal["auto", "desktop", "mobile"]

# Reserved id of the row-selection column.
SELECT_COLUMN_ID = "select"


class ColumnType(Enum):
    """Semantic type of a column, derived from its id."""
    TEXT = "text"
    DATE = "date"
    NUMBER = "number"


@dataclass(frozen=True)
class RowModel(Generic[T]):
    """Handle for one row of the table.

    Attributes:
        index: Position of the row in the caller's data sequence. This is the
            row identity used for selection.
        original: The caller's row object, never mutated by the table.
    """
    index: int
    original: T


@dataclass
class ColumnConfig:
    """Declarative configuration for a single table column.

    Attributes:
        field: Unique column id. Also the key (or attribute name) used to read
            the raw value from a row when ``accessor`` is not set.
        header: Column label. ``None`` uses ``field``.
        header_slot: Optional Quasar template for the desktop header cell
            (``props`` in scope, wrap in ``<q-th :props="props">``). A column
            with a custom header is not filterable and not shown on cards.
        accessor: Optional function returning the raw value for a row.
        formatter: Optional function turning the raw value into display text.
            The display text is what text filters and the global search match.
        cell: Optional card cell renderer called with the RowModel inside
            the card. Defaults to a label with the display text.
        cell_slot: Optional Quasar template for the desktop body cell
            (``props.value`` is the display text, ``props.row`` the table row).
        sortable: Whether clicking the header cycles sorting.
        sort_key: Optional key function on the raw value, overriding the
            type-based sort comparison.
        column_type: Derived from ``field`` once; not an init argument.
    """

    field: str
    header: Optional[str] = None
    header_slot: Optional[str] = None
    accessor: Optional[Callable[[Any], Any]] = None
    formatter: Optional[Callable[[Any], str]] = None
    cell: Optional[Callable[[RowModel], None]] = None
    cell_slot: Optional[str] = None

    sortable: bool = True
    sort_key: Optional[Callable[[Any], Any]] = None

    column_type: ColumnType = field(init=False)

    def __post_init__(self) -> None:
        # local import: the classifier module imports this one
        from nicetable.data_table.column_classifier import classify

        self.column_type = classify(self.field)

    @property
    def label(self) -> str:
        """Plain header label (``field`` when no header is set)."""
        return self.header if self.header is not None else self.field

    def raw_value(self, row: Any) -> Any:
        """Return the raw (unformatted) value of this column for ``row``."""
        if self.accessor is not None:
            return self.accessor(row)
        if isinstance(row, Mapping):
            return row.get(self.field)
        return getattr(row, self.field, None)

    def display_value(self, row: Any) -> str:
        """Return the formatted text shown for this column in ``row``."""
        value = self.raw_value(row)
        if self.formatter is not None:
            return str(self.formatter(value))
        if value is None:
            return ""
        return str(value)


@dataclass
class TableConfig:
    """Declarative configuration for table-level behavior.

    Attributes:
        search_placeholder: Placeholder of the global search input.
        empty_message: Text shown when no row passes the filters.
        enable_row_selection: Show row checkboxes and report selections.
        mobile_breakpoint_px: Viewports narrower than this use the card layout.
        render_mode: ``"auto"`` follows the viewport width; ``"desktop"`` and
            ``"mobile"`` force one layout.
    """

    search_placeholder: str = "Search all columns..."
    empty_message: str = "No results."
    enable_row_selection: bool = False

    mobile_breakpoint_px: int = 768
    render_mode: RenderMode = "auto"
