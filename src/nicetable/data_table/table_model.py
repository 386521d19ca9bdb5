# src/nicetable/data_table/table_model.py
"""State core of DataTable: one owned state record plus transitions and derivations.

Views never mutate state directly. They call a transition (``apply_filter``,
``toggle_sort``, ``toggle_row_selected``, ``set_data``, ...) and re-render from
the derivations (``row_model``, ``selected_rows``, ...) when notified.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

import pandas as pd

from nicetable.data_table import filter_engine as fe
from nicetable.data_table.column_classifier import FilterableColumn, filterable_columns
from nicetable.data_table.config import ColumnConfig, ColumnType, RowModel, TableConfig
from nicetable.data_table.filter_engine import AppliedFilter, PendingFilter
from nicetable.data_table.selection import HeaderCheckState, SelectionTracker
from nicetable.data_table.sort_engine import SortState, next_sort, sort_indicator, sort_rows
from nicetable.utils.logging import get_logger

logger = get_logger(__name__)

try:  # pragma: no cover
    import polars as _pl  # type: ignore[import]
    HAS_POLARS = True
except Exception:  # pragma: no cover
    _pl = None  # type: ignore[assignment]
    HAS_POLARS = False

if TYPE_CHECKING:
    import polars as pl
else:
    pl = _pl  # type: ignore[assignment]

DataLike = Union[Sequence[Any], "pd.DataFrame", "pl.DataFrame"]  # type: ignore[name-defined]

RowClickHandler = Callable[[RowModel], None]
SelectionChangeHandler = Callable[[list[Any]], None]
ChangeHandler = Callable[[], None]


@dataclass
class TableState:
    """Everything the table owns; created on mount, dropped on unmount."""
    global_filter: str = ""
    applied_filters: list[AppliedFilter] = field(default_factory=list)
    sort: Optional[SortState] = None
    pending: PendingFilter = field(default_factory=PendingFilter)
    selection: SelectionTracker = field(default_factory=SelectionTracker)


def convert_input_to_rows(data: DataLike) -> list[Any]:
    """Return the rows of a list/tuple, pandas DataFrame or polars DataFrame."""
    if isinstance(data, pd.DataFrame):
        return data.to_dict(orient="records")

    if HAS_POLARS and pl is not None and isinstance(data, pl.DataFrame):
        return data.to_dicts()

    if isinstance(data, (list, tuple)):
        return list(data)

    raise TypeError("Unsupported data type: expected a list of rows, pandas.DataFrame, or polars.DataFrame.")


class DataTableModel:
    """Filter, sort and selection state for one table instance.

    Public API:
        transitions: set_data, set_global_filter, select_filter_column,
            set_pending_text, set_pending_date, set_pending_range, apply_filter,
            remove_filter, clear_filters, toggle_sort, toggle_row_selected,
            set_row_selected, toggle_all_visible, clear_selection, click_row
        derivations: filterable_columns, filtered_rows, row_model,
            selected_rows, visible_selected_count, header_check_state,
            can_apply_filter, filter_chips, row_count_text
        on_change(handler): handler() after every state change
    """

    def __init__(
        self,
        columns: Sequence[ColumnConfig],
        data: DataLike,
        config: TableConfig | None = None,
        *,
        on_row_click: Optional[RowClickHandler] = None,
        on_row_selection_change: Optional[SelectionChangeHandler] = None,
    ) -> None:
        ids = [c.field for c in columns]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ValueError(f"Column ids must be unique, duplicated: {dupes}")

        self._columns: list[ColumnConfig] = list(columns)
        self._columns_by_id: dict[str, ColumnConfig] = {c.field: c for c in self._columns}
        self._filterable: list[FilterableColumn] = filterable_columns(self._columns)
        self._config: TableConfig = config or TableConfig()

        self._rows: list[Any] = convert_input_to_rows(data)
        self._state = TableState()

        self._on_row_click = on_row_click
        self._on_row_selection_change = on_row_selection_change
        self._change_handlers: list[ChangeHandler] = []
        self._pending_handlers: list[ChangeHandler] = []

        # filtered rows, recomputed after the next state change
        self._filtered: Optional[list[RowModel]] = None

        logger.debug(
            "DataTableModel rows=%s cols=%s filterable=%s selection=%s",
            len(self._rows),
            len(self._columns),
            [c.id for c in self._filterable],
            self._config.enable_row_selection,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def columns(self) -> list[ColumnConfig]:
        return list(self._columns)

    @property
    def config(self) -> TableConfig:
        return self._config

    @property
    def state(self) -> TableState:
        """The owned state record (read it, do not mutate it)."""
        return self._state

    @property
    def rows(self) -> list[Any]:
        return list(self._rows)

    @property
    def has_row_click(self) -> bool:
        return self._on_row_click is not None

    def on_change(self, handler: ChangeHandler) -> None:
        """Register handler() called after each state change except pending filter input."""
        self._change_handlers.append(handler)

    def on_pending_change(self, handler: ChangeHandler) -> None:
        """Register handler() called when the pending filter input changes.

        Pending input never changes the rendered rows, so views only need to
        update the filter controls (e.g. enable "Add Filter").
        """
        self._pending_handlers.append(handler)

    # ------------------------------------------------------------------
    # Transitions: data and global search
    # ------------------------------------------------------------------

    def set_data(self, data: DataLike) -> None:
        """Replace the rows. Selection resets; filters and sort stay applied."""
        self._rows = convert_input_to_rows(data)
        selection_changed = self._state.selection.clear()
        logger.debug("set_data rows=%s selection_reset=%s", len(self._rows), selection_changed)
        self._notify(selection_changed)

    def set_global_filter(self, text: Optional[str]) -> None:
        text = text or ""
        if text == self._state.global_filter:
            return
        self._state.global_filter = text
        self._notify()

    # ------------------------------------------------------------------
    # Transitions: column filters
    # ------------------------------------------------------------------

    def select_filter_column(self, column_id: str) -> bool:
        """Start a pending filter on column_id. Returns False (no change) for a non-filterable id."""
        if not any(c.id == column_id for c in self._filterable):
            logger.warning("ignoring filter on non-filterable column %r", column_id)
            return False
        self._state.pending = fe.select_column(column_id)
        self._notify_pending()
        return True

    def set_pending_text(self, text: Optional[str]) -> None:
        self._state.pending = fe.set_pending_text(self._state.pending, text)
        self._notify_pending()

    def set_pending_date(self, value: Any) -> None:
        self._state.pending = fe.set_pending_date(self._state.pending, value)
        self._notify_pending()

    def set_pending_range(self, min_value: Any = None, max_value: Any = None) -> None:
        self._state.pending = fe.set_pending_range(self._state.pending, min_value, max_value)
        self._notify_pending()

    def apply_filter(self) -> Optional[AppliedFilter]:
        """Commit the pending input as a filter. Returns the filter, or None if invalid."""
        new = fe.encode_pending(self._state.pending, self._filterable)
        if new is None:
            return None
        self._state.applied_filters = fe.add_filter(self._state.applied_filters, new)
        self._state.pending = PendingFilter()
        logger.debug("apply_filter %s -> %s filter(s)", new, len(self._state.applied_filters))
        self._notify()
        return new

    def remove_filter(self, target: AppliedFilter) -> None:
        updated = fe.remove_filter(self._state.applied_filters, target)
        if len(updated) == len(self._state.applied_filters):
            return
        self._state.applied_filters = updated
        self._notify()

    def clear_filters(self) -> None:
        if not self._state.applied_filters:
            return
        self._state.applied_filters = []
        self._notify()

    # ------------------------------------------------------------------
    # Transitions: sort
    # ------------------------------------------------------------------

    def toggle_sort(self, column_id: str) -> None:
        col = self._columns_by_id.get(column_id)
        if col is None or not col.sortable:
            return
        self._state.sort = next_sort(self._state.sort, column_id)
        logger.debug("sort -> %s", self._state.sort)
        self._notify()

    # ------------------------------------------------------------------
    # Transitions: selection and row click
    # ------------------------------------------------------------------

    def toggle_row_selected(self, index: int) -> None:
        if not self._config.enable_row_selection:
            return
        self._notify(self._state.selection.toggle(index))

    def set_row_selected(self, index: int, value: bool) -> None:
        if not self._config.enable_row_selection:
            return
        self._notify(self._state.selection.set_selected(index, bool(value)))

    def toggle_all_visible(self, value: Optional[bool] = None) -> None:
        """Select (or deselect) every row currently in the row model.

        With value None: deselect when all visible rows are selected, else select all.
        """
        if not self._config.enable_row_selection:
            return
        visible = [r.index for r in self.row_model()]
        if value is None:
            value = self._state.selection.header_state(visible) is not HeaderCheckState.ALL
        self._notify(self._state.selection.set_many(visible, value))

    def clear_selection(self) -> None:
        """Deselect all rows, visible or not."""
        self._notify(self._state.selection.clear())

    def click_row(self, row: RowModel) -> None:
        """Forward a row click to the caller; never changes selection."""
        if self._on_row_click is None:
            return
        try:
            self._on_row_click(row)
        except Exception:
            logger.exception("Error in row_click handler")

    # ------------------------------------------------------------------
    # Derivations
    # ------------------------------------------------------------------

    def filterable_columns(self) -> list[FilterableColumn]:
        return list(self._filterable)

    def pending_column(self) -> Optional[FilterableColumn]:
        column_id = self._state.pending.column_id
        return next((c for c in self._filterable if c.id == column_id), None)

    def pending_column_type(self) -> ColumnType:
        col = self.pending_column()
        return col.type if col is not None else ColumnType.TEXT

    def can_apply_filter(self) -> bool:
        return fe.is_pending_valid(self._state.pending, self.pending_column_type())

    def filtered_rows(self) -> list[RowModel]:
        if self._filtered is None:
            state = self._state
            self._filtered = [
                RowModel(i, row)
                for i, row in enumerate(self._rows)
                if fe.row_passes(row, self._columns_by_id, state.applied_filters, state.global_filter)
            ]
        return list(self._filtered)

    def row_model(self) -> list[RowModel]:
        """Filtered then sorted rows, ready to render."""
        rows = self.filtered_rows()
        sort = self._state.sort
        if sort is None:
            return rows
        col = self._columns_by_id.get(sort.column_id)
        if col is None:
            return rows
        return sort_rows(rows, col, sort.direction)

    def sort_indicator(self, column_id: str) -> str:
        return sort_indicator(self._state.sort, column_id)

    def is_selected(self, index: int) -> bool:
        return self._state.selection.is_selected(index)

    def selected_rows(self) -> list[Any]:
        """All selected rows (visible or filtered out), in data order."""
        return [self._rows[i] for i in self._state.selection.selected_indices() if 0 <= i < len(self._rows)]

    def visible_selected_count(self) -> int:
        return self._state.selection.count_in(r.index for r in self.filtered_rows())

    def header_check_state(self) -> HeaderCheckState:
        return self._state.selection.header_state(r.index for r in self.filtered_rows())

    def filter_chips(self) -> list[tuple[AppliedFilter, str]]:
        return [(f, fe.format_filter_chip(f)) for f in self._state.applied_filters]

    def row_count_text(self) -> str:
        return f"{len(self.filtered_rows())} of {len(self._rows)} row(s)"

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _notify(self, selection_changed: bool = False) -> None:
        self._filtered = None
        if selection_changed and self._config.enable_row_selection and self._on_row_selection_change is not None:
            try:
                self._on_row_selection_change(self.selected_rows())
            except Exception:
                logger.exception("Error in row_selection_change handler")

        for handler in list(self._change_handlers):
            try:
                handler()
            except Exception:
                logger.exception("Error in table change handler")

    def _notify_pending(self) -> None:
        for handler in list(self._pending_handlers):
            try:
                handler()
            except Exception:
                logger.exception("Error in pending filter handler")
