# src/nicetable/data_table/data_table.py
from __future__ import annotations

from typing import Any, Optional, Sequence

from nicegui import events, ui

from nicetable.data_table.config import ColumnConfig, ColumnType, TableConfig
from nicetable.data_table.js_hooks import js_watch_viewport_width
from nicetable.data_table.table_model import (
    DataLike,
    DataTableModel,
    RowClickHandler,
    SelectionChangeHandler,
)
from nicetable.data_table.theme import ensure_table_theme
from nicetable.data_table.views import (
    DesktopTableView,
    MobileCardView,
    RenderStrategy,
    choose_render_strategy,
)
from nicetable.utils.logging import get_logger

logger = get_logger(__name__)


class DataTable:
    """NiceGUI data table with global search, typed column filters, sorting and row selection.

    Key behavior:
    - Global search matches the display text of every column.
    - Column filters depend on the column type (derived from the column id):
        - text:   substring input, Enter applies
        - date:   date picker, matches the calendar day
        - number: min/max inputs, inclusive range
      One filter per column; applied filters show as chips, click to remove.
    - Header click cycles sort asc -> desc -> none.
    - Row click calls on_row_click(row_model); the checkbox region only toggles selection.
    - on_row_selection_change(rows) gets every selected row, visible or filtered out.
    - Layout switches between a grid and cards at TableConfig.mobile_breakpoint_px.

    Public API:
        model: the DataTableModel (state + transitions)
        set_data(data): replace rows (resets selection, keeps filters/sort)
        selected_rows(): currently selected rows
        set_viewport_width(width): feed a viewport width (px)
        strategy: current RenderStrategy
    """

    def __init__(
        self,
        columns: Sequence[ColumnConfig],
        data: DataLike,
        config: TableConfig | None = None,
        *,
        on_row_click: Optional[RowClickHandler] = None,
        on_row_selection_change: Optional[SelectionChangeHandler] = None,
        parent: ui.element | None = None,
        watch_viewport: bool = True,
    ) -> None:
        ensure_table_theme()

        self._model = DataTableModel(
            columns,
            data,
            config,
            on_row_click=on_row_click,
            on_row_selection_change=on_row_selection_change,
        )
        self._cfg: TableConfig = self._model.config
        self._viewport_width: Optional[int] = None
        self._strategy: RenderStrategy = choose_render_strategy(
            None, self._cfg.mobile_breakpoint_px, self._cfg.render_mode
        )

        # instance-unique emitted event name (several tables on one page)
        self._evt_viewport: str = f"nicetable_viewport_{id(self)}"

        self._container: ui.element = parent or ui.column()
        self._container.classes("nicetable w-full gap-4")

        with self._container:
            self._build_search_bar()
            self._build_filter_bar()
            self._chips_row = ui.row().classes("items-center gap-2 flex-wrap")
            self._selection_bar = ui.row().classes("items-center gap-2 p-3 rounded-lg bg-gray-100")
            self._view_container = ui.column().classes("w-full")

        self._model.on_change(self._refresh)
        self._model.on_pending_change(self._refresh_filter_controls)
        self._refresh()

        if watch_viewport and self._cfg.render_mode == "auto":
            ui.on(self._evt_viewport, self._on_viewport_emitted)
            ui.timer(0.0, self._install_viewport_watch, once=True)

        logger.info(
            "DataTable initialized: rows=%s cols=%s selection=%s render_mode=%s",
            len(self._model.rows),
            len(self._model.columns),
            self._cfg.enable_row_selection,
            self._cfg.render_mode,
        )

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------

    @property
    def model(self) -> DataTableModel:
        return self._model

    @property
    def strategy(self) -> RenderStrategy:
        return self._strategy

    def selected_rows(self) -> list[Any]:
        return self._model.selected_rows()

    def set_data(self, data: DataLike) -> None:
        """Replace table rows and refresh."""
        self._model.set_data(data)

    def set_viewport_width(self, width: Optional[int]) -> None:
        """Record the viewport width and swap layouts if the breakpoint is crossed."""
        self._viewport_width = width
        strategy = choose_render_strategy(width, self._cfg.mobile_breakpoint_px, self._cfg.render_mode)
        if strategy is self._strategy:
            return
        logger.debug("viewport width=%s -> %s", width, strategy.value)
        self._strategy = strategy
        self._render_view()

    # ------------------------------------------------------------------
    # Internal: static parts
    # ------------------------------------------------------------------

    def _build_search_bar(self) -> None:
        with ui.row().classes("w-full items-center justify-between gap-4"):
            ui.input(
                placeholder=self._cfg.search_placeholder,
                on_change=lambda e: self._model.set_global_filter(e.value),
            ).props("clearable").classes("max-w-sm")
            self._count_label = ui.label("").classes("text-sm text-gray-500")

    def _build_filter_bar(self) -> None:
        with ui.row().classes("items-center gap-2 flex-wrap"):
            with ui.button(icon="filter_list").props("outline") as self._column_button:
                with ui.menu():
                    for col in self._model.filterable_columns():
                        ui.menu_item(col.header, on_click=lambda c=col.id: self._on_column_selected(c))
            self._filter_input_container = ui.row().classes("items-center gap-2")
            self._add_button = ui.button("Add Filter", icon="search", on_click=self._on_add_filter)
        self._build_filter_input()

    def _build_filter_input(self) -> None:
        """(Re)build the pending-value input for the selected column type."""
        model = self._model
        column = model.pending_column()
        disabled = column is None

        if column is None:
            self._column_button.text = "Select Column"
        else:
            self._column_button.text = f"{column.header} ({column.type.value})"

        self._filter_input_container.clear()
        with self._filter_input_container:
            column_type = model.pending_column_type()
            if column_type is ColumnType.DATE:
                date_input = ui.input(placeholder="Select date...").props("readonly").classes("w-48")
                with date_input.add_slot("append"):
                    ui.icon("event").classes("cursor-pointer")
                with ui.menu().props("no-parent-event") as date_menu:
                    ui.date(on_change=lambda e: self._on_date_picked(e, date_input, date_menu))
                date_input.on("click", date_menu.open)
                if disabled:
                    date_input.disable()
            elif column_type is ColumnType.NUMBER:
                min_input = ui.number(placeholder="Min", step=0.01).classes("w-24")
                ui.label("to").classes("text-sm text-gray-500")
                max_input = ui.number(placeholder="Max", step=0.01).classes("w-24")

                def _on_range_change(_e: Any = None) -> None:
                    model.set_pending_range(min_input.value, max_input.value)

                min_input.on_value_change(_on_range_change)
                max_input.on_value_change(_on_range_change)
                if disabled:
                    min_input.disable()
                    max_input.disable()
            else:
                text_input = ui.input(
                    placeholder="Filter value...",
                    on_change=lambda e: model.set_pending_text(e.value),
                ).classes("w-48")
                text_input.on("keydown.enter", self._on_add_filter)
                if disabled:
                    text_input.disable()

    # ------------------------------------------------------------------
    # Internal: event handlers
    # ------------------------------------------------------------------

    def _on_column_selected(self, column_id: str) -> None:
        self._model.select_filter_column(column_id)
        self._build_filter_input()

    def _on_date_picked(self, e: events.ValueChangeEventArguments, date_input: ui.input, date_menu: ui.menu) -> None:
        date_input.value = e.value or ""
        date_menu.close()
        self._model.set_pending_date(e.value)

    def _on_add_filter(self) -> None:
        if self._model.apply_filter() is None:
            return
        self._build_filter_input()

    def _on_viewport_emitted(self, e: events.GenericEventArguments) -> None:
        args: dict[str, Any] = e.args or {}
        try:
            width = int(args.get("width"))
        except (TypeError, ValueError):
            return
        self.set_viewport_width(width)

    def _install_viewport_watch(self) -> None:
        ui.run_javascript(js_watch_viewport_width(emit_event=self._evt_viewport))

    # ------------------------------------------------------------------
    # Internal: refresh from model
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        model = self._model
        selectable = self._cfg.enable_row_selection
        selected_count = model.visible_selected_count() if selectable else 0

        count_text = model.row_count_text()
        if selected_count > 0:
            count_text = f"{selected_count} selected  {count_text}"
        self._count_label.text = count_text

        self._refresh_filter_controls()

        self._chips_row.clear()
        chips = model.filter_chips()
        self._chips_row.visible = bool(chips)
        if chips:
            with self._chips_row:
                ui.label("Filters:").classes("text-sm text-gray-500")
                for applied, text in chips:
                    ui.chip(
                        text,
                        icon="close",
                        on_click=lambda f=applied: model.remove_filter(f),
                    ).props("clickable")
                ui.button("Clear all", on_click=model.clear_filters).props("flat size=sm")

        self._selection_bar.clear()
        self._selection_bar.visible = selected_count > 0
        if selected_count > 0:
            with self._selection_bar:
                plural = "s" if selected_count > 1 else ""
                ui.label(f"{selected_count} item{plural} selected").classes("text-sm font-medium")
                ui.button("Clear selection", on_click=model.clear_selection).props("outline size=sm")

        self._render_view()

    def _refresh_filter_controls(self) -> None:
        if self._model.can_apply_filter():
            self._add_button.enable()
        else:
            self._add_button.disable()

    def _render_view(self) -> None:
        view = DesktopTableView(self._model) if self._strategy is RenderStrategy.DESKTOP else MobileCardView(self._model)
        self._view_container.clear()
        with self._view_container:
            view.render()
