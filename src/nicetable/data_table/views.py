"""Presentation adapters for DataTable.

Two views render the same DataTableModel:

- DesktopTableView: a ui.table with sortable headers and row checkboxes.
- MobileCardView: one card per row with label/value pairs.

Views only read the model and call its transitions; they hold no filter, sort
or selection state of their own, so swapping views never loses state.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from nicegui import events, ui

from nicetable.data_table.column_classifier import is_card_column
from nicetable.data_table.config import SELECT_COLUMN_ID, ColumnConfig, RenderMode, RowModel
from nicetable.data_table.selection import HeaderCheckState
from nicetable.data_table.table_model import DataTableModel
from nicetable.utils.logging import get_logger

logger = get_logger(__name__)

SORT_ICONS = {
    "none": "unfold_more",
    "asc": "arrow_upward",
    "desc": "arrow_downward",
}


class RenderStrategy(Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"


def choose_render_strategy(
    width: Optional[int],
    breakpoint: int,
    mode: RenderMode = "auto",
) -> RenderStrategy:
    """Pick the layout for a viewport width.

    A forced mode wins. An unknown width (not reported yet) renders desktop.
    """
    if mode == "desktop":
        return RenderStrategy.DESKTOP
    if mode == "mobile":
        return RenderStrategy.MOBILE
    if width is None:
        return RenderStrategy.DESKTOP
    return RenderStrategy.MOBILE if width < breakpoint else RenderStrategy.DESKTOP


def _render_cell(column: ColumnConfig, row: RowModel) -> None:
    if column.cell is not None:
        column.cell(row)
        return
    ui.label(column.display_value(row.original))


def _selection_box(value: Optional[bool], on_click, *, text: Optional[str] = None) -> ui.element:
    """Checkbox inside a click region that does not bubble to the row.

    The checkbox itself ignores pointer events; the wrapper toggles, so one
    click means exactly one toggle and never a row click.
    """
    with ui.element("div").classes("flex items-center").props("data-checkbox") as box:
        ui.checkbox(value=value).props("tabindex=-1").style("pointer-events: none")
        if text is not None:
            ui.label(text).classes("ml-2 text-sm text-gray-500")
    box.on("click.stop", on_click)
    return box


# Quasar slot templates. Sorting stays in Python: the table gets rows already
# sorted and header clicks are emitted back to the model.
_HEADER_CELL_SLOT = r'''
<q-th :props="props" :class="props.col.ntSortable ? 'nt-sortable' : ''"
      @click="() => { if (props.col.ntSortable) $parent.$emit('nt_sort', props.col.name) }">
    {{ props.col.label }}
    <q-icon v-if="props.col.ntSortable" :name="props.col.ntSortIcon" size="xs" />
</q-th>
'''

_HEADER_SELECT_SLOT = r'''
<q-th :props="props" class="w-10">
    <q-checkbox dense :model-value="props.col.ntChecked"
        @update:model-value="() => $parent.$emit('nt_toggle_all')" />
</q-th>
'''

# @click.stop keeps the checkbox cell from firing rowClick
_BODY_SELECT_SLOT = r'''
<q-td :props="props" class="w-10" @click.stop>
    <q-checkbox dense :model-value="props.row._nt_selected"
        @update:model-value="() => $parent.$emit('nt_toggle_row', props.row._nt_index)" />
</q-td>
'''

_ROW_INDEX_KEY = "_nt_index"
_ROW_SELECTED_KEY = "_nt_selected"


class DesktopTableView:
    """Grid layout: a ui.table fed with the model's filtered and sorted rows.

    Events:
        nt_sort(column_id)     header click on a sortable column
        nt_toggle_row(index)   row checkbox
        nt_toggle_all          header checkbox
        rowClick               anywhere on a row except the checkbox cell
    """

    strategy = RenderStrategy.DESKTOP

    def __init__(self, model: DataTableModel) -> None:
        self._model = model
        self._rows_by_index: dict[int, RowModel] = {}

    def render(self) -> ui.table:
        model = self._model
        selectable = model.config.enable_row_selection
        rows = model.row_model()
        self._rows_by_index = {r.index: r for r in rows}

        table = ui.table(
            columns=self._column_defs(selectable),
            rows=[self._row_dict(r, selectable) for r in rows],
            row_key=_ROW_INDEX_KEY,
            pagination={"rowsPerPage": 0},
        ).classes("w-full")
        table.props("flat bordered dense hide-pagination")
        table._props["no-data-label"] = model.config.empty_message

        row_classes = []
        if model.has_row_click:
            row_classes.append("'nt-row-clickable'")
        if selectable:
            row_classes.append(f"(row.{_ROW_SELECTED_KEY} ? 'nt-row-selected' : '')")
        if row_classes:
            table._props[":table-row-class-fn"] = f"row => [{', '.join(row_classes)}].join(' ')"

        table.add_slot("header-cell", _HEADER_CELL_SLOT)
        if selectable:
            table.add_slot(f"header-cell-{SELECT_COLUMN_ID}", _HEADER_SELECT_SLOT)
            table.add_slot(f"body-cell-{SELECT_COLUMN_ID}", _BODY_SELECT_SLOT)
        for col in model.columns:
            if col.header_slot is not None:
                table.add_slot(f"header-cell-{col.field}", col.header_slot)
            if col.cell_slot is not None:
                table.add_slot(f"body-cell-{col.field}", col.cell_slot)

        table.on("nt_sort", self._on_sort)
        table.on("nt_toggle_row", self._on_toggle_row)
        table.on("nt_toggle_all", self._on_toggle_all)
        table.on("rowClick", self._on_row_click)
        return table

    def _column_defs(self, selectable: bool) -> list[dict[str, Any]]:
        model = self._model
        defs: list[dict[str, Any]] = []
        if selectable:
            state = model.header_check_state()
            defs.append({
                "name": SELECT_COLUMN_ID,
                "label": "",
                "field": _ROW_SELECTED_KEY,
                "align": "left",
                # tri-state: null renders indeterminate
                "ntChecked": {
                    HeaderCheckState.ALL: True,
                    HeaderCheckState.NONE: False,
                    HeaderCheckState.SOME: None,
                }[state],
            })
        for col in model.columns:
            defs.append({
                "name": col.field,
                "label": col.label,
                "field": col.field,
                "align": "left",
                "ntSortable": col.sortable,
                "ntSortIcon": SORT_ICONS[model.sort_indicator(col.field)],
            })
        return defs

    def _row_dict(self, row: RowModel, selectable: bool) -> dict[str, Any]:
        out: dict[str, Any] = {_ROW_INDEX_KEY: row.index}
        if selectable:
            out[_ROW_SELECTED_KEY] = self._model.is_selected(row.index)
        for col in self._model.columns:
            try:
                out[col.field] = col.display_value(row.original)
            except Exception:
                logger.debug("display value of column %r failed", col.field, exc_info=True)
                out[col.field] = ""
        return out

    # ------------------------------------------------------------------
    # Table events
    # ------------------------------------------------------------------

    def _on_sort(self, e: events.GenericEventArguments) -> None:
        if isinstance(e.args, str):
            self._model.toggle_sort(e.args)

    def _on_toggle_row(self, e: events.GenericEventArguments) -> None:
        try:
            index = int(e.args)
        except (TypeError, ValueError):
            return
        self._model.toggle_row_selected(index)

    def _on_toggle_all(self) -> None:
        self._model.toggle_all_visible()

    def _on_row_click(self, e: events.GenericEventArguments) -> None:
        # rowClick args: [event, row, index]
        args = e.args if isinstance(e.args, (list, tuple)) else []
        row = args[1] if len(args) > 1 and isinstance(args[1], dict) else {}
        row_model = self._rows_by_index.get(row.get(_ROW_INDEX_KEY))
        if row_model is not None:
            self._model.click_row(row_model)


class MobileCardView:
    """Card layout: first card column is the title, the rest are label/value pairs."""

    strategy = RenderStrategy.MOBILE

    def __init__(self, model: DataTableModel) -> None:
        self._model = model

    def render(self) -> None:
        model = self._model
        rows = model.row_model()

        with ui.column().classes("w-full gap-3"):
            if not rows:
                with ui.card().classes("w-full"):
                    ui.label(model.config.empty_message).classes("w-full p-8 text-center text-gray-500")
                return

            for row in rows:
                self._render_card(row)

    def _render_card(self, row: RowModel) -> None:
        model = self._model
        selectable = model.config.enable_row_selection
        selected = selectable and model.is_selected(row.index)
        card_columns = [c for c in model.columns if is_card_column(c)]

        with ui.card().classes("w-full") as card:
            if selectable:
                _selection_box(
                    selected,
                    lambda i=row.index: model.toggle_row_selected(i),
                    text="Selected" if selected else "Select",
                )
            with ui.column().classes("w-full gap-2"):
                for i, col in enumerate(card_columns):
                    if i == 0:
                        with ui.element("div").classes("font-semibold text-base"):
                            _render_cell(col, row)
                        continue
                    with ui.row().classes("w-full justify-between items-center text-sm"):
                        ui.label(f"{col.label}:").classes("text-gray-500 font-medium")
                        _render_cell(col, row)

        if model.has_row_click:
            card.classes("nt-row-clickable")
        if selected:
            card.classes("nt-card-selected")
        card.on("click", lambda r=row: model.click_row(r))
