from __future__ import annotations

from nicegui import ui


# Table CSS, scoped by the .nicetable container class:
# - .nt-sortable      → pointer cursor on sortable header cells
# - .nt-row-clickable → pointer cursor on rows with a click handler
# - .nt-row-selected  → selected row background
# - .nt-card-selected → selected card outline
_THEME_CSS = """
<style>
.nicetable .nt-sortable {
    cursor: pointer;
    user-select: none;
}
.nicetable .nt-row-clickable {
    cursor: pointer;
}
.nicetable .nt-row-selected {
    background-color: rgba(25, 118, 210, 0.10);
}
.nicetable .nt-card-selected {
    outline: 2px solid var(--q-primary);
}
</style>
"""

_theme_injected: bool = False


def ensure_table_theme() -> None:
    """Inject the table CSS once per application.

    Idempotent: only the first call adds the CSS block to the document head.
    """
    global _theme_injected
    if not _theme_injected:
        ui.add_head_html(_THEME_CSS, shared=True)
        _theme_injected = True
