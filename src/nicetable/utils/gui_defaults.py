"""Set up default classes and props for NiceGUI widgets used by the table.

Call setUpGuiDefaults() once per page before building a DataTable so that
labels, buttons, inputs and checkboxes share one dense text size.
"""

from __future__ import annotations

from nicegui import ui

from nicetable.utils.logging import get_logger

logger = get_logger(__name__)

# tailwind text size -> quasar size
_QUASAR_SIZE = {
    "text-xs": "xs",
    "text-sm": "sm",
    "text-base": "md",
    "text-lg": "lg",
}


def setUpGuiDefaults(text_size: str = "text-sm") -> None:
    """Set up default classes and props for the ui elements the table builds.

    Args:
        text_size: Tailwind CSS text size class ('text-xs', 'text-sm',
            'text-base' or 'text-lg'). Defaults to 'text-sm'.
    """
    text_size_quasar = _QUASAR_SIZE[text_size]

    logger.debug(f'using classes text_size:"{text_size}" text_size_quasar:{text_size_quasar}')

    ui.label.default_classes(f"{text_size} select-text")
    #
    ui.button.default_classes(text_size)
    ui.button.default_props("dense no-caps")
    #
    ui.checkbox.default_classes(text_size)
    ui.checkbox.default_props(f"dense size={text_size_quasar}")
    #
    ui.input.default_classes(text_size)
    ui.input.default_props("dense")
    #
    ui.number.default_classes(text_size)
    ui.number.default_props("dense")
    #
    ui.menu_item.default_classes(text_size)
    ui.menu_item.default_props("dense")

    ui.chip.default_classes(text_size)
    ui.chip.default_props("dense")
