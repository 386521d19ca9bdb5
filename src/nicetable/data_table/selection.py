"""Row selection tracking keyed by row index.

Selection does not depend on what is currently visible: a selected row hidden
by a filter stays selected and comes back checked when the filter is cleared.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class HeaderCheckState(Enum):
    """Tri-state of the "select all visible rows" header checkbox."""
    NONE = "none"
    SOME = "some"
    ALL = "all"


class SelectionTracker:
    """Set of selected row indices.

    Mutators return True when the selection changed, so callers only notify
    listeners on real changes.
    """

    def __init__(self) -> None:
        self._selected: set[int] = set()

    def __len__(self) -> int:
        return len(self._selected)

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def selected_indices(self) -> list[int]:
        """Selected indices in data order."""
        return sorted(self._selected)

    def set_selected(self, index: int, value: bool) -> bool:
        if value == (index in self._selected):
            return False
        if value:
            self._selected.add(index)
        else:
            self._selected.discard(index)
        return True

    def toggle(self, index: int) -> bool:
        return self.set_selected(index, index not in self._selected)

    def set_many(self, indices: Iterable[int], value: bool) -> bool:
        before = set(self._selected)
        if value:
            self._selected.update(indices)
        else:
            self._selected.difference_update(indices)
        return before != self._selected

    def clear(self) -> bool:
        if not self._selected:
            return False
        self._selected.clear()
        return True

    def count_in(self, visible_indices: Iterable[int]) -> int:
        return sum(1 for i in visible_indices if i in self._selected)

    def header_state(self, visible_indices: Iterable[int]) -> HeaderCheckState:
        visible = list(visible_indices)
        if not visible:
            return HeaderCheckState.NONE
        n = self.count_in(visible)
        if n == 0:
            return HeaderCheckState.NONE
        if n == len(visible):
            return HeaderCheckState.ALL
        return HeaderCheckState.SOME
