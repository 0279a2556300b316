"""Bounded index into the visible part of the candidate list."""

from __future__ import annotations

from collections.abc import Sequence


class SelectionState:
    """Selected row of the candidate dropdown.

    Only the first ``capacity`` candidates are ever shown, so the index is
    kept within ``min(list_len, capacity)``. Replacing the candidate list
    leaves the index alone unless it no longer points at a visible row, in
    which case it goes back to the top.
    """

    def __init__(self) -> None:
        self.index: int = 0

    def move_up(self) -> bool:
        """Move one row up; return whether the index changed."""
        if self.index == 0:
            return False
        self.index -= 1
        return True

    def move_down(self, list_len: int, capacity: int) -> bool:
        """Move one row down; return whether the index changed."""
        if self.index + 1 >= min(list_len, capacity):
            return False
        self.index += 1
        return True

    def clamp(self, list_len: int, capacity: int) -> None:
        if self.index >= min(list_len, capacity):
            self.index = 0

    def selected(self, candidates: Sequence[str]) -> str | None:
        """Return the selected candidate, or ``None`` when the list is empty."""
        if self.index < len(candidates):
            return candidates[self.index]
        return None
