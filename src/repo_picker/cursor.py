"""Selection cursor over the filtered view, with wraparound."""

from __future__ import annotations


class SelectionCursor:
    """Index of the highlighted row.

    The cursor does not hold the view; callers pass the current view size so
    the index is always checked against the list it refers to.
    """

    def __init__(self, index: int = 0):
        self.index = index

    def advance(self, size: int) -> None:
        """Move down one row, wrapping from the last row to the first."""
        if size == 0:
            return
        self.index = (self.index + 1) % size

    def retreat(self, size: int) -> None:
        """Move up one row, wrapping from the first row to the last."""
        if size == 0:
            return
        self.index = (self.index - 1) % size

    def reset(self) -> None:
        self.index = 0

    def clamp(self, size: int) -> None:
        """Pull the index back inside ``[0, size)``; 0 for an empty view."""
        if size == 0:
            self.index = 0
        else:
            self.index = min(max(self.index, 0), size - 1)

    def __repr__(self) -> str:
        return f"SelectionCursor(index={self.index})"
