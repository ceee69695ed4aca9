"""Item store: the fixed set of discovered items plus the current view."""

from __future__ import annotations

from collections.abc import Iterable

from .fuzzy import DEFAULT_THRESHOLD, Scorer, fuzzy_score, rank
from .types import Item


class ItemStore:
    """Immutable snapshot of all items and the filtered view derived from it.

    The view is only ever recomputed from the full set, so it cannot drift
    from ``rank(query, all_items)``.
    """

    def __init__(self, items: Iterable[Item] = ()):
        self._all: tuple[Item, ...] = ()
        self._view: tuple[Item, ...] = ()
        self.initialize(items)

    def initialize(self, items: Iterable[Item]) -> None:
        """Store the full set and reset the view to all of it."""
        self._all = tuple(items)
        self._view = self._all

    @property
    def all_items(self) -> tuple[Item, ...]:
        return self._all

    def current_view(self) -> tuple[Item, ...]:
        return self._view

    def apply_query(
        self,
        query: str,
        threshold: int = DEFAULT_THRESHOLD,
        scorer: Scorer = fuzzy_score,
    ) -> tuple[Item, ...]:
        """Re-rank the full set against ``query`` and make it the view."""
        self._view = rank(query, self._all, threshold=threshold, scorer=scorer)
        return self._view
