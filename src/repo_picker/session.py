"""Session state for one picker run and the mutators that drive it.

``Session`` is the only mutable state of the picker. ``apply`` performs the
single mutation that an ``Action`` stands for and keeps the cursor valid for
the current view before returning.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .cursor import SelectionCursor
from .fuzzy import DEFAULT_THRESHOLD, Scorer, fuzzy_score
from .machine import next_mode
from .store import ItemStore
from .types import Action, Item, Mode

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Mutable state of one picker session.

    Attributes:
        store: All items and the current filtered view.
        query: Current search text.
        mode: Whether keys navigate or edit the query.
        cursor: Highlighted row within ``store.current_view()``.
        running: False once the session should end.
        selected: Item chosen on confirm, if any.
        threshold: Minimum score for an item to stay in the view.
        scorer: Scoring function used for ranking.
    """

    store: ItemStore
    query: str = ""
    mode: Mode = Mode.NAVIGATION
    cursor: SelectionCursor = field(default_factory=SelectionCursor)
    running: bool = True
    selected: Item | None = None
    threshold: int = DEFAULT_THRESHOLD
    scorer: Scorer = fuzzy_score

    @classmethod
    def create(
        cls,
        items: Iterable[Item],
        threshold: int = DEFAULT_THRESHOLD,
        scorer: Scorer = fuzzy_score,
    ) -> "Session":
        return cls(store=ItemStore(items), threshold=threshold, scorer=scorer)

    @property
    def view(self) -> tuple[Item, ...]:
        return self.store.current_view()

    @property
    def current_item(self) -> Item | None:
        """The highlighted item, or None when the view is empty."""
        view = self.view
        if not view:
            return None
        return view[self.cursor.index]

    # -- mutators -----------------------------------------------------------

    def type_char(self, ch: str) -> None:
        self.query += ch
        self._requery()

    def delete_char(self) -> None:
        """Drop the last query character; harmless on an empty query."""
        self.query = self.query[:-1]
        self._requery()

    def move_down(self) -> None:
        self.cursor.advance(len(self.view))

    def move_up(self) -> None:
        self.cursor.retreat(len(self.view))

    def confirm(self) -> Item | None:
        """Select the highlighted item and stop; no-op on an empty view."""
        item = self.current_item
        if item is None:
            logger.debug("confirm ignored: no item under cursor")
            return None
        self.selected = item
        self.running = False
        return item

    def quit(self) -> None:
        self.running = False

    def _requery(self) -> None:
        self.store.apply_query(self.query, threshold=self.threshold, scorer=self.scorer)
        self.cursor.reset()
        logger.debug("query %r matched %d of %d", self.query, len(self.view), len(self.store.all_items))

    # -- dispatch -----------------------------------------------------------

    def apply(self, action: Action, key: str = "") -> None:
        """Apply the mutation for ``action``; ``key`` is the typed character."""
        if action is Action.TYPE_CHAR:
            self.type_char(key)
        elif action is Action.DELETE_CHAR:
            self.delete_char()
        elif action is Action.MOVE_DOWN:
            self.move_down()
        elif action is Action.MOVE_UP:
            self.move_up()
        elif action is Action.CONFIRM:
            self.confirm()
        elif action is Action.QUIT:
            self.quit()
        self.mode = next_mode(self.mode, action)
