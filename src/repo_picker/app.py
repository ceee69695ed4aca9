"""Interactive picker loop using Rich.Live.

``Picker`` owns one ``Session`` and drives it from key presses:
render, block for a key, classify it, apply it, repeat until the session
stops. Screen setup and restoration belong to the ``Live`` context.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

import readchar
from rich.console import Console
from rich.live import Live

from .fuzzy import DEFAULT_THRESHOLD, Scorer, fuzzy_score
from .machine import DEFAULT_BINDINGS, KeyBindings, classify
from .render import build_frame, to_renderable, visible_rows
from .session import Session
from .themes import DEFAULT_THEME, Theme
from .types import Action, Item

logger = logging.getLogger(__name__)


class Picker:
    """Keyboard-driven repository picker.

    Keyboard controls:
        - Navigation mode: ``i`` edit query, ``q`` quit, Up/Down or j/k move
        - Editing mode: type to filter, Backspace delete, Esc stop editing
        - Both modes: Enter selects the highlighted repository

    Args:
        items: Repositories to choose from, in discovery order.
        threshold: Minimum fuzzy score for an item to stay listed.
        bindings: Keys for entering edit mode and quitting.
        theme: Visual theme.
        console: Rich Console to draw on (auto-created if not provided).
        read_key: Blocking key reader, ``readchar.readkey`` by default.
        on_select: Called with the chosen item on confirm. ``OSError`` or
            ``UnicodeError`` from it is logged and kept in ``delivery_error``;
            the session still ends.
        scorer: Fuzzy scoring function.
    """

    def __init__(
        self,
        items: Iterable[Item],
        *,
        threshold: int = DEFAULT_THRESHOLD,
        bindings: KeyBindings = DEFAULT_BINDINGS,
        theme: Theme | None = None,
        console: Console | None = None,
        read_key: Callable[[], str] | None = None,
        on_select: Callable[[Item], None] | None = None,
        scorer: Scorer = fuzzy_score,
    ):
        self.session = Session.create(items, threshold=threshold, scorer=scorer)
        self.bindings = bindings
        self.theme = theme or DEFAULT_THEME
        self.console = console or Console()
        self.read_key = read_key or readchar.readkey
        self.on_select = on_select
        self.delivery_error: OSError | UnicodeError | None = None

    def render(self):
        """Build the renderable for the current session state."""
        frame = build_frame(
            self.session,
            visible_rows(self.console.height, self.theme),
            self.bindings,
        )
        return to_renderable(frame, self.theme)

    def handle_key(self, key: str) -> Action:
        """Classify ``key`` and apply it to the session."""
        action = classify(self.session.mode, key, self.bindings)
        if action is Action.IGNORE:
            return action

        self.session.apply(action, key)
        if action is Action.CONFIRM and self.session.selected is not None:
            self._deliver(self.session.selected)
        return action

    def _deliver(self, item: Item) -> None:
        if self.on_select is None:
            return
        try:
            self.on_select(item)
        except (OSError, UnicodeError) as e:
            logger.warning("could not deliver selection %r: %s", item.path, e)
            self.delivery_error = e

    def run(self) -> Item | None:
        """Show the picker and block until a repository is chosen or the user quits.

        Returns:
            The selected item, or None if the user quit or pressed Ctrl+C.
        """
        with Live(
            self.render(),
            console=self.console,
            screen=True,
            auto_refresh=False,
            transient=True,
        ) as live:
            while self.session.running:
                try:
                    key = self.read_key()
                except KeyboardInterrupt:
                    self.session.quit()
                    break
                self.handle_key(key)
                if self.session.running:
                    live.update(self.render(), refresh=True)

        return self.session.selected


def pick(items: Iterable[Item], **kwargs) -> Item | None:
    """Run a picker over ``items`` and return the chosen one."""
    return Picker(items, **kwargs).run()
