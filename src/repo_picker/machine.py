"""Input mode state machine.

Keys are classified into an ``Action`` by looking them up in a per-mode
table. Only two actions change the mode: ENTER_EDIT from navigation and
LEAVE_EDIT from editing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .keys import is_backspace, is_down, is_enter, is_escape, is_printable, is_up
from .types import Action, Mode


@dataclass(frozen=True)
class KeyBindings:
    """Configurable single-character bindings for navigation mode."""

    edit: str = "i"
    quit: str = "q"


DEFAULT_BINDINGS = KeyBindings()

KeyTest = Callable[[str, KeyBindings], bool]

# Checked in order; the first matching test wins.
_COMMON: list[tuple[KeyTest, Action]] = [
    (lambda key, _b: is_enter(key), Action.CONFIRM),
    (lambda key, _b: is_up(key), Action.MOVE_UP),
    (lambda key, _b: is_down(key), Action.MOVE_DOWN),
]

TRANSITIONS: dict[Mode, list[tuple[KeyTest, Action]]] = {
    Mode.NAVIGATION: [
        (lambda key, b: key == b.edit, Action.ENTER_EDIT),
        (lambda key, b: key == b.quit, Action.QUIT),
        *_COMMON,
        (lambda key, _b: is_up(key, vim=True), Action.MOVE_UP),
        (lambda key, _b: is_down(key, vim=True), Action.MOVE_DOWN),
    ],
    Mode.EDITING: [
        (lambda key, _b: is_escape(key), Action.LEAVE_EDIT),
        (lambda key, _b: is_backspace(key), Action.DELETE_CHAR),
        *_COMMON,
        (lambda key, _b: is_printable(key), Action.TYPE_CHAR),
    ],
}

MODE_CHANGES: dict[tuple[Mode, Action], Mode] = {
    (Mode.NAVIGATION, Action.ENTER_EDIT): Mode.EDITING,
    (Mode.EDITING, Action.LEAVE_EDIT): Mode.NAVIGATION,
}


def classify(mode: Mode, key: str, bindings: KeyBindings = DEFAULT_BINDINGS) -> Action:
    """Return what ``key`` means in ``mode``; IGNORE if nothing matches."""
    for test, action in TRANSITIONS[mode]:
        if test(key, bindings):
            return action
    return Action.IGNORE


def next_mode(mode: Mode, action: Action) -> Mode:
    return MODE_CHANGES.get((mode, action), mode)
