"""Type definitions for repo-picker.

Shared enums and dataclasses used by the picker core. Modes and actions are
string enums so they render readably in logs and test failures.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Item:
    """One selectable repository.

    Attributes:
        name: Text shown in the list and matched against the query.
        path: Opaque payload handed to the delivery step on confirm.
    """

    name: str
    path: str

    def __str__(self) -> str:
        return self.name


class Mode(str, Enum):
    """Input modes of the picker."""

    NAVIGATION = "navigation"
    EDITING = "editing"

    def __str__(self) -> str:
        return self.value


class Action(str, Enum):
    """What a single key press means in the current mode."""

    ENTER_EDIT = "enter_edit"
    LEAVE_EDIT = "leave_edit"
    QUIT = "quit"
    CONFIRM = "confirm"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    TYPE_CHAR = "type_char"
    DELETE_CHAR = "delete_char"
    IGNORE = "ignore"

    def __str__(self) -> str:
        return self.value
