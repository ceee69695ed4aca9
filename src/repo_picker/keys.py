"""Keyboard input helpers for repo-picker.

Small predicates over the strings returned by ``readchar.readkey()`` so the
transition table reads as names instead of escape sequences.
"""

from __future__ import annotations

import readchar


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_up(key: str, vim: bool = False) -> bool:
    """Check if key is up arrow, or vim 'k' when ``vim`` is set."""
    return key == readchar.key.UP or (vim and key == "k")


def is_down(key: str, vim: bool = False) -> bool:
    """Check if key is down arrow, or vim 'j' when ``vim`` is set."""
    return key == readchar.key.DOWN or (vim and key == "j")


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_printable(key: str) -> bool:
    """Check if key is a single printable character."""
    return len(key) == 1 and key.isprintable()


def key_label(key: str) -> str:
    """Human readable name for a binding, used in help hints."""
    if key == " ":
        return "space"
    return key
