"""Configurable theme for the picker screen.

The Theme dataclass holds every visual knob: colors, icons, layout, and the
help hints shown for each mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any

from rich.errors import StyleSyntaxError
from rich.style import Style

logger = logging.getLogger(__name__)


@dataclass
class Theme:
    """Visual theme for the picker.

    All colors use Rich markup format (e.g., "green", "bold cyan", "dim").

    Attributes:
        selected_color: Color for the highlighted row.
        editing_color: Color of the search text while editing.
        dim_color: Color for secondary text (paths, scroll hints).
        key_color: Color for key names in the help line.
        border_color: Color for panel borders.
        editing_border_color: Border color of the search box while editing.

        cursor_icon: Character shown next to the highlighted row.
        caret_icon: Block drawn after the query while editing.
        scroll_up_icon: Character indicating more rows above.
        scroll_down_icon: Character indicating more rows below.

        show_paths: Show each repository path next to its name.
        search_height: Rows taken by the search box (with borders).
        help_height: Rows taken by the help line.
        min_visible_items: Lower bound on list rows before scrolling.
    """

    # Colors
    selected_color: str = "bold red"
    editing_color: str = "red"
    dim_color: str = "dim"
    key_color: str = "bold"
    border_color: str = "cyan"
    editing_border_color: str = "red"

    # Icons
    cursor_icon: str = "›"
    caret_icon: str = "█"
    scroll_up_icon: str = "↑"
    scroll_down_icon: str = "↓"

    # Layout
    show_paths: bool = True
    search_height: int = 3
    help_height: int = 1
    min_visible_items: int = 1

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Theme":
        """Build a theme from config overrides.

        Unknown keys are ignored. Values of the wrong type, colors Rich cannot
        parse, and sizes below 1 are dropped with a warning.
        """
        defaults = cls()
        accepted: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            expected = type(getattr(defaults, f.name))
            problem = None
            if type(value) is not expected:
                problem = f"expected {expected.__name__}"
            elif f.name.endswith("_color"):
                try:
                    Style.parse(value)
                except StyleSyntaxError as e:
                    problem = str(e)
            elif expected is int and value < 1:
                problem = "must be at least 1"

            if problem:
                logger.warning("ignoring theme.%s=%r: %s", f.name, value, problem)
                continue
            accepted[f.name] = value
        return cls(**accepted)


# Default theme used when none is specified
DEFAULT_THEME = Theme()
