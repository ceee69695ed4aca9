"""repo-picker: fuzzy-find a repository from the terminal.

Example:
    from repo_picker import Picker, find_repositories

    items = find_repositories("~/code")
    chosen = Picker(items).run()  # Item or None
"""

__version__ = "0.1.0"

from .app import Picker, pick
from .cursor import SelectionCursor
from .discovery import find_repositories
from .fuzzy import DEFAULT_THRESHOLD, fuzzy_score, rank
from .machine import KeyBindings, classify, next_mode
from .session import Session
from .store import ItemStore
from .themes import DEFAULT_THEME, Theme
from .types import Action, Item, Mode

__all__ = [
    "__version__",
    # Picker
    "Picker",
    "pick",
    "Session",
    # Core pieces
    "Item",
    "ItemStore",
    "SelectionCursor",
    "Mode",
    "Action",
    "KeyBindings",
    "classify",
    "next_mode",
    # Ranking
    "fuzzy_score",
    "rank",
    "DEFAULT_THRESHOLD",
    # Discovery
    "find_repositories",
    # Theming
    "Theme",
    "DEFAULT_THEME",
]
