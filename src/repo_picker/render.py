"""Render model for the picker screen.

``build_frame`` maps a session to a plain ``Frame`` with three regions: the
search box, the list, and the help line. It touches no terminal state.
``to_renderable`` turns a frame into a Rich ``Layout`` for ``Live`` to draw.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.layout import Layout
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from .keys import key_label
from .machine import DEFAULT_BINDINGS, KeyBindings
from .session import Session
from .themes import DEFAULT_THEME, Theme
from .types import Mode


@dataclass(frozen=True)
class SearchField:
    text: str
    editing: bool


@dataclass(frozen=True)
class Row:
    name: str
    path: str
    selected: bool


@dataclass(frozen=True)
class ListRegion:
    """Visible slice of the filtered view.

    Attributes:
        rows: Rows inside the scroll window.
        above: Number of rows hidden above the window.
        below: Number of rows hidden below the window.
        total: Size of the whole filtered view.
    """

    rows: tuple[Row, ...]
    above: int
    below: int
    total: int


@dataclass(frozen=True)
class HelpLine:
    hints: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class Frame:
    search: SearchField
    items: ListRegion
    help: HelpLine


def help_hints(mode: Mode, bindings: KeyBindings = DEFAULT_BINDINGS) -> tuple[tuple[str, str], ...]:
    """(key, description) pairs for the help line in ``mode``."""
    if mode is Mode.EDITING:
        return (
            ("ESC", "to exit Edit mode"),
            ("↑↓", "move"),
            ("↵", "open"),
        )
    return (
        (key_label(bindings.edit), "to enter Edit mode"),
        ("↑↓/jk", "move"),
        ("↵", "open"),
        (key_label(bindings.quit), "to exit"),
    )


def window(cursor: int, total: int, max_visible: int) -> tuple[int, int]:
    """Start/end of the scroll window so that ``cursor`` stays visible."""
    if total <= max_visible:
        return 0, total
    start = max(0, cursor - max_visible + 1)
    return start, start + max_visible


def visible_rows(height: int, theme: Theme = DEFAULT_THEME) -> int:
    """List rows that fit on a terminal ``height`` lines tall."""
    # 2 border lines on the list panel, 2 more reserved for scroll hints
    available = height - theme.search_height - theme.help_height - 4
    return max(theme.min_visible_items, available)


def build_frame(
    session: Session,
    max_visible: int,
    bindings: KeyBindings = DEFAULT_BINDINGS,
) -> Frame:
    """Describe what the screen should show for ``session``."""
    view = session.view
    total = len(view)
    cursor = session.cursor.index if total else -1
    start, end = window(max(cursor, 0), total, max(1, max_visible))

    rows = tuple(
        Row(name=item.name, path=item.path, selected=(start + offset == cursor))
        for offset, item in enumerate(view[start:end])
    )
    return Frame(
        search=SearchField(text=session.query, editing=session.mode is Mode.EDITING),
        items=ListRegion(rows=rows, above=start, below=total - end, total=total),
        help=HelpLine(hints=help_hints(session.mode, bindings)),
    )


def displayable(text: str) -> str:
    """Replace undecodable filename bytes so the text can be written to a UTF-8 terminal."""
    try:
        return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
    except UnicodeEncodeError:
        return text.encode("utf-8", "replace").decode("utf-8")


def _search_panel(search: SearchField, theme: Theme) -> Panel:
    if search.editing:
        body = (
            f"[{theme.editing_color}]{escape(search.text)}[/{theme.editing_color}]"
            f"{escape(theme.caret_icon)}"
        )
        border = theme.editing_border_color
    else:
        body = escape(search.text)
        border = theme.border_color
    text = Text.from_markup(body, overflow="ellipsis")
    text.no_wrap = True
    return Panel(text, title="Search", title_align="left", border_style=border)


def _row_markup(row: Row, theme: Theme) -> str:
    name = escape(displayable(row.name))
    path = f"  [{theme.dim_color}]{escape(displayable(row.path))}[/{theme.dim_color}]" if theme.show_paths else ""
    if row.selected:
        prefix = f"[{theme.selected_color}]{escape(theme.cursor_icon)}[/{theme.selected_color}]"
        return f"{prefix} [{theme.selected_color}]{name}[/{theme.selected_color}]{path}"
    return f"  {name}{path}"


def _list_panel(region: ListRegion, theme: Theme) -> Panel:
    lines = []
    if region.above > 0:
        lines.append(
            f"[{theme.dim_color}]  {escape(theme.scroll_up_icon)} "
            f"{region.above} more above[/{theme.dim_color}]"
        )
    lines.extend(_row_markup(row, theme) for row in region.rows)
    if region.below > 0:
        lines.append(
            f"[{theme.dim_color}]  {escape(theme.scroll_down_icon)} "
            f"{region.below} more below[/{theme.dim_color}]"
        )
    body = Text("\n", no_wrap=True, overflow="ellipsis").join(
        Text.from_markup(line, overflow="ellipsis") for line in lines
    )
    return Panel(
        body,
        title=f"Repos ({region.total})",
        title_align="left",
        border_style=theme.border_color,
    )


def _help_text(help_line: HelpLine, theme: Theme) -> Text:
    parts = [
        f"[{theme.key_color}]{escape(key)}[/{theme.key_color}] {escape(desc)}"
        for key, desc in help_line.hints
    ]
    text = Text.from_markup("Press " + " • ".join(parts), overflow="ellipsis")
    text.no_wrap = True
    return text


def to_renderable(frame: Frame, theme: Theme = DEFAULT_THEME) -> Layout:
    """Build the Rich layout for ``frame``: search, list, help from top to bottom."""
    layout = Layout()
    layout.split_column(
        Layout(_search_panel(frame.search, theme), name="search", size=theme.search_height),
        Layout(_list_panel(frame.items, theme), name="items", ratio=1),
        Layout(_help_text(frame.help, theme), name="help", size=theme.help_height),
    )
    return layout
