"""
Screen rendering for the interactive front end, built on rich.
"""

from typing import Optional

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .app import App, Focus


TITLE = "File Search TUI • Include Match • Multi-thread"
ROOT_PLACEHOLDER = "(leave empty = entire computer)"
NO_RESULTS = "(no results yet)"
HIGHLIGHT_SYMBOL = "▶ "

# title, query, root and status boxes are three rows each; the results box
# has two border rows
FIXED_ROWS = 4 * 3 + 2


def _box(content: Text, title: str, style: str = "") -> Panel:
    return Panel(content, title=title, title_align="left", style=style, height=3)


def visible_window(total: int, selected: Optional[int], rows: int) -> range:
    """Indices of the result rows to draw so the selection stays on screen."""
    rows = max(1, rows)
    if total <= rows:
        return range(total)
    anchor = selected or 0
    start = min(max(0, anchor - rows // 2), total - rows)
    return range(start, start + rows)


def render_results(app: App, rows: int) -> Panel:
    title = "Matched file paths (focus)" if app.focus == Focus.RESULTS else "Matched file paths"
    results = app.results

    if not results:
        body = Text(NO_RESULTS, style="bright_black")
    else:
        rows = min(rows, app.config.ui.max_visible_rows)
        body = Text()
        for index in visible_window(len(results), app.selected, rows):
            if index == app.selected:
                body.append(HIGHLIGHT_SYMBOL + results[index], style="white on blue")
            else:
                body.append(" " * len(HIGHLIGHT_SYMBOL) + results[index])
            body.append("\n")
        body.rstrip()

    return Panel(body, title=title, title_align="left")


def render(app: App, height: Optional[int] = None) -> Group:
    """
    Build the whole screen for the current state.

    Args:
        app: Screen state
        height: Terminal height, used to size the results list

    Returns:
        A rich renderable
    """
    focused = "yellow"

    title = _box(Text(TITLE, style="bright_magenta"), "Overview")
    query = _box(Text(app.query), "Query (include)", focused if app.focus == Focus.QUERY else "")
    root_text = app.root if app.root.strip() else ROOT_PLACEHOLDER
    root = _box(Text(root_text), "Root folder", focused if app.focus == Focus.ROOT else "")
    status = _box(Text(app.status_line(), style="yellow" if app.searching else "cyan"), "Status")

    rows = (height - FIXED_ROWS) if height else app.config.ui.max_visible_rows
    return Group(title, query, root, status, render_results(app, rows))
