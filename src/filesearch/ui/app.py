"""
Interactive front end state for filesearch.

``App`` holds what the user typed, which box has focus and which result is
selected, and translates key presses into controller calls. It does no
drawing; see ``filesearch.ui.render``.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from ..errors import RevealError
from ..models.config import FinderConfig
from ..session import SearchController, SessionState
from ..tools.platforms import reveal_in_file_manager
from .keys import Key, KeyPress


logger = logging.getLogger(__name__)


class Focus(Enum):
    """Which part of the screen receives typed keys."""
    QUERY = "query"
    ROOT = "root"
    RESULTS = "results"

    def next(self) -> 'Focus':
        order = [Focus.QUERY, Focus.ROOT, Focus.RESULTS]
        return order[(order.index(self) + 1) % len(order)]


class App:
    """
    State of the interactive search screen.

    Attributes:
        controller: Search controller running the searches
        query: Text of the query box
        root: Text of the root box (blank means the whole machine)
        focus: Box receiving key presses
        selected: Index of the selected result, or None
        running: False once the user asked to quit
    """

    def __init__(self, controller: Optional[SearchController] = None,
                 config: Optional[FinderConfig] = None,
                 reveal: Callable[[str], object] = reveal_in_file_manager):
        self.config = config or (controller.config if controller else FinderConfig())
        self.controller = controller or SearchController(self.config)
        self.reveal = reveal
        self.query = ""
        self.root = self.config.search.default_root or ""
        self.focus = Focus.QUERY
        self.selected: Optional[int] = None
        self.running = True

    @property
    def results(self):
        return self.controller.results

    @property
    def searching(self) -> bool:
        return self.controller.is_running

    def status_line(self) -> str:
        return self.controller.status_line()

    def tick(self) -> None:
        """Poll the controller once; select the first result of a finished search."""
        outcome = self.controller.poll_tick()
        if outcome == SessionState.COMPLETED:
            self.selected = 0 if self.results else None

    def start_search(self) -> None:
        self.controller.start_search(self.query, self.root)

    def handle_key(self, press: KeyPress) -> None:
        """Apply one key press to the screen state."""
        key = press.key
        if key == Key.ESC:
            self.running = False
        elif key == Key.TAB:
            self.focus = self.focus.next()
        elif key == Key.BACKSPACE:
            if self.focus == Focus.QUERY:
                self.query = self.query[:-1]
            elif self.focus == Focus.ROOT:
                self.root = self.root[:-1]
        elif key == Key.ENTER:
            if self.focus == Focus.RESULTS:
                self.open_selected()
            else:
                self.start_search()
        elif key == Key.UP:
            if self.focus == Focus.RESULTS:
                self.select_prev()
        elif key == Key.DOWN:
            if self.focus == Focus.RESULTS:
                self.select_next()
        elif key == Key.CHAR:
            if self.focus == Focus.QUERY:
                self.query += press.char
            elif self.focus == Focus.ROOT:
                self.root += press.char

    def select_next(self) -> None:
        if not self.results:
            self.selected = None
            return
        current = self.selected or 0
        self.selected = min(current + 1, len(self.results) - 1)

    def select_prev(self) -> None:
        if not self.results:
            self.selected = None
            return
        current = self.selected or 0
        self.selected = max(current - 1, 0)

    def selected_path(self) -> Optional[str]:
        if self.selected is None or not 0 <= self.selected < len(self.results):
            return None
        return self.results[self.selected]

    def open_selected(self) -> None:
        """Reveal the selected result in the platform file manager."""
        if self.searching:
            self.controller.status = "Searching, cannot open a file yet."
            return

        if self.selected is None:
            self.controller.status = "No item selected."
            return

        path = self.selected_path()
        if path is None:
            self.controller.status = "Selected item is not valid."
            return

        try:
            self.reveal(path)
        except RevealError as e:
            logger.warning(f"Failed to reveal {path}: {e}")
            self.controller.status = f"Failed to open file manager: {e}"
            return

        self.controller.status = f"Opened file manager at: {path}"
