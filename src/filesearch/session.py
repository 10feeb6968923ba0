"""
Search session control for filesearch.

A ``SearchController`` runs at most one search at a time on a background
thread and hands the finished ``SearchOutput`` to the front end through a
one-shot channel. The front end polls the channel once per tick and never
blocks on the search.
"""

import threading
import time
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

from .errors import ChannelError
from .models.config import FinderConfig
from .models.search_query import SearchQuery, SearchScope
from .models.search_results import SearchOutput
from .tools.fs_walker import search_files
from .tools.platforms import Platform, describe_roots
from .tools.roots import enumerate_roots


logger = logging.getLogger(__name__)

SPINNER = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧"]

IDLE_STATUS = "Type a query, Enter to search, Tab to switch box, Esc to quit"

SearchFunction = Callable[[str, List[Path], int, Optional[int]], SearchOutput]


class ChannelStatus(Enum):
    """Outcome of a non-blocking receive."""
    READY = "ready"
    EMPTY = "empty"
    DISCONNECTED = "disconnected"


class OneShotChannel:
    """
    Single-producer, single-consumer channel carrying at most one value.

    The producer sends once and closes; closing without sending tells the
    consumer the producer is gone.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Any = None
        self._has_value = False
        self._closed = False

    def send(self, value: Any) -> None:
        """
        Deliver the value.

        Raises:
            ChannelError: If a value was already sent or the channel is closed
        """
        with self._lock:
            if self._closed:
                raise ChannelError("Cannot send on a closed channel")
            if self._has_value:
                raise ChannelError("One-shot channel already holds a value")
            self._value = value
            self._has_value = True

    def close(self) -> None:
        with self._lock:
            self._closed = True

    def try_receive(self) -> Tuple[ChannelStatus, Any]:
        """Take the value if one is waiting, without blocking."""
        with self._lock:
            if self._has_value:
                value = self._value
                self._value = None
                self._has_value = False
                self._closed = True
                return ChannelStatus.READY, value
            if self._closed:
                return ChannelStatus.DISCONNECTED, None
            return ChannelStatus.EMPTY, None


class SessionState(Enum):
    """Lifecycle states of the search controller."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    DISCONNECTED = "disconnected"


@dataclass
class SearchSession:
    """
    One in-flight search.

    Attributes:
        query: The validated query being run
        channel: Delivery channel for the finished output
        started_at: Monotonic start time
        thread: Background thread running the search
    """
    query: SearchQuery
    channel: OneShotChannel
    started_at: float
    thread: threading.Thread

    @property
    def scope_label(self) -> str:
        return self.query.scope.describe()


class SearchController:
    """
    Owns the lifecycle of searches for an interactive front end.

    States go IDLE -> RUNNING -> COMPLETED or DISCONNECTED, and straight back
    to IDLE once the outcome has been applied. ``last_outcome`` keeps the
    terminal state of the most recent search.
    """

    def __init__(self, config: Optional[FinderConfig] = None, platform: Optional[Platform] = None,
                 search_fn: SearchFunction = search_files,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the controller.

        Args:
            config: Application configuration
            platform: Capability implementation used to enumerate roots
            search_fn: Function running one complete search
            clock: Monotonic clock used for elapsed times
        """
        self.config = config or FinderConfig()
        self.platform = platform
        self.search_fn = search_fn
        self.clock = clock

        self.state = SessionState.IDLE
        self.last_outcome: Optional[SessionState] = None
        self.results: Tuple[str, ...] = ()
        self.last_output: Optional[SearchOutput] = None
        self.last_elapsed: Optional[float] = None
        self.status = IDLE_STATUS
        self.spinner_idx = 0
        self._session: Optional[SearchSession] = None

    @property
    def is_running(self) -> bool:
        return self._session is not None

    def start_search(self, query: str, scope_text: str = "") -> str:
        """
        Validate input and start a background search.

        Args:
            query: Raw query text from the user
            scope_text: Raw root text; blank means the whole machine

        Returns:
            The new status message
        """
        if self.is_running:
            self.status = "Search already in progress, please wait..."
            return self.status

        if not query or not query.strip():
            self.status = "Query is empty. Type something to search."
            return self.status

        scope = SearchScope.from_text(scope_text)
        roots = enumerate_roots(scope, self.platform)
        if not roots:
            self.status = "No valid root to search."
            return self.status

        search_query = SearchQuery(text=query, scope=scope, max_results=self.config.search.max_results)
        channel = OneShotChannel()
        thread = threading.Thread(
            target=self._run_search,
            args=(search_query, roots, channel),
            name="filesearch-session",
            daemon=True,
        )
        self._session = SearchSession(
            query=search_query,
            channel=channel,
            started_at=self.clock(),
            thread=thread,
        )
        self.state = SessionState.RUNNING
        self.spinner_idx = 0
        logger.info(f"Starting search {search_query} over {describe_roots(roots)}")
        thread.start()

        self.status = "Started multi-threaded search"
        return self.status

    def _run_search(self, search_query: SearchQuery, roots: List[Path], channel: OneShotChannel) -> None:
        try:
            output = self.search_fn(
                search_query.text,
                roots,
                search_query.max_results,
                self.config.search.max_workers,
            )
            channel.send(output)
        except Exception:
            logger.exception(f"Search worker failed for {search_query}")
        finally:
            channel.close()

    def poll_tick(self) -> Optional[SessionState]:
        """
        Advance the spinner and check for a finished search without blocking.

        Returns:
            COMPLETED or DISCONNECTED when a search ended on this tick, else None
        """
        session = self._session
        if session is None:
            return None

        self.spinner_idx = (self.spinner_idx + 1) % len(SPINNER)

        status, output = session.channel.try_receive()
        if status == ChannelStatus.EMPTY:
            return None

        elapsed = self.clock() - session.started_at
        self._session = None
        self.state = SessionState.IDLE

        if status == ChannelStatus.READY:
            self.results = output.matched
            self.last_output = output
            self.last_elapsed = elapsed
            self.last_outcome = SessionState.COMPLETED
            self.status = (
                f"Done: {len(self.results)} results / {output.scanned} files scanned "
                f"in {session.scope_label} ({elapsed:.2f}s)"
            )
            logger.info(f"Search finished: {output} in {elapsed:.2f}s")
        else:
            self.last_outcome = SessionState.DISCONNECTED
            self.status = "Search thread disconnected."
            logger.warning(f"Search thread for {session.query} ended without a result")

        return self.last_outcome

    def wait(self, timeout: Optional[float] = None) -> Optional[SessionState]:
        """
        Block until the running search ends, then apply its outcome.

        Intended for non-interactive callers; the interactive loop only uses
        ``poll_tick``.
        """
        session = self._session
        if session is None:
            return None
        session.thread.join(timeout)
        if session.thread.is_alive():
            return None
        return self.poll_tick()

    def elapsed(self) -> float:
        if self._session is None:
            return 0.0
        return self.clock() - self._session.started_at

    def status_line(self) -> str:
        """Human-readable status for the front end."""
        if self.is_running:
            spin = SPINNER[self.spinner_idx]
            return f"{spin} Searching... {self.elapsed():.1f}s (multi-thread, include strategy)"
        return self.status
