"""
Parallel filesystem walker for filesearch.

This module runs independent work items across a thread pool, walks each
directory subtree without following symbolic links, and keeps every file
whose full path contains the query. Matches are capped by a counter shared
between workers; the number of files scanned is never capped.
"""

import os
import stat
import threading
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..models.config import SearchConfig
from ..models.search_results import SearchOutput
from .aggregator import aggregate
from .partition import partition_all


logger = logging.getLogger(__name__)


class AtomicCounter:
    """Integer counter that can be incremented from many threads."""

    def __init__(self, value: int = 0):
        self._value = value
        self._lock = threading.Lock()

    def fetch_add(self, amount: int = 1) -> int:
        """Add ``amount`` and return the value held before the addition."""
        with self._lock:
            previous = self._value
            self._value += amount
            return previous

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass
class SearchCounters:
    """
    Counters shared by all workers of one traversal.

    Attributes:
        scanned: Files visited, matching or not
        hits: Matches seen, including those dropped by the cap
        errors: Entries or listings that could not be read
    """
    scanned: AtomicCounter = field(default_factory=AtomicCounter)
    hits: AtomicCounter = field(default_factory=AtomicCounter)
    errors: AtomicCounter = field(default_factory=AtomicCounter)

    def snapshot(self) -> Dict[str, int]:
        return {
            'files_scanned': self.scanned.value,
            'files_matched': self.hits.value,
            'errors': self.errors.value,
        }


@dataclass
class TraversalResult:
    """
    Raw output of a traversal before aggregation.

    Attributes:
        scanned: Total files visited
        fragments: Per-work-item lists of kept matches
        hits: Total matches seen (may exceed the cap)
        errors: Number of unreadable entries
    """
    scanned: int
    fragments: List[List[str]]
    hits: int = 0
    errors: int = 0


def path_matches(path_text: str, folded_query: str) -> bool:
    """Case-insensitive substring test of a full path against a folded query."""
    return folded_query in path_text.casefold()


class FSWalker:
    """
    Filesystem walker that fans work items out across a thread pool.

    Each work item is processed independently: a regular file is tested
    directly, a directory is walked recursively. Symbolic links below a work
    item are never followed, so linked subtrees are not visited and cycles
    cannot occur.
    Unreadable entries are skipped and counted, never fatal.
    """

    def __init__(self, config: Optional[SearchConfig] = None, max_workers: Optional[int] = None):
        """
        Initialize the walker.

        Args:
            config: Search configuration (worker count, result cap)
            max_workers: Explicit worker count, overrides the configuration
        """
        self.config = config or SearchConfig()
        self.max_workers = max_workers or self.config.effective_workers()
        self._stats = SearchCounters().snapshot()

    def traverse(self, work_items: Sequence[Path], query: str, max_results: Optional[int] = None,
                 counters: Optional[SearchCounters] = None) -> TraversalResult:
        """
        Process all work items concurrently.

        Args:
            work_items: Independent paths to process
            query: Substring to look for (matched case-insensitively)
            max_results: Cap on kept matches (defaults to the configured cap)
            counters: Shared counters, created per call when omitted

        Returns:
            TraversalResult with per-item match fragments and totals

        Raises:
            ValueError: If the query is empty or whitespace-only
        """
        if not query or not query.strip():
            raise ValueError("Search query text cannot be empty")

        if max_results is None:
            max_results = self.config.max_results
        folded_query = query.casefold()
        counters = counters or SearchCounters()
        work_items = list(work_items)
        fragments: List[List[str]] = []

        if work_items:
            workers = max(1, min(self.max_workers, len(work_items)))
            logger.info(f"Traversing {len(work_items)} work items with {workers} workers")

            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="filesearch-walk") as executor:
                futures = {
                    executor.submit(self._process_item, Path(item), folded_query, max_results, counters): item
                    for item in work_items
                }
                for future in as_completed(futures):
                    try:
                        fragments.append(future.result())
                    except Exception:
                        logger.exception(f"Unexpected error processing work item {futures[future]}")
                        counters.errors.fetch_add(1)

        self._stats = counters.snapshot()
        return TraversalResult(
            scanned=counters.scanned.value,
            fragments=fragments,
            hits=counters.hits.value,
            errors=counters.errors.value,
        )

    def _process_item(self, item: Path, folded_query: str, max_results: int,
                      counters: SearchCounters) -> List[str]:
        """
        Test a file item or walk a directory item.

        The item itself is followed if it is a link, so a root given as a
        link is still searched. Links found while walking are not.
        """
        try:
            mode = os.stat(item).st_mode
        except OSError as e:
            logger.debug(f"Cannot stat work item {item}: {e}")
            counters.errors.fetch_add(1)
            return []

        found: List[str] = []
        if stat.S_ISREG(mode):
            self._record_file(str(item), folded_query, max_results, counters, found)
        elif stat.S_ISDIR(mode):
            self._walk_directory(item, folded_query, max_results, counters, found)
        return found

    def _walk_directory(self, root: Path, folded_query: str, max_results: int,
                        counters: SearchCounters, found: List[str]) -> None:
        """
        Walk a directory subtree iteratively.

        Only real directories are descended into and only regular files are
        counted; symbolic links of either kind are ignored.
        """
        pending = [str(root)]
        while pending:
            current = pending.pop()
            try:
                with os.scandir(current) as entries:
                    for entry in entries:
                        try:
                            if entry.is_dir(follow_symlinks=False):
                                pending.append(entry.path)
                            elif entry.is_file(follow_symlinks=False):
                                self._record_file(entry.path, folded_query, max_results, counters, found)
                        except OSError as e:
                            logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
                            counters.errors.fetch_add(1)
            except OSError as e:
                logger.debug(f"Cannot list directory {current}: {e}")
                counters.errors.fetch_add(1)

    @staticmethod
    def _record_file(path_text: str, folded_query: str, max_results: int,
                     counters: SearchCounters, found: List[str]) -> None:
        counters.scanned.fetch_add(1)
        if path_matches(path_text, folded_query):
            # keep only matches that arrive before the shared count reaches the cap
            if counters.hits.fetch_add(1) < max_results:
                found.append(path_text)

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last traversal.

        Returns:
            Dictionary containing operation statistics
        """
        return dict(self._stats)


def search_files(query: str, roots: Iterable[Path], max_results: int,
                 max_workers: Optional[int] = None) -> SearchOutput:
    """
    Run a complete search: partition the roots, traverse, aggregate.

    Args:
        query: Substring to look for
        roots: Top-level roots to search
        max_results: Cap on kept matches
        max_workers: Worker threads (defaults to the logical core count)

    Returns:
        The finished SearchOutput
    """
    work_items = partition_all(roots)
    walker = FSWalker(SearchConfig(max_results=max_results, max_workers=max_workers))
    result = walker.traverse(work_items, query, max_results)
    stats = walker.get_stats()
    if stats['errors']:
        logger.info(f"Skipped {stats['errors']} unreadable entries")
    return aggregate(result.fragments, result.scanned, max_results)
