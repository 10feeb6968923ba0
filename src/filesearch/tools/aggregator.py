"""
Result aggregation for filesearch.

Merges the per-worker match lists of a traversal into the final output.
"""

from typing import Iterable

from ..models.search_results import SearchOutput


def aggregate(fragments: Iterable[Iterable[str]], scanned: int, max_results: int) -> SearchOutput:
    """
    Merge match fragments into one deduplicated, sorted SearchOutput.

    The ordering depends only on the path text, never on which worker found a
    path first, so repeated searches over an unchanged tree give identical
    results.

    Args:
        fragments: Match lists produced by individual work items
        scanned: Total number of files visited
        max_results: Upper bound on the number of matches kept

    Returns:
        The finished SearchOutput
    """
    merged = set()
    for fragment in fragments:
        merged.update(fragment)

    matched = sorted(merged)[:max_results]
    return SearchOutput(scanned=scanned, matched=matched)
