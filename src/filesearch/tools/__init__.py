"""
Search tools for filesearch.

This package contains the search engine itself: root enumeration, work
partitioning, the parallel filesystem walker and result aggregation, plus the
platform capabilities they depend on.
"""

from .aggregator import aggregate
from .fs_walker import FSWalker, SearchCounters, TraversalResult, path_matches, search_files
from .partition import partition, partition_all, prune_nested_roots
from .platforms import Platform, current_platform, reveal_in_file_manager
from .roots import enumerate_roots

__all__ = [
    'aggregate',
    'FSWalker',
    'SearchCounters',
    'TraversalResult',
    'path_matches',
    'search_files',
    'partition',
    'partition_all',
    'prune_nested_roots',
    'Platform',
    'current_platform',
    'reveal_in_file_manager',
    'enumerate_roots',
]
