"""
Root enumeration for filesearch.

Turns a search scope into the list of top-level paths to scan.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..models.search_query import SearchScope, expand_root
from .platforms import Platform, current_platform, describe_roots


logger = logging.getLogger(__name__)


def enumerate_roots(scope: SearchScope, platform: Optional[Platform] = None) -> List[Path]:
    """
    Produce the top-level roots for a scope.

    A rooted scope yields exactly its own path without checking that it
    exists; a missing root is discovered during partitioning and simply
    produces no work. The whole-machine scope asks the platform for its
    volume roots, which may be empty.

    Args:
        scope: The scope to enumerate
        platform: Capability implementation (defaults to the host platform)

    Returns:
        List of root paths
    """
    if not scope.is_whole_machine():
        return [expand_root(scope.path)]

    roots = (platform or current_platform()).search_roots()
    logger.debug(f"Whole-machine roots: {describe_roots(roots)}")
    return roots
