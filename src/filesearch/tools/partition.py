"""
Work partitioning for filesearch.

Each search root is split into its immediate children so that the worker
pool gets many independent units even when there are only one or two roots.
"""

import os
import logging
from pathlib import Path
from typing import Iterable, List


logger = logging.getLogger(__name__)


def partition(root: Path) -> List[Path]:
    """
    Expand a root into independent work items.

    - a regular file is a single item
    - a directory yields one item per direct child entry
    - an empty or unreadable directory yields the directory itself
    - anything else (missing path, dangling link) yields nothing

    A root that is a symbolic link is followed but keeps the path it was
    given, so work items and matches carry the link's path text. Children
    that are symbolic links are left out.

    Args:
        root: Root path to partition

    Returns:
        List of work item paths
    """
    root = Path(root)
    if root.is_file():
        return [root]

    if not root.is_dir():
        logger.debug(f"Root is neither a file nor a directory: {root}")
        return []

    items = []
    try:
        with os.scandir(root) as entries:
            for entry in entries:
                if entry.is_symlink():
                    continue
                items.append(root / entry.name)
    except OSError as e:
        logger.debug(f"Cannot list {root}: {e}")

    if not items:
        items.append(root)

    return items


def prune_nested_roots(roots: Iterable[Path]) -> List[Path]:
    """
    Drop roots that repeat or lie inside another root.

    Paths are compared as written, without resolving links. Order of the
    remaining roots is kept.
    """
    candidates = [Path(root) for root in roots]
    kept: List[Path] = []
    for root in candidates:
        if root in kept:
            continue
        if any(other in root.parents for other in candidates):
            logger.debug(f"Skipping root {root}, already covered by an enclosing root")
            continue
        kept.append(root)
    return kept


def partition_all(roots: Iterable[Path]) -> List[Path]:
    """Partition several roots and concatenate their work items."""
    items = []
    for root in prune_nested_roots(roots):
        items.extend(partition(root))
    return items
