"""
Data models for filesearch.

This module contains the core data structures used throughout the system.
"""

from .search_query import SearchQuery, SearchScope, ScopeKind
from .search_results import SearchOutput
from .config import FinderConfig

__all__ = ['SearchQuery', 'SearchScope', 'ScopeKind', 'SearchOutput', 'FinderConfig']
