"""
Search query data models for filesearch.

This module defines the structures describing what the user asked for: the
substring to look for and the part of the filesystem to look in.
"""

from typing import Dict, Optional, Any
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_MAX_RESULTS = 10_000


class ScopeKind(Enum):
    """Which part of the filesystem a search covers."""
    WHOLE_MACHINE = "whole_machine"
    ROOTED = "rooted"


class SearchScope(BaseModel):
    """
    The part of the filesystem a search should cover.

    Either every top-level filesystem root of the machine, or a single
    user-supplied path. The path is not checked for existence here; a
    missing path simply produces no work.

    Attributes:
        kind: Whole machine or a single rooted path
        path: The user-supplied root (only for rooted scopes)
    """

    model_config = {"frozen": True}

    kind: ScopeKind = Field(ScopeKind.WHOLE_MACHINE, description="Scope kind")
    path: Optional[str] = Field(None, description="Root path for rooted scopes")

    @field_validator('kind', mode='before')
    @classmethod
    def validate_kind(cls, v) -> ScopeKind:
        """Accept scope kinds given as strings."""
        if isinstance(v, str):
            try:
                return ScopeKind(v)
            except ValueError:
                raise ValueError(f"Invalid scope kind: {v}")
        return v

    @model_validator(mode='after')
    def validate_scope(self):
        """A rooted scope needs a path, a whole-machine scope must not have one."""
        if self.kind == ScopeKind.ROOTED:
            if not self.path or not self.path.strip():
                raise ValueError("Rooted scope requires a non-empty path")
        elif self.path is not None:
            raise ValueError("Whole-machine scope cannot carry a path")
        return self

    @classmethod
    def whole_machine(cls) -> 'SearchScope':
        return cls(kind=ScopeKind.WHOLE_MACHINE)

    @classmethod
    def rooted(cls, path: str) -> 'SearchScope':
        return cls(kind=ScopeKind.ROOTED, path=path.strip())

    @classmethod
    def from_text(cls, text: Optional[str]) -> 'SearchScope':
        """Build a scope from the root box text; blank means the whole machine."""
        if text is None or not text.strip():
            return cls.whole_machine()
        return cls.rooted(text)

    def is_whole_machine(self) -> bool:
        return self.kind == ScopeKind.WHOLE_MACHINE

    def describe(self) -> str:
        """Human-readable label used in status messages."""
        if self.is_whole_machine():
            return "entire computer"
        return self.path

    def __str__(self) -> str:
        return self.describe()


class SearchQuery(BaseModel):
    """
    A substring search request.

    Attributes:
        text: Substring to look for, stripped of surrounding whitespace
        scope: Part of the filesystem to search
        max_results: Maximum number of matches to keep
    """

    text: str = Field(..., min_length=1, description="Substring to search for")
    scope: SearchScope = Field(default_factory=SearchScope.whole_machine, description="Search scope")
    max_results: int = Field(DEFAULT_MAX_RESULTS, gt=0, description="Maximum number of results")

    @field_validator('text')
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject blank queries and strip surrounding whitespace."""
        if not v or not v.strip():
            raise ValueError("Search query text cannot be empty")
        return v.strip()

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data['scope'] = {'kind': self.scope.kind.value, 'path': self.scope.path}
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchQuery':
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Query: '{self.text}'"]
        parts.append(f"Scope: {self.scope.describe()}")
        parts.append(f"Max results: {self.max_results}")
        return " | ".join(parts)


def expand_root(path: str) -> Path:
    """Turn user-entered root text into a Path, expanding ``~``."""
    return Path(path.strip()).expanduser()
