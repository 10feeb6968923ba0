"""
Search result data models for filesearch.

A finished search is described by a single immutable ``SearchOutput``: how
many files were looked at and which paths matched.
"""

from typing import Dict, Tuple, Any
from pydantic import BaseModel, Field, field_validator, model_validator


class SearchOutput(BaseModel):
    """
    Final result of one search.

    Produced exactly once per search and never modified afterwards.

    Attributes:
        scanned: Number of files examined, matching or not
        matched: Deduplicated, sorted matching paths
    """

    model_config = {"frozen": True}

    scanned: int = Field(0, ge=0, description="Number of files examined")
    matched: Tuple[str, ...] = Field(default_factory=tuple, description="Matching file paths")

    @field_validator('matched', mode='before')
    @classmethod
    def validate_matched(cls, v) -> Tuple[str, ...]:
        """Store matches as a sorted tuple without duplicates."""
        if v is None:
            return ()
        return tuple(sorted(set(v)))

    @model_validator(mode='after')
    def validate_counts(self):
        if len(self.matched) > self.scanned:
            raise ValueError("Matched count cannot exceed scanned count")
        return self

    def get_match_count(self) -> int:
        return len(self.matched)

    def is_empty(self) -> bool:
        return not self.matched

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data['matched'] = list(self.matched)
        data['match_count'] = self.get_match_count()
        return data

    def __str__(self) -> str:
        return f"Found {self.get_match_count()} matches | Scanned {self.scanned} files"
