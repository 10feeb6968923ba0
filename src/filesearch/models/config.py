"""
Configuration data models for filesearch.

This module defines the settings that tune the search engine, the interactive
terminal front end and logging.
"""

import logging
import os
from typing import Dict, List, Optional, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator

from .search_query import DEFAULT_MAX_RESULTS


DEFAULT_LOG_FILE = "~/.filesearch/filesearch.log"


class SearchConfig(BaseModel):
    """
    Configuration for the search engine.

    Attributes:
        max_results: Maximum number of matches kept per search
        max_workers: Worker threads for traversal (None means one per logical core)
        default_root: Root text prefilled in the interactive root box
    """

    max_results: int = Field(DEFAULT_MAX_RESULTS, gt=0, description="Maximum number of matches kept per search")
    max_workers: Optional[int] = Field(None, gt=0, description="Worker threads used for traversal")
    default_root: Optional[str] = Field(None, description="Root prefilled in the interactive root box")

    @field_validator('default_root')
    @classmethod
    def validate_default_root(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank roots as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()

    def effective_workers(self) -> int:
        """Get the worker count, falling back to the logical core count."""
        if self.max_workers:
            return self.max_workers
        return os.cpu_count() or 1

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data['effective_workers'] = self.effective_workers()
        return data


class UIConfig(BaseModel):
    """
    Configuration for the interactive terminal front end.

    Attributes:
        tick_interval_ms: Poll interval of the front end loop in milliseconds
        max_visible_rows: Upper bound on result rows rendered at once
    """

    tick_interval_ms: int = Field(120, ge=20, le=1000, description="Front end poll interval in milliseconds")
    max_visible_rows: int = Field(500, gt=0, description="Maximum result rows rendered at once")

    def tick_seconds(self) -> float:
        return self.tick_interval_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class LoggingConfig(BaseModel):
    """
    Configuration for application logging.

    Attributes:
        level: Logging level name
        file: Log file path (None disables file logging)
    """

    level: str = Field("WARNING", description="Logging level name")
    file: Optional[str] = Field(DEFAULT_LOG_FILE, description="Log file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the level name."""
        level = str(v).strip().upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid logging level: {v}")
        return level

    @field_validator('file')
    @classmethod
    def validate_file(cls, v: Optional[str]) -> Optional[str]:
        """Expand user paths; blank means no log file."""
        if v is None or not str(v).strip():
            return None
        v = str(v).strip()
        if v.startswith('~'):
            return str(Path(v).expanduser())
        return v

    def get_level(self) -> int:
        return getattr(logging, self.level)

    def get_file_path(self) -> Optional[Path]:
        return Path(self.file) if self.file else None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class FinderConfig(BaseModel):
    """
    Main configuration class for filesearch.

    Attributes:
        search: Search engine settings
        ui: Interactive front end settings
        logging: Logging settings
    """

    search: SearchConfig = Field(default_factory=SearchConfig, description="Search engine settings")
    ui: UIConfig = Field(default_factory=UIConfig, description="Interactive front end settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    def validate_configuration(self) -> List[str]:
        """
        Check for settings that are valid but likely to cause trouble.

        Returns:
            List of warning messages
        """
        warnings = []

        cpu_count = os.cpu_count() or 1
        if self.search.max_workers and self.search.max_workers > cpu_count * 8:
            warnings.append(
                f"max_workers ({self.search.max_workers}) is far above the logical core count ({cpu_count})"
            )

        if self.search.max_results > 1_000_000:
            warnings.append("Very high max_results limit may cause memory issues")

        if self.ui.max_visible_rows > self.search.max_results:
            warnings.append("max_visible_rows exceeds max_results and will never be reached")

        if self.search.default_root and not Path(self.search.default_root).expanduser().exists():
            warnings.append(f"Default root does not exist: {self.search.default_root}")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'search': self.search.model_dump(),
            'ui': self.ui.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Max results: {self.search.max_results}"]
        parts.append(f"Workers: {self.search.effective_workers()}")
        parts.append(f"Tick: {self.ui.tick_interval_ms}ms")
        parts.append(f"Log level: {self.logging.level}")
        return " | ".join(parts)
