"""
Error taxonomy for the report pipeline.

Invalid settings (ConfigError), loading errors (MissingFileError,
ParseError, SchemaError) and violated cleaning post-conditions
(DataQualityError) are fatal: they abort the run before any output is
written. Missing values and join mismatches are not errors; they are
recovered locally and counted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class PipelineError(Exception):
    """Base class for fatal pipeline errors."""


class MissingFileError(PipelineError, FileNotFoundError):
    """An input file does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Input file not found: {self.path}")


class ParseError(PipelineError):
    """An input file could not be read as the expected delimited table."""

    def __init__(self, message: str, *, path: Optional[Path | str] = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{self.path}: {message}"
        super().__init__(message)


class SchemaError(ParseError):
    """The columns of an input table do not match its declared schema."""


class DataQualityError(PipelineError):
    """A cleaning post-condition does not hold for the loaded data."""


class ConfigError(PipelineError, ValueError):
    """A setting (environment variable or flag) has an invalid value."""


__all__ = [
    "PipelineError",
    "MissingFileError",
    "ParseError",
    "SchemaError",
    "DataQualityError",
    "ConfigError",
]
