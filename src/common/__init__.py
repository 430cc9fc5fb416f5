"""
Common helpers
--------------

Shared building blocks used across ingestion, transformations and analysis.
"""

from .errors import (  # noqa: F401
    ConfigError,
    DataQualityError,
    MissingFileError,
    ParseError,
    PipelineError,
    SchemaError,
)

__all__ = [
    "PipelineError",
    "MissingFileError",
    "ParseError",
    "SchemaError",
    "DataQualityError",
    "ConfigError",
]
