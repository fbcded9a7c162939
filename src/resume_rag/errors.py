"""Error taxonomy for the ingestion pipeline.

Every failure surfaced by the pipeline is one of four categories.  The
category travels with the exception so the CLI can report it without
inspecting types.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for all pipeline failures."""

    category: str = "ingestion"


class ConfigError(IngestionError):
    """A required credential or endpoint is missing or invalid."""

    category = "config"


class LoadError(IngestionError):
    """The résumé JSON is missing, malformed, or lacks an expected section."""

    category = "load"


class StoreError(IngestionError):
    """The cache or the vector collection reported a failure."""

    category = "store"


class EmbeddingError(IngestionError):
    """The embedding provider failed to embed a chunk."""

    category = "embedding"
