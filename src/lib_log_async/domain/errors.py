"""Error types surfaced to callers of the pipeline."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when capacities, thresholds, or intervals are invalid."""


class PipelineClosedError(RuntimeError):
    """Raised when an operation reaches a pipeline that is not accepting work.

    Covers enqueueing after shutdown began and requesting loggers before
    initialisation or after shutdown.
    """


__all__ = ["ConfigurationError", "PipelineClosedError"]
