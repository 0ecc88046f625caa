"""Domain entities and value objects used by the logging pipeline."""

from __future__ import annotations

from .errors import ConfigurationError, PipelineClosedError
from .events import LogEvent
from .levels import LogLevel
from .policy import BackpressurePolicy, DispatcherState

__all__ = [
    "BackpressurePolicy",
    "ConfigurationError",
    "DispatcherState",
    "LogEvent",
    "LogLevel",
    "PipelineClosedError",
]
