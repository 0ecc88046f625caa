"""Asynchronous batching log pipeline.

Producers call :class:`Logger` methods from any thread; events are queued in
a bounded buffer and a single background worker hands them, in batches, to a
Rich console sink and a size-rotated file sink. The public surface below is
what host applications are expected to import.

>>> import lib_log_async
>>> lib_log_async.LogLevel.WARN > lib_log_async.LogLevel.INFO
True
"""

from __future__ import annotations

from .adapters import AsyncDispatcher, ConsoleSink, DispatcherStats, RotatingFileSink
from .domain import (
    BackpressurePolicy,
    ConfigurationError,
    DispatcherState,
    LogEvent,
    LogLevel,
    PipelineClosedError,
)
from .runtime import (
    LogManager,
    Logger,
    LoggingConfig,
    RuntimeSnapshot,
    get_logger,
    initialize,
    inspect_runtime,
    is_initialised,
    shutdown,
)

__all__ = [
    "AsyncDispatcher",
    "BackpressurePolicy",
    "ConfigurationError",
    "ConsoleSink",
    "DispatcherState",
    "DispatcherStats",
    "LogEvent",
    "LogLevel",
    "LogManager",
    "Logger",
    "LoggingConfig",
    "PipelineClosedError",
    "RotatingFileSink",
    "RuntimeSnapshot",
    "get_logger",
    "initialize",
    "inspect_runtime",
    "is_initialised",
    "shutdown",
]
