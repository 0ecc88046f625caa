"""Runtime façade wiring the asynchronous logging pipeline.

Purpose
-------
Expose a stable entry point (``initialize``, ``get_logger``, ``shutdown``,
``inspect_runtime``) that host applications use instead of importing the
inner layers directly.

Contents
--------
* ``initialize`` - composition root for the process-wide pipeline.
* ``get_logger`` - accessor for :class:`Logger` facades.
* ``shutdown`` - deterministic, draining teardown.
* ``inspect_runtime`` - read-only snapshot of configuration and counters.
* :class:`LogManager` / :class:`LoggingConfig` for callers that own their
  pipeline explicitly.

System Role
-----------
Outer shell of the package: the process-wide slot holds one
:class:`LogManager`; everything else is a plain object that tests and hosts
may construct as often as they like.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lib_log_async.adapters import AsyncDispatcher, DispatcherStats
from lib_log_async.domain import BackpressurePolicy, LogLevel, PipelineClosedError

from ._factories import SystemClock
from ._logger import Logger
from ._manager import LogManager
from ._settings import LoggingConfig
from ._state import clear_manager, current_manager, ensure_manager, is_initialised


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active logging runtime."""

    default_level: LogLevel
    backpressure: BackpressurePolicy
    queue_capacity: int
    batch_size: int
    flush_interval: float
    log_dir: Path | None
    sinks: tuple[str, ...]
    stats: DispatcherStats


def initialize(config: LoggingConfig | None = None, **overrides: Any) -> AsyncDispatcher:
    """Compose the process-wide pipeline; later calls return the same dispatcher.

    Inputs
    ------
    config:
        Explicit settings. When omitted, :meth:`LoggingConfig.from_env` builds
        them from ``overrides`` plus ``LOG_*`` environment variables.
    **overrides:
        Field overrides applied to ``config`` (or to the environment-derived
        defaults).

    Outputs
    -------
    :class:`AsyncDispatcher` owned by the process-wide :class:`LogManager`.

    Side Effects
    ------------
    Creates the log directory and spawns the dispatcher worker thread on the
    first call. Raises :class:`ConfigurationError` for invalid settings, in
    which case nothing is installed.
    """

    def build() -> LogManager:
        resolved = config.replace(**overrides) if config is not None else LoggingConfig.from_env(**overrides)
        manager = LogManager(resolved)
        manager.initialize()
        return manager

    manager = ensure_manager(build)
    return manager.initialize()


def get_logger(name: str, level: LogLevel | str | None = None) -> Logger:
    """Return a logger bound to the process-wide dispatcher.

    Raises :class:`PipelineClosedError` when :func:`initialize` has not been
    called.
    """

    return current_manager().get_logger(name, level)


def shutdown() -> None:
    """Drain the queue, close the sinks, and clear the process-wide slot.

    A second call, or a call without :func:`initialize`, does nothing.
    """

    manager = clear_manager()
    if manager is not None:
        manager.shutdown()


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    manager = current_manager()
    config = manager.config
    dispatcher = manager.dispatcher
    if config is None or dispatcher is None:
        raise PipelineClosedError("logging runtime is not initialised")
    return RuntimeSnapshot(
        default_level=config.default_level,
        backpressure=dispatcher.policy,
        queue_capacity=dispatcher.capacity,
        batch_size=dispatcher.batch_size,
        flush_interval=dispatcher.flush_interval,
        log_dir=config.log_dir if config.file_enabled else None,
        sinks=tuple(type(sink).__name__ for sink in dispatcher.sinks),
        stats=dispatcher.stats(),
    )


__all__ = [
    "LogManager",
    "Logger",
    "LoggingConfig",
    "RuntimeSnapshot",
    "SystemClock",
    "get_logger",
    "initialize",
    "inspect_runtime",
    "is_initialised",
    "shutdown",
]
