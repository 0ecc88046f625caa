"""Caller-owned lifecycle object for one logging pipeline.

Purpose
-------
Construct the dispatcher and its sinks once, vend :class:`Logger` facades
bound to it, and drive a single orderly shutdown.

Contents
--------
* :class:`LogManager` - initialise / get_logger / shutdown.

System Role
-----------
Composition root of the pipeline. Independent instances can coexist (tests
build several per process); :mod:`lib_log_async.runtime` keeps one of them as
the process-wide default.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from types import TracebackType

from lib_log_async.adapters import AsyncDispatcher
from lib_log_async.application.ports import ClockPort, SinkPort
from lib_log_async.application.use_cases import EmitCallable, create_emit_event, create_shutdown
from lib_log_async.domain import LogLevel, PipelineClosedError

from ._factories import SystemClock, create_default_sinks, create_dispatcher
from ._logger import Logger
from ._settings import LoggingConfig


LOGGER = logging.getLogger(__name__)


class LogManager:
    """Own exactly one :class:`AsyncDispatcher` for its lifetime.

    Examples
    --------
    >>> class ListSink:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def consume(self, batch):
    ...         self.lines.extend(event.message for event in batch)
    ...     def close(self):
    ...         pass
    >>> sink = ListSink()
    >>> with LogManager(LoggingConfig(flush_interval=0.05), sinks=[sink]) as manager:
    ...     manager.get_logger('demo').info('hello')
    True
    >>> sink.lines
    ['hello']
    """

    def __init__(
        self,
        config: LoggingConfig | None = None,
        *,
        sinks: Sequence[SinkPort] | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        """Remember the configuration; nothing starts until :meth:`initialize`.

        Parameters
        ----------
        config:
            Defaults used by :meth:`initialize` when it is called without one.
        sinks:
            Replace the default console + rotating file sinks.
        clock:
            Timestamp source for emitted events.
        """
        self._config = config
        self._sinks = tuple(sinks) if sinks is not None else None
        self._clock: ClockPort = clock or SystemClock()
        self._lock = threading.RLock()
        self._dispatcher: AsyncDispatcher | None = None
        self._emit: EmitCallable | None = None
        self._shutdown: Callable[[], bool] | None = None
        self._closed = False

    @property
    def config(self) -> LoggingConfig | None:
        return self._config

    @property
    def dispatcher(self) -> AsyncDispatcher | None:
        return self._dispatcher

    @property
    def is_initialised(self) -> bool:
        return self._dispatcher is not None and not self._closed

    @property
    def is_closed(self) -> bool:
        return self._closed

    def initialize(self, config: LoggingConfig | None = None) -> AsyncDispatcher:
        """Build the pipeline on first call; later calls return the same dispatcher.

        Raises
        ------
        ConfigurationError
            When the sinks or dispatcher reject the configuration. No worker is
            left running in that case.
        PipelineClosedError
            When the manager has already been shut down.
        """
        with self._lock:
            if self._closed:
                raise PipelineClosedError("LogManager has been shut down and cannot be re-initialised")
            if self._dispatcher is not None:
                if config is not None and config != self._config:
                    LOGGER.debug("LogManager already initialised; ignoring new configuration")
                return self._dispatcher
            resolved = config or self._config or LoggingConfig()
            sinks = list(self._sinks) if self._sinks is not None else create_default_sinks(resolved)
            try:
                dispatcher = create_dispatcher(resolved, sinks)
            except Exception:
                for sink in sinks:
                    sink.close()
                raise
            self._config = resolved
            self._dispatcher = dispatcher
            self._emit = create_emit_event(dispatcher=dispatcher, clock=self._clock)
            self._shutdown = create_shutdown(dispatcher=dispatcher)
            return dispatcher

    def get_logger(self, name: str, level: LogLevel | str | None = None) -> Logger:
        """Return a logger named ``name`` bound to this manager's dispatcher.

        Parameters
        ----------
        name:
            Logical source, rendered in brackets on every line.
        level:
            Threshold; defaults to ``config.default_level``.

        Raises
        ------
        PipelineClosedError
            Before :meth:`initialize` or after :meth:`shutdown`.
        """
        with self._lock:
            if self._closed:
                raise PipelineClosedError("LogManager has been shut down")
            if self._dispatcher is None or self._emit is None or self._config is None:
                raise PipelineClosedError("LogManager.initialize() must be called before get_logger()")
            threshold = LogLevel.coerce(level) if level is not None else self._config.default_level
            return Logger(name, threshold, dispatcher=self._dispatcher, emit=self._emit)

    def shutdown(self) -> None:
        """Drain the queue, close all sinks, and refuse further work. Idempotent."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._shutdown is not None:
                self._shutdown()

    def __enter__(self) -> "LogManager":
        self.initialize()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()


__all__ = ["LogManager"]
