"""Per-name logger facade handed to application code."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from lib_log_async.application.ports import DispatcherPort
from lib_log_async.application.use_cases import EmitCallable
from lib_log_async.domain import LogLevel


class Logger:
    """Immutable binding of a name, a severity threshold and a dispatcher.

    Loggers are cheap; many of them share one dispatcher. Every convenience
    method routes through :meth:`log`, which checks the threshold before an
    event is built.

    Examples
    --------
    >>> calls = []
    >>> def emit(name, level, message, context):
    ...     calls.append((name, level.name, message, dict(context or {})))
    ...     return True
    >>> logger = Logger('svc', LogLevel.INFO, dispatcher=None, emit=emit)
    >>> logger.debug('hidden')
    False
    >>> logger.bind(request='r1').info('shown')
    True
    >>> calls
    [('svc', 'INFO', 'shown', {'request': 'r1'})]
    """

    __slots__ = ("_name", "_threshold", "_dispatcher", "_emit", "_context")

    def __init__(
        self,
        name: str,
        threshold: LogLevel,
        *,
        dispatcher: DispatcherPort | None,
        emit: EmitCallable,
        context: Mapping[str, str] | None = None,
    ) -> None:
        self._name = name
        self._threshold = threshold
        self._dispatcher = dispatcher
        self._emit = emit
        self._context = MappingProxyType(dict(context or {}))

    @property
    def name(self) -> str:
        return self._name

    @property
    def threshold(self) -> LogLevel:
        return self._threshold

    @property
    def dispatcher(self) -> DispatcherPort | None:
        return self._dispatcher

    @property
    def context(self) -> Mapping[str, str]:
        return self._context

    def is_enabled_for(self, level: LogLevel | str) -> bool:
        return LogLevel.coerce(level).enabled_at(self._threshold)

    def log(self, level: LogLevel | str, message: str, context: Mapping[str, Any] | None = None) -> bool:
        """Emit ``message`` at ``level``.

        Returns ``True`` when the event was queued, ``False`` when it was
        filtered by the threshold or dropped by the backpressure policy.

        Raises
        ------
        PipelineClosedError
            When the dispatcher has been shut down.
        """
        resolved = LogLevel.coerce(level)
        if not resolved.enabled_at(self._threshold):
            return False
        merged: Mapping[str, Any] | None = context
        if self._context:
            merged = {**self._context, **(context or {})}
        return self._emit(self._name, resolved, message, merged)

    def trace(self, message: str, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(LogLevel.TRACE, message, context)

    def debug(self, message: str, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(LogLevel.INFO, message, context)

    def warn(self, message: str, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(LogLevel.WARN, message, context)

    warning = warn

    def error(self, message: str, context: Mapping[str, Any] | None = None) -> bool:
        return self.log(LogLevel.ERROR, message, context)

    def bind(self, **context: Any) -> "Logger":
        """Return a logger that adds ``context`` to every event."""
        return Logger(
            self._name,
            self._threshold,
            dispatcher=self._dispatcher,
            emit=self._emit,
            context={**self._context, **{key: str(value) for key, value in context.items()}},
        )

    def __repr__(self) -> str:
        return f"Logger(name={self._name!r}, threshold={self._threshold.name})"


__all__ = ["Logger"]
