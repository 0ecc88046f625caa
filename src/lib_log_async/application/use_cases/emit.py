"""Use case turning a log call into a queued :class:`LogEvent`.

Purpose
-------
Stamp the event with time and producer identity and hand it to the
dispatcher under its configured backpressure policy.

Contents
--------
* :func:`create_emit_event` factory returning the per-call closure.

System Role
-----------
Application-layer step invoked by :class:`lib_log_async.runtime.Logger`
after the threshold check, so suppressed levels never allocate an event.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping

from lib_log_async.application.ports import ClockPort, DispatcherPort, OriginProvider
from lib_log_async.domain import LogEvent, LogLevel

EmitCallable = Callable[[str, LogLevel, str, Mapping[str, str] | None], bool]


def current_thread_name() -> str:
    """Return the name of the calling thread."""

    return threading.current_thread().name


def create_emit_event(
    *,
    dispatcher: DispatcherPort,
    clock: ClockPort,
    origin: OriginProvider = current_thread_name,
) -> EmitCallable:
    """Build the closure that creates and enqueues events.

    Parameters
    ----------
    dispatcher:
        Queue receiving the events; its default policy applies.
    clock:
        Provider of timezone-aware timestamps.
    origin:
        Callable naming the producer; defaults to the current thread name.

    Returns
    -------
    Callable[[str, LogLevel, str, Mapping[str, str] | None], bool]
        Function accepting ``logger_name``, ``level``, ``message`` and
        optional ``context``; returns ``True`` when the event was accepted.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> class DummyClock:
    ...     def now(self):
    ...         return datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> class DummyDispatcher:
    ...     def __init__(self):
    ...         self.events = []
    ...     def enqueue(self, event, policy=None):
    ...         self.events.append(event)
    ...         return True
    ...     def shutdown(self, timeout=None):
    ...         pass
    >>> dispatcher = DummyDispatcher()
    >>> emit = create_emit_event(dispatcher=dispatcher, clock=DummyClock(), origin=lambda: 'worker-1')
    >>> emit('svc', LogLevel.INFO, 'hello', None)
    True
    >>> dispatcher.events[0].origin
    'worker-1'
    """

    def emit(logger_name: str, level: LogLevel, message: str, context: Mapping[str, str] | None = None) -> bool:
        event = LogEvent(
            timestamp=clock.now(),
            level=level,
            origin=origin(),
            logger_name=logger_name,
            message=message,
            context=context or {},
        )
        return dispatcher.enqueue(event)

    return emit


__all__ = ["EmitCallable", "create_emit_event", "current_thread_name"]
