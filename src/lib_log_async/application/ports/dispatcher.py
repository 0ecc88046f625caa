"""Port describing the queue that loggers hand events to."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_async.domain.events import LogEvent
from lib_log_async.domain.policy import BackpressurePolicy


@runtime_checkable
class DispatcherPort(Protocol):
    """Bridge between producer threads and the background worker."""

    def enqueue(self, event: LogEvent, policy: BackpressurePolicy | None = None) -> bool:
        """Hand ``event`` to the worker; ``False`` when it was dropped."""

    def shutdown(self, timeout: float | None = None) -> None:
        """Stop accepting events, drain the queue, and close the sinks."""


__all__ = ["DispatcherPort"]
