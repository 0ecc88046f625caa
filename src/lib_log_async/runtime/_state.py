"""Process-wide manager slot and access helpers."""

from __future__ import annotations

from threading import RLock
from typing import Callable

from lib_log_async.domain import PipelineClosedError

from ._manager import LogManager


_STATE: LogManager | None = None
_STATE_LOCK = RLock()


def ensure_manager(factory: Callable[[], LogManager]) -> LogManager:
    """Return the active manager, installing ``factory()`` when none exists.

    The factory runs under the state lock, so concurrent first calls build
    exactly one manager; when it raises nothing is installed.
    """

    with _STATE_LOCK:
        global _STATE
        if _STATE is None:
            _STATE = factory()
        return _STATE


def clear_manager() -> LogManager | None:
    """Remove and return the active manager if present."""

    with _STATE_LOCK:
        global _STATE
        manager, _STATE = _STATE, None
        return manager


def current_manager() -> LogManager:
    """Return the active manager or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise PipelineClosedError("lib_log_async.initialize() must be called before using the logging API")
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_log_async.initialize` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "clear_manager",
    "current_manager",
    "ensure_manager",
    "is_initialised",
]
