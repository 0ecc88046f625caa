"""Shutdown orchestration for the logging pipeline.

Purpose
-------
Provide a unified, run-once shutdown routine that drains the dispatcher and
closes its sinks.
"""

from __future__ import annotations

import threading
from typing import Callable

from lib_log_async.application.ports import DispatcherPort


def create_shutdown(
    *,
    dispatcher: DispatcherPort,
    timeout: float | None = None,
) -> Callable[[], bool]:
    """Return a callable performing the shutdown sequence exactly once.

    The callable returns ``True`` on the call that actually stopped the
    dispatcher and ``False`` on every later call.
    """

    lock = threading.Lock()
    done = False

    def shutdown() -> bool:
        """Drain the queue and close the sinks; later calls are no-ops."""
        nonlocal done
        with lock:
            if done:
                return False
            dispatcher.shutdown(timeout=timeout)
            done = True
            return True

    return shutdown


__all__ = ["create_shutdown"]
