"""Sink port describing batch consumers of log events.

Purpose
-------
Define the abstraction every output destination implements so the dispatcher
can fan batches out without knowing about consoles or files.

Contents
--------
* :class:`SinkPort` - runtime-checkable protocol with ``consume`` and ``close``.

System Role
-----------
``consume`` is only invoked from the dispatcher worker, one call at a time per
sink; ``close`` happens after the last ``consume``. Raising from ``consume``
signals failure and is contained by the dispatcher.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from lib_log_async.domain.events import LogEvent


@runtime_checkable
class SinkPort(Protocol):
    """Consume ordered batches of log events."""

    def consume(self, batch: Sequence[LogEvent]) -> None:
        """Write ``batch`` in order; raise to report failure."""

    def close(self) -> None:
        """Flush and release held resources. Must be idempotent."""


__all__ = ["SinkPort"]
