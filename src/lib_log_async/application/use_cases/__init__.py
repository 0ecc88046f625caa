"""Use cases composed by the runtime."""

from __future__ import annotations

from .emit import EmitCallable, create_emit_event, current_thread_name
from .shutdown import create_shutdown

__all__ = ["EmitCallable", "create_emit_event", "create_shutdown", "current_thread_name"]
