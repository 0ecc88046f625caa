"""Concrete adapters: sinks and the asynchronous dispatcher."""

from __future__ import annotations

from .console import ConsoleSink
from .dispatcher import AsyncDispatcher, DiagnosticHook, DispatcherStats
from .file import RotatingFileSink

__all__ = [
    "AsyncDispatcher",
    "ConsoleSink",
    "DiagnosticHook",
    "DispatcherStats",
    "RotatingFileSink",
]
