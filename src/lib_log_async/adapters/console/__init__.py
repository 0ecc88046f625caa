"""Console sinks."""

from __future__ import annotations

from .rich_console import ConsoleSink

__all__ = ["ConsoleSink"]
