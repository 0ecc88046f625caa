"""File sinks."""

from __future__ import annotations

from .rotating import DEFAULT_BASE_NAME, RotatingFileSink

__all__ = ["DEFAULT_BASE_NAME", "RotatingFileSink"]
