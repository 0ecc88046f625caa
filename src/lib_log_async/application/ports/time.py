"""Ports for time and producer identity."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current timestamp."""

    def now(self) -> datetime: ...


@runtime_checkable
class OriginProvider(Protocol):
    """Name the producer of a log event (thread or task)."""

    def __call__(self) -> str: ...


__all__ = ["ClockPort", "OriginProvider"]
