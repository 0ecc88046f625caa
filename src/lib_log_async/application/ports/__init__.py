"""Protocols separating the application layer from concrete adapters."""

from __future__ import annotations

from .dispatcher import DispatcherPort
from .sink import SinkPort
from .time import ClockPort, OriginProvider

__all__ = ["ClockPort", "DispatcherPort", "OriginProvider", "SinkPort"]
