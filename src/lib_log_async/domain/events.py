"""Domain event describing one log occurrence.

Purpose
-------
Provide an immutable representation of log events travelling from producer
threads through the dispatcher queue into the sinks.

Contents
--------
* :class:`LogEvent` dataclass with serialisation helpers.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer. Events are read-only after construction, so the
producer thread and the dispatcher worker share them without locking.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


def _freeze_context(context: Mapping[str, Any] | None) -> Mapping[str, str]:
    if not context:
        return MappingProxyType({})
    return MappingProxyType({str(key): str(value) for key, value in context.items()})


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event transported through the logging pipeline.

    Attributes
    ----------
    timestamp:
        Time of the event in timezone-aware UTC.
    level:
        :class:`LogLevel` severity associated with the event.
    origin:
        Name of the producing thread. Advisory only.
    logger_name:
        Logical logger emitting the event.
    message:
        Rendered message passed by the caller.
    context:
        Read-only string mapping captured at emission time.

    Examples
    --------
    >>> event = LogEvent(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'MainThread', 'svc', 'msg', {'k': 1})
    >>> event.context['k']
    '1'
    """

    timestamp: datetime
    level: LogLevel
    origin: str
    logger_name: str
    message: str
    context: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "context", _freeze_context(self.context))

    def __hash__(self) -> int:
        return hash(
            (
                self.timestamp,
                self.level,
                self.origin,
                self.logger_name,
                self.message,
                tuple(sorted(self.context.items())),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event to a dictionary with ISO8601 timestamps."""

        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.severity,
            "origin": self.origin,
            "logger_name": self.logger_name,
            "message": self.message,
            "context": dict(self.context),
        }

    def to_json(self) -> str:
        """Serialize the event to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True)


__all__ = ["LogEvent"]
