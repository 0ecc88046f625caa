"""Ordered severity levels used by loggers and sinks.

Purpose
-------
Offer a domain-specific representation of log severities with the ordering,
name coercion, and fixed-width labels the pipeline relies on.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and presentation metadata.

System Role
-----------
Loggers compare levels against their threshold before building an event;
sinks render :attr:`LogLevel.label` into the shared line format.
"""

from __future__ import annotations

from enum import Enum
from functools import total_ordering


_ALIASES = {"WARNING": "WARN"}


@total_ordering
class LogLevel(Enum):
    """Enumerated logging levels ordered ``TRACE < DEBUG < INFO < WARN < ERROR``."""

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    @property
    def label(self) -> str:
        """Return the level name left-aligned in a five character column."""

        return f"{self.name:<5}"

    def enabled_at(self, threshold: "LogLevel") -> bool:
        """Return ``True`` when a logger configured with ``threshold`` emits this level.

        Examples
        --------
        >>> LogLevel.INFO.enabled_at(LogLevel.DEBUG)
        True
        >>> LogLevel.DEBUG.enabled_at(LogLevel.INFO)
        False
        """

        return self.value >= threshold.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def coerce(cls, value: "LogLevel | str | int") -> "LogLevel":
        """Accept a level, a level name, or a numeric value."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        return cls.from_numeric(value)


__all__ = ["LogLevel"]
