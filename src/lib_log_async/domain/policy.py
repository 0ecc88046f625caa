"""Strategy values steering the dispatcher."""

from __future__ import annotations

from enum import Enum


class BackpressurePolicy(Enum):
    """Rule applied when the dispatcher queue is full.

    ``BLOCK`` suspends the producer until the worker frees a slot; ``DROP``
    discards the new event and counts it.
    """

    BLOCK = "block"
    DROP = "drop"

    @classmethod
    def from_name(cls, name: "str | BackpressurePolicy") -> "BackpressurePolicy":
        if isinstance(name, BackpressurePolicy):
            return name
        if not isinstance(name, str):
            raise ValueError(f"backpressure policy must be a string, got {type(name).__name__}")
        normalized = name.strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError("backpressure policy must be 'block' or 'drop'") from exc


class DispatcherState(Enum):
    """Lifecycle of an :class:`~lib_log_async.adapters.dispatcher.AsyncDispatcher`."""

    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


__all__ = ["BackpressurePolicy", "DispatcherState"]
