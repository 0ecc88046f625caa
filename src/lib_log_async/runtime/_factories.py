"""Factories turning :class:`LoggingConfig` into live collaborators."""

from __future__ import annotations

from datetime import datetime, timezone

from lib_log_async.adapters import AsyncDispatcher, ConsoleSink, RotatingFileSink
from lib_log_async.application.ports import ClockPort, SinkPort
from lib_log_async.domain import ConfigurationError

from ._settings import LoggingConfig


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        """Return the current UTC timestamp with timezone info."""
        return datetime.now(timezone.utc)


def create_default_sinks(config: LoggingConfig) -> list[SinkPort]:
    """Return the console and rotating file sinks enabled by ``config``."""

    sinks: list[SinkPort] = []
    if config.console_enabled:
        sinks.append(ConsoleSink(force_color=config.force_color, no_color=config.no_color))
    if config.file_enabled:
        sinks.append(
            RotatingFileSink(
                config.log_dir,
                max_bytes=config.rotation_bytes,
                base_name=config.base_name,
            )
        )
    if not sinks:
        raise ConfigurationError("at least one of console_enabled/file_enabled must be set")
    return sinks


def create_dispatcher(config: LoggingConfig, sinks: list[SinkPort]) -> AsyncDispatcher:
    """Instantiate and start the dispatcher for ``sinks``."""

    return AsyncDispatcher(
        sinks,
        capacity=config.queue_capacity,
        batch_size=config.batch_size,
        flush_interval=config.flush_interval,
        policy=config.backpressure,
        diagnostic=config.diagnostic_hook,
    )


__all__ = ["SystemClock", "create_default_sinks", "create_dispatcher"]
