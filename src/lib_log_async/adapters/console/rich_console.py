"""Rich-powered console sink implementing :class:`SinkPort`.

Purpose
-------
Write each event of a batch as one line on standard output while keeping the
exact text produced by :func:`lib_log_async.adapters._formatting.render_record`.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`ConsoleSink` - sink constructed by the runtime when console output
  is enabled.

System Role
-----------
Primary human-facing sink. Rich markup, emoji substitution, highlighting and
wrapping are disabled so console lines stay diffable against the log files;
colour is only applied on real terminals.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Mapping, MutableMapping

from rich.console import Console

from lib_log_async.adapters._formatting import render_record
from lib_log_async.application.ports.sink import SinkPort
from lib_log_async.domain.events import LogEvent
from lib_log_async.domain.levels import LogLevel


_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "bold red",
}


class ConsoleSink(SinkPort):
    """Render log events to stdout, one line per event, in batch order."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
    ) -> None:
        """Configure the console sink with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(
                force_terminal=True if force_color else None,
                no_color=no_color,
                markup=False,
                emoji=False,
                highlight=False,
                soft_wrap=True,
            )
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def consume(self, batch: Sequence[LogEvent]) -> None:
        """Print every event of ``batch``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> event = LogEvent(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'main', 'svc', 'msg')
        >>> console = Console(file=StringIO(), record=True, markup=False, soft_wrap=True)
        >>> ConsoleSink(console=console).consume([event])
        >>> console.export_text()
        '2025-09-30T12:00:00.000Z  INFO  [svc] msg\\n'
        """
        colorize = self._console.is_terminal and not self._no_color
        for event in batch:
            style = self._style_map.get(event.level) if colorize else None
            self._console.print(
                render_record(event),
                style=style,
                markup=False,
                emoji=False,
                highlight=False,
                soft_wrap=True,
            )

    def close(self) -> None:
        """Nothing to release; the console stream belongs to the process."""


__all__ = ["ConsoleSink"]
