"""Shared line rendering for every text sink.

Why
---
Console and file output must be diffable against each other, so both sinks
render through :func:`format_line` and nowhere else.

Contents
--------
* :func:`format_timestamp` - ISO-8601 UTC with millisecond precision.
* :func:`render_record` - the record text without a terminator.
* :func:`format_line` - the complete, newline-terminated record.
"""

from __future__ import annotations

from datetime import datetime

from lib_log_async.domain.events import LogEvent

# C0 controls and DEL are escaped so every record stays on one line and
# renders identically in a terminal and in a file.
_ESCAPES = {code: f"\\x{code:02x}" for code in (*range(0x20), 0x7F)}
_ESCAPES.update({ord("\t"): "\\t", ord("\n"): "\\n", ord("\r"): "\\r"})


def format_timestamp(ts: datetime) -> str:
    """Render ``ts`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    Examples
    --------
    >>> from datetime import timezone
    >>> format_timestamp(datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc))
    '2025-09-23T12:00:00.000Z'
    """

    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def render_record(event: LogEvent) -> str:
    """Return the single-line representation of ``event`` without a terminator.

    Examples
    --------
    >>> from datetime import timezone
    >>> from lib_log_async.domain.levels import LogLevel
    >>> event = LogEvent(datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'main', 'app', 'ready')
    >>> render_record(event)
    '2025-09-23T12:00:00.000Z  INFO  [app] ready'
    >>> render_record(LogEvent(event.timestamp, LogLevel.WARN, 'main', 'app', 'a\\tb\\r\\nc'))
    '2025-09-23T12:00:00.000Z  WARN  [app] a\\\\tb\\\\r\\\\nc'
    """

    line = f"{format_timestamp(event.timestamp)}  {event.level.label} [{event.logger_name}] {event.message}"
    if event.context:
        line += " " + " ".join(f"{key}={value}" for key, value in sorted(event.context.items()))
    return line.translate(_ESCAPES)


def format_line(event: LogEvent) -> str:
    """Return :func:`render_record` followed by a newline."""

    return render_record(event) + "\n"


__all__ = ["format_line", "format_timestamp", "render_record"]
