"""Size-rotated file sink implementing :class:`SinkPort`.

Purpose
-------
Append the shared line format to ``<directory>/<base_name>`` and roll over to
``<base_name>.1``, ``<base_name>.2``... once the next line would push the
current file past ``max_bytes``.

Contents
--------
* :class:`RotatingFileSink` - the sink built by the runtime when file output
  is enabled.

System Role
-----------
Durable sink of the pipeline. The rotation check runs before each line is
written, so no file exceeds ``max_bytes`` unless a single line alone does; such
a line is written whole into a file of its own.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import IO

from lib_log_async.adapters._formatting import format_line
from lib_log_async.application.ports.sink import SinkPort
from lib_log_async.domain.errors import ConfigurationError
from lib_log_async.domain.events import LogEvent


LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_NAME = "app.log"


class RotatingFileSink(SinkPort):
    """Write batches to size-bounded files with increasing numeric suffixes.

    Examples
    --------
    >>> import tempfile
    >>> from datetime import datetime, timezone
    >>> from lib_log_async.domain.levels import LogLevel
    >>> directory = Path(tempfile.mkdtemp())
    >>> sink = RotatingFileSink(directory, max_bytes=1024)
    >>> sink.consume([LogEvent(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'main', 'svc', 'msg')])
    >>> sink.close()
    >>> (directory / 'app.log').read_text()
    '2025-09-30T12:00:00.000Z  INFO  [svc] msg\\n'
    """

    def __init__(
        self,
        directory: str | Path,
        *,
        max_bytes: int,
        base_name: str = DEFAULT_BASE_NAME,
    ) -> None:
        """Create ``directory`` if needed and open the most recent file.

        Parameters
        ----------
        directory:
            Folder holding the rotated files.
        max_bytes:
            Rotation threshold in bytes; must be positive.
        base_name:
            File name of rotation index ``0``; later files append ``.<n>``.
        """
        if max_bytes <= 0:
            raise ConfigurationError("max_bytes must be positive")
        if not base_name or Path(base_name).name != base_name:
            raise ConfigurationError("base_name must be a plain file name")
        self._directory = Path(directory)
        self._max_bytes = max_bytes
        self._base_name = base_name
        self._lock = threading.Lock()
        self._closed = False
        self._directory.mkdir(parents=True, exist_ok=True)
        self._index = self._latest_index()
        self._handle: IO[str] | None
        self._handle, self._written = self._open(self._index)

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @property
    def rotation_index(self) -> int:
        """Suffix of the file currently written (``0`` for the base file)."""
        return self._index

    @property
    def bytes_written(self) -> int:
        """Size in bytes of the current file as tracked by the sink."""
        return self._written

    @property
    def current_path(self) -> Path:
        return self._path_for(self._index)

    def paths(self) -> list[Path]:
        """Return every file of this sink that exists, oldest first."""
        return [path for path in (self._path_for(index) for index in range(self._index + 1)) if path.exists()]

    def consume(self, batch: Sequence[LogEvent]) -> None:
        """Append ``batch`` in order, rotating before any line that would overflow."""
        with self._lock:
            if self._closed or self._handle is None:
                raise RuntimeError("RotatingFileSink is closed")
            try:
                for event in batch:
                    line = format_line(event)
                    size = len(line.encode("utf-8"))
                    if self._written > 0 and self._written + size > self._max_bytes:
                        self._rotate()
                    self._handle.write(line)
                    self._written += size
            finally:
                self._handle.flush()

    def close(self) -> None:
        """Flush and release the current file handle. Safe to call repeatedly."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            handle, self._handle = self._handle, None
            if handle is not None:
                handle.close()

    def _rotate(self) -> None:
        """Continue in the next index; the current file stays active if opening fails."""
        index = self._index + 1
        handle, written = self._open(index)
        previous, self._handle = self._handle, handle
        self._index, self._written = index, written
        LOGGER.debug("Rotated %s to index %d", self._base_name, index)
        if previous is not None:
            previous.close()

    def _open(self, index: int) -> tuple[IO[str], int]:
        path = self._path_for(index)
        # newline="" keeps byte accounting identical across platforms.
        handle = path.open("a", encoding="utf-8", newline="")
        return handle, path.stat().st_size

    def _path_for(self, index: int) -> Path:
        if index == 0:
            return self._directory / self._base_name
        return self._directory / f"{self._base_name}.{index}"

    def _latest_index(self) -> int:
        """Return the highest rotation index already present on disk."""
        pattern = re.compile(rf"^{re.escape(self._base_name)}\.(\d+)$")
        indices = [int(match.group(1)) for path in self._directory.iterdir() if (match := pattern.match(path.name))]
        return max(indices, default=0)


__all__ = ["DEFAULT_BASE_NAME", "RotatingFileSink"]
