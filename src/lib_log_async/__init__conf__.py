"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

import sys
from typing import Callable

name = "lib_log_async"
title = "Asynchronous batching log pipeline with console and rotating file sinks"
version = "0.1.0"
shell_command = "lib_log_async"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Emit the metadata banner line by line through ``writer`` (stdout by default)."""

    write = writer if writer is not None else sys.stdout.write
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    write(f"Info for {name}:\n\n")
    for label, value in fields:
        write(f"    {label:<{pad}} = {value}\n")


__all__ = ["print_info", "shell_command", "version"]
