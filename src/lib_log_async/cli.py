"""Click command group exposing the metadata banner and a load demo.

Purpose
-------
Give operators a quick way to watch the pipeline work: ``logdemo`` starts a
handful of producer threads that log through the process-wide façade, shuts
down, and reports what was accepted, dropped and delivered.

Contents
--------
* :func:`cli` - root group (``--use-dotenv``, ``--version``).
* :func:`info` - metadata banner.
* :func:`logdemo` - multi-threaded producer demo.
* :func:`main` - test-friendly runner returning an exit code.

System Role
-----------
Presentation layer only; it talks to :mod:`lib_log_async.runtime` through
``initialize``/``get_logger``/``shutdown`` like any host application.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Sequence

import click

from . import __init__conf__
from . import config as log_config
from . import runtime
from .domain import BackpressurePolicy, ConfigurationError, LogLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner used by ``info`` and the bare command."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help="Load LOG_* settings from the nearest .env before running commands.",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool) -> None:
    """Asynchronous batching log pipeline."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if log_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--workers", type=click.IntRange(min=1), default=4, show_default=True, help="Producer threads.")
@click.option("--messages", type=click.IntRange(min=0), default=1000, show_default=True, help="Messages per producer.")
@click.option(
    "--policy",
    type=click.Choice([policy.value for policy in BackpressurePolicy], case_sensitive=False),
    default=None,
    help="Backpressure policy when the queue is full.",
)
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory for rotated files.")
@click.option("--capacity", type=int, default=None, help="Queue capacity.")
@click.option("--batch-size", type=int, default=None, help="Maximum events per sink call.")
@click.option("--flush-interval", type=float, default=None, help="Seconds before a partial batch is flushed.")
@click.option("--rotation-bytes", type=int, default=None, help="File size that triggers rotation.")
@click.option(
    "--level",
    type=click.Choice([level.name for level in LogLevel], case_sensitive=False),
    default=None,
    help="Default logger threshold.",
)
@click.option("--console/--no-console", default=True, show_default=True, help="Echo events to stdout.")
def logdemo(
    *,
    workers: int,
    messages: int,
    policy: str | None,
    log_dir: Path | None,
    capacity: int | None,
    batch_size: int | None,
    flush_interval: float | None,
    rotation_bytes: int | None,
    level: str | None,
    console: bool,
) -> None:
    """Log from several threads at once, then report the dispatcher counters."""

    candidates: dict[str, Any] = {
        "backpressure": policy,
        "log_dir": log_dir,
        "queue_capacity": capacity,
        "batch_size": batch_size,
        "flush_interval": flush_interval,
        "rotation_bytes": rotation_bytes,
        "default_level": level,
    }
    overrides = {key: value for key, value in candidates.items() if value is not None}
    overrides["console_enabled"] = console
    try:
        dispatcher = runtime.initialize(**overrides)
    except ConfigurationError as exc:
        raise click.BadParameter(str(exc)) from exc

    try:
        threads = [
            threading.Thread(target=_produce, args=(f"worker-{index}", messages), name=f"worker-{index}")
            for index in range(workers)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        runtime.get_logger("logdemo").info("All work done. Check the console and the log directory for output.")
    finally:
        runtime.shutdown()

    stats = dispatcher.stats()
    click.echo(
        f"accepted={stats.accepted} dropped={stats.dropped} delivered={stats.delivered} "
        f"batches={stats.batches} sink_failures={stats.sink_failures}"
    )


def _produce(name: str, count: int) -> None:
    logger = runtime.get_logger(name)
    for index in range(count):
        logger.info(f"{name} message {index}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group in a test-friendly manner.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Exit code of the invoked command.
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


__all__ = ["cli", "main", "summary_info"]
