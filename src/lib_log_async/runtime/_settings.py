"""Construction-time configuration and environment overrides.

Purpose
-------
Collect every knob of the pipeline in one validated, immutable value so the
composition root never starts a worker with an invalid setup.

Contents
--------
* :class:`LoggingConfig` - frozen settings dataclass.
* ``_env_*`` helpers translating ``LOG_*`` environment variables.

System Role
-----------
Consumed by :class:`lib_log_async.runtime.LogManager`. Environment values take
precedence over keyword arguments in :meth:`LoggingConfig.from_env`, matching
how deployments override application defaults.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

from lib_log_async.adapters.dispatcher import DiagnosticHook
from lib_log_async.adapters.file import DEFAULT_BASE_NAME
from lib_log_async.domain import BackpressurePolicy, ConfigurationError, LogLevel

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Validated settings for one pipeline.

    Attributes
    ----------
    queue_capacity:
        Bounded queue size of the dispatcher.
    batch_size:
        Maximum events per sink call; values above ``queue_capacity`` simply
        never fill up.
    flush_interval:
        Seconds the worker waits for new events before looping.
    backpressure:
        Policy applied when the queue is full.
    rotation_bytes:
        Size threshold of each log file.
    log_dir, base_name:
        Where the rotating file sink writes.
    default_level:
        Threshold for loggers that do not request their own.
    console_enabled, file_enabled:
        Toggle the two default sinks.
    force_color, no_color:
        Console colour control.
    diagnostic_hook:
        Optional ``(name, payload)`` callback for sink failures.
    """

    queue_capacity: int = 10_000
    batch_size: int = 128
    flush_interval: float = 1.0
    backpressure: BackpressurePolicy = BackpressurePolicy.BLOCK
    rotation_bytes: int = 10 * 1024 * 1024
    log_dir: Path = Path("logs")
    base_name: str = DEFAULT_BASE_NAME
    default_level: LogLevel = LogLevel.INFO
    console_enabled: bool = True
    file_enabled: bool = True
    force_color: bool = False
    no_color: bool = False
    diagnostic_hook: DiagnosticHook = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "backpressure", BackpressurePolicy.from_name(self.backpressure))
            object.__setattr__(self, "default_level", LogLevel.coerce(self.default_level))
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        object.__setattr__(self, "log_dir", Path(self.log_dir))
        _require_positive("queue_capacity", self.queue_capacity)
        _require_positive("batch_size", self.batch_size)
        _require_positive("flush_interval", self.flush_interval)
        _require_positive("rotation_bytes", self.rotation_bytes)
        if not self.base_name.strip():
            raise ConfigurationError("base_name must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "LoggingConfig":
        """Build a config from ``overrides`` with ``LOG_*`` variables applied on top.

        Examples
        --------
        >>> LoggingConfig.from_env({"LOG_BATCH_SIZE": "16"}, batch_size=4).batch_size
        16
        """

        env = os.environ if environ is None else environ
        known = {item.name for item in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError("Unknown configuration option(s): " + ", ".join(sorted(unknown)))
        values: dict[str, Any] = dict(overrides)
        values.update(_env_values(env))
        return cls(**values)

    def replace(self, **changes: Any) -> "LoggingConfig":
        """Return a copy with ``changes`` applied and re-validated."""

        return replace(self, **changes)


def _require_positive(name: str, value: float) -> None:
    if isinstance(value, bool) or value <= 0:
        raise ConfigurationError(f"{name} must be positive")
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")


def _env_values(env: Mapping[str, str]) -> dict[str, Any]:
    """Translate recognised environment variables into config fields."""

    values: dict[str, Any] = {}
    ints = {
        "LOG_QUEUE_CAPACITY": "queue_capacity",
        "LOG_BATCH_SIZE": "batch_size",
        "LOG_ROTATION_BYTES": "rotation_bytes",
    }
    for key, name in ints.items():
        if key in env:
            values[name] = _env_int(key, env[key])
    if "LOG_FLUSH_INTERVAL" in env:
        values["flush_interval"] = _env_float("LOG_FLUSH_INTERVAL", env["LOG_FLUSH_INTERVAL"])
    if "LOG_BACKPRESSURE" in env:
        values["backpressure"] = env["LOG_BACKPRESSURE"]
    if "LOG_LEVEL" in env:
        values["default_level"] = env["LOG_LEVEL"]
    if "LOG_DIR" in env:
        values["log_dir"] = Path(env["LOG_DIR"])
    if "LOG_BASE_NAME" in env:
        values["base_name"] = env["LOG_BASE_NAME"]
    bools = {
        "LOG_CONSOLE_ENABLED": "console_enabled",
        "LOG_FILE_ENABLED": "file_enabled",
        "LOG_FORCE_COLOR": "force_color",
        "LOG_NO_COLOR": "no_color",
    }
    for key, name in bools.items():
        if key in env:
            values[name] = _env_bool(key, env[key])
    return values


def _env_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _env_bool(name: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")


__all__ = ["LoggingConfig"]
