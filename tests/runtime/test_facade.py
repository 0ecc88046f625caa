from __future__ import annotations

from pathlib import Path

import pytest

import lib_log_async
from lib_log_async import runtime
from lib_log_async.domain import BackpressurePolicy, ConfigurationError, LogLevel, PipelineClosedError


def test_get_logger_before_initialize_raises() -> None:
    assert not runtime.is_initialised()
    with pytest.raises(PipelineClosedError, match="initialize"):
        runtime.get_logger("svc")


def test_initialize_log_and_shutdown(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    dispatcher = lib_log_async.initialize(log_dir=tmp_path, flush_interval=0.05, no_color=True)
    assert lib_log_async.initialize() is dispatcher

    lib_log_async.get_logger("svc").info("hello", {"user": "ada"})
    lib_log_async.shutdown()

    out = capsys.readouterr().out
    assert out.endswith("  INFO  [svc] hello user=ada\n")
    assert (tmp_path / "app.log").read_text(encoding="utf-8") == out
    assert not runtime.is_initialised()


def test_environment_shapes_the_runtime(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_BACKPRESSURE", "drop")
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_CONSOLE_ENABLED", "0")
    runtime.initialize(log_dir=tmp_path, flush_interval=0.05, backpressure="block")

    snapshot = runtime.inspect_runtime()
    assert snapshot.backpressure is BackpressurePolicy.DROP
    assert snapshot.default_level is LogLevel.ERROR
    assert snapshot.sinks == ("RotatingFileSink",)
    assert snapshot.log_dir == tmp_path
    assert runtime.get_logger("svc").warn("hidden") is False


def test_explicit_config_with_overrides(tmp_path: Path) -> None:
    config = runtime.LoggingConfig(log_dir=tmp_path, console_enabled=False, flush_interval=0.05)
    runtime.initialize(config, batch_size=7)

    runtime.get_logger("svc").error("boom")
    snapshot = runtime.inspect_runtime()
    assert snapshot.batch_size == 7
    assert snapshot.stats.accepted == 1


def test_invalid_configuration_installs_nothing(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        runtime.initialize(log_dir=tmp_path, queue_capacity=0)
    assert not runtime.is_initialised()


def test_shutdown_is_idempotent_and_allows_reinitialise(tmp_path: Path) -> None:
    runtime.shutdown()
    first = runtime.initialize(log_dir=tmp_path, console_enabled=False, flush_interval=0.05)
    runtime.shutdown()
    runtime.shutdown()

    second = runtime.initialize(log_dir=tmp_path, console_enabled=False, flush_interval=0.05)
    assert second is not first
    runtime.get_logger("svc").info("again")
    runtime.shutdown()
    assert (tmp_path / "app.log").read_text(encoding="utf-8").endswith("[svc] again\n")


def test_loggers_from_a_closed_pipeline_raise(tmp_path: Path) -> None:
    runtime.initialize(log_dir=tmp_path, console_enabled=False, flush_interval=0.05)
    logger = runtime.get_logger("svc")
    runtime.shutdown()
    with pytest.raises(PipelineClosedError):
        logger.info("late")


def test_inspect_runtime_requires_an_initialised_manager() -> None:
    from lib_log_async.runtime import _state

    with pytest.raises(PipelineClosedError):
        runtime.inspect_runtime()

    _state.ensure_manager(runtime.LogManager)
    with pytest.raises(PipelineClosedError, match="not initialised"):
        runtime.inspect_runtime()
