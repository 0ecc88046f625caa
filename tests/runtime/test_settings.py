from __future__ import annotations

from pathlib import Path

import pytest

from lib_log_async.domain import BackpressurePolicy, ConfigurationError, LogLevel
from lib_log_async.runtime import LoggingConfig


def test_defaults_are_valid() -> None:
    config = LoggingConfig()
    assert config.queue_capacity == 10_000
    assert config.batch_size == 128
    assert config.flush_interval == 1.0
    assert config.backpressure is BackpressurePolicy.BLOCK
    assert config.rotation_bytes == 10 * 1024 * 1024
    assert config.log_dir == Path("logs")
    assert config.default_level is LogLevel.INFO


def test_strings_are_coerced() -> None:
    config = LoggingConfig(backpressure="DROP", default_level="debug", log_dir="/tmp/x")  # type: ignore[arg-type]
    assert config.backpressure is BackpressurePolicy.DROP
    assert config.default_level is LogLevel.DEBUG
    assert config.log_dir == Path("/tmp/x")


@pytest.mark.parametrize(
    "field, value",
    [
        ("queue_capacity", 0),
        ("batch_size", -1),
        ("flush_interval", 0.0),
        ("rotation_bytes", 0),
        ("queue_capacity", True),
    ],
)
def test_non_positive_values_are_rejected(field: str, value: object) -> None:
    with pytest.raises(ConfigurationError, match=f"{field} must be positive"):
        LoggingConfig(**{field: value})


def test_unknown_policy_and_level_are_configuration_errors() -> None:
    with pytest.raises(ConfigurationError, match="'block' or 'drop'"):
        LoggingConfig(backpressure="spill")  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError, match="Unknown log level"):
        LoggingConfig(default_level="loud")  # type: ignore[arg-type]


def test_batch_size_may_exceed_capacity() -> None:
    assert LoggingConfig(queue_capacity=4, batch_size=64).batch_size == 64


def test_environment_overrides_keyword_arguments() -> None:
    env = {
        "LOG_QUEUE_CAPACITY": "50",
        "LOG_BATCH_SIZE": "5",
        "LOG_FLUSH_INTERVAL": "0.25",
        "LOG_BACKPRESSURE": "drop",
        "LOG_ROTATION_BYTES": "2048",
        "LOG_DIR": "/var/tmp/logs",
        "LOG_BASE_NAME": "svc.log",
        "LOG_LEVEL": "warning",
        "LOG_CONSOLE_ENABLED": "off",
        "LOG_FILE_ENABLED": "yes",
        "LOG_NO_COLOR": "1",
    }
    config = LoggingConfig.from_env(env, queue_capacity=10, base_name="other.log")

    assert config.queue_capacity == 50
    assert config.batch_size == 5
    assert config.flush_interval == 0.25
    assert config.backpressure is BackpressurePolicy.DROP
    assert config.rotation_bytes == 2048
    assert config.log_dir == Path("/var/tmp/logs")
    assert config.base_name == "svc.log"
    assert config.default_level is LogLevel.WARN
    assert config.console_enabled is False
    assert config.file_enabled is True
    assert config.no_color is True


def test_from_env_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_BATCH_SIZE", "9")
    assert LoggingConfig.from_env(batch_size=3).batch_size == 9


def test_keyword_arguments_apply_without_environment() -> None:
    assert LoggingConfig.from_env({}, batch_size=3).batch_size == 3


@pytest.mark.parametrize(
    "env, message",
    [
        ({"LOG_QUEUE_CAPACITY": "many"}, "must be an integer"),
        ({"LOG_FLUSH_INTERVAL": "soon"}, "must be a number"),
        ({"LOG_CONSOLE_ENABLED": "perhaps"}, "must be a boolean flag"),
        ({"LOG_BATCH_SIZE": "0"}, "batch_size must be positive"),
    ],
)
def test_invalid_environment_values(env: dict[str, str], message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        LoggingConfig.from_env(env)


def test_unknown_override_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown configuration option"):
        LoggingConfig.from_env({}, queue_size=3)


def test_replace_revalidates() -> None:
    config = LoggingConfig()
    assert config.replace(batch_size=7).batch_size == 7
    with pytest.raises(ConfigurationError):
        config.replace(batch_size=0)


@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_non_finite_flush_interval_is_rejected(value: float) -> None:
    with pytest.raises(ConfigurationError, match="flush_interval must be"):
        LoggingConfig(flush_interval=value)


@pytest.mark.parametrize("raw", ["inf", "nan", "-inf"])
def test_non_finite_flush_interval_from_environment_is_rejected(raw: str) -> None:
    with pytest.raises(ConfigurationError, match="flush_interval must be"):
        LoggingConfig.from_env({"LOG_FLUSH_INTERVAL": raw})
