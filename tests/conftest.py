from __future__ import annotations

from collections.abc import Iterator
from io import StringIO

import pytest
from rich.console import Console

from lib_log_async import config as log_config
from lib_log_async import runtime

_LOG_ENV_VARS = (
    "LOG_QUEUE_CAPACITY",
    "LOG_BATCH_SIZE",
    "LOG_FLUSH_INTERVAL",
    "LOG_BACKPRESSURE",
    "LOG_ROTATION_BYTES",
    "LOG_DIR",
    "LOG_BASE_NAME",
    "LOG_LEVEL",
    "LOG_CONSOLE_ENABLED",
    "LOG_FILE_ENABLED",
    "LOG_FORCE_COLOR",
    "LOG_NO_COLOR",
    log_config.DOTENV_ENV_VAR,
)


@pytest.fixture
def record_console() -> Console:
    """Rich console that records plain output without touching the terminal."""

    return Console(file=StringIO(), record=True, markup=False, soft_wrap=True, color_system=None)


@pytest.fixture(autouse=True)
def _isolate_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep ``LOG_*`` variables and the process-wide pipeline out of neighbouring tests."""

    for name in _LOG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    runtime.shutdown()
