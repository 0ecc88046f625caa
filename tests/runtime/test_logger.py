from __future__ import annotations

from collections.abc import Mapping

import pytest

from lib_log_async.domain import LogLevel
from lib_log_async.runtime import Logger


class _Emitter:
    def __init__(self) -> None:
        self.calls: list[tuple[str, LogLevel, str, dict[str, str]]] = []

    def __call__(self, name: str, level: LogLevel, message: str, context: Mapping[str, str] | None) -> bool:
        self.calls.append((name, level, message, dict(context or {})))
        return True


@pytest.mark.parametrize(
    "method, level",
    [
        ("trace", LogLevel.TRACE),
        ("debug", LogLevel.DEBUG),
        ("info", LogLevel.INFO),
        ("warn", LogLevel.WARN),
        ("warning", LogLevel.WARN),
        ("error", LogLevel.ERROR),
    ],
)
def test_convenience_methods_map_to_levels(method: str, level: LogLevel) -> None:
    emit = _Emitter()
    logger = Logger("svc", LogLevel.TRACE, dispatcher=None, emit=emit)

    assert getattr(logger, method)("msg") is True
    assert emit.calls == [("svc", level, "msg", {})]


def test_threshold_filters_before_emitting() -> None:
    emit = _Emitter()
    logger = Logger("svc", LogLevel.WARN, dispatcher=None, emit=emit)

    assert logger.info("quiet") is False
    assert logger.log("debug", "quiet") is False
    assert logger.is_enabled_for("error")
    assert not logger.is_enabled_for(LogLevel.INFO)
    assert emit.calls == []


def test_bind_merges_context_and_call_context_wins() -> None:
    emit = _Emitter()
    base = Logger("svc", LogLevel.INFO, dispatcher=None, emit=emit)
    bound = base.bind(user="ada", attempt=1)

    bound.info("first", {"attempt": "2"})
    base.info("second")

    assert emit.calls[0][3] == {"user": "ada", "attempt": "2"}
    assert emit.calls[1][3] == {}
    assert bound.context == {"user": "ada", "attempt": "1"}
    assert repr(bound) == "Logger(name='svc', threshold=INFO)"
