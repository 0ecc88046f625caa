from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lib_log_async.adapters.console.rich_console import ConsoleSink
from lib_log_async.domain.events import LogEvent
from lib_log_async.domain.levels import LogLevel


def _event(message: str = "hello", level: LogLevel = LogLevel.INFO, **context: str) -> LogEvent:
    return LogEvent(
        timestamp=datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
        level=level,
        origin="MainThread",
        logger_name="tests",
        message=message,
        context=context,
    )


def test_console_sink_renders_expected_line(record_console) -> None:
    sink = ConsoleSink(console=record_console)
    sink.consume([_event()])
    assert record_console.export_text() == "2025-09-23T12:00:00.000Z  INFO  [tests] hello\n"


def test_console_sink_keeps_batch_order(record_console) -> None:
    sink = ConsoleSink(console=record_console)
    sink.consume([_event(f"m{index}") for index in range(3)])
    lines = record_console.export_text().splitlines()
    assert [line.rsplit(" ", 1)[-1] for line in lines] == ["m0", "m1", "m2"]


def test_console_sink_does_not_interpret_markup(record_console) -> None:
    sink = ConsoleSink(console=record_console)
    sink.consume([_event("[bold]literal[/bold] :smile:")])
    assert "[bold]literal[/bold] :smile:" in record_console.export_text()


def test_console_sink_appends_sorted_context(record_console) -> None:
    sink = ConsoleSink(console=record_console)
    sink.consume([_event(job="7", attempt="2")])
    assert record_console.export_text().endswith("hello attempt=2 job=7\n")


def test_console_sink_writes_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    sink = ConsoleSink(no_color=True)
    sink.consume([_event(level=LogLevel.WARN)])
    sink.close()
    captured = capsys.readouterr()
    assert captured.out == "2025-09-23T12:00:00.000Z  WARN  [tests] hello\n"
    assert captured.err == ""


def test_console_sink_accepts_style_overrides_by_name(record_console) -> None:
    sink = ConsoleSink(console=record_console, styles={"error": "magenta"})
    sink.consume([_event(level=LogLevel.ERROR)])
    assert "ERROR [tests] hello" in record_console.export_text()


def test_console_sink_close_is_repeatable(record_console) -> None:
    sink = ConsoleSink(console=record_console)
    sink.close()
    sink.close()


def test_console_and_file_lines_match_for_control_characters(
    tmp_path, capsys: pytest.CaptureFixture[str]
) -> None:
    from lib_log_async.adapters.file.rotating import RotatingFileSink

    event = _event("a\tb\rc\nd\x1be", note="x\ty")
    console = ConsoleSink(no_color=True)
    file_sink = RotatingFileSink(tmp_path, max_bytes=1024)

    console.consume([event])
    file_sink.consume([event])
    file_sink.close()

    console_text = capsys.readouterr().out
    file_text = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert console_text == file_text
    assert file_text.count("\n") == 1
    assert file_text.endswith("[tests] a\\tb\\rc\\nd\\x1be note=x\\ty\n")
