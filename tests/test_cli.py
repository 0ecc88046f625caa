"""CLI behaviour coverage for the Click command group."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_log_async import __init__conf__
from lib_log_async import cli as cli_mod
from lib_log_async import runtime


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the command group with ``CliRunner`` and capture output."""

    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, args or [], prog_name=__init__conf__.shell_command)
    return result.exit_code, result.output, result.exception


def _rotation_index(path: Path) -> int:
    suffix = path.suffix.lstrip(".")
    return int(suffix) if suffix.isdigit() else 0


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == cli_mod.summary_info()


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout.startswith("Info for lib_log_async:")
    assert f"= {__init__conf__.version}" in stdout


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == __init__conf__.version


def test_logdemo_writes_files_and_reports_counters(tmp_path: Path) -> None:
    exit_code, stdout, exception = run_cli(
        [
            "logdemo",
            "--workers",
            "3",
            "--messages",
            "20",
            "--log-dir",
            str(tmp_path),
            "--rotation-bytes",
            "500",
            "--flush-interval",
            "0.05",
            "--no-console",
        ]
    )

    assert exception is None
    assert exit_code == 0
    assert "accepted=61 dropped=0 delivered=61" in stdout
    assert not runtime.is_initialised()

    files = sorted(tmp_path.iterdir(), key=_rotation_index)
    assert len(files) > 1
    lines = [line for path in files for line in path.read_text(encoding="utf-8").splitlines()]
    assert len(lines) == 61
    assert all(path.stat().st_size <= 500 for path in files)
    assert lines[-1].endswith("All work done. Check the console and the log directory for output.")


def test_logdemo_drop_policy_never_fails(tmp_path: Path) -> None:
    exit_code, stdout, exception = run_cli(
        [
            "logdemo",
            "--workers",
            "4",
            "--messages",
            "200",
            "--policy",
            "drop",
            "--capacity",
            "5",
            "--log-dir",
            str(tmp_path),
            "--no-console",
        ]
    )

    assert exception is None
    assert exit_code == 0
    counters = dict(item.split("=") for item in stdout.strip().splitlines()[-1].split())
    assert int(counters["accepted"]) + int(counters["dropped"]) == 801
    assert counters["accepted"] == counters["delivered"]


def test_logdemo_rejects_invalid_settings(tmp_path: Path) -> None:
    exit_code, stdout, _ = run_cli(["logdemo", "--capacity", "0", "--log-dir", str(tmp_path)])

    assert exit_code == 2
    assert "queue_capacity must be positive" in stdout
    assert not runtime.is_initialised()


def test_main_returns_exit_codes(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_mod.main(["info"]) == 0
    assert capsys.readouterr().out == cli_mod.summary_info()

    assert cli_mod.main(["no-such-command"]) == 2
    assert "No such command" in capsys.readouterr().err
