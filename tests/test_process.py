# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for subprocess helpers."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from master_mold.errors import SubcommandExecutionError
from master_mold.process import TIMEOUT_EXIT_CODE, CommandOptions, run_binary, run_command

pytestmark = pytest.mark.skipif(os.name == "nt", reason="requires /bin/sh")


def test_run_command_rejects_empty_arguments() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_run_command_captures_output() -> None:
    completed = run_command(
        ["/bin/sh", "-c", "echo hello"],
        options=CommandOptions(capture_output=True),
    )

    assert completed.returncode == 0
    assert completed.stdout == "hello\n"


def test_run_command_raises_on_non_zero_exit() -> None:
    with pytest.raises(SubcommandExecutionError) as excinfo:
        run_command(["/bin/sh", "-c", "exit 3"])

    assert excinfo.value.returncode == 3
    assert "exited with status 3" in str(excinfo.value)


def test_run_command_without_check_returns_status() -> None:
    completed = run_command(["/bin/sh", "-c", "exit 4"], options=CommandOptions(check=False))

    assert completed.returncode == 4


def test_run_command_reports_launch_failure(tmp_path: Path) -> None:
    missing = tmp_path / "mm-missing"

    with pytest.raises(SubcommandExecutionError) as excinfo:
        run_command([missing])

    assert excinfo.value.path == missing
    assert excinfo.value.returncode is None
    assert str(missing) in str(excinfo.value)


def test_run_command_timeout_uses_conventional_exit_code() -> None:
    options = CommandOptions(check=False, capture_output=True, timeout=0.2)

    completed = run_command(["/bin/sh", "-c", "sleep 5"], options=options)

    assert completed.returncode == TIMEOUT_EXIT_CODE
    assert "timed out" in completed.stderr


def test_run_command_timeout_raises_when_checked() -> None:
    with pytest.raises(SubcommandExecutionError, match="timed out") as excinfo:
        run_command(["/bin/sh", "-c", "sleep 5"], options=CommandOptions(capture_output=True, timeout=0.2))

    assert excinfo.value.returncode == TIMEOUT_EXIT_CODE


def test_run_binary_forwards_arguments_and_logs(tmp_path: Path, make_script, recording_logger, capfd) -> None:
    script = make_script(tmp_path / "mm-echo", 'echo "args:$*"\n')

    run_binary(script, ["one", "two"], logger=recording_logger)

    assert capfd.readouterr().out == "args:one two\n"
    assert recording_logger.messages("debug") == [f"executing binary path={script} args=['one', 'two']"]


def test_run_binary_wraps_child_failure(tmp_path: Path, make_script, recording_logger) -> None:
    script = make_script(tmp_path / "mm-fail", "exit 7\n")

    with pytest.raises(SubcommandExecutionError) as excinfo:
        run_binary(script, [], logger=recording_logger)

    assert excinfo.value.returncode == 7
    assert excinfo.value.path == script
