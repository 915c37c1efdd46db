# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for binary lookup and enumeration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from master_mold import discovery
from master_mold.discovery import (
    ensure_directory,
    find_all,
    find_executable,
    find_in_directory,
    find_in_path,
    is_executable,
    search_path,
)
from master_mold.errors import CommandNotFoundError, DirectoryCreationError, ExecutableResolutionError

pytestmark = pytest.mark.skipif(os.name == "nt", reason="requires POSIX execute bits")


def test_search_path_drops_empty_entries(tmp_path: Path) -> None:
    first = tmp_path / "a"
    second = tmp_path / "b"
    raw = os.pathsep.join([str(first), "", str(second), ""])

    assert search_path({"PATH": raw}) == [first, second]
    assert search_path({}) == []


def test_is_executable_requires_regular_file_with_execute_bit(tmp_path: Path, make_script) -> None:
    runnable = make_script(tmp_path / "mm-run")
    plain = make_script(tmp_path / "mm-plain", executable=False)

    assert is_executable(runnable)
    assert not is_executable(plain)
    assert not is_executable(tmp_path)
    assert not is_executable(tmp_path / "missing")


def test_find_executable_prefers_search_path(tmp_path: Path, make_script) -> None:
    path_dir = tmp_path / "path"
    base_dir = tmp_path / "base"
    on_path = make_script(path_dir / "mm-foo")
    make_script(base_dir / "mm-foo")

    resolved = find_executable("foo", base_dir, env={"PATH": str(path_dir)})

    assert resolved == on_path.absolute()


def test_find_executable_uses_first_path_directory(tmp_path: Path, make_script) -> None:
    first = make_script(tmp_path / "one" / "master-mold-foo")
    make_script(tmp_path / "two" / "master-mold-foo")
    env = {"PATH": os.pathsep.join([str(tmp_path / "one"), str(tmp_path / "two")])}

    assert find_executable("foo", tmp_path / "base", env=env) == first.absolute()


def test_find_executable_falls_back_to_expanded_base_dir(tmp_path: Path, make_script) -> None:
    binary = make_script(tmp_path / "custom" / "bins" / "master-mold-deploy")
    env = {"PATH": "", "MM_ROOT": str(tmp_path / "custom")}

    resolved = find_executable("deploy", "${MM_ROOT}/bins", env=env)

    assert resolved == binary.absolute()


def test_find_executable_ignores_non_executable_candidates(tmp_path: Path, make_script) -> None:
    base_dir = tmp_path / "base"
    make_script(base_dir / "mm-bar", executable=False)

    with pytest.raises(CommandNotFoundError) as excinfo:
        find_executable("bar", base_dir, env={"PATH": ""})

    assert excinfo.value.command == "bar"
    assert "subcommand 'bar' not found" in str(excinfo.value)


def test_find_all_creates_missing_base_dir(tmp_path: Path) -> None:
    base_dir = tmp_path / "nested" / "base"

    assert find_all(base_dir, env={"PATH": ""}) == []
    assert base_dir.is_dir()


def test_find_all_lists_base_dir_before_path(tmp_path: Path, make_script) -> None:
    base_dir = tmp_path / "base"
    path_dir = tmp_path / "path"
    base_b = make_script(base_dir / "mm-b")
    base_a = make_script(base_dir / "master-mold-a")
    make_script(base_dir / "mm-not-executable", executable=False)
    make_script(base_dir / "unrelated")
    (base_dir / "mm-directory").mkdir()
    path_x = make_script(path_dir / "mm-b")
    env = {"PATH": os.pathsep.join([str(tmp_path / "missing"), str(path_dir)])}

    result = find_all(base_dir, env=env)

    assert result == [base_a.absolute(), base_b.absolute(), path_x.absolute()]


def test_find_in_directory_missing_directory_is_empty(tmp_path: Path) -> None:
    assert find_in_directory(tmp_path / "absent") == []


def test_unreadable_directory_raises_for_base_and_is_skipped_on_path(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _denied(_path: object) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(discovery.os, "scandir", _denied)

    with pytest.raises(ExecutableResolutionError, match="failed to read directory"):
        find_in_directory(tmp_path)
    assert find_in_path({"PATH": str(tmp_path)}) == []


def test_ensure_directory_reports_creation_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(DirectoryCreationError, match="failed to create base directory"):
        ensure_directory(blocker / "child")


def test_unstatable_path_entry_is_skipped(tmp_path: Path, make_script) -> None:
    good = tmp_path / "good"
    binary = make_script(good / "mm-ok")
    too_long = tmp_path / ("x" * 300)
    env = {"PATH": os.pathsep.join([str(too_long), str(good)])}

    assert find_in_path(env) == [binary.absolute()]
    assert find_all(tmp_path / "base", env=env) == [binary.absolute()]


def test_ensure_directory_reports_unstatable_path(tmp_path: Path) -> None:
    with pytest.raises(DirectoryCreationError, match="failed to create base directory"):
        ensure_directory(tmp_path / ("x" * 300))
