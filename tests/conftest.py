# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

ScriptFactory = Callable[..., Path]

_ISOLATED_ENV = ("MASTER_MOLD_BASE_DIR", "MASTER_MOLD_TIMEOUT", "MASTER_MOLD_DEBUG")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``HOME`` and the working directory at throwaway locations."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return home


@pytest.fixture
def make_script() -> ScriptFactory:
    """Return a factory writing ``/bin/sh`` scripts."""

    def _make(path: Path, body: str = "exit 0\n", *, executable: bool = True) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
        path.chmod(0o755 if executable else 0o644)
        return path

    return _make


@pytest.fixture
def path_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Replace ``PATH`` with a single empty directory."""

    directory = tmp_path / "path-bin"
    directory.mkdir()
    monkeypatch.setenv("PATH", str(directory))
    return directory


class RecordingLogger:
    """Collects dispatch log records for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def debug(self, message: str) -> None:
        self.records.append(("debug", message))

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def fail(self, message: str) -> None:
        self.records.append(("fail", message))

    def messages(self, level: str) -> list[str]:
        return [message for record_level, message in self.records if record_level == level]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
