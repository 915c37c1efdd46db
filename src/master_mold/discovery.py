# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate and enumerate subcommand binaries on ``PATH`` and the base directory."""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from .config import expand_env_string
from .errors import CommandNotFoundError, DirectoryCreationError, ExecutableResolutionError
from .naming import candidate_names, has_valid_prefix

PATH_ENV: Final[str] = "PATH"
_EXECUTE_BITS: Final[int] = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
_WINDOWS: Final[bool] = os.name == "nt"


def search_path(env: Mapping[str, str] | None = None) -> list[Path]:
    """Return the directories listed in ``PATH``, left to right.

    Empty entries are dropped.

    Args:
        env: Environment mapping to read; defaults to :data:`os.environ`.

    Returns:
        list[Path]: Search-path directories in precedence order.
    """

    source = os.environ if env is None else env
    raw = source.get(PATH_ENV, "")
    return [Path(entry) for entry in raw.split(os.pathsep) if entry]


def is_executable(path: Path) -> bool:
    """Return ``True`` when ``path`` is a regular file with an execute bit set.

    Windows has no execute bit, so any regular file qualifies there.
    """

    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    if not stat.S_ISREG(mode):
        return False
    if _WINDOWS:
        return True
    return bool(mode & _EXECUTE_BITS)


def find_in_directory(directory: Path) -> list[Path]:
    """Return executable binaries in ``directory`` that follow the naming convention.

    The scan is non-recursive and ordered by file name. A missing directory
    yields an empty list.

    Args:
        directory: Directory to scan.

    Returns:
        list[Path]: Absolute paths of matching executables.

    Raises:
        ExecutableResolutionError: If the directory exists but cannot be read.
    """

    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except FileNotFoundError:
        return []
    except OSError as exc:
        raise ExecutableResolutionError(directory, exc.strerror or str(exc)) from exc

    binaries: list[Path] = []
    for entry in entries:
        if not has_valid_prefix(entry.name):
            continue
        candidate = Path(entry.path)
        if is_executable(candidate):
            binaries.append(candidate.absolute())
    return binaries


def find_in_path(env: Mapping[str, str] | None = None) -> list[Path]:
    """Return matching executables from every ``PATH`` directory.

    Directories that are missing or cannot be read are skipped.
    """

    binaries: list[Path] = []
    for directory in search_path(env):
        try:
            binaries.extend(find_in_directory(directory))
        except ExecutableResolutionError:
            continue
    return binaries


def ensure_directory(directory: Path) -> Path:
    """Create ``directory`` (and parents) when it does not exist yet.

    Raises:
        DirectoryCreationError: If the directory cannot be created.
    """

    try:
        if directory.is_dir():
            return directory
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(directory, exc.strerror or str(exc)) from exc
    return directory


def find_all(fallback_dir: str | Path, *, env: Mapping[str, str] | None = None) -> list[Path]:
    """Return every subcommand binary in the base directory and on ``PATH``.

    Base-directory matches come first, followed by ``PATH`` matches in
    discovery order. Duplicate logical names are preserved; the display
    layer keeps the first occurrence.

    Args:
        fallback_dir: Base directory holding user-installed binaries. It is
            created when missing.
        env: Environment mapping used for ``PATH``; defaults to :data:`os.environ`.

    Returns:
        list[Path]: Absolute paths of all discovered binaries.

    Raises:
        DirectoryCreationError: If the base directory cannot be created.
        ExecutableResolutionError: If the base directory cannot be read.
    """

    base_dir = ensure_directory(Path(fallback_dir))
    return [*find_in_directory(base_dir), *find_in_path(env)]


def find_executable(
    command: str,
    fallback_dir: str | Path,
    *,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Resolve ``command`` to a single executable.

    Both prefixed names are looked up on ``PATH`` first; only then is the
    base directory consulted, after expanding environment references in it.

    Args:
        command: Logical command name, e.g. ``"deploy"``.
        fallback_dir: Base directory, possibly containing ``$VAR`` references.
        env: Environment mapping used for ``PATH`` and expansion; defaults to
            :data:`os.environ`.

    Returns:
        Path: Absolute path to the executable.

    Raises:
        CommandNotFoundError: If no executable matches ``command``.
    """

    source = os.environ if env is None else env
    names = candidate_names(command)
    path_value = os.pathsep.join(str(entry) for entry in search_path(source))

    for name in names:
        resolved = shutil.which(name, path=path_value) if path_value else None
        if resolved is not None:
            return Path(resolved).absolute()

    base_dir = Path(expand_env_string(str(fallback_dir), source)).expanduser()
    for name in names:
        candidate = base_dir / name
        if is_executable(candidate):
            return candidate.absolute()

    raise CommandNotFoundError(command)


__all__ = [
    "PATH_ENV",
    "ensure_directory",
    "find_all",
    "find_executable",
    "find_in_directory",
    "find_in_path",
    "is_executable",
    "search_path",
]
