# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""External subcommand resolution and parent-process detection."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from enum import StrEnum
from pathlib import Path
from typing import Final

from .config import MasterMoldConfig
from .discovery import find_executable
from .errors import MasterMoldError
from .interfaces import DispatchLogger
from .process import CommandOptions, run_binary, run_command

DISPATCHER_NAME: Final[str] = "master-mold"


class SubcommandExecutor:
    """Locate ``mm-<name>`` binaries and run them.

    Instances are callable so they can be handed straight to
    :class:`~master_mold.registry.CommandRegistry` as its delegate.
    """

    def __init__(
        self,
        config: MasterMoldConfig,
        logger: DispatchLogger,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._logger = logger
        self._env = env

    def resolve(self, name: str) -> Path:
        """Return the executable implementing ``name``.

        Raises:
            CommandNotFoundError: If no binary matches ``name``.
        """

        return find_executable(name, self._config.base_dir, env=self._env)

    def __call__(self, name: str, args: Sequence[str]) -> None:
        """Resolve ``name`` and run it with ``args``.

        The configured timeout is not applied; subcommands may be interactive
        and run for as long as the user needs.

        Raises:
            CommandNotFoundError: If no binary matches ``name``.
            SubcommandExecutionError: If the binary fails.
        """

        path = self.resolve(name)
        self._logger.debug(f"executing subcommand command={name} binary={path}")
        run_binary(path, args, logger=self._logger)


class ParentKind(StrEnum):
    """Best-effort classification of the process that launched us."""

    DISPATCHER = "dispatcher"
    STANDALONE = "standalone"
    UNKNOWN = "unknown"


def parent_process_name(ppid: int | None = None) -> str | None:
    """Return the command name of the parent process, or ``None`` when unavailable.

    Relies on ``ps``; platforms without it yield ``None``.
    """

    pid = os.getppid() if ppid is None else ppid
    try:
        completed = run_command(
            ["ps", "-o", "comm=", "-p", str(pid)],
            options=CommandOptions(check=False, capture_output=True, timeout=5),
        )
    except MasterMoldError:
        return None
    name = (completed.stdout or "").strip()
    if completed.returncode != 0 or not name:
        return None
    return name


def detect_parent(ppid: int | None = None) -> ParentKind:
    """Return whether the current process was launched by the dispatcher."""

    name = parent_process_name(ppid)
    if name is None:
        return ParentKind.UNKNOWN
    if Path(name).name == DISPATCHER_NAME:
        return ParentKind.DISPATCHER
    return ParentKind.STANDALONE


__all__ = [
    "DISPATCHER_NAME",
    "ParentKind",
    "SubcommandExecutor",
    "detect_parent",
    "parent_process_name",
]
