# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the dispatcher components."""

from __future__ import annotations

from pathlib import Path


class MasterMoldError(RuntimeError):
    """Base class for failures surfaced to the CLI entry point."""


class ConfigLoadError(MasterMoldError):
    """Raised when configuration input cannot be read or validated."""


class CommandNotFoundError(MasterMoldError):
    """Raised when neither a handler nor a binary matches a command name."""

    def __init__(self, command: str) -> None:
        """Initialise the error for ``command``.

        Args:
            command: Logical command name that could not be resolved.
        """

        super().__init__(f"subcommand '{command}' not found")
        self.command = command


class ExecutableResolutionError(MasterMoldError):
    """Raised when a directory holding candidate binaries cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"failed to read directory {path}: {reason}")
        self.path = path


class DirectoryCreationError(MasterMoldError):
    """Raised when the fallback binary directory cannot be created."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"failed to create base directory {path}: {reason}")
        self.path = path


class SubcommandExecutionError(MasterMoldError):
    """Raised when a child process fails to launch or exits non-zero."""

    def __init__(self, path: Path, *, returncode: int | None = None, reason: str | None = None) -> None:
        """Initialise the error with the binary path and failure details.

        Args:
            path: Executable that was launched.
            returncode: Exit status reported by the child, when it ran.
            reason: Launch or timeout failure description, which takes precedence.
        """

        if reason:
            detail = reason
        elif returncode is not None:
            detail = f"exited with status {returncode}"
        else:
            detail = "failed to start"
        super().__init__(f"failed to execute binary '{path}': {detail}")
        self.path = path
        self.returncode = returncode
        self.reason = reason


__all__ = [
    "CommandNotFoundError",
    "ConfigLoadError",
    "DirectoryCreationError",
    "ExecutableResolutionError",
    "MasterMoldError",
    "SubcommandExecutionError",
]
