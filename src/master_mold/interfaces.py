# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols shared between the dispatch core and the CLI layer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class DispatchLogger(Protocol):
    """Logging surface the dispatch core relies on."""

    def debug(self, message: str) -> None:
        """Emit a diagnostic ``key=value`` record."""
        ...

    def warn(self, message: str) -> None:
        """Emit a warning."""
        ...

    def fail(self, message: str) -> None:
        """Emit a failure message."""
        ...


@runtime_checkable
class CommandHandler(Protocol):
    """In-process implementation of a dispatcher command."""

    def execute(self, args: Sequence[str]) -> None:
        """Run the command with ``args``, raising on failure."""
        ...


class SubcommandDelegate(Protocol):
    """Fallback invoked for names without an in-process handler."""

    def __call__(self, name: str, args: Sequence[str]) -> None:
        """Resolve ``name`` and run it with ``args``, raising on failure."""
        ...


__all__ = ["CommandHandler", "DispatchLogger", "SubcommandDelegate"]
