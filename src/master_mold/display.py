# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render discovered subcommand binaries."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from .naming import extract_command_name


@dataclass(frozen=True, slots=True)
class BinaryInfo:
    """A logical command bound to the binary that implements it."""

    name: str
    path: Path

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-serialisable mapping."""

        return {"name": self.name, "path": str(self.path)}


def format_binary_info(info: BinaryInfo) -> str:
    """Return the one-line text rendering of ``info``."""

    return f"  - {info.name} ({info.path})"


def process_binaries(binary_paths: Iterable[str | Path]) -> list[BinaryInfo]:
    """Return one :class:`BinaryInfo` per logical command name.

    The first path seen for a name wins, so earlier search locations shadow
    later ones.
    """

    result: list[BinaryInfo] = []
    seen: set[str] = set()
    for raw_path in binary_paths:
        name = extract_command_name(raw_path)
        if name in seen:
            continue
        seen.add(name)
        result.append(BinaryInfo(name=name, path=Path(raw_path)))
    return result


def _default_console() -> Console:
    return Console(highlight=False, soft_wrap=True, emoji=False)


def print_binaries(binaries: Sequence[BinaryInfo], *, console: Console | None = None) -> None:
    """Print ``binaries`` as a human readable list."""

    target = console or _default_console()
    if not binaries:
        target.print("No subcommand binaries found.")
        return
    target.print("Available subcommands:")
    for info in binaries:
        target.print(format_binary_info(info), markup=False)


def print_binary_paths(binary_paths: Iterable[str | Path], *, console: Console | None = None) -> None:
    """Deduplicate ``binary_paths`` by command name and print them."""

    print_binaries(process_binaries(binary_paths), console=console)


def binaries_to_json(binaries: Sequence[BinaryInfo]) -> str:
    """Return ``binaries`` rendered as an indented JSON array."""

    return json.dumps([info.to_dict() for info in binaries], indent=2)


__all__ = [
    "BinaryInfo",
    "binaries_to_json",
    "format_binary_info",
    "print_binaries",
    "print_binary_paths",
    "process_binaries",
]
