# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Naming convention for subcommand binaries."""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePath
from typing import Final


class BinaryPrefix(StrEnum):
    """Recognised file name prefixes, in match order."""

    SHORT = "mm-"
    LONG = "master-mold-"


VALID_PREFIXES: Final[tuple[BinaryPrefix, ...]] = (BinaryPrefix.SHORT, BinaryPrefix.LONG)


def has_valid_prefix(filename: str) -> bool:
    """Return ``True`` when ``filename`` starts with a recognised prefix."""

    return any(filename.startswith(prefix) for prefix in VALID_PREFIXES)


def extract_command_name(path: str | PurePath) -> str:
    """Return the logical command name for ``path``.

    The final path segment is stripped of the first matching prefix exactly
    once; segments without a recognised prefix are returned unchanged.

    Args:
        path: Binary path or bare file name.

    Returns:
        str: Logical command name, e.g. ``"deploy"`` for ``/opt/bin/mm-deploy``.
    """

    name = PurePath(path).name
    for prefix in VALID_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix) :]
    return name


def candidate_names(command: str) -> tuple[str, ...]:
    """Return the binary file names that may implement ``command``."""

    return tuple(f"{prefix}{command}" for prefix in VALID_PREFIXES)


__all__ = [
    "BinaryPrefix",
    "VALID_PREFIXES",
    "candidate_names",
    "extract_command_name",
    "has_valid_prefix",
]
