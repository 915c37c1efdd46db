# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console messages with optional colour and emoji support."""

from __future__ import annotations

import sys
from typing import TextIO

from rich.console import Console
from rich.text import Text


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return ``True`` when ``stream`` (stderr by default) is a terminal."""

    target = sys.stderr if stream is None else stream
    try:
        return target.isatty()
    except (AttributeError, ValueError):
        return False


def build_console(*, stderr: bool = True, color: bool = True, emoji: bool = True) -> Console:
    """Return a Rich console honouring colour and emoji preferences.

    Args:
        stderr: Write to standard error rather than standard output.
        color: Allow ANSI colour when the target stream is a terminal.
        emoji: Allow Rich to render emoji glyphs.

    Returns:
        Console: Console configured for the requested stream.
    """

    tty = detect_tty(sys.stderr if stderr else sys.stdout)
    return Console(
        stderr=stderr,
        no_color=not (color and tty),
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(console: Console, msg: str, *, style: str) -> None:
    text = Text(msg)
    if not console.no_color:
        text.stylize(style)
    console.print(text)


def warn(console: Console, msg: str, *, use_emoji: bool) -> None:
    """Emit a warning message."""

    _print_line(console, f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow")


def fail(console: Console, msg: str, *, use_emoji: bool) -> None:
    """Emit an error message."""

    _print_line(console, f"{emoji('❌ ', use_emoji)}{msg}", style="red")


__all__ = [
    "build_console",
    "detect_tty",
    "emoji",
    "fail",
    "warn",
]
