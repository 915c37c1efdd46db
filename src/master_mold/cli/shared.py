# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, application state)."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import click
import typer
from rich.console import Console
from rich.text import Text

from ..config import ConfigLoadResult, MasterMoldConfig, load_config
from ..errors import MasterMoldError
from ..logging import build_console
from ..logging import fail as core_fail
from ..logging import warn as core_warn

DEBUG_ENV: Final[str] = "MASTER_MOLD_DEBUG"
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


class CLIError(MasterMoldError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around the console helpers respecting CLI emoji settings.

    Diagnostics are written to ``console`` (standard error by default) so a
    dispatched subcommand owns standard output.
    """

    console: Console
    use_emoji: bool
    debug_enabled: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(self.console, message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(self.console, message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a ``key=value`` debug record when debug logging is enabled.

        Args:
            message: Debug payload rendered with simple highlighting.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            key, raw_value = match.group(1), match.group(2)
            text.append(key, style="bold magenta")
            text.append("=", style="dim")
            value_style = "bold blue" if key in {"command", "binary", "path"} else "bold green"
            text.append(raw_value, style=value_style)
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)


def debug_from_env() -> bool:
    """Return ``True`` when :data:`DEBUG_ENV` requests debug output."""

    return os.environ.get(DEBUG_ENV, "").strip().lower() in _TRUTHY


def build_cli_logger(*, emoji: bool = True, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated stderr console.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to a Rich console.
    """

    console = build_console(stderr=True, color=not no_color, emoji=emoji)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug or debug_from_env())


@dataclass(frozen=True, slots=True)
class AppState:
    """Services constructed once by an entry point and shared with commands."""

    config: MasterMoldConfig
    logger: CLILogger
    config_source: Path | None = None


def load_app_state(logger: CLILogger, *, config_path: Path | None = None) -> AppState:
    """Load configuration and bundle it with ``logger``.

    Raises:
        ConfigLoadError: If configuration cannot be loaded.
    """

    result: ConfigLoadResult = load_config(explicit_path=config_path, write_default=True)
    for warning in result.warnings:
        logger.warn(warning)
    logger.debug(
        f"configuration loaded source={result.source or 'defaults'} "
        f"base_dir={result.config.base_dir} timeout={result.config.timeout}"
    )
    return AppState(config=result.config, logger=logger, config_source=result.source)


def resolve_app_state(ctx: typer.Context) -> AppState:
    """Return the dispatcher-supplied state, or build one for standalone use."""

    state = ctx.obj
    if isinstance(state, AppState):
        return state
    state = load_app_state(build_cli_logger())
    ctx.obj = state
    return state


def invoke_app(
    app: typer.Typer,
    args: Sequence[str],
    *,
    prog_name: str,
    obj: AppState | None = None,
) -> int:
    """Run ``app`` in-process and return its exit status.

    Click runs in non-standalone mode, so ``--help`` and ``typer.Exit`` become
    return codes while usage errors and command failures propagate.

    Args:
        app: Typer application to run.
        args: Arguments parsed by the application.
        prog_name: Program name shown in usage output.
        obj: Application state exposed to commands as ``ctx.obj``.

    Returns:
        int: Exit status reported by the application.

    Raises:
        click.ClickException: If argument parsing fails.
        click.Abort: If the user aborts the command.
        MasterMoldError: If the command fails.
    """

    command = typer.main.get_command(app)
    result = command.main(args=list(args), prog_name=prog_name, standalone_mode=False, obj=obj)
    return result if isinstance(result, int) else 0


def run_standalone(
    app: typer.Typer,
    *,
    prog_name: str,
    argv: Sequence[str] | None = None,
    logger: CLILogger | None = None,
) -> int:
    """Run ``app`` as a console script and translate failures into exit codes."""

    log = logger or build_cli_logger()
    try:
        return invoke_app(app, sys.argv[1:] if argv is None else argv, prog_name=prog_name)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        log.fail("Aborted!")
        return 1
    except CLIError as exc:
        log.fail(str(exc))
        return exc.exit_code
    except MasterMoldError as exc:
        log.fail(str(exc))
        return 1


__all__ = [
    "AppState",
    "CLIError",
    "CLILogger",
    "DEBUG_ENV",
    "build_cli_logger",
    "debug_from_env",
    "invoke_app",
    "load_app_state",
    "resolve_app_state",
    "run_standalone",
]
