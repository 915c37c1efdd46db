# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``list-binaries`` command and the standalone ``mm-list-binaries`` entry point."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

import typer

from ..discovery import ensure_directory, find_all
from ..display import binaries_to_json, print_binaries, process_binaries
from ..subcommand import ParentKind, detect_parent
from .shared import AppState, resolve_app_state, run_standalone

PROG_NAME: Final[str] = "mm-list-binaries"

list_binaries_app = typer.Typer(
    add_completion=False,
    help="List every mm-* subcommand binary on PATH and in the base directory.",
)


def collect_binaries(state: AppState) -> list[Path]:
    """Ensure the base directory exists and return every discovered binary.

    Raises:
        DirectoryCreationError: If the base directory cannot be created.
        ExecutableResolutionError: If the base directory cannot be read.
    """

    base_dir = ensure_directory(state.config.expanded_base_dir())
    state.logger.debug(f"scanning binaries base_dir={base_dir}")
    return find_all(base_dir)


@list_binaries_app.command()
def list_binaries(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Output the results in JSON format."),
) -> None:
    """List available subcommands, one line per command name."""

    state = resolve_app_state(ctx)
    binaries = process_binaries(collect_binaries(state))
    if as_json:
        state.logger.echo(binaries_to_json(binaries))
        return
    print_binaries(binaries)


_PARENT_MESSAGES: Final[dict[ParentKind, str]] = {
    ParentKind.DISPATCHER: "Running as a subcommand of master-mold",
    ParentKind.STANDALONE: "Running as a standalone command",
}


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point for ``mm-list-binaries``."""

    exit_code = run_standalone(list_binaries_app, prog_name=PROG_NAME, argv=argv)
    if exit_code == 0:
        message = _PARENT_MESSAGES.get(detect_parent())
        if message is not None:
            typer.echo(f"\n{message}")
    raise SystemExit(exit_code)


__all__ = ["PROG_NAME", "collect_binaries", "list_binaries", "list_binaries_app", "main"]
