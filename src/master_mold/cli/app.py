# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""The ``master-mold`` dispatcher entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Final

import click
import typer

from ..errors import MasterMoldError
from ..subcommand import DISPATCHER_NAME
from .commands import build_registry
from .shared import CLIError, build_cli_logger, load_app_state

USAGE_LINES: Final[tuple[str, ...]] = (
    f"Usage: {DISPATCHER_NAME} <command> [options]",
    f"Run '{DISPATCHER_NAME} list-binaries' to see available commands",
)

app = typer.Typer(
    add_completion=False,
    help="Dispatch to built-in commands or mm-<command> binaries.",
)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
def dispatch(
    ctx: typer.Context,
    command: str | None = typer.Argument(None, help="Command to run."),
    debug: bool = typer.Option(False, "--debug", help="Emit debug diagnostics on stderr."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colour output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji in diagnostics."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Configuration file to load instead of searching.",
        dir_okay=False,
    ),
) -> None:
    """Run COMMAND with any following arguments."""

    if command is None:
        for line in USAGE_LINES:
            typer.echo(line)
        raise typer.Exit(code=1)

    logger = build_cli_logger(emoji=not no_emoji, debug=debug, no_color=no_color)
    args = list(ctx.args)
    try:
        state = load_app_state(logger, config_path=config_path)
        registry = build_registry(state)
        logger.debug(f"dispatching command={command} args={args}")
        registry.execute(command, args)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except click.ClickException as exc:
        exc.show()
        raise typer.Exit(code=exc.exit_code) from exc
    except click.Abort as exc:
        logger.fail("Aborted!")
        raise typer.Exit(code=1) from exc
    except MasterMoldError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Console-script entry point for ``master-mold``."""

    app(prog_name=DISPATCHER_NAME)


__all__ = ["USAGE_LINES", "app", "dispatch", "main"]
