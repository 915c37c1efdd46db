# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in commands registered with the dispatcher."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import typer

from ..registry import CommandRegistry
from ..subcommand import DISPATCHER_NAME, SubcommandExecutor
from .config_cmd import config_app
from .list_binaries import list_binaries_app
from .shared import AppState, CLIError, invoke_app


@dataclass(frozen=True, slots=True)
class TyperCommandHandler:
    """Run a Typer application in-process as a dispatcher command."""

    app: typer.Typer
    prog_name: str
    state: AppState

    def execute(self, args: Sequence[str]) -> None:
        """Run the wrapped application with ``args``.

        Raises:
            CLIError: If the application exits with a non-zero status.
        """

        exit_code = invoke_app(self.app, args, prog_name=self.prog_name, obj=self.state)
        if exit_code != 0:
            raise CLIError(f"command '{self.prog_name}' exited with status {exit_code}", exit_code=exit_code)


BUILTIN_COMMANDS: dict[str, typer.Typer] = {
    "list-binaries": list_binaries_app,
    "config": config_app,
}


def build_registry(state: AppState) -> CommandRegistry:
    """Return a registry holding the built-in commands.

    Unregistered names fall through to ``mm-<name>`` binaries.
    """

    executor = SubcommandExecutor(state.config, state.logger)
    registry = CommandRegistry(state.config, state.logger, delegate=executor)
    for name, app in BUILTIN_COMMANDS.items():
        registry.register(name, TyperCommandHandler(app, f"{DISPATCHER_NAME} {name}", state))
    return registry


__all__ = ["BUILTIN_COMMANDS", "TyperCommandHandler", "build_registry"]
