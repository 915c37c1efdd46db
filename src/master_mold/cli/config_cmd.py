# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration inspection command."""

from __future__ import annotations

import json
from typing import Any

import typer

from .shared import AppState, resolve_app_state

config_app = typer.Typer(add_completion=False, help="Print the effective configuration as JSON.")


def render_config_mapping(state: AppState) -> dict[str, Any]:
    """Return the effective configuration plus the file it came from."""

    return {
        "source": str(state.config_source) if state.config_source is not None else None,
        "config": state.config.model_dump(mode="json"),
        "expanded_base_dir": str(state.config.expanded_base_dir()),
    }


@config_app.command()
def config_show(ctx: typer.Context) -> None:
    """Print the effective configuration."""

    state = resolve_app_state(ctx)
    state.logger.echo(json.dumps(render_config_mapping(state), indent=2, sort_keys=True))


__all__ = ["config_app", "config_show", "render_config_mapping"]
