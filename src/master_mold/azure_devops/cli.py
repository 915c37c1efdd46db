# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``mm-azure-devops``: manage Azure DevOps work items and pull requests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

import typer

from ..cli.shared import build_cli_logger, run_standalone
from .client import AzureDevOpsClient, ConnectionDetails
from .rendering import (
    format_assigned_work_items,
    format_created_work_items,
    format_pull_requests,
    models_to_json,
)
from .services import assigned_work_items, create_work_items, open_pull_requests, read_work_item_fields
from .templates import TEMPLATE_FILE_NAME, write_template

PROG_NAME: Final[str] = "mm-azure-devops"

azure_devops_app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Manage Azure DevOps work items and pull requests.",
)
work_items_app = typer.Typer(no_args_is_help=True, help="Create and manage work items in Azure DevOps.")
pull_requests_app = typer.Typer(no_args_is_help=True, help="Manage pull requests in Azure DevOps.")
azure_devops_app.add_typer(work_items_app, name="work-items")
azure_devops_app.add_typer(pull_requests_app, name="pull-requests")


def build_client() -> AzureDevOpsClient:
    """Return a client configured from the ``AZURE_DEVOPS_*`` environment.

    Raises:
        AzureDevOpsError: If a required variable is missing.
    """

    return AzureDevOpsClient(ConnectionDetails.from_env())


@work_items_app.command("create")
def create(
    json_file: Path = typer.Option(
        ...,
        "--json",
        help="Path to the JSON file containing work item definitions.",
        dir_okay=False,
    ),
) -> None:
    """Create work items from a JSON file."""

    logger = build_cli_logger()
    fields = read_work_item_fields(json_file)
    created = create_work_items(build_client(), fields, logger)
    logger.echo(format_created_work_items(created))


@work_items_app.command("template")
def template() -> None:
    """Generate a template JSON file for creating work items."""

    logger = build_cli_logger()
    path = write_template(Path.cwd() / TEMPLATE_FILE_NAME)
    logger.echo(f"Template file created: {path}")
    logger.echo("Edit this file and use it with the 'create' command to create work items.")


@work_items_app.command("assigned")
def assigned(
    user: str = typer.Option(..., "--user", help="Username to filter work items by."),
    as_json: bool = typer.Option(False, "--json", help="Output the results in JSON format."),
) -> None:
    """List work items assigned to a user with the time logged against them."""

    logger = build_cli_logger()
    items = assigned_work_items(build_client(), user, logger)
    logger.echo(models_to_json(items) if as_json else format_assigned_work_items(items))


@pull_requests_app.command("list-open")
def list_open(
    as_json: bool = typer.Option(False, "--json", help="Output the results in JSON format."),
) -> None:
    """List all open pull requests for every repository in the organization."""

    logger = build_cli_logger()
    pull_requests = open_pull_requests(build_client(), logger)
    logger.echo(models_to_json(pull_requests) if as_json else format_pull_requests(pull_requests))


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point for ``mm-azure-devops``."""

    raise SystemExit(run_standalone(azure_devops_app, prog_name=PROG_NAME, argv=argv))


__all__ = [
    "PROG_NAME",
    "azure_devops_app",
    "build_client",
    "main",
    "pull_requests_app",
    "work_items_app",
]
