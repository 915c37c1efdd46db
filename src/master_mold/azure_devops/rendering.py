# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Text and JSON renderings of Azure DevOps results."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel

from .models import AssignedWorkItem, CreatedWorkItem, PullRequest


def models_to_json(models: Sequence[BaseModel]) -> str:
    """Return ``models`` as an indented JSON array using camelCase keys."""

    return json.dumps([model.model_dump(mode="json", by_alias=True) for model in models], indent=2)


def _timestamp(value: datetime | None) -> str:
    return value.isoformat() if value is not None else "Unknown"


def format_created_work_items(items: Sequence[CreatedWorkItem]) -> str:
    lines = ["Successfully created work items:"]
    lines.extend(f"  - ID: {item.id}, Title: {item.title}" for item in items)
    return "\n".join(lines)


def format_assigned_work_items(items: Sequence[AssignedWorkItem]) -> str:
    """Return the human readable listing of assigned work items."""

    if not items:
        return "No work items found."
    blocks = [f"Found {len(items)} work items:"]
    for item in items:
        blocks.append(
            "\n".join(
                (
                    f"ID: {item.id}",
                    f"Title: {item.title}",
                    f"Type: {item.type}",
                    f"State: {item.state}",
                    f"Assigned To: {item.assigned_to}",
                    f"Time Logged: {item.time_logged:.2f} hours",
                    f"Created Date: {_timestamp(item.created_date)}",
                )
            )
        )
    return "\n\n".join(blocks)


def format_pull_requests(pull_requests: Sequence[PullRequest]) -> str:
    """Return the human readable listing of open pull requests."""

    if not pull_requests:
        return "No open pull requests found."
    blocks = [f"Found {len(pull_requests)} open pull requests:"]
    for pr in pull_requests:
        blocks.append(
            "\n".join(
                (
                    f"Repository: {pr.repository}",
                    f"ID: {pr.id}",
                    f"Title: {pr.title}",
                    f"Creator: {pr.creator}",
                    f"Created: {_timestamp(pr.created)}",
                    f"Status: {pr.status}",
                    f"Target Branch: {pr.target_branch}",
                )
            )
        )
    return "\n\n".join(blocks)


__all__ = [
    "format_assigned_work_items",
    "format_created_work_items",
    "format_pull_requests",
    "models_to_json",
]
