# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Starter work item template written by ``work-items template``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Final

from .client import AzureDevOpsError
from .models import WORK_ITEM_TYPE_PATH, WorkItemField

TEMPLATE_FILE_NAME: Final[str] = "work-item-template.json"


def template_fields() -> list[WorkItemField]:
    """Return the placeholder fields of a new work item."""

    return [
        WorkItemField(path="/fields/System.Title", value="Example Title: Update this value"),
        WorkItemField(path=WORK_ITEM_TYPE_PATH, value="Task | Bug | User Story | Feature"),
        WorkItemField(
            path="/fields/System.Description",
            value="Example Description: Provide a detailed description here.",
        ),
        WorkItemField(path="/fields/System.AreaPath", value="YourProject\\YourArea"),
        WorkItemField(path="/fields/System.IterationPath", value="YourProject\\Iteration 1"),
    ]


def write_template(destination: Path) -> Path:
    """Write the template to ``destination`` and return its absolute path.

    Raises:
        AzureDevOpsError: If the file cannot be written.
    """

    payload = json.dumps([field.model_dump() for field in template_fields()], indent=2)
    try:
        destination.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise AzureDevOpsError(f"failed to write template to {destination}: {exc}") from exc
    return destination.resolve()


__all__ = ["TEMPLATE_FILE_NAME", "template_fields", "write_template"]
