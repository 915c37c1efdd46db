# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models exchanged with the Azure DevOps REST API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

WORK_ITEM_TYPE_PATH = "/fields/System.WorkItemType"


class WorkItemField(BaseModel):
    """One JSON patch operation describing a work item field."""

    model_config = ConfigDict(extra="ignore")

    op: str = "add"
    path: str
    value: str = ""

    def to_patch(self) -> dict[str, str]:
        """Return the patch document entry, always using the ``add`` operation."""

        return {"op": "add", "path": self.path, "value": self.value}


class CreatedWorkItem(BaseModel):
    """Identifier and title of a newly created work item."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = "Unknown"


class AssignedWorkItem(BaseModel):
    """A work item assigned to a user, with completed work in hours."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str = "Unknown"
    type: str = "Unknown"
    state: str = "Unknown"
    assigned_to: str = Field(default="Unknown", alias="assignedTo")
    time_logged: float = Field(default=0.0, alias="timeLogged")
    created_date: datetime | None = Field(default=None, alias="createdDate")


class PullRequest(BaseModel):
    """An active pull request in one repository."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    repository: str
    id: int
    title: str = ""
    creator: str = "Unknown"
    created: datetime | None = None
    status: str = ""
    target_branch: str = Field(default="", alias="targetBranch")


__all__ = [
    "AssignedWorkItem",
    "CreatedWorkItem",
    "PullRequest",
    "WORK_ITEM_TYPE_PATH",
    "WorkItemField",
]
