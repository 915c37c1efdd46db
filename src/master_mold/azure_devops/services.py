# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Work item and pull request operations composed from client calls."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Final

from pydantic import TypeAdapter, ValidationError

from ..interfaces import DispatchLogger
from .client import AzureDevOpsClient, AzureDevOpsError
from .models import WORK_ITEM_TYPE_PATH, AssignedWorkItem, CreatedWorkItem, PullRequest, WorkItemField

DEFAULT_WORK_ITEM_TYPE: Final[str] = "Task"
UNKNOWN: Final[str] = "Unknown"
_FIELD_LIST = TypeAdapter(list[WorkItemField])


def read_work_item_fields(path: Path) -> list[WorkItemField]:
    """Load the list of field operations stored in ``path``.

    Raises:
        AzureDevOpsError: If the file is unreadable or not a list of fields.
    """

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AzureDevOpsError(f"failed to read JSON file {path}: {exc}") from exc
    try:
        return _FIELD_LIST.validate_json(raw)
    except ValidationError as exc:
        raise AzureDevOpsError(f"failed to parse JSON file {path}: {exc}") from exc


def group_fields_by_type(fields: Sequence[WorkItemField]) -> dict[str, list[WorkItemField]]:
    """Group ``fields`` under the work item type they declare.

    All fields describe a single work item; its type comes from the first
    ``System.WorkItemType`` entry and defaults to ``Task``.
    """

    work_item_type = next((field.value for field in fields if field.path == WORK_ITEM_TYPE_PATH), "")
    return {work_item_type or DEFAULT_WORK_ITEM_TYPE: list(fields)}


def to_patch_document(fields: Sequence[WorkItemField], logger: DispatchLogger) -> list[dict[str, str]]:
    """Convert ``fields`` to a JSON patch document, warning about non-add operations."""

    document: list[dict[str, str]] = []
    for field in fields:
        if field.op != "add":
            logger.warn(f"Unsupported operation type op={field.op} path={field.path}; sending as add")
        document.append(field.to_patch())
    return document


def create_work_items(
    client: AzureDevOpsClient,
    fields: Sequence[WorkItemField],
    logger: DispatchLogger,
) -> list[CreatedWorkItem]:
    """Create the work items described by ``fields``.

    Raises:
        AzureDevOpsError: If the service rejects a work item.
    """

    created: list[CreatedWorkItem] = []
    for work_item_type, group in group_fields_by_type(fields).items():
        logger.debug(f"creating work item type={work_item_type} fields={len(group)}")
        try:
            payload = client.create_work_item(work_item_type, to_patch_document(group, logger))
        except AzureDevOpsError as exc:
            raise AzureDevOpsError(f"failed to create work item of type {work_item_type}: {exc}") from exc
        item_fields = payload.get("fields") or {}
        title = item_fields.get("System.Title")
        created.append(CreatedWorkItem(id=int(payload.get("id", 0)), title=str(title) if title is not None else UNKNOWN))
    return created


def build_assigned_query(user: str) -> str:
    """Return the WIQL query selecting work items assigned to ``user``."""

    escaped = user.replace("'", "''")
    return (
        "SELECT [System.Id], [System.Title], [System.WorkItemType], [System.State], "
        "[System.AssignedTo], [Microsoft.VSTS.Scheduling.CompletedWork] FROM WorkItems "
        f"WHERE [System.AssignedTo] = '{escaped}' ORDER BY [System.ChangedDate] DESC"
    )


def _string_field(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    return value if isinstance(value, str) else UNKNOWN


def _identity_name(value: Any) -> str:
    if isinstance(value, Mapping):
        name = value.get("displayName")
        return name if isinstance(name, str) and name else UNKNOWN
    return value if isinstance(value, str) and value else UNKNOWN


def _float_field(fields: Mapping[str, Any], name: str) -> float:
    value = fields.get(name)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    return float(value)


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def work_item_from_payload(payload: Mapping[str, Any]) -> AssignedWorkItem | None:
    """Return the summary of a work item payload, or ``None`` without fields."""

    fields = payload.get("fields")
    if not isinstance(fields, Mapping):
        return None
    return AssignedWorkItem(
        id=int(payload.get("id", 0)),
        title=_string_field(fields, "System.Title"),
        type=_string_field(fields, "System.WorkItemType"),
        state=_string_field(fields, "System.State"),
        assigned_to=_identity_name(fields.get("System.AssignedTo")),
        time_logged=_float_field(fields, "Microsoft.VSTS.Scheduling.CompletedWork"),
        created_date=_parse_timestamp(fields.get("System.CreatedDate")),
    )


def assigned_work_items(client: AzureDevOpsClient, user: str, logger: DispatchLogger) -> list[AssignedWorkItem]:
    """Return the work items assigned to ``user``, most recently changed first.

    Items that cannot be fetched individually are reported and skipped.

    Raises:
        AzureDevOpsError: If the WIQL query fails.
    """

    try:
        ids = client.query_work_item_ids(build_assigned_query(user))
    except AzureDevOpsError as exc:
        raise AzureDevOpsError(f"failed to execute WIQL query: {exc}") from exc
    logger.debug(f"wiql query matched user={user} count={len(ids)}")
    items: list[AssignedWorkItem] = []
    for work_item_id in ids:
        try:
            payload = client.get_work_item(work_item_id)
        except AzureDevOpsError as exc:
            logger.warn(f"Failed to get work item id={work_item_id}: {exc}")
            continue
        item = work_item_from_payload(payload)
        if item is not None:
            items.append(item)
    return items


def pull_request_from_payload(repository: str, payload: Mapping[str, Any]) -> PullRequest:
    """Return the summary of a raw pull request payload."""

    return PullRequest(
        repository=repository,
        id=int(payload.get("pullRequestId", 0)),
        title=str(payload.get("title") or ""),
        creator=_identity_name(payload.get("createdBy")),
        created=_parse_timestamp(payload.get("creationDate")),
        status=str(payload.get("status") or ""),
        target_branch=str(payload.get("targetRefName") or ""),
    )


def open_pull_requests(client: AzureDevOpsClient, logger: DispatchLogger) -> list[PullRequest]:
    """Return every active pull request across all projects and repositories.

    Failures listing one project's repositories or one repository's pull
    requests are reported and skipped.

    Raises:
        AzureDevOpsError: If the project list cannot be fetched.
    """

    try:
        projects = client.list_projects()
    except AzureDevOpsError as exc:
        raise AzureDevOpsError(f"failed to get projects: {exc}") from exc
    pull_requests: list[PullRequest] = []
    for project in projects:
        try:
            repositories = client.list_repositories(project)
        except AzureDevOpsError as exc:
            logger.warn(f"Failed to get repositories for project={project}: {exc}")
            continue
        for repository in repositories:
            try:
                payloads = client.list_active_pull_requests(project, repository)
            except AzureDevOpsError as exc:
                logger.warn(f"Failed to get pull requests for repository={repository}: {exc}")
                continue
            pull_requests.extend(pull_request_from_payload(repository, payload) for payload in payloads)
    return pull_requests


__all__ = [
    "DEFAULT_WORK_ITEM_TYPE",
    "assigned_work_items",
    "build_assigned_query",
    "create_work_items",
    "group_fields_by_type",
    "open_pull_requests",
    "pull_request_from_payload",
    "read_work_item_fields",
    "to_patch_document",
    "work_item_from_payload",
]
