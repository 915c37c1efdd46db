# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for ``mm-azure-devops``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from master_mold.azure_devops import cli as azure_cli
from master_mold.azure_devops.cli import azure_devops_app, main
from master_mold.azure_devops.templates import TEMPLATE_FILE_NAME


class StubClient:
    def __init__(self) -> None:
        self.created: list[tuple[str, list[dict[str, str]]]] = []

    def create_work_item(self, work_item_type: str, document: list[dict[str, str]]) -> dict[str, Any]:
        self.created.append((work_item_type, document))
        return {"id": 77, "fields": {"System.Title": "From file"}}

    def query_work_item_ids(self, wiql: str) -> list[int]:
        return [8]

    def get_work_item(self, work_item_id: int) -> dict[str, Any]:
        return {"id": work_item_id, "fields": {"System.Title": "Assigned", "System.State": "New"}}

    def list_projects(self) -> list[str]:
        return ["P"]

    def list_repositories(self, project: str) -> list[str]:
        return ["repo"]

    def list_active_pull_requests(self, project: str, repository: str) -> list[dict[str, Any]]:
        return [{"pullRequestId": 3, "title": "Tidy", "status": "active", "targetRefName": "refs/heads/main"}]


@pytest.fixture
def stub_client(monkeypatch: pytest.MonkeyPatch) -> StubClient:
    client = StubClient()
    monkeypatch.setattr(azure_cli, "build_client", lambda: client)
    return client


def test_template_writes_file_in_working_directory() -> None:
    runner = CliRunner()

    result = runner.invoke(azure_devops_app, ["work-items", "template"])

    assert result.exit_code == 0
    written = Path.cwd() / TEMPLATE_FILE_NAME
    assert written.is_file()
    assert f"Template file created: {written.resolve()}" in result.stdout


def test_create_reads_json_and_reports_created_items(stub_client: StubClient) -> None:
    runner = CliRunner()
    source = Path.cwd() / "items.json"
    source.write_text(
        json.dumps(
            [
                {"op": "add", "path": "/fields/System.Title", "value": "From file"},
                {"op": "add", "path": "/fields/System.WorkItemType", "value": "Bug"},
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(azure_devops_app, ["work-items", "create", "--json", str(source)])

    assert result.exit_code == 0
    assert "Successfully created work items:" in result.stdout
    assert "  - ID: 77, Title: From file" in result.stdout
    assert stub_client.created[0][0] == "Bug"


def test_create_requires_json_option() -> None:
    runner = CliRunner()

    result = runner.invoke(azure_devops_app, ["work-items", "create"])

    assert result.exit_code == 2
    assert "--json" in result.output


def test_assigned_json_output(stub_client: StubClient) -> None:
    runner = CliRunner()

    result = runner.invoke(azure_devops_app, ["work-items", "assigned", "--user", "sam", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload[0]["id"] == 8
    assert payload[0]["state"] == "New"


def test_list_open_text_output(stub_client: StubClient) -> None:
    runner = CliRunner()

    result = runner.invoke(azure_devops_app, ["pull-requests", "list-open"])

    assert result.exit_code == 0
    assert result.stdout.startswith("Found 1 open pull requests:")
    assert "Repository: repo" in result.stdout
    assert "Target Branch: refs/heads/main" in result.stdout


def test_main_reports_missing_credentials(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("AZURE_DEVOPS_PAT", "AZURE_DEVOPS_ORG", "AZURE_DEVOPS_PROJECT"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(SystemExit) as excinfo:
        main(["pull-requests", "list-open"])

    assert excinfo.value.code == 1
    assert "Set the AZURE_DEVOPS_PAT environment variable" in capsys.readouterr().err
