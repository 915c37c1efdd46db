# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Minimal Azure DevOps REST client built on :mod:`urllib.request`."""

from __future__ import annotations

import base64
import json
import os
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Protocol
from urllib.parse import quote, urlencode

from ..errors import MasterMoldError

TOKEN_ENV: Final[str] = "AZURE_DEVOPS_PAT"
ORGANIZATION_ENV: Final[str] = "AZURE_DEVOPS_ORG"
PROJECT_ENV: Final[str] = "AZURE_DEVOPS_PROJECT"
API_VERSION_ENV: Final[str] = "AZURE_DEVOPS_API_VERSION"
DEFAULT_API_VERSION: Final[str] = "7.0"
SERVICE_URL: Final[str] = "https://dev.azure.com"
JSON_PATCH_CONTENT_TYPE: Final[str] = "application/json-patch+json"
JSON_CONTENT_TYPE: Final[str] = "application/json"
DEFAULT_TIMEOUT: Final[float] = 30.0
USER_AGENT: Final[str] = "master-mold-azure-devops/1.0"


class AzureDevOpsError(MasterMoldError):
    """Raised when the Azure DevOps service cannot be reached or rejects a request."""


class Opener(Protocol):
    """Subset of :class:`urllib.request.OpenerDirector` used by the client."""

    def open(self, fullurl: urllib.request.Request, data: bytes | None = None, timeout: float = ...) -> Any: ...


@dataclass(frozen=True, slots=True)
class ConnectionDetails:
    """Credentials and scope for talking to one Azure DevOps project."""

    token: str
    organization: str
    project: str
    api_version: str = DEFAULT_API_VERSION

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> ConnectionDetails:
        """Read connection details from the environment.

        Raises:
            AzureDevOpsError: If a required variable is unset or empty.
        """

        source = os.environ if env is None else env
        required = (
            (TOKEN_ENV, "Personal Access Token"),
            (ORGANIZATION_ENV, "Organization"),
            (PROJECT_ENV, "Project"),
        )
        values: list[str] = []
        for variable, label in required:
            value = source.get(variable, "")
            if not value:
                raise AzureDevOpsError(f"Azure DevOps {label} not found. Set the {variable} environment variable")
            values.append(value)
        token, organization, project = values
        api_version = source.get(API_VERSION_ENV, "") or DEFAULT_API_VERSION
        return cls(token=token, organization=organization, project=project, api_version=api_version)

    @property
    def organization_url(self) -> str:
        """Return the base URL of the organization."""

        return f"{SERVICE_URL}/{quote(self.organization, safe='')}"


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


class AzureDevOpsClient:
    """Issue JSON requests against the Azure DevOps REST API."""

    def __init__(
        self,
        details: ConnectionDetails,
        *,
        opener: Opener | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._details = details
        self._opener = opener or urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=ssl.create_default_context())
        )
        self._timeout = timeout

    def _authorization(self) -> str:
        credentials = base64.b64encode(f":{self._details.token}".encode()).decode("ascii")
        return f"Basic {credentials}"

    def build_url(self, path: str, query: Mapping[str, str] | None = None) -> str:
        """Return the absolute URL for ``path`` with the API version appended."""

        params = dict(query or {})
        params["api-version"] = self._details.api_version
        return f"{self._details.organization_url}/{path.lstrip('/')}?{urlencode(params)}"

    def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
        query: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON response.

        Args:
            method: HTTP method.
            path: Path below the organization URL.
            body: JSON-serialisable request payload.
            content_type: Content type of ``body``.
            query: Extra query string parameters.

        Returns:
            Any: Decoded JSON document, or ``None`` for an empty response.

        Raises:
            AzureDevOpsError: On transport failures, HTTP errors, or invalid JSON.
        """

        url = self.build_url(path, query)
        data = None if body is None else json.dumps(body).encode("utf-8")
        request = urllib.request.Request(url, data=data, method=method)
        request.add_header("Authorization", self._authorization())
        request.add_header("Accept", JSON_CONTENT_TYPE)
        request.add_header("User-Agent", USER_AGENT)
        if data is not None:
            request.add_header("Content-Type", content_type)
        try:
            with self._opener.open(request, timeout=self._timeout) as response:
                payload = response.read()
        except urllib.error.HTTPError as exc:
            raise AzureDevOpsError(f"{method} {path} failed with HTTP {exc.code}: {exc.reason}") from exc
        except urllib.error.URLError as exc:
            raise AzureDevOpsError(f"{method} {path} failed: {exc.reason}") from exc
        except OSError as exc:
            raise AzureDevOpsError(f"{method} {path} failed: {exc}") from exc
        if not payload:
            return None
        try:
            return json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise AzureDevOpsError(f"{method} {path} returned invalid JSON: {exc}") from exc

    # Work item tracking

    def create_work_item(self, work_item_type: str, document: Sequence[Mapping[str, str]]) -> dict[str, Any]:
        """Create a work item of ``work_item_type`` from a JSON patch ``document``."""

        path = f"{_segment(self._details.project)}/_apis/wit/workitems/${_segment(work_item_type)}"
        return self.request("POST", path, body=list(document), content_type=JSON_PATCH_CONTENT_TYPE) or {}

    def query_work_item_ids(self, wiql: str) -> list[int]:
        """Run a WIQL query and return the matching work item identifiers."""

        path = f"{_segment(self._details.project)}/_apis/wit/wiql"
        result = self.request("POST", path, body={"query": wiql}) or {}
        return [int(ref["id"]) for ref in result.get("workItems") or [] if "id" in ref]

    def get_work_item(self, work_item_id: int) -> dict[str, Any]:
        """Return the work item identified by ``work_item_id``."""

        path = f"{_segment(self._details.project)}/_apis/wit/workitems/{_segment(work_item_id)}"
        return self.request("GET", path) or {}

    # Core and Git

    def list_projects(self) -> list[str]:
        """Return the names of every project in the organization."""

        result = self.request("GET", "_apis/projects") or {}
        return [project["name"] for project in result.get("value") or [] if project.get("name")]

    def list_repositories(self, project: str) -> list[str]:
        """Return the names of every Git repository in ``project``."""

        result = self.request("GET", f"{_segment(project)}/_apis/git/repositories") or {}
        return [repo["name"] for repo in result.get("value") or [] if repo.get("name")]

    def list_active_pull_requests(self, project: str, repository: str) -> list[dict[str, Any]]:
        """Return the raw active pull requests of ``repository``."""

        path = f"{_segment(project)}/_apis/git/repositories/{_segment(repository)}/pullrequests"
        result = self.request("GET", path, query={"searchCriteria.status": "active"}) or {}
        return list(result.get("value") or [])


__all__ = [
    "API_VERSION_ENV",
    "AzureDevOpsClient",
    "AzureDevOpsError",
    "ConnectionDetails",
    "DEFAULT_API_VERSION",
    "JSON_PATCH_CONTENT_TYPE",
    "ORGANIZATION_ENV",
    "Opener",
    "PROJECT_ENV",
    "TOKEN_ENV",
]
