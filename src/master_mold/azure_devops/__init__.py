# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Azure DevOps subcommand distributed as ``mm-azure-devops``."""

from __future__ import annotations

from .client import AzureDevOpsClient, AzureDevOpsError, ConnectionDetails

__all__ = ["AzureDevOpsClient", "AzureDevOpsError", "ConnectionDetails"]
