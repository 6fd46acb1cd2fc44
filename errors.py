#!/usr/bin/env python3
"""Exception hierarchy for gh-migrate-variables."""

from __future__ import annotations

from typing import Optional


class MigrationError(Exception):
    """Base exception for variable migration operations."""


class ConfigError(MigrationError):
    """A required input is missing or invalid."""


class AuthError(MigrationError):
    """The API token is missing or rejected."""


class RemoteError(MigrationError):
    """A GitHub API call failed after retries or returned no data."""

    def __init__(self, message: str, attempts: Optional[int] = None) -> None:
        super().__init__(message)
        self.attempts = attempts


class RepositoryNotFoundError(RemoteError):
    """Target repository for a repository variable does not exist."""

    def __init__(self, org: str, repo: str) -> None:
        super().__init__(f"repository {repo} does not exist in organization {org}")
        self.org = org
        self.repo = repo
