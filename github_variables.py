#!/usr/bin/env python3
"""GitHub API wrapper for listing and creating Actions variables."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests

from config import GitHubClientConfig
from errors import ConfigError, RemoteError, RepositoryNotFoundError
from logging_utils import Logger
from models import ORGANIZATION_SCOPE, VariableRecord, default_visibility
from transport import build_session, resolve_api_url
from utils import retry_operation

REPOS_PER_PAGE = 100
VARIABLES_PER_PAGE = 30  # API maximum for the variables endpoints

# HTTPError, connection errors and undecodable JSON (ValueError) are retried
RETRYABLE_ERRORS = (requests.RequestException, ValueError, RemoteError)


class GitHubVariables:
    """Wrapper around the GitHub REST API for Actions variables."""

    def __init__(
        self,
        config: GitHubClientConfig,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.api_url = resolve_api_url(config.hostname)
        self.session = session if session is not None else build_session(config)
        self.sleep = sleep

    def _retry(self, operation: Callable[[], Any], description: str) -> Any:
        return retry_operation(
            operation, description, retry_on=RETRYABLE_ERRORS, sleep=self.sleep
        )

    def _get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Tuple[Any, requests.Response]:
        response = self.session.get(url, params=params)
        response.raise_for_status()
        return response.json(), response

    def _url(self, *segments: str) -> str:
        # names come from CSV input and must stay single path segments
        return "/".join([self.api_url] + [quote(s, safe="") for s in segments])

    @staticmethod
    def _next_page(response: requests.Response) -> Optional[str]:
        return (response.links or {}).get("next", {}).get("url")

    def _list_variables(self, url: str, scope: str) -> List[VariableRecord]:
        def fetch_all() -> List[VariableRecord]:
            records: List[VariableRecord] = []
            next_url: Optional[str] = url
            params: Optional[Dict[str, Any]] = {"per_page": VARIABLES_PER_PAGE}
            while next_url:
                payload, response = self._get_json(next_url, params)
                if not isinstance(payload, dict) or not isinstance(
                    payload.get("variables"), list
                ):
                    raise RemoteError(f"no variables data returned for {scope}")
                for variable in payload["variables"]:
                    record = VariableRecord.from_api(variable, scope)
                    if record is not None:
                        records.append(record)
                next_url = self._next_page(response)
                # next links already carry the query string
                params = None
            return records

        return self._retry(fetch_all, f"fetch variables for {scope}")

    def repo_exists(self, org: str, repo: str) -> bool:
        """Best-effort existence check; any error counts as missing."""
        url = self._url("repos", org, repo)
        try:
            response = self.session.get(url)
        except requests.RequestException as e:
            Logger.debug(f"existence check for '{org}/{repo}' failed: {e}")
            return False
        return response.status_code == 200

    def list_org_variables(self, org: str) -> List[VariableRecord]:
        if not org:
            raise ConfigError("organization name is required")
        return self._list_variables(
            self._url("orgs", org, "actions", "variables"), ORGANIZATION_SCOPE
        )

    def list_repo_variables(self, org: str, repo: str) -> List[VariableRecord]:
        if not org or not repo:
            raise ConfigError("organization name and repository name are required")
        return self._list_variables(
            self._url("repos", org, repo, "actions", "variables"), repo
        )

    def list_repositories(self, org: str) -> List[str]:
        """Return all repository names of org.

        A failure on any page restarts enumeration from the first page.
        """
        if not org:
            raise ConfigError("organization name is required")

        def fetch_all() -> List[str]:
            names: List[str] = []
            next_url: Optional[str] = self._url("orgs", org, "repos")
            params: Optional[Dict[str, Any]] = {"per_page": REPOS_PER_PAGE}
            page = 1
            while next_url:
                repos, response = self._get_json(next_url, params)
                if not isinstance(repos, list):
                    raise RemoteError(
                        f"no repositories data returned for organization {org}"
                    )
                names.extend(
                    r["name"] for r in repos if isinstance(r, dict) and r.get("name")
                )
                Logger.debug(f"repositories page {page}: {len(repos)} entries")
                next_url = self._next_page(response)
                params = None
                page += 1
            return names

        return self._retry(fetch_all, f"list repositories for {org}")

    def create_org_variable(
        self, org: str, name: str, value: str, visibility: Optional[str] = None
    ) -> None:
        if not org or not name:
            raise ConfigError("organization name and variable name are required")
        body = {
            "name": name,
            "value": value,
            "visibility": default_visibility(visibility),
        }
        url = self._url("orgs", org, "actions", "variables")

        def create() -> None:
            self.session.post(url, json=body).raise_for_status()

        self._retry(create, f"create org variable {name}")

    def create_repo_variable(
        self,
        org: str,
        repo: str,
        name: str,
        value: str,
        visibility: Optional[str] = None,
    ) -> None:
        """Create a repository variable after confirming the repo exists.

        Repository variables have no visibility on the API, so the value is
        accepted for symmetry with organization variables and not sent.
        """
        if not org or not repo or not name:
            raise ConfigError(
                "organization name, repository name, and variable name are required"
            )
        if not self.repo_exists(org, repo):
            raise RepositoryNotFoundError(org, repo)

        url = self._url("repos", org, repo, "actions", "variables")

        def create() -> None:
            self.session.post(url, json={"name": name, "value": value}).raise_for_status()

        self._retry(create, f"create repo variable {name} in repo {repo}")
