#!/usr/bin/env python3
"""Export organization and repository variables of a GitHub org to CSV."""

from __future__ import annotations

import os
from typing import List, Optional

from config import ExportConfig
from csv_store import output_path, write_variables
from errors import AuthError, ConfigError, MigrationError, RemoteError
from github_variables import GitHubVariables
from logging_utils import Logger
from models import RunStatistics, VariableRecord

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_MISSING_ARGUMENTS = 2
EXIT_GITHUB_ERROR = 31
EXIT_AUTH_ERROR = 40


class VariableExporter:
    def __init__(
        self, config: ExportConfig, client: Optional[GitHubVariables] = None
    ) -> None:
        self.config = config
        self.client = client
        self.output_file: Optional[str] = None

    def run(self) -> int:
        try:
            stats = self.export()
        except ConfigError as e:
            Logger.error(f"configuration error: {e}")
            return EXIT_MISSING_ARGUMENTS
        except AuthError as e:
            Logger.error(f"authentication error: {e}")
            return EXIT_AUTH_ERROR
        except RemoteError as e:
            Logger.error(f"github error: {e}")
            return EXIT_GITHUB_ERROR
        except OSError as e:
            Logger.error(f"cannot write output file: {e}")
            return EXIT_EXECUTION_ERROR

        # an export that found no variables writes no file and succeeds
        if stats.failed > 0 and self.output_file is not None:
            Logger.error(
                f"export completed with {stats.failed} failed repositories; "
                "some variables may not have been exported"
            )
            return EXIT_EXECUTION_ERROR
        Logger.success("export completed successfully")
        return EXIT_SUCCESS

    def _validate(self) -> None:
        missing = [
            label
            for label, value in (
                ("source organization", self.config.organization),
                ("source token", self.config.client.token),
                ("output file prefix", self.config.file_prefix),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"missing required configuration: {', '.join(missing)}")

    def export(self) -> RunStatistics:
        """Collect all variables and write them to the CSV artifact.

        Organization variables are best-effort and a failing repository is
        counted and skipped, but failing to list repositories is fatal.
        """
        self._validate()
        self.output_file = None
        if self.client is None:
            self.client = GitHubVariables(self.config.client)
        org = self.config.organization
        stats = RunStatistics()
        variables: List[VariableRecord] = []

        Logger.info(f"fetching organization variables for {org}")
        try:
            org_variables = self.client.list_org_variables(org)
            Logger.info(f"found {len(org_variables)} organization variables")
            variables.extend(org_variables)
        except MigrationError as e:
            Logger.warn(f"failed to fetch organization variables: {e}")

        Logger.info(f"fetching repository list for {org}")
        repos = self.client.list_repositories(org)
        stats.repositories = len(repos)
        Logger.info(f"found {len(repos)} repositories")

        total = len(repos)
        for idx, repo in enumerate(repos, start=1):
            Logger.info(f"[{idx}/{total}] processing repository {repo}")
            stats.total += 1
            try:
                repo_variables = self.client.list_repo_variables(org, repo)
            except MigrationError as e:
                Logger.warn(f"failed to fetch variables for repo {repo}: {e}")
                stats.failed += 1
                continue
            if repo_variables:
                Logger.info(f"found {len(repo_variables)} variables in {repo}")
            else:
                Logger.debug(f"no variables found in {repo}")
            variables.extend(repo_variables)
            stats.succeeded += 1

        if not variables:
            Logger.info("no variables found to export")
            self._print_summary(stats)
            return stats

        self.output_file = output_path(self.config.file_prefix)
        stats.variables = write_variables(self.output_file, variables)
        self._print_summary(stats)
        return stats

    def _print_summary(self, stats: RunStatistics) -> None:
        Logger.info("export summary:")
        Logger.info(f"  total repositories found: {stats.repositories}")
        Logger.info(f"  successfully processed: {stats.succeeded}")
        Logger.info(f"  failed to process: {stats.failed}")
        Logger.info(f"  total variables exported: {stats.variables}")
        if self.output_file:
            Logger.info(f"  output file: {os.path.abspath(self.output_file)}")
