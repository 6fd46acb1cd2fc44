#!/usr/bin/env python3
"""Recreate variables from a CSV artifact in a target GitHub organization."""

from __future__ import annotations

import csv
from typing import List, Optional

from config import SyncConfig
from csv_store import read_rows
from errors import (AuthError, ConfigError, MigrationError,
                    RepositoryNotFoundError)
from github_variables import GitHubVariables
from logging_utils import Logger
from models import RunStatistics, VariableRecord

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_MISSING_ARGUMENTS = 2
EXIT_AUTH_ERROR = 40

MIN_COLUMNS = 4


class VariableSyncer:
    def __init__(
        self, config: SyncConfig, client: Optional[GitHubVariables] = None
    ) -> None:
        self.config = config
        self.client = client

    def run(self) -> int:
        try:
            stats = self.sync()
        except ConfigError as e:
            Logger.error(f"configuration error: {e}")
            return EXIT_MISSING_ARGUMENTS
        except AuthError as e:
            Logger.error(f"authentication error: {e}")
            return EXIT_AUTH_ERROR
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            Logger.error(f"cannot read mapping file {self.config.mapping_file}: {e}")
            return EXIT_EXECUTION_ERROR

        if stats.failed > 0:
            Logger.error(f"sync completed with {stats.failed} failed variables")
            return EXIT_EXECUTION_ERROR
        Logger.success("sync completed successfully")
        return EXIT_SUCCESS

    def _validate(self) -> None:
        missing = [
            label
            for label, value in (
                ("mapping file", self.config.mapping_file),
                ("target organization", self.config.organization),
                ("target token", self.config.client.token),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"missing required configuration: {', '.join(missing)}")

    def sync(self) -> RunStatistics:
        self._validate()
        rows = read_rows(self.config.mapping_file)
        if self.client is None:
            self.client = GitHubVariables(self.config.client)

        stats = RunStatistics()
        for row in rows:
            stats.total += 1
            self._sync_row(row, stats)

        self._print_summary(stats)
        return stats

    def _sync_row(self, row: List[str], stats: RunStatistics) -> None:
        if len(row) < MIN_COLUMNS:
            Logger.warn(f"record {row} does not have enough columns, skipping")
            stats.skipped += 1
            return

        record = VariableRecord(*row[:MIN_COLUMNS])
        name, scope = record.name, record.scope
        org = self.config.organization
        Logger.debug(
            f"processing variable name={name} value={record.value} "
            f"scope={scope} visibility={record.visibility}"
        )

        try:
            if record.is_organization:
                self.client.create_org_variable(
                    org, name, record.value, record.visibility
                )
                Logger.success(f"created organization variable: {name}")
            else:
                self.client.create_repo_variable(
                    org, scope, name, record.value, record.visibility
                )
                Logger.success(f"created repository variable: {name} in {scope}")
            stats.succeeded += 1
        except RepositoryNotFoundError as e:
            Logger.warn(f"skipping variable {name}: {e}")
            stats.skipped += 1
        except MigrationError as e:
            Logger.error(f"error creating variable {name} ({scope}): {e}")
            stats.failed += 1

    def _print_summary(self, stats: RunStatistics) -> None:
        Logger.info("sync summary:")
        Logger.info(f"  total variables processed: {stats.total}")
        Logger.info(f"  successfully created: {stats.succeeded}")
        Logger.info(f"  failed: {stats.failed}")
        Logger.info(f"  skipped: {stats.skipped}")
