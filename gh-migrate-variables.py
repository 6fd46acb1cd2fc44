#!/usr/bin/env python3
"""
gh-migrate-variables - Migrate GitHub Actions variables between organizations.

The export command reads every organization and repository variable of a
source organization into <prefix>_variables.csv. The sync command reads that
file and creates each variable in a target organization, on GitHub.com or
GitHub Enterprise Server. Sync is create-only: existing variables are never
updated or deleted.
"""

from __future__ import annotations

import sys
from typing import NoReturn

from argument_parser import parse_arguments
from config import Command
from exporter import VariableExporter
from logging_utils import Logger
from syncer import VariableSyncer

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


def main() -> NoReturn:
    if __name__ != "__main__":
        sys.exit(EXIT_EXECUTION_ERROR)

    cfg = parse_arguments()
    Logger.verbose = cfg.verbose
    if cfg.command == Command.EXPORT:
        sys.exit(VariableExporter(cfg.export).run())
    sys.exit(VariableSyncer(cfg.sync).run())


if __name__ == "__main__":
    main()
