#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Mapping, Optional

from config import (Command, Config, ExportConfig, GitHubClientConfig,
                    ProxyConfig, SyncConfig)
from logging_utils import Logger
from security import SecurityValidator
from transport import normalize_hostname

# Exit codes
EXIT_AUTH_ERROR = 40
EXIT_MISSING_ARGUMENTS = 2


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Migrate GitHub Actions variables between organizations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s export --organization acme --token $SOURCE_TOKEN
  %(prog)s export -o acme -t $SOURCE_TOKEN -f backup -n https://ghe.acme.com
  %(prog)s sync --file-mapping acme_variables.csv \\
           --target-organization acme2 --target-token $TARGET_TOKEN
  %(prog)s --https-proxy http://proxy:3128 --no-proxy ghe.acme.com \\
           sync -f acme_variables.csv -o acme2 -n ghe.acme.com
        """,
    )
    return parser


def _add_global_arguments(parser: argparse.ArgumentParser) -> None:
    """Add proxy and output arguments shared by all commands."""
    parser.add_argument(
        "--http-proxy",
        dest="http_proxy",
        help="HTTP proxy (or set HTTP_PROXY env var)",
    )
    parser.add_argument(
        "--https-proxy",
        dest="https_proxy",
        help="HTTPS proxy (or set HTTPS_PROXY env var)",
    )
    parser.add_argument(
        "--no-proxy",
        dest="no_proxy",
        help="Comma-separated hosts that bypass the proxy (or set NO_PROXY env var)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Print debug output",
    )


def _add_export_arguments(subparsers) -> None:
    """Add the export command and its arguments."""
    export = subparsers.add_parser(
        Command.EXPORT.value,
        help="Create a CSV file of the organization and repository variables",
    )
    export.add_argument(
        "-o",
        "--organization",
        dest="organization",
        help="Organization to export (or set GHMV_SOURCE_ORGANIZATION env var)",
    )
    export.add_argument(
        "-t",
        "--token",
        dest="token",
        help="GitHub token (or set GHMV_SOURCE_TOKEN env var)",
    )
    export.add_argument(
        "-f",
        "--file-prefix",
        dest="file_prefix",
        help="Output filename prefix (default: organization name)",
    )
    export.add_argument(
        "-n",
        "--hostname",
        dest="hostname",
        help="GitHub Enterprise Server hostname, e.g. https://github.example.com "
        "(or set GHMV_SOURCE_HOSTNAME env var)",
    )


def _add_sync_arguments(subparsers) -> None:
    """Add the sync command and its arguments."""
    sync = subparsers.add_parser(
        Command.SYNC.value,
        help="Create variables from a CSV file in a target organization",
    )
    sync.add_argument(
        "-f",
        "--file-mapping",
        dest="mapping_file",
        help="CSV mapping file to sync from (or set GHMV_MAPPING_FILE env var)",
    )
    sync.add_argument(
        "-o",
        "--target-organization",
        dest="organization",
        help="Target organization (or set GHMV_TARGET_ORGANIZATION env var)",
    )
    sync.add_argument(
        "-t",
        "--target-token",
        dest="token",
        help="Target organization token with admin:org scope "
        "(or set GHMV_TARGET_TOKEN env var)",
    )
    sync.add_argument(
        "-n",
        "--hostname",
        dest="hostname",
        help="GitHub Enterprise Server hostname, e.g. https://github.example.com "
        "(or set GHMV_TARGET_HOSTNAME env var)",
    )


def _proxy_config(args, environ: Mapping[str, str]) -> ProxyConfig:
    return ProxyConfig(
        http_proxy=args.http_proxy or environ.get("HTTP_PROXY") or None,
        https_proxy=args.https_proxy or environ.get("HTTPS_PROXY") or None,
        no_proxy=args.no_proxy or environ.get("NO_PROXY") or None,
    )


def _require_organization(value: Optional[str], flag: str, env_var: str) -> str:
    if not value:
        Logger.error(f"error: organization not provided (use {flag} or {env_var})")
        sys.exit(EXIT_MISSING_ARGUMENTS)
    try:
        return SecurityValidator.validate_org_name(value)
    except ValueError as e:
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_MISSING_ARGUMENTS)


def _require_token(value: Optional[str], flag: str, env_var: str) -> str:
    if not value:
        Logger.error(f"error: github token not provided (use {flag} or {env_var})")
        sys.exit(EXIT_AUTH_ERROR)
    return value


def _require_path(value: Optional[str], flag: str, env_var: str) -> str:
    if not value:
        Logger.error(f"error: file not provided (use {flag} or {env_var})")
        sys.exit(EXIT_MISSING_ARGUMENTS)
    try:
        return SecurityValidator.validate_file_path(value)
    except ValueError as e:
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_MISSING_ARGUMENTS)


def _report_connection(client: GitHubClientConfig) -> None:
    if client.hostname:
        Logger.info(f"using GitHub Enterprise Server: {client.hostname}")
    else:
        Logger.info("using GitHub.com")
    status = "configured" if client.proxy.configured else "not configured"
    Logger.info(f"proxy: {status}")


def _build_export_config(args, environ: Mapping[str, str]) -> ExportConfig:
    organization = _require_organization(
        args.organization or environ.get("GHMV_SOURCE_ORGANIZATION"),
        "--organization",
        "GHMV_SOURCE_ORGANIZATION",
    )
    token = _require_token(
        args.token or environ.get("GHMV_SOURCE_TOKEN"),
        "--token",
        "GHMV_SOURCE_TOKEN",
    )
    file_prefix = _require_path(
        args.file_prefix or environ.get("GHMV_OUTPUT_FILE") or organization,
        "--file-prefix",
        "GHMV_OUTPUT_FILE",
    )
    client = GitHubClientConfig(
        token=token,
        hostname=normalize_hostname(
            args.hostname or environ.get("GHMV_SOURCE_HOSTNAME")
        ),
        proxy=_proxy_config(args, environ),
    )
    return ExportConfig(
        organization=organization, file_prefix=file_prefix, client=client
    )


def _build_sync_config(args, environ: Mapping[str, str]) -> SyncConfig:
    mapping_file = _require_path(
        args.mapping_file or environ.get("GHMV_MAPPING_FILE"),
        "--file-mapping",
        "GHMV_MAPPING_FILE",
    )
    organization = _require_organization(
        args.organization or environ.get("GHMV_TARGET_ORGANIZATION"),
        "--target-organization",
        "GHMV_TARGET_ORGANIZATION",
    )
    token = _require_token(
        args.token or environ.get("GHMV_TARGET_TOKEN"),
        "--target-token",
        "GHMV_TARGET_TOKEN",
    )
    client = GitHubClientConfig(
        token=token,
        hostname=normalize_hostname(
            args.hostname or environ.get("GHMV_TARGET_HOSTNAME")
        ),
        proxy=_proxy_config(args, environ),
    )
    return SyncConfig(
        mapping_file=mapping_file, organization=organization, client=client
    )


def parse_arguments(
    argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None
) -> Config:
    """Parse command line arguments and return configuration object."""
    if environ is None:
        environ = os.environ

    parser = _create_argument_parser()
    _add_global_arguments(parser)
    subparsers = parser.add_subparsers(dest="command", metavar="{export,sync}")
    subparsers.required = True
    _add_export_arguments(subparsers)
    _add_sync_arguments(subparsers)

    args = parser.parse_args(argv)

    command = Command(args.command)
    if command == Command.EXPORT:
        export_config = _build_export_config(args, environ)
        _report_connection(export_config.client)
        return Config(command=command, export=export_config, verbose=args.verbose)

    sync_config = _build_sync_config(args, environ)
    _report_connection(sync_config.client)
    return Config(command=command, sync=sync_config, verbose=args.verbose)
