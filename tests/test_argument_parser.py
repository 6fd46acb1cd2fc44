"""Tests for command line parsing."""

from __future__ import annotations

import pytest

from argument_parser import EXIT_AUTH_ERROR, EXIT_MISSING_ARGUMENTS, parse_arguments
from config import Command


def test_export_arguments_build_config() -> None:
    cfg = parse_arguments(
        ['export', '-o', 'acme', '-t', 'ghp_source', '-n', 'ghe.acme.com/'],
        environ={},
    )

    assert cfg.command == Command.EXPORT
    assert cfg.sync is None
    assert cfg.export.organization == 'acme'
    assert cfg.export.file_prefix == 'acme'
    assert cfg.export.client.token == 'ghp_source'
    assert cfg.export.client.hostname == 'https://ghe.acme.com/api/v3'


def test_export_falls_back_to_environment() -> None:
    environ = {
        'GHMV_SOURCE_ORGANIZATION': 'acme',
        'GHMV_SOURCE_TOKEN': 'ghp_env',
        'GHMV_OUTPUT_FILE': 'backup',
        'HTTPS_PROXY': 'http://proxy:3128',
        'NO_PROXY': 'ghe.acme.com',
    }
    cfg = parse_arguments(['export'], environ=environ)

    assert cfg.export.organization == 'acme'
    assert cfg.export.client.token == 'ghp_env'
    assert cfg.export.file_prefix == 'backup'
    assert cfg.export.client.hostname is None
    assert cfg.export.client.proxy.https_proxy == 'http://proxy:3128'
    assert cfg.export.client.proxy.no_proxy == 'ghe.acme.com'
    assert cfg.export.client.proxy.http_proxy is None


def test_flags_override_environment() -> None:
    cfg = parse_arguments(
        ['--https-proxy', 'http://flag-proxy:1', 'sync', '-f', 'acme_variables.csv',
         '-o', 'acme2', '-t', 'ghp_flag'],
        environ={'HTTPS_PROXY': 'http://env-proxy:2', 'GHMV_TARGET_TOKEN': 'ghp_env'},
    )

    assert cfg.command == Command.SYNC
    assert cfg.sync.mapping_file == 'acme_variables.csv'
    assert cfg.sync.organization == 'acme2'
    assert cfg.sync.client.token == 'ghp_flag'
    assert cfg.sync.client.proxy.https_proxy == 'http://flag-proxy:1'


def test_missing_token_exits_with_auth_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(['sync', '-f', 'vars.csv', '-o', 'acme2'], environ={})
    assert excinfo.value.code == EXIT_AUTH_ERROR


def test_missing_organization_exits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(['export', '-t', 'ghp_source'], environ={})
    assert excinfo.value.code == EXIT_MISSING_ARGUMENTS


def test_invalid_organization_exits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(['export', '-o', 'bad/org', '-t', 'ghp_source'], environ={})
    assert excinfo.value.code == EXIT_MISSING_ARGUMENTS


def test_missing_mapping_file_exits() -> None:
    with pytest.raises(SystemExit) as excinfo:
        parse_arguments(['sync', '-o', 'acme2', '-t', 'ghp_target'], environ={})
    assert excinfo.value.code == EXIT_MISSING_ARGUMENTS


def test_verbose_flag_is_carried_in_config() -> None:
    cfg = parse_arguments(
        ['-v', 'export', '-o', 'acme', '-t', 'ghp_source'], environ={}
    )
    assert cfg.verbose is True
    quiet = parse_arguments(['export', '-o', 'acme', '-t', 'ghp_source'], environ={})
    assert quiet.verbose is False
