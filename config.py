#!/usr/bin/env python3
"""Configuration dataclasses for gh-migrate-variables."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_TIMEOUT_S = 30.0


class Command(Enum):
    """Enumeration for the supported operations."""
    EXPORT = "export"
    SYNC = "sync"


@dataclass
class ProxyConfig:
    """Outbound proxy configuration."""
    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    no_proxy: Optional[str] = None

    @property
    def configured(self) -> bool:
        return bool(self.http_proxy or self.https_proxy)


@dataclass
class GitHubClientConfig:
    """Connection settings for one GitHub endpoint."""
    token: str
    hostname: Optional[str] = None
    proxy: ProxyConfig = field(default_factory=ProxyConfig)
    timeout_s: float = DEFAULT_TIMEOUT_S


@dataclass
class ExportConfig:
    """Configuration for exporting variables from a source organization."""
    organization: str
    file_prefix: str
    client: GitHubClientConfig


@dataclass
class SyncConfig:
    """Configuration for creating variables in a target organization."""
    mapping_file: str
    organization: str
    client: GitHubClientConfig


@dataclass
class Config:
    """Main configuration, built once from the command line."""
    command: Command
    export: Optional[ExportConfig] = None
    sync: Optional[SyncConfig] = None
    verbose: bool = False
