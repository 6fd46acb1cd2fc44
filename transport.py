#!/usr/bin/env python3
"""Authenticated HTTP session for GitHub.com and GitHub Enterprise Server."""

from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import urlparse

import requests

from config import GitHubClientConfig, ProxyConfig
from errors import AuthError

PUBLIC_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


def normalize_hostname(hostname: Optional[str]) -> Optional[str]:
    """Return the REST base URL for an Enterprise Server hostname.

    'ghe.example.com', 'https://ghe.example.com/' and
    'https://ghe.example.com/api/v3/' all map to
    'https://ghe.example.com/api/v3'. Empty input returns None.
    """
    host = (hostname or "").strip()
    if not host:
        return None
    for prefix in ("http://", "https://"):
        if host.startswith(prefix):
            host = host[len(prefix):]
    host = host.rstrip("/")
    if host.endswith("/api/v3"):
        host = host[: -len("/api/v3")]
    host = host.rstrip("/")
    if not host:
        return None
    return f"https://{host}/api/v3"


def resolve_api_url(hostname: Optional[str]) -> str:
    return normalize_hostname(hostname) or PUBLIC_API_URL


def select_proxies(url: str, proxy: Optional[ProxyConfig]) -> Dict[str, str]:
    """Pick the proxy mapping for one request.

    Hosts listed verbatim in no_proxy bypass proxying; otherwise https
    requests use https_proxy and http requests use http_proxy.
    """
    if proxy is None:
        return {}
    parsed = urlparse(url)
    if proxy.no_proxy:
        bypass = {entry.strip() for entry in proxy.no_proxy.split(",")}
        if parsed.netloc in bypass:
            return {}
    if parsed.scheme == "https" and proxy.https_proxy:
        return {"https": proxy.https_proxy}
    if parsed.scheme == "http" and proxy.http_proxy:
        return {"http": proxy.http_proxy}
    return {}


class GitHubSession(requests.Session):
    """requests session with GitHub headers, per-request proxies and timeout."""

    def __init__(
        self,
        token: str,
        proxy: Optional[ProxyConfig] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        super().__init__()
        # Proxies come from ProxyConfig only, never from the process environment
        self.trust_env = False
        self.proxy_config = proxy
        self.timeout_s = timeout_s
        self.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": API_VERSION,
            }
        )

    def request(self, method, url, *args, **kwargs):
        if not kwargs.get("proxies"):
            kwargs["proxies"] = select_proxies(url, self.proxy_config)
        if kwargs.get("timeout") is None and self.timeout_s is not None:
            kwargs["timeout"] = self.timeout_s
        return super().request(method, url, *args, **kwargs)


def build_session(config: GitHubClientConfig) -> GitHubSession:
    """Create the authenticated session; performs no network I/O."""
    if not config.token:
        raise AuthError("GitHub token is required")
    return GitHubSession(config.token, config.proxy, config.timeout_s)
