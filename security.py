#!/usr/bin/env python3
"""Security validation utilities for gh-migrate-variables."""

import os
import re


class SecurityValidator:
    """Input validation and log sanitization."""

    MAX_ORG_NAME_LENGTH = 39
    MAX_PATH_LENGTH = 500

    # Alphanumerics, hyphens and underscores; no leading or trailing separator
    SAFE_ORG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9_-]*[A-Za-z0-9])?$")

    REDACTIONS = [
        (r"(https?://)[^:/@\s]+:[^@\s]+@", r"\1[REDACTED]@"),  # URLs with credentials
        (r"bearer\s+[^\s]+", "Bearer [REDACTED]"),  # Authorization headers
        (r"token\s*[=:]\s*[^\s]+", "token=[REDACTED]"),  # Token assignments
        (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained PATs
        (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Classic/OAuth/app tokens
    ]

    @classmethod
    def validate_org_name(cls, name: str) -> str:
        """Validate a GitHub organization login."""
        if not name or not isinstance(name, str):
            raise ValueError("Organization name must be a non-empty string")

        if len(name) > cls.MAX_ORG_NAME_LENGTH:
            raise ValueError(
                f"Organization name exceeds maximum length of {cls.MAX_ORG_NAME_LENGTH}"
            )

        if "\x00" in name or any(ord(c) < 32 for c in name):
            raise ValueError(
                "Organization name contains null bytes or control characters"
            )

        if not cls.SAFE_ORG_NAME_PATTERN.match(name):
            raise ValueError(f"Organization name contains invalid characters: {name}")

        return name

    @classmethod
    def validate_file_path(cls, path: str) -> str:
        """Validate a CSV path or output prefix."""
        if not path or not isinstance(path, str):
            raise ValueError("File path must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(
                f"File path exceeds maximum length of {cls.MAX_PATH_LENGTH}"
            )

        if "\x00" in path:
            raise ValueError("File path contains null bytes")

        return os.path.normpath(path)

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        sanitized = str(message)
        for pattern, replacement in cls.REDACTIONS:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
