#!/usr/bin/env python3
"""Records moved between the GitHub API and the CSV artifact."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional

ORGANIZATION_SCOPE = "organization"


class Visibility(Enum):
    """Enumeration for GitHub Actions variable visibility."""
    PRIVATE = "private"
    ALL = "all"
    SELECTED = "selected"


def default_visibility(visibility: Optional[str]) -> str:
    return visibility or Visibility.PRIVATE.value


@dataclass
class VariableRecord:
    """One Actions variable, organization or repository scoped."""
    name: str
    value: str
    scope: str
    visibility: str = Visibility.PRIVATE.value

    @property
    def is_organization(self) -> bool:
        return self.scope == ORGANIZATION_SCOPE

    @classmethod
    def from_api(
        cls, payload: Optional[Mapping[str, Any]], scope: str
    ) -> Optional["VariableRecord"]:
        """Build a record from an API variable object.

        Returns None for missing payloads and variables without a name.
        """
        if not isinstance(payload, Mapping) or not payload.get("name"):
            return None
        return cls(
            name=payload["name"],
            value=payload.get("value") or "",
            scope=scope,
            visibility=default_visibility(payload.get("visibility")),
        )

    def to_row(self) -> List[str]:
        return [self.name, self.value, self.scope, self.visibility]


@dataclass
class RunStatistics:
    """Counters for one export or sync run."""
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    repositories: int = 0
    variables: int = 0
