"""Shared fixtures and fakes for the test suite."""

from __future__ import annotations

from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import pytest
import requests


def make_response(
    payload: Any = None,
    status_code: int = 200,
    next_url: Optional[str] = None,
) -> MagicMock:
    """Build a requests.Response stand-in."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = payload
    response.links = {"next": {"url": next_url}} if next_url else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def sleeps() -> list:
    return []


@pytest.fixture
def record_sleep(sleeps):
    def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return _sleep


def org_variable(name: str, value: str, visibility: Optional[str] = 'private') -> Dict[str, Any]:
    payload: Dict[str, Any] = {'name': name, 'value': value}
    if visibility is not None:
        payload['visibility'] = visibility
    return payload
