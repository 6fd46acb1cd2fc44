#!/usr/bin/env python3
"""Utility functions for gh-migrate-variables."""

from __future__ import annotations

import time
from typing import Callable, Tuple, Type, TypeVar

from errors import RemoteError
from logging_utils import Logger

MAX_ATTEMPTS = 3

T = TypeVar("T")


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after a failed attempt (1-based): 1, 2, 4, ..."""
    return float(2 ** (attempt - 1))


def retry_operation(
    operation: Callable[[], T],
    description: str,
    *,
    max_attempts: int = MAX_ATTEMPTS,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run operation with bounded exponential backoff.

    Raises RemoteError (chained to the last failure) once all attempts
    are used. Exceptions outside retry_on propagate immediately.
    """
    last_error: BaseException = RemoteError(f"{description}: no attempt made")
    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except retry_on as e:
            last_error = e
            if attempt < max_attempts:
                wait_time = backoff_delay(attempt)
                Logger.warn(
                    f"attempt {attempt}/{max_attempts} to {description} failed, "
                    f"retrying in {wait_time:.0f}s: {e}"
                )
                sleep(wait_time)

    raise RemoteError(
        f"failed to {description} after {max_attempts} attempts: {last_error}",
        attempts=max_attempts,
    ) from last_error
