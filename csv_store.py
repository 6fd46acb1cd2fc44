#!/usr/bin/env python3
"""Reading and writing the variables CSV artifact."""

from __future__ import annotations

import csv
from typing import Iterable, List

from models import VariableRecord

HEADER = ["Name", "Value", "Scope", "Visibility"]
FILE_SUFFIX = "_variables.csv"


def output_path(prefix: str) -> str:
    return f"{prefix}{FILE_SUFFIX}"


def write_variables(path: str, records: Iterable[VariableRecord]) -> int:
    """Write header plus one row per named record; return rows written."""
    written = 0
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(HEADER)
        for record in records:
            if not record.name:
                continue
            writer.writerow(record.to_row())
            written += 1
    return written


def read_rows(path: str) -> List[List[str]]:
    """Return every non-blank row after the first; the first row is never data."""
    with open(path, newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    return [row for row in rows[1:] if row]
