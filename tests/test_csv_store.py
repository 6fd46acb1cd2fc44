"""Tests for the CSV artifact reader and writer."""

from __future__ import annotations

from pathlib import Path

from csv_store import output_path, read_rows, write_variables
from models import VariableRecord


def test_output_path_appends_suffix() -> None:
    assert output_path('acme') == 'acme_variables.csv'


def test_header_and_rows(tmp_path: Path) -> None:
    path = tmp_path / 'acme_variables.csv'
    records = [
        VariableRecord('FOO', 'bar', 'organization', 'private'),
        VariableRecord('BAZ', 'qux', 'widget', 'private'),
    ]

    assert write_variables(str(path), records) == 2
    assert path.read_text(encoding='utf-8') == (
        'Name,Value,Scope,Visibility\n'
        'FOO,bar,organization,private\n'
        'BAZ,qux,widget,private\n'
    )


def test_awkward_values_survive_round_trip(tmp_path: Path) -> None:
    """Empty values and embedded commas, quotes and newlines are preserved."""
    path = tmp_path / 'out_variables.csv'
    records = [
        VariableRecord('EMPTY', '', 'organization', 'all'),
        VariableRecord('LIST', 'a,b,c', 'widget', 'private'),
        VariableRecord('QUOTED', 'say "hi"', 'widget', 'private'),
        VariableRecord('MULTILINE', 'line one\nline two', 'organization', 'selected'),
    ]
    write_variables(str(path), records)

    rows = read_rows(str(path))

    assert [VariableRecord(*row) for row in rows] == records


def test_records_without_name_are_not_written(tmp_path: Path) -> None:
    path = tmp_path / 'out_variables.csv'
    written = write_variables(
        str(path), [VariableRecord('', 'x', 'organization'), VariableRecord('A', 'x', 'r')]
    )
    assert written == 1
    assert read_rows(str(path)) == [['A', 'x', 'r', 'private']]


def test_first_row_is_always_dropped(tmp_path: Path) -> None:
    path = tmp_path / 'mapping.csv'
    path.write_text('FOO,bar,organization,private\nBAZ,qux,widget\n', encoding='utf-8')

    assert read_rows(str(path)) == [['BAZ', 'qux', 'widget']]


def test_empty_file_has_no_rows(tmp_path: Path) -> None:
    path = tmp_path / 'empty.csv'
    path.write_text('', encoding='utf-8')
    assert read_rows(str(path)) == []


def test_blank_lines_are_dropped(tmp_path: Path) -> None:
    path = tmp_path / 'mapping.csv'
    path.write_text(
        'Name,Value,Scope,Visibility\n\nFOO,bar,organization,private\n\n',
        encoding='utf-8',
    )
    assert read_rows(str(path)) == [['FOO', 'bar', 'organization', 'private']]
