"""Output formatting for library listings."""

from __future__ import annotations

import csv
import json
import sys
from enum import Enum
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

console = Console(stderr=True)

Rows = list[dict[str, Any]] | dict[str, Any] | list[BaseModel] | BaseModel


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def _to_rows(data: Rows) -> list[dict[str, Any]]:
    if isinstance(data, (dict, BaseModel)):
        data = [data]
    return [row.model_dump() if isinstance(row, BaseModel) else row for row in data]


def _cell(value: Any) -> str:
    """Flatten a value for a single table/CSV cell."""
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(_cell(v) for v in value)
    if isinstance(value, dict):
        return value.get("url") or value.get("date") or json.dumps(value, default=str)
    return str(value)


def print_output(
    data: Rows,
    fmt: OutputFormat = OutputFormat.TABLE,
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print records in the requested format.

    Args:
        data: Records to display (dicts or pydantic models, single or list).
        fmt: Output format (table, json, csv).
        columns: Which columns to show in table/csv mode. None = all.
        title: Optional title for table output.
    """
    rows = _to_rows(data)
    if fmt == OutputFormat.JSON:
        print_json(rows)
    elif fmt == OutputFormat.CSV:
        print_csv(rows, columns)
    else:
        print_table(rows, columns, title)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def print_table(
    rows: list[dict[str, Any]],
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print rows as a Rich table on stderr."""
    if not rows:
        console.print("[dim]No results.[/dim]")
        return

    if columns is None:
        columns = list(rows[0].keys())

    table = Table(title=title, show_lines=False)
    for col in columns:
        table.add_column(col, overflow="fold")

    for row in rows:
        table.add_row(*[_cell(row.get(col)) for col in columns])

    console.print(table)


def print_csv(
    rows: list[dict[str, Any]],
    columns: list[str] | None = None,
) -> None:
    """Print rows as CSV to stdout."""
    if not rows:
        return

    if columns is None:
        columns = list(rows[0].keys())

    writer = csv.DictWriter(sys.stdout, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: _cell(row.get(k)) for k in columns})
