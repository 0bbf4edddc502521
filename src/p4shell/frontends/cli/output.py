"""Output formatting utilities for CLI commands."""

from __future__ import annotations

import json
import sys
from datetime import datetime
from typing import Any, NoReturn

import rich_click as click

from p4shell.core.types import ChangeListItem, ClientInfo, FileLogItem, OpenedFile


def print_table(
    headers: list[str],
    rows: list[list[str]],
    widths: list[int] | None = None,
    separator_width: int = 70,
) -> None:
    """Print a formatted table with headers.

    Args:
        headers: Column header strings
        rows: List of rows, each row is a list of cell values
        widths: Optional column widths. If None, fits the widest cell.
        separator_width: Width of the separator line
    """
    if widths is None:
        widths = [
            max([len(h)] + [len(row[i]) for row in rows if i < len(row)])
            for i, h in enumerate(headers)
        ]

    fmt_parts = []
    for i, width in enumerate(widths):
        if i == len(widths) - 1:
            # Last column doesn't need padding
            fmt_parts.append("{}")
        else:
            fmt_parts.append(f"{{:<{width}}}")
    fmt = " ".join(fmt_parts)

    click.echo(fmt.format(*headers))
    click.echo("-" * separator_width)

    for row in rows:
        padded_row = list(row) + [""] * (len(headers) - len(row))
        click.echo(fmt.format(*padded_row[: len(headers)]))


def output_json(data: Any, indent: int = 2) -> None:
    """Output data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent))


def error_exit(message: str, code: int = 1) -> NoReturn:
    """Print error message and exit with code."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def to_jsonable(parsed: Any) -> Any:
    """Convert parser output (a record, a list of records or lines) to JSON data."""
    if isinstance(parsed, list):
        return [to_jsonable(item) for item in parsed]
    if hasattr(parsed, "to_dict"):
        return parsed.to_dict()
    return parsed


def _date(timestamp: datetime | None) -> str:
    if timestamp is None:
        return ""
    if timestamp.hour or timestamp.minute or timestamp.second:
        return timestamp.strftime("%Y/%m/%d %H:%M:%S")
    return timestamp.strftime("%Y/%m/%d")


def _show_client_info(info: ClientInfo) -> None:
    rows = [[key, value] for key, value in info.to_dict().items()]
    print_table(["FIELD", "VALUE"], rows, separator_width=50)


def _show_changes(changes: list[ChangeListItem]) -> None:
    rows = [
        [
            str(c.change_list),
            _date(c.timestamp),
            c.user_name,
            c.client_name,
            c.status,
            c.summary[:60],
        ]
        for c in changes
    ]
    print_table(["CHANGE", "DATE", "USER", "CLIENT", "STATUS", "DESCRIPTION"], rows)


def _show_filelog(items: list[FileLogItem]) -> None:
    rows = [
        [
            f"#{i.revision}",
            str(i.change_list),
            i.action,
            _date(i.timestamp),
            i.user_name,
            i.file_type,
            i.description[:50],
        ]
        for i in items
    ]
    print_table(["REV", "CHANGE", "ACTION", "DATE", "USER", "TYPE", "DESCRIPTION"], rows)


def _show_opened(files: list[OpenedFile]) -> None:
    rows = [
        [
            f.file_path,
            f"#{f.revision}",
            "default" if f.in_default_change else str(f.change_list),
            f.action,
        ]
        for f in files
    ]
    print_table(["FILE", "REV", "CHANGE", "ACTION"], rows)


def render_records(parsed: Any, json_output: bool = False) -> None:
    """Print parser output as a table (or JSON), raw lines as-is.

    Args:
        parsed: Whatever parse_structured returned.
        json_output: Print JSON instead of a table.
    """
    if json_output:
        output_json(to_jsonable(parsed))
        return

    if isinstance(parsed, ClientInfo):
        _show_client_info(parsed)
        return

    if not parsed:
        click.echo("(no output)")
        return

    first = parsed[0]
    if isinstance(first, ChangeListItem):
        _show_changes(parsed)
    elif isinstance(first, FileLogItem):
        _show_filelog(parsed)
    elif isinstance(first, OpenedFile):
        _show_opened(parsed)
    else:
        for line in parsed:
            click.echo(line)
