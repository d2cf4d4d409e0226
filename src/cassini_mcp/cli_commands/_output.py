"""Shared CLI output formatters and options."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from cassini_mcp.protocol.models import MCPToolDef  # noqa: TC001

console = Console()
err_console = Console(stderr=True)

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="SQLite database with the master_plan table (overrides settings).",
)
demo_option = click.option(
    "--demo",
    "demo_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Serve observations from a JSON/YAML file instead of the database.",
)


def print_json(data: Any) -> None:
    """Print *data* as highlighted JSON."""
    console.print_json(json.dumps(data, default=str))


def print_tools_table(tools: list[MCPToolDef]) -> None:
    """Pretty-print registered tool schemas as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Required")
    table.add_column("Description")

    for tool in tools:
        required = ", ".join(tool.input_schema.get("required", [])) or "-"
        table.add_row(tool.name, required, _truncate(tool.description))

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
