"""``cassini-mcp db`` — inspect the observation store."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path  # noqa: TC003

import click

from cassini_mcp.cli_commands._output import console, db_option, demo_option, err_console
from cassini_mcp.config import Settings  # noqa: TC001


@click.group()
def db() -> None:
    """Inspect the observation store."""


@db.command("info")
@db_option
@demo_option
@click.pass_obj
def info(settings: Settings, db_path: Path | None, demo_file: Path | None) -> None:
    """Check that the store is readable and report its record count."""
    from cassini_mcp.data.errors import RepositoryError
    from cassini_mcp.server.app import build_repository

    try:
        repository = build_repository(settings, db_path=db_path, demo_file=demo_file)
        count = asyncio.run(repository.get_count())
    except RepositoryError as exc:
        err_console.print(f"[red]Database connection failed:[/red] {exc}")
        sys.exit(1)

    source = demo_file or db_path or settings.database.path
    console.print("[green]Connected[/green]")
    console.print(f"  Source: {source}")
    console.print(f"  Total records: {count}")
