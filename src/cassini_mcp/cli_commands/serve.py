"""``cassini-mcp serve`` — run the MCP server over HTTP or stdio."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path  # noqa: TC003

import click

from cassini_mcp.cli_commands._output import db_option, demo_option, err_console
from cassini_mcp.config import Settings  # noqa: TC001


@click.command()
@click.option(
    "--transport",
    type=click.Choice(["http", "stdio"]),
    default="http",
    help="Transport to serve on.",
)
@click.option("--host", default=None, help="HTTP bind address (overrides settings).")
@click.option("--port", type=int, default=None, help="HTTP port (overrides settings).")
@db_option
@demo_option
@click.pass_obj
def serve(
    settings: Settings,
    transport: str,
    host: str | None,
    port: int | None,
    db_path: Path | None,
    demo_file: Path | None,
) -> None:
    """Serve the observation tools until interrupted."""
    from cassini_mcp.data.errors import RepositoryError
    from cassini_mcp.server.app import build_dispatcher, build_repository

    if settings.telemetry.enabled:
        _enable_telemetry(settings, transport)

    try:
        repository = build_repository(settings, db_path=db_path, demo_file=demo_file)
    except RepositoryError as exc:
        err_console.print(f"[red]Data error:[/red] {exc}")
        sys.exit(1)

    dispatcher = build_dispatcher(settings, repository)

    if transport == "stdio":
        from cassini_mcp.server.stdio import StdioServer

        asyncio.run(StdioServer(dispatcher).serve())
        return

    from cassini_mcp.server.http import create_app, serve_http

    app = create_app(dispatcher, repository, path=settings.http.path)
    bind_host = host or settings.http.host
    bind_port = port or settings.http.port
    err_console.print(
        f"Serving {len(dispatcher.registry)} tools at "
        f"http://{bind_host}:{bind_port}{settings.http.path}"
    )
    serve_http(app, bind_host, bind_port, log_level=settings.logging.level)


def _enable_telemetry(settings: Settings, transport: str) -> None:
    from cassini_mcp.utils.telemetry import configure_telemetry

    # Console span export writes to stdout, which stdio responses own.
    to_console = settings.telemetry.console and transport != "stdio"
    try:
        configure_telemetry(
            service_name=settings.server.name,
            export_to_console=to_console,
            otlp_endpoint=settings.telemetry.otlp_endpoint,
        )
    except ImportError as exc:
        err_console.print(f"[red]Telemetry error:[/red] {exc}")
        sys.exit(1)
