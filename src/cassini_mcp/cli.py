"""cassini-mcp CLI entrypoint."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cassini_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cassini-mcp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    envvar="CASSINI_MCP_CONFIG",
    help="Settings YAML file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """cassini-mcp — MCP tool server for Cassini mission observations."""
    from cassini_mcp.cli_commands._output import err_console
    from cassini_mcp.config import ConfigError, SettingsLoader
    from cassini_mcp.utils.log import configure_logging

    try:
        settings = SettingsLoader(config_path).load()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if log_level:
        settings.logging.level = log_level.upper()  # type: ignore[assignment]
    configure_logging(settings.logging.level)
    ctx.obj = settings


# Register subcommands
from cassini_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
