"""``cassini-mcp tools`` — list and call the registered tools locally."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path  # noqa: TC003
from typing import Any

import click

from cassini_mcp.cli_commands._output import (
    console,
    db_option,
    demo_option,
    err_console,
    print_json,
    print_tools_table,
)
from cassini_mcp.config import Settings  # noqa: TC001


@click.group()
def tools() -> None:
    """List and call observation tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list result as JSON.")
@click.pass_obj
def list_tools(settings: Settings, as_json: bool) -> None:
    """Show the tool schemas advertised by ``tools/list``."""
    from cassini_mcp.server.app import build_dispatcher, build_repository

    dispatcher = build_dispatcher(settings, build_repository(settings))
    registered = dispatcher.registry.list_tools()

    if as_json:
        print_json({"tools": [tool.to_wire() for tool in registered]})
        return
    print_tools_table(registered)


@tools.command("call")
@click.argument("name")
@click.option(
    "--arg",
    "-a",
    "args",
    multiple=True,
    metavar="KEY=VALUE",
    help="Tool argument; VALUE is read as JSON when possible, else as a string.",
)
@click.option("--arguments", "arguments_json", default=None, help="All arguments as a JSON object.")
@db_option
@demo_option
@click.pass_obj
def call_tool(
    settings: Settings,
    name: str,
    args: tuple[str, ...],
    arguments_json: str | None,
    db_path: Path | None,
    demo_file: Path | None,
) -> None:
    """Invoke tool NAME through the JSON-RPC dispatcher and print the response."""
    from cassini_mcp.data.errors import RepositoryError
    from cassini_mcp.server.app import build_dispatcher, build_repository

    try:
        arguments = _parse_arguments(args, arguments_json)
    except click.BadParameter as exc:
        err_console.print(f"[red]Argument error:[/red] {exc.message}")
        sys.exit(2)

    try:
        repository = build_repository(settings, db_path=db_path, demo_file=demo_file)
    except RepositoryError as exc:
        err_console.print(f"[red]Data error:[/red] {exc}")
        sys.exit(1)

    dispatcher = build_dispatcher(settings, repository)
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments},
    }
    raw = asyncio.run(dispatcher.handle(json.dumps(request)))
    response = json.loads(raw)

    if "error" in response:
        error = response["error"]
        console.print(f"[red]Error {error['code']}:[/red] {error['message']}")
        sys.exit(1)

    for block in response["result"].get("content", []):
        if block.get("type") == "resource":
            print_json(json.loads(block["resource"]["text"]))
        else:
            console.print(block.get("text", ""))


def _parse_arguments(args: tuple[str, ...], arguments_json: str | None) -> dict[str, Any]:
    arguments: dict[str, Any] = {}
    if arguments_json:
        try:
            loaded = json.loads(arguments_json)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"--arguments is not valid JSON: {exc}") from exc
        if not isinstance(loaded, dict):
            raise click.BadParameter("--arguments must be a JSON object")
        arguments.update(loaded)

    for item in args:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        try:
            arguments[key] = json.loads(value)
        except json.JSONDecodeError:
            arguments[key] = value
    return arguments
