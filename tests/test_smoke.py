"""Smoke test to verify the project wiring."""

from __future__ import annotations


def test_import() -> None:
    import cassini_mcp

    assert cassini_mcp.__version__ == "1.0.0"


def test_cli_entrypoint() -> None:
    from cassini_mcp.cli import main

    assert callable(main)


def test_package_exports() -> None:
    from cassini_mcp.data import InMemoryObservationRepository, Observation
    from cassini_mcp.protocol import ErrorCode, RequestDispatcher, ToolRegistry
    from cassini_mcp.server import StdioServer, build_dispatcher, create_app
    from cassini_mcp.tools import default_tools

    assert ErrorCode.TOOL_NOT_FOUND == -32001
    assert RequestDispatcher is not None
    assert ToolRegistry is not None
    assert StdioServer is not None
    assert create_app is not None
    assert Observation is not None
    assert len(default_tools(InMemoryObservationRepository())) == 4
    assert build_dispatcher is not None


async def test_build_dispatcher_registers_every_tool(demo_file) -> None:  # type: ignore[no-untyped-def]
    from cassini_mcp.config import Settings
    from cassini_mcp.server.app import build_dispatcher, build_repository

    settings = Settings()
    repository = build_repository(settings, demo_file=demo_file)
    dispatcher = build_dispatcher(settings, repository)

    assert len(dispatcher.registry) == 4
    assert dispatcher.methods == ["initialize", "tools/list", "tools/call"]
    assert await repository.get_count() == 7
