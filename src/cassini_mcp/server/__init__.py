"""Transports and application wiring."""

from cassini_mcp.server.app import build_dispatcher, build_repository
from cassini_mcp.server.http import create_app
from cassini_mcp.server.stdio import StdioServer

__all__ = ["StdioServer", "build_dispatcher", "build_repository", "create_app"]
