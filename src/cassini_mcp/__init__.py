"""Cassini MCP — a JSON-RPC tool server over the Cassini observation master plan."""

from __future__ import annotations

__version__ = "1.0.0"
