"""Observation tools exposed over ``tools/call``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cassini_mcp.tools.details import GetObservationDetailsTool
from cassini_mcp.tools.queries import QueryObservationsByTargetTool, QueryObservationsByTeamTool
from cassini_mcp.tools.timerange import QueryObservationsByTimerangeTool

if TYPE_CHECKING:
    from cassini_mcp.data.repository import ObservationRepository
    from cassini_mcp.protocol.registry import Tool, ToolRegistry


def default_tools(repository: ObservationRepository) -> list[Tool]:
    """Build the four observation tools, in advertised order."""
    return [
        GetObservationDetailsTool(repository),
        QueryObservationsByTargetTool(repository),
        QueryObservationsByTeamTool(repository),
        QueryObservationsByTimerangeTool(repository),
    ]


def register_default_tools(registry: ToolRegistry, repository: ObservationRepository) -> None:
    """Register every observation tool on *registry*."""
    for tool in default_tools(repository):
        registry.register_tool(tool)


__all__ = [
    "GetObservationDetailsTool",
    "QueryObservationsByTargetTool",
    "QueryObservationsByTeamTool",
    "QueryObservationsByTimerangeTool",
    "default_tools",
    "register_default_tools",
]
