"""Exact-match observation queries: by target and by team."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cassini_mcp.protocol.models import MCPToolDef, ToolResult
from cassini_mcp.tools.common import (
    LIMIT_SCHEMA,
    OFFSET_SCHEMA,
    page_window,
    paginate,
    require_string,
    summarize,
)

if TYPE_CHECKING:
    from cassini_mcp.data.models import Observation
    from cassini_mcp.data.repository import ObservationRepository

logger = logging.getLogger(__name__)


def _page_payload(
    key: str, value: str, observations: list[Observation], offset: int, limit: int
) -> dict[str, Any]:
    page = paginate(observations, offset, limit)
    return {
        "count": len(page),
        "total": len(observations),
        "offset": offset,
        "limit": limit,
        key: value,
        "observations": summarize(page),
    }


class QueryObservationsByTargetTool:
    """Lists observations whose target matches exactly (case-sensitive)."""

    name = "query_observations_by_target"

    def __init__(self, repository: ObservationRepository) -> None:
        self._repository = repository

    def definition(self) -> MCPToolDef:
        return MCPToolDef(
            name=self.name,
            description=(
                "Query Cassini mission observations by observation target. Common targets "
                "include: Saturn, Titan, Enceladus, Rhea, Iapetus, Dione, Tethys, rings, "
                "and other moons."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "target": {
                        "type": "string",
                        "description": "Target name (e.g., Saturn, Titan, Enceladus, rings)",
                    },
                    "limit": dict(LIMIT_SCHEMA),
                    "offset": dict(OFFSET_SCHEMA),
                },
                "required": ["target"],
            },
        )

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        target = require_string(arguments, "target")
        limit, offset = page_window(arguments)
        logger.info(
            "Querying observations by target: %s, limit=%d, offset=%d", target, limit, offset
        )

        observations = await self._repository.get_by_target(target)
        payload = _page_payload("target", target, observations, offset, limit)

        logger.info(
            "Found %d observations for target %s, returned %d",
            payload["total"],
            target,
            payload["count"],
        )
        return ToolResult.from_json(payload, uri=f"cassini://observations/target/{target}")


class QueryObservationsByTeamTool:
    """Lists observations whose instrument team matches exactly (case-sensitive)."""

    name = "query_observations_by_team"

    def __init__(self, repository: ObservationRepository) -> None:
        self._repository = repository

    def definition(self) -> MCPToolDef:
        return MCPToolDef(
            name=self.name,
            description=(
                "Query Cassini mission observations by team/instrument identifier. Common teams "
                "include: CAPS, CDA, CIRS, ISS, INMS, MAG, MIMI, RADAR, RPWS, RSS, UVIS, VIMS."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "team": {
                        "type": "string",
                        "description": "Team or instrument identifier (e.g., ISS, CAPS, RADAR, VIMS)",
                    },
                    "limit": dict(LIMIT_SCHEMA),
                    "offset": dict(OFFSET_SCHEMA),
                },
                "required": ["team"],
            },
        )

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        team = require_string(arguments, "team")
        limit, offset = page_window(arguments)
        logger.info("Querying observations by team: %s, limit=%d, offset=%d", team, limit, offset)

        observations = await self._repository.get_by_team(team)
        payload = _page_payload("team", team, observations, offset, limit)

        logger.info(
            "Found %d observations for team %s, returned %d",
            payload["total"],
            team,
            payload["count"],
        )
        return ToolResult.from_json(payload, uri=f"cassini://observations/team/{team}")
