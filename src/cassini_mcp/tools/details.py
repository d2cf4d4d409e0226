"""``get_observation_details`` — one observation, every field."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cassini_mcp.protocol.errors import InvalidParamsError
from cassini_mcp.protocol.models import MCPToolDef, ToolResult
from cassini_mcp.tools.common import int_or_default

if TYPE_CHECKING:
    from cassini_mcp.data.repository import ObservationRepository

logger = logging.getLogger(__name__)


class GetObservationDetailsTool:
    """Looks up a single observation by id.

    A missing observation is a normal text answer, not an error.
    """

    name = "get_observation_details"

    def __init__(self, repository: ObservationRepository) -> None:
        self._repository = repository

    def definition(self) -> MCPToolDef:
        return MCPToolDef(
            name=self.name,
            description=(
                "Retrieve complete details for a specific Cassini observation by its ID. "
                "Returns all available fields including description and library definition."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "id": {
                        "type": "integer",
                        "description": "Observation ID",
                        "minimum": 1,
                    },
                },
                "required": ["id"],
            },
        )

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        observation_id = int_or_default(arguments, "id", 0)
        if observation_id <= 0:
            raise InvalidParamsError("ID must be a positive integer")

        logger.info("Retrieving observation details for ID: %d", observation_id)
        observation = await self._repository.get_by_id(observation_id)
        if observation is None:
            return ToolResult.from_text(f"No observation found with ID: {observation_id}")

        logger.info("Retrieved observation %d: %s", observation_id, observation.title)
        return ToolResult.from_json(
            observation.details(), uri=f"cassini://observations/{observation_id}"
        )
