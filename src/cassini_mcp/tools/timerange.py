"""``query_observations_by_timerange`` — observations starting inside a window."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cassini_mcp.protocol.models import MCPToolDef, ToolResult
from cassini_mcp.timeparse import parse_time, try_parse_time
from cassini_mcp.tools.common import (
    LIMIT_SCHEMA,
    OFFSET_SCHEMA,
    page_window,
    paginate,
    require_string,
    summarize,
)

if TYPE_CHECKING:
    from cassini_mcp.data.repository import ObservationRepository

logger = logging.getLogger(__name__)

_TIME_FORMATS = "UTC format (YYYY-DDDTHH:MM:SS or YYYY-MM-DD)"


class QueryObservationsByTimerangeTool:
    """Filters all observations by start time, inclusive at both ends.

    Observations whose own start time does not parse are left out; boundaries
    that do not parse fail the call.  Unlike the target and team queries, the
    result carries no ``total``.
    """

    name = "query_observations_by_timerange"

    def __init__(self, repository: ObservationRepository) -> None:
        self._repository = repository

    def definition(self) -> MCPToolDef:
        return MCPToolDef(
            name=self.name,
            description=(
                "Query Cassini mission observations within a specified time range. "
                "Returns observation records filtered by start time."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "start_time": {
                        "type": "string",
                        "description": f"Start of time range in {_TIME_FORMATS}",
                    },
                    "end_time": {
                        "type": "string",
                        "description": f"End of time range in {_TIME_FORMATS}",
                    },
                    "limit": dict(LIMIT_SCHEMA),
                    "offset": dict(OFFSET_SCHEMA),
                },
                "required": ["start_time", "end_time"],
            },
        )

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        start_time = require_string(arguments, "start_time")
        end_time = require_string(arguments, "end_time")
        limit, offset = page_window(arguments)

        range_start = parse_time(start_time)
        range_end = parse_time(end_time)

        logger.info(
            "Querying observations by time range: %s to %s, limit=%d, offset=%d",
            start_time,
            end_time,
            limit,
            offset,
        )

        in_range = []
        for observation in await self._repository.get_all():
            started = try_parse_time(observation.start_time_utc)
            if started is not None and range_start <= started <= range_end:
                in_range.append(observation)

        page = paginate(in_range, offset, limit)
        logger.info("Found %d observations in time range", len(page))

        payload = {
            "count": len(page),
            "offset": offset,
            "limit": limit,
            "observations": summarize(page),
        }
        return ToolResult.from_json(
            payload, uri=f"cassini://observations/timerange?start={start_time}&end={end_time}"
        )
