"""ToolRegistry — the name-keyed table of tool schemas and handlers."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

from cassini_mcp.protocol.errors import InvalidToolError, ToolExecutionError, ToolNotFoundError
from cassini_mcp.protocol.models import MCPToolDef, ToolResult
from cassini_mcp.utils.telemetry import ATTR_RESULT_COUNT, ATTR_TOOL_NAME, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolResult]]


@runtime_checkable
class Tool(Protocol):
    """A self-describing tool: a static schema plus an async executor."""

    def definition(self) -> MCPToolDef:
        """Return the schema advertised by ``tools/list``."""
        ...

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        """Run the tool against *arguments*."""
        ...


class ToolRegistry:
    """Maps tool names to their schema and handler.

    Registration happens once at startup, before any request is served;
    afterwards the registry is only read, so it needs no locking.

    Usage::

        registry = ToolRegistry()
        registry.register_tool(GetObservationDetailsTool(repository))

        registry.list_tools()                          # in registration order
        result = await registry.invoke("get_observation_details", {"id": 7})
    """

    def __init__(self) -> None:
        self._tools: dict[str, MCPToolDef] = {}
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, tool: MCPToolDef, handler: ToolHandler) -> None:
        """Add *tool* with *handler*; an existing name is replaced in place.

        Raises:
            InvalidToolError: If the tool name is empty.
        """
        if not tool.name:
            raise InvalidToolError("tool name cannot be empty")

        if tool.name in self._tools:
            logger.warning("Tool %s is already registered. It will be replaced.", tool.name)

        # Reassigning an existing key keeps its original position.
        self._tools[tool.name] = tool
        self._handlers[tool.name] = handler
        logger.info("Registered tool: %s", tool.name)

    def register_tool(self, tool: Tool) -> None:
        """Register an object implementing :class:`Tool`."""
        self.register(tool.definition(), tool.execute)

    def list_tools(self) -> list[MCPToolDef]:
        """Return all tool schemas in registration order."""
        return list(self._tools.values())

    def exists(self, name: str) -> bool:
        return name in self._tools

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def invoke(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Run the handler registered under *name*.

        Raises:
            ToolNotFoundError: If no tool is registered under *name*.
            ToolExecutionError: If the handler raises; the original exception
                is chained as ``__cause__``.
        """
        handler = self._handlers.get(name)
        if handler is None:
            logger.error("Tool not found: %s", name)
            raise ToolNotFoundError(name)

        logger.info("Executing tool: %s with arguments: %s", name, arguments)

        with _tracer.start_as_current_span("mcp.tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                result = await handler(arguments)
            except Exception as exc:
                logger.error("Tool execution failed for %s: %s", name, exc)
                raise ToolExecutionError(name, str(exc)) from exc
            span.set_attribute(ATTR_RESULT_COUNT, len(result.content))

        logger.info("Tool %s executed successfully", name)
        return result
