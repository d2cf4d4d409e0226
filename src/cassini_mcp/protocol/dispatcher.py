"""RequestDispatcher — turns raw JSON-RPC request bytes into response bytes.

The dispatcher is the error boundary of the server: whatever goes wrong while
parsing, routing, or running a tool, :meth:`RequestDispatcher.handle` returns
a well-formed JSON-RPC response carrying the best-known request ``id``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from cassini_mcp.protocol.errors import ToolExecutionError, ToolNotFoundError
from cassini_mcp.protocol.models import (
    JSONRPC_VERSION,
    ErrorCode,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
    ServerInfo,
    ToolCallParams,
)
from cassini_mcp.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    get_tracer,
)

if TYPE_CHECKING:
    from cassini_mcp.protocol.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MethodHandler = Callable[[JsonRpcRequest], Awaitable[JsonRpcResponse]]


class RequestDispatcher:
    """Parses JSON-RPC envelopes and routes them to the MCP methods.

    Supported methods are ``initialize``, ``tools/list`` and ``tools/call``;
    anything else is answered with ``MethodNotFound``.

    Usage::

        dispatcher = RequestDispatcher(registry)
        body = await dispatcher.handle(b'{"jsonrpc": "2.0", "id": 1, "method": "tools/list"}')
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_name: str = "cassini-mcp-server",
        server_version: str = "1.0.0",
    ) -> None:
        self._registry = registry
        self._server_info = ServerInfo(name=server_name, version=server_version)
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def methods(self) -> list[str]:
        return list(self._methods)

    async def handle(self, raw: bytes | str) -> bytes:
        """Handle one raw request and return the serialized response. Never raises."""
        response = await self.handle_raw(raw)
        try:
            return response.to_json()
        except (TypeError, ValueError):
            logger.exception("Failed to serialize response for id %r", response.id)
            fallback = JsonRpcResponse.failure(
                response.id, ErrorCode.INTERNAL_ERROR, "Internal server error"
            )
            return fallback.to_json()

    async def handle_raw(self, raw: bytes | str) -> JsonRpcResponse:
        """Parse *raw* into a request and dispatch it."""
        request_id: RequestId = None
        try:
            try:
                data: Any = json.loads(raw)
            except ValueError:
                logger.error("Failed to parse JSON request")
                return JsonRpcResponse.failure(None, ErrorCode.PARSE_ERROR, "Invalid JSON")

            if data is None:
                return JsonRpcResponse.failure(
                    None, ErrorCode.INVALID_REQUEST, "Request body is empty"
                )
            if not isinstance(data, dict):
                return JsonRpcResponse.failure(
                    None, ErrorCode.PARSE_ERROR, "Request must be a JSON object"
                )

            try:
                request = JsonRpcRequest.model_validate(data)
            except ValidationError as exc:
                logger.error("Malformed JSON-RPC request: %s", exc)
                return JsonRpcResponse.failure(
                    None, ErrorCode.PARSE_ERROR, "Malformed JSON-RPC request"
                )

            request_id = request.id
            if request.jsonrpc != JSONRPC_VERSION:
                return JsonRpcResponse.failure(
                    request_id, ErrorCode.INVALID_REQUEST, "Invalid jsonrpc version"
                )

            return await self.handle_request(request)
        except Exception:
            logger.exception("Unexpected error processing request")
            return JsonRpcResponse.failure(
                request_id, ErrorCode.INTERNAL_ERROR, "Internal server error"
            )

    async def handle_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Route an already-parsed request to its method handler."""
        handler = self._methods.get(request.method)
        if handler is None:
            logger.warning("Method not found: %s", request.method)
            return JsonRpcResponse.failure(
                request.id, ErrorCode.METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )

        logger.info("Processing method: %s", request.method)
        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            if request.id is not None:
                span.set_attribute(ATTR_REQUEST_ID, str(request.id))
            try:
                response = await handler(request)
            except Exception:
                logger.exception("Unexpected error in %s", request.method)
                response = JsonRpcResponse.failure(
                    request.id, ErrorCode.INTERNAL_ERROR, "Internal server error"
                )
            if response.error is not None:
                span.set_attribute(ATTR_ERROR_CODE, response.error.code)
        return response

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    async def _initialize(self, request: JsonRpcRequest) -> JsonRpcResponse:
        result = InitializeResult(server_info=self._server_info)
        return JsonRpcResponse.success(request.id, result.model_dump(by_alias=True))

    async def _tools_list(self, request: JsonRpcRequest) -> JsonRpcResponse:
        tools = [tool.to_wire() for tool in self._registry.list_tools()]
        return JsonRpcResponse.success(request.id, {"tools": tools})

    async def _tools_call(self, request: JsonRpcRequest) -> JsonRpcResponse:
        params = request.params if request.params is not None else {}
        if not isinstance(params, dict):
            return JsonRpcResponse.failure(
                request.id, ErrorCode.INVALID_PARAMS, "Tool call params must be an object"
            )
        if params.get("arguments") is None:
            params = {**params, "arguments": {}}

        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as exc:
            return JsonRpcResponse.failure(
                request.id,
                ErrorCode.INVALID_PARAMS,
                "Invalid tool call params",
                data=exc.errors(include_url=False, include_context=False),
            )

        if not call.name:
            return JsonRpcResponse.failure(
                request.id, ErrorCode.INVALID_PARAMS, "Tool name is required"
            )

        try:
            result = await self._registry.invoke(call.name, call.arguments)
        except ToolNotFoundError as exc:
            logger.warning("Tool not found: %s", exc.name)
            return JsonRpcResponse.failure(request.id, ErrorCode.TOOL_NOT_FOUND, str(exc))
        except ToolExecutionError as exc:
            logger.error("Tool execution failed: %s", exc)
            return JsonRpcResponse.failure(
                request.id,
                ErrorCode.TOOL_EXECUTION_ERROR,
                exc.detail or str(exc),
                data={"tool": exc.name},
            )

        return JsonRpcResponse.success(request.id, result.to_wire())
