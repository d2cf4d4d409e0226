"""Protocol layer — JSON-RPC envelope, tool registry, and request dispatch."""

from cassini_mcp.protocol.dispatcher import RequestDispatcher
from cassini_mcp.protocol.errors import (
    InvalidParamsError,
    InvalidToolError,
    MissingParameterError,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
)
from cassini_mcp.protocol.models import (
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ToolResult,
)
from cassini_mcp.protocol.registry import Tool, ToolRegistry

__all__ = [
    "ErrorCode",
    "InvalidParamsError",
    "InvalidToolError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPToolDef",
    "MissingParameterError",
    "ProtocolError",
    "RequestDispatcher",
    "Tool",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolResult",
]
