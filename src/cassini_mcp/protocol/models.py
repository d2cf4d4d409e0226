"""MCP models — JSON-RPC 2.0 messages, tool definitions, and tool results.

Implements the message format used by the Model Context Protocol for the
``initialize`` handshake, tool discovery (``tools/list``) and execution
(``tools/call``).
"""

from __future__ import annotations

import json
from enum import IntEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROTOCOL_VERSION = "2024-11-05"
JSONRPC_VERSION = "2.0"

RequestId = int | float | str | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class ErrorCode(IntEnum):
    """JSON-RPC error codes, including the MCP tool-specific range."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_ERROR = -32000
    TOOL_NOT_FOUND = -32001
    TOOL_EXECUTION_ERROR = -32002


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    Field types are checked strictly: ``{"method": 5}`` is a malformed
    request, not a method named ``"5"``.  A missing ``id`` is answered with
    ``id: null``.
    """

    model_config = ConfigDict(strict=True)

    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: Any = None
    id: RequestId = None

    @field_validator("id", mode="before")
    @classmethod
    def _reject_bool_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            msg = "id must be a string, a number, or null"
            raise ValueError(msg)
        return value


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    Exactly one of ``result`` and ``error`` is set; use :meth:`success` and
    :meth:`failure` rather than the bare constructor.
    """

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: Any = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId, result: Any) -> JsonRpcResponse:
        """Build a result response for *request_id*."""
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls,
        request_id: RequestId,
        code: int,
        message: str,
        data: Any = None,
    ) -> JsonRpcResponse:
        """Build an error response for *request_id*."""
        return cls(id=request_id, error=JsonRpcError(code=int(code), message=message, data=data))

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready dict: ``id`` always, plus ``result`` xor ``error``."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result if self.result is not None else {}
        return payload

    def to_json(self) -> bytes:
        return json.dumps(self.to_wire()).encode("utf-8")


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class MCPToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolCallParams(BaseModel):
    """Parameters of a ``tools/call`` request."""

    model_config = ConfigDict(strict=True)

    name: str = ""
    arguments: dict[str, Any] = Field(default_factory=dict)


class ServerInfo(BaseModel):
    name: str
    version: str


class ServerCapabilities(BaseModel):
    tools: dict[str, Any] = Field(default_factory=dict)


class InitializeResult(BaseModel):
    """Result of the ``initialize`` handshake."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: ServerCapabilities = Field(default_factory=ServerCapabilities)
    server_info: ServerInfo = Field(alias="serverInfo")


# ---------------------------------------------------------------------------
# Tool results — content blocks
# ---------------------------------------------------------------------------


class Resource(BaseModel):
    """An embedded resource payload."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: str | None = Field(default=None, alias="mimeType")
    text: str | None = None


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str


class ResourceContent(BaseModel):
    """Resource content block."""

    type: Literal["resource"] = "resource"
    resource: Resource


Content = Annotated[TextContent | ResourceContent, Field(discriminator="type")]


class ToolResult(BaseModel):
    """The result of a ``tools/call``: an ordered list of content blocks."""

    content: list[Content] = []

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        """Create a ToolResult with a single text block."""
        return cls(content=[TextContent(text=text)])

    @classmethod
    def from_json(cls, data: Any, uri: str = "data://result") -> ToolResult:
        """Serialize *data* as indented JSON inside a single resource block."""
        body = json.dumps(data, indent=2)
        resource = Resource(uri=uri, mime_type="application/json", text=body)
        return cls(content=[ResourceContent(resource=resource)])

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
