"""Tests for MCP JSON-RPC models."""

import json

import pytest
from pydantic import ValidationError

from cassini_mcp.protocol.models import (
    ErrorCode,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    MCPToolDef,
    ServerInfo,
    ToolResult,
)


class TestJsonRpcRequest:
    def test_defaults(self) -> None:
        req = JsonRpcRequest(method="tools/list")
        assert req.jsonrpc == "2.0"
        assert req.id is None
        assert req.params is None

    def test_id_keeps_its_type(self) -> None:
        assert JsonRpcRequest.model_validate({"method": "m", "id": 7}).id == 7
        assert JsonRpcRequest.model_validate({"method": "m", "id": "7"}).id == "7"
        assert isinstance(JsonRpcRequest.model_validate({"method": "m", "id": 7}).id, int)

    def test_wrong_method_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"method": 5})

    def test_boolean_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JsonRpcRequest.model_validate({"method": "m", "id": True})


class TestJsonRpcResponse:
    def test_success_wire_shape(self) -> None:
        wire = JsonRpcResponse.success(3, {"tools": []}).to_wire()
        assert wire == {"jsonrpc": "2.0", "id": 3, "result": {"tools": []}}

    def test_failure_wire_shape(self) -> None:
        wire = JsonRpcResponse.failure("a", ErrorCode.METHOD_NOT_FOUND, "nope").to_wire()
        assert wire == {
            "jsonrpc": "2.0",
            "id": "a",
            "error": {"code": -32601, "message": "nope"},
        }

    def test_failure_keeps_data(self) -> None:
        wire = JsonRpcResponse.failure(None, -32002, "boom", data={"tool": "x"}).to_wire()
        assert wire["error"]["data"] == {"tool": "x"}
        assert wire["id"] is None
        assert "result" not in wire

    def test_to_json_is_bytes(self) -> None:
        raw = JsonRpcResponse.success(1, {"ok": True}).to_json()
        assert json.loads(raw)["result"] == {"ok": True}


class TestErrorCode:
    def test_values(self) -> None:
        assert ErrorCode.PARSE_ERROR == -32700
        assert ErrorCode.INVALID_REQUEST == -32600
        assert ErrorCode.METHOD_NOT_FOUND == -32601
        assert ErrorCode.INVALID_PARAMS == -32602
        assert ErrorCode.INTERNAL_ERROR == -32603
        assert ErrorCode.SERVER_ERROR == -32000
        assert ErrorCode.TOOL_NOT_FOUND == -32001
        assert ErrorCode.TOOL_EXECUTION_ERROR == -32002


class TestMCPToolDef:
    def test_alias_on_the_wire(self) -> None:
        tool = MCPToolDef(name="t", description="d", input_schema={"type": "object"})
        assert tool.to_wire() == {"name": "t", "description": "d", "inputSchema": {"type": "object"}}

    def test_populate_by_alias(self) -> None:
        tool = MCPToolDef.model_validate({"name": "t", "inputSchema": {"type": "object"}})
        assert tool.input_schema == {"type": "object"}


class TestInitializeResult:
    def test_wire_shape(self) -> None:
        result = InitializeResult(server_info=ServerInfo(name="s", version="1"))
        assert result.model_dump(by_alias=True) == {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "s", "version": "1"},
        }


class TestToolResult:
    def test_from_text(self) -> None:
        assert ToolResult.from_text("hello").to_wire() == {
            "content": [{"type": "text", "text": "hello"}]
        }

    def test_from_json_default_uri(self) -> None:
        wire = ToolResult.from_json({"a": 1}).to_wire()
        resource = wire["content"][0]["resource"]
        assert wire["content"][0]["type"] == "resource"
        assert resource["uri"] == "data://result"
        assert resource["mimeType"] == "application/json"
        assert json.loads(resource["text"]) == {"a": 1}

    def test_from_json_is_indented(self) -> None:
        text = ToolResult.from_json({"a": 1}, uri="x://y").content[0].resource.text  # type: ignore[union-attr]
        assert text == '{\n  "a": 1\n}'

    def test_content_discriminator(self) -> None:
        result = ToolResult.model_validate(
            {"content": [{"type": "resource", "resource": {"uri": "u", "text": "t"}}]}
        )
        assert result.content[0].type == "resource"
