"""Tests for the wire models."""

from __future__ import annotations

from example_mcp.protocol.models import (
    PROTOCOL_VERSION,
    CallToolResult,
    InitializeResult,
    InputSchema,
    JsonRpcError,
    JsonRpcResponse,
    PropertySchema,
    ServerInfo,
    ToolDescriptor,
)


class TestToolDescriptor:
    def test_wire_uses_aliases(self) -> None:
        descriptor = ToolDescriptor(
            name="t",
            description="d",
            input_schema=InputSchema(
                properties={"x": PropertySchema(type="string", description="X")},
                required=["x"],
            ),
        )
        assert descriptor.to_wire() == {
            "name": "t",
            "description": "d",
            "inputSchema": {
                "type": "object",
                "properties": {"x": {"type": "string", "description": "X"}},
                "required": ["x"],
                "additionalProperties": False,
            },
        }

    def test_validates_from_wire_shape(self) -> None:
        descriptor = ToolDescriptor.model_validate(
            {
                "name": "t",
                "inputSchema": {"type": "object", "additionalProperties": True},
            }
        )
        assert descriptor.input_schema.additional_properties is True
        assert descriptor.input_schema.required_fields == []

    def test_property_default_is_emitted(self) -> None:
        schema = InputSchema(properties={"p": PropertySchema(type="string", default="> ")})
        descriptor = ToolDescriptor(name="t", input_schema=schema)
        assert descriptor.to_wire()["inputSchema"]["properties"]["p"]["default"] == "> "


class TestJsonRpcResponse:
    def test_result_envelope(self) -> None:
        assert JsonRpcResponse(id=1, result={"a": 1}).to_wire() == {
            "jsonrpc": "2.0",
            "id": 1,
            "result": {"a": 1},
        }

    def test_null_result_still_emitted(self) -> None:
        assert JsonRpcResponse(id=1).to_wire() == {"jsonrpc": "2.0", "id": 1, "result": None}

    def test_error_envelope_omits_missing_data(self) -> None:
        err = JsonRpcError(code=-32600, message="bad")
        assert JsonRpcResponse(id=None, error=err).to_wire() == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32600, "message": "bad"},
        }


class TestInitializeResult:
    def test_defaults(self) -> None:
        assert InitializeResult().to_wire() == {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "example-mcp-server", "version": "1.0.0"},
        }

    def test_custom_identity(self) -> None:
        result = InitializeResult(server_info=ServerInfo(name="n", version="2"))
        assert result.to_wire()["serverInfo"] == {"name": "n", "version": "2"}


class TestCallToolResult:
    def test_from_text(self) -> None:
        assert CallToolResult.from_text("hi").to_wire() == {
            "content": [{"type": "text", "text": "hi"}]
        }
