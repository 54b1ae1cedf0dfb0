"""MCP models — JSON-RPC 2.0 messages, tool descriptors and handshake payloads.

Implements the message format used by the Model Context Protocol for the
``initialize`` handshake, tool discovery (``tools/list``) and execution
(``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

PROTOCOL_VERSION = "2024-11-05"
JSONRPC_VERSION = "2.0"

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request that passed envelope validation."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    id: Any = None
    params: dict[str, Any] = Field(default_factory=dict)


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    def to_wire(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message carrying either ``result`` or ``error``."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: JsonRpcError | None = None

    def to_wire(self) -> dict[str, Any]:
        """Return the envelope as a plain dict, with exactly one of result/error."""
        envelope: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            envelope["error"] = self.error.to_wire()
        else:
            envelope["result"] = self.result
        return envelope


# ---------------------------------------------------------------------------
# Tool descriptors
# ---------------------------------------------------------------------------


class PropertySchema(BaseModel):
    """Schema of a single tool argument."""

    type: str
    description: str = ""
    default: Any = None


class InputSchema(BaseModel):
    """Object schema describing a tool's arguments.

    Only ``required`` is enforced at call time; ``additionalProperties`` is
    advertised to clients but not checked.
    """

    model_config = {"populate_by_name": True}

    type: Literal["object"] = "object"
    properties: dict[str, PropertySchema] = Field(default_factory=dict)
    required: list[str] | None = None
    additional_properties: bool = Field(default=False, alias="additionalProperties")

    @property
    def required_fields(self) -> list[str]:
        return list(self.required or [])


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    description: str = ""
    input_schema: InputSchema = Field(default_factory=InputSchema, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ServerInfo(BaseModel):
    """Static identity reported during the handshake."""

    name: str = "example-mcp-server"
    version: str = "1.0.0"


class InitializeResult(BaseModel):
    """Result of a successful ``initialize`` handshake."""

    model_config = {"populate_by_name": True}

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    server_info: ServerInfo = Field(default_factory=ServerInfo, alias="serverInfo")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TextContent(BaseModel):
    """Plain text content part of a tool result."""

    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    """The result shape tool implementations return."""

    content: list[TextContent] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> CallToolResult:
        """Convenience constructor for a single text part."""
        return cls(content=[TextContent(text=text)])

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump()
