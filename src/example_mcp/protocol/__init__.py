"""Protocol layer — JSON-RPC framing, dispatch and the stdio transport."""

from example_mcp.protocol.dispatcher import MessageDispatcher
from example_mcp.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RpcError,
    ToolExecutionError,
    ToolImplementationNotFoundError,
    UnsupportedVersionError,
)
from example_mcp.protocol.models import PROTOCOL_VERSION, ServerInfo, ToolDescriptor
from example_mcp.protocol.transport import StdioServer

__all__ = [
    "PROTOCOL_VERSION",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "MessageDispatcher",
    "MethodNotFoundError",
    "ParseError",
    "RpcError",
    "ServerInfo",
    "StdioServer",
    "ToolDescriptor",
    "ToolExecutionError",
    "ToolImplementationNotFoundError",
    "UnsupportedVersionError",
]
