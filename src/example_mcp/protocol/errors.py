"""Error taxonomy for the JSON-RPC protocol layer.

Each :class:`RpcError` carries the JSON-RPC code it is reported under, so the
dispatcher can frame any of them without a lookup table.
"""

from __future__ import annotations

from typing import Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class RpcError(Exception):
    """Base error for all failures reported back to the client."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)


class ParseError(RpcError):
    """The input line is not a valid JSON document."""

    code = PARSE_ERROR

    def __init__(self, message: str = "Parse error: Invalid JSON") -> None:
        super().__init__(message)


class InvalidRequestError(RpcError):
    """The JSON document is not a well-formed JSON-RPC 2.0 request."""

    code = INVALID_REQUEST


class MethodNotFoundError(RpcError):
    """The requested method is not one the server implements."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: Any) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class ToolImplementationNotFoundError(RpcError):
    """A tool is declared but has no executable implementation."""

    code = METHOD_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool implementation not found: {name}")


class InvalidParamsError(RpcError):
    """Method parameters are missing or malformed."""

    code = INVALID_PARAMS


class UnsupportedVersionError(InvalidParamsError):
    """The client asked for a protocol version the server does not speak."""

    def __init__(self, version: Any) -> None:
        self.version = version
        super().__init__(f"Unsupported protocol version: {version}")


class ToolExecutionError(RpcError):
    """A tool call failed during validation or inside its implementation."""

    code = INTERNAL_ERROR

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Tool execution error: {detail}")


class InternalError(RpcError):
    """Anything unanticipated that escaped the request handling paths."""

    code = INTERNAL_ERROR

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Internal error: {detail}")


# ---------------------------------------------------------------------------
# Tool-layer errors (raised by the validator, never framed directly)
# ---------------------------------------------------------------------------


class ToolError(Exception):
    """Base error for tool lookup and argument validation failures."""


class ToolNotFoundError(ToolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' not found")


class MissingParameterError(ToolError):
    """A field listed in the tool's ``required`` schema is absent."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing required parameter: {field}")


class InvalidArgumentsError(ToolError):
    """The supplied ``arguments`` value is not a mapping."""

    def __init__(self) -> None:
        super().__init__("Invalid arguments: expected an object")

