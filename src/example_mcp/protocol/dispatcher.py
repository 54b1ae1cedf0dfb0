"""MessageDispatcher — turns one input line into at most one framed response.

Each line moves through parse, envelope validation and method routing.  Every
failure along the way becomes a JSON-RPC error envelope, so no per-request
failure ever escapes :meth:`MessageDispatcher.handle_line`.
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from example_mcp.protocol import framer
from example_mcp.protocol.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RpcError,
    ToolError,
    ToolExecutionError,
    ToolImplementationNotFoundError,
    UnsupportedVersionError,
)
from example_mcp.protocol.models import (
    JSONRPC_VERSION,
    PROTOCOL_VERSION,
    InitializeResult,
    JsonRpcRequest,
    ServerInfo,
)
from example_mcp.tools.validator import validate_tool_call
from example_mcp.utils.telemetry import (
    ATTR_TOOL_NAME,
    SPAN_DISPATCH,
    SPAN_TOOL_CALL,
    get_tracer,
    record_error,
    record_request,
)

if TYPE_CHECKING:
    from opentelemetry.trace import Span

    from example_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

NOTIFICATION_METHODS = frozenset({"initialized", "notifications/initialized"})

Handler = Callable[[JsonRpcRequest], Awaitable[Any]]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


class MessageDispatcher:
    """Routes JSON-RPC requests to the handshake, listing and tool-call paths.

    Holds no per-request state: the registry is read-only and ``initialize``
    is answered the same way every time it is received.

    Usage::

        dispatcher = MessageDispatcher(build_default_registry())
        line = await dispatcher.handle_line('{"jsonrpc":"2.0","id":1,"method":"tools/list"}')
        # line is a newline-terminated JSON document, or None for notifications
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_info: ServerInfo | None = None,
    ) -> None:
        self._registry = registry
        self._server_info = server_info or ServerInfo()
        self._handlers: dict[str, Handler] = {
            "initialize": self._handle_initialize,
            "tools/list": self._handle_tools_list,
            "tools/call": self._handle_tools_call,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def server_info(self) -> ServerInfo:
        return self._server_info

    async def handle_line(self, line: str | bytes) -> str | None:
        """Handle one input line and return the wire line to emit, if any."""
        logger.debug("Received: %r", line)
        with _tracer.start_as_current_span(SPAN_DISPATCH) as span:
            try:
                payload = self._parse(line)
            except ParseError as exc:
                return self._frame_error(None, exc, span)

            request_id = payload.get("id") if isinstance(payload, dict) else None
            try:
                request = self._validate_envelope(payload)
                record_request(span, request.method, request.id)

                if request.method in NOTIFICATION_METHODS:
                    logger.info("Client signalled %s", request.method)
                    return None

                handler = self._handlers.get(request.method)
                if handler is None:
                    raise MethodNotFoundError(request.method)
                result = await handler(request)
                response = framer.success(request.id, result)
            except RpcError as exc:
                return self._frame_error(request_id, exc, span)
            except Exception as exc:
                logger.exception("Unhandled error while handling request id=%r", request_id)
                return self._frame_error(request_id, InternalError(str(exc)), span)

        logger.debug("Sending: %s", response.rstrip("\n"))
        return response

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(line: str | bytes) -> Any:
        if isinstance(line, (bytes, bytearray)):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ParseError() from exc
        try:
            return json.loads(line.strip(), parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise ParseError() from exc

    @staticmethod
    def _validate_envelope(payload: Any) -> JsonRpcRequest:
        if not isinstance(payload, dict) or payload.get("jsonrpc") != JSONRPC_VERSION:
            raise InvalidRequestError("Invalid Request: Missing or invalid jsonrpc version")

        method = payload.get("method")
        if not method or not isinstance(method, str):
            raise InvalidRequestError("Invalid Request: Missing method")

        params = payload.get("params")
        if params is None:
            params = {}
        elif not isinstance(params, dict):
            raise InvalidParamsError("Invalid params: params must be an object")

        return JsonRpcRequest(
            method=method,
            id=payload.get("id"),
            params=params,
        )

    # ------------------------------------------------------------------
    # Method handlers
    # ------------------------------------------------------------------

    async def _handle_initialize(self, request: JsonRpcRequest) -> dict[str, Any]:
        version = request.params.get("protocolVersion")
        client_info = request.params.get("clientInfo")

        if version != PROTOCOL_VERSION:
            raise UnsupportedVersionError(version)

        logger.info("Handshake completed (protocol %s, client %s)", version, client_info)
        return InitializeResult(server_info=self._server_info).to_wire()

    async def _handle_tools_list(self, request: JsonRpcRequest) -> dict[str, Any]:
        return {"tools": [descriptor.to_wire() for descriptor in self._registry.list()]}

    async def _handle_tools_call(self, request: JsonRpcRequest) -> Any:
        name = request.params.get("name")
        arguments = request.params.get("arguments")
        if arguments is None:
            arguments = {}

        if not name:
            raise InvalidParamsError("Invalid params: Missing tool name")

        try:
            validate_tool_call(self._registry, name, arguments)
        except ToolError as exc:
            raise ToolExecutionError(str(exc)) from exc

        implementation = self._registry.get_implementation(name)
        if implementation is None:
            raise ToolImplementationNotFoundError(name)

        with _tracer.start_as_current_span(SPAN_TOOL_CALL) as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                result = implementation(arguments)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                logger.exception("Tool %s failed", name)
                raise ToolExecutionError(str(exc)) from exc

        return result

    # ------------------------------------------------------------------
    # Framing
    # ------------------------------------------------------------------

    @staticmethod
    def _frame_error(request_id: Any, exc: RpcError, span: Span) -> str:
        version = exc.version if isinstance(exc, UnsupportedVersionError) else None
        record_error(span, exc.code, exc.message, protocol_version=version)
        logger.warning("Returning error %d for id=%r: %s", exc.code, request_id, exc.message)
        return framer.error(request_id, exc.code, exc.message, exc.data)
