"""Shared fixtures for the example MCP server tests."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from example_mcp.protocol.dispatcher import MessageDispatcher
from example_mcp.tools import ToolRegistry, build_default_registry

SendLine = Callable[[Any], Awaitable[dict[str, Any]]]
Rpc = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def registry() -> ToolRegistry:
    return build_default_registry()


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> MessageDispatcher:
    return MessageDispatcher(registry)


@pytest.fixture
def send_line(dispatcher: MessageDispatcher) -> SendLine:
    """Dispatch a raw line and decode the single response it must produce."""

    async def _send(line: str | bytes) -> dict[str, Any]:
        response = await dispatcher.handle_line(line)
        assert response is not None
        assert response.endswith("\n")
        assert response.count("\n") == 1
        return json.loads(response)  # type: ignore[no-any-return]

    return _send


@pytest.fixture
def rpc(send_line: SendLine) -> Rpc:
    """Send a well-formed request for *method* and return the decoded response."""

    async def _rpc(method: str, params: Any = None, request_id: Any = 1) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": "2.0", "id": request_id, "method": method}
        if params is not None:
            payload["params"] = params
        return await send_line(json.dumps(payload))

    return _rpc
