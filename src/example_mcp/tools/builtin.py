"""Built-in tools: ``get_time``, ``echo`` and ``add_numbers``."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from example_mcp.protocol.models import CallToolResult, InputSchema, PropertySchema, ToolDescriptor
from example_mcp.tools.registry import ToolRegistry

DEFAULT_ECHO_PREFIX = "Echo: "

GET_TIME = ToolDescriptor(
    name="get_time",
    description="Returns the current server time in ISO format",
    input_schema=InputSchema(properties={}, additional_properties=False),
)

ECHO = ToolDescriptor(
    name="echo",
    description="Echoes back a message with optional prefix",
    input_schema=InputSchema(
        properties={
            "message": PropertySchema(type="string", description="The message to echo back"),
            "prefix": PropertySchema(
                type="string",
                description="Optional prefix to add to the message",
                default=DEFAULT_ECHO_PREFIX,
            ),
        },
        required=["message"],
        additional_properties=False,
    ),
)

ADD_NUMBERS = ToolDescriptor(
    name="add_numbers",
    description="Adds two numbers together",
    input_schema=InputSchema(
        properties={
            "a": PropertySchema(type="number", description="First number"),
            "b": PropertySchema(type="number", description="Second number"),
        },
        required=["a", "b"],
        additional_properties=False,
    ),
)


async def get_time(arguments: dict[str, Any]) -> dict[str, Any]:
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return CallToolResult.from_text(f"Current time: {now.replace('+00:00', 'Z')}").to_wire()


async def echo(arguments: dict[str, Any]) -> dict[str, Any]:
    message = _to_text(arguments["message"])
    prefix = _to_text(arguments.get("prefix", DEFAULT_ECHO_PREFIX))
    return CallToolResult.from_text(f"{prefix}{message}").to_wire()


async def add_numbers(arguments: dict[str, Any]) -> dict[str, Any]:
    """Sum two numbers.

    Booleans and null count as numbers (``true`` is 1, ``null`` is 0).  If
    either operand is a string, array or object the two are joined as text.
    """
    a, b = arguments["a"], arguments["b"]
    if _is_numeric(a) and _is_numeric(b):
        total = _to_text(_as_number(a) + _as_number(b))
    else:
        total = _to_text(a) + _to_text(b)
    return CallToolResult.from_text(f"{_to_text(a)} + {_to_text(b)} = {total}").to_wire()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_numeric(value: Any) -> bool:
    return value is None or isinstance(value, (int, float))


def _as_number(value: Any) -> int | float:
    if value is None:
        return 0
    return int(value) if isinstance(value, bool) else value


def _to_text(value: Any) -> str:
    """Render an argument the way it reads in JSON; strings stay unquoted."""
    if isinstance(value, str):
        return value
    # JSON has a single number type: 2.0 and 2 both read back as "2".
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if _is_number(value):
        return str(value)
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def build_default_registry() -> ToolRegistry:
    """Return the registry of built-in tools in declaration order."""
    return ToolRegistry(
        [GET_TIME, ECHO, ADD_NUMBERS],
        {
            GET_TIME.name: get_time,
            ECHO.name: echo,
            ADD_NUMBERS.name: add_numbers,
        },
    )
