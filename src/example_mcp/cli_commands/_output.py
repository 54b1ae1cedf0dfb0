"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from example_mcp.protocol.models import ToolDescriptor

console = Console()
# stdout carries protocol traffic while serving; diagnostics go here.
err_console = Console(stderr=True)


def print_tools_table(tools: tuple[ToolDescriptor, ...] | list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = ", ".join(tool.input_schema.required_fields) or "-"
        table.add_row(tool.name, _truncate(tool.description), required)

    console.print(table)


def print_tools_json(tools: tuple[ToolDescriptor, ...] | list[ToolDescriptor]) -> None:
    """Print tool descriptors exactly as ``tools/list`` would return them."""
    console.print_json(json.dumps({"tools": [tool.to_wire() for tool in tools]}))


def print_tool_result(result: Any) -> None:
    """Print the text parts of a tool result, or the raw result otherwise."""
    content = result.get("content") if isinstance(result, dict) else None
    if not isinstance(content, list):
        console.print_json(json.dumps(result, default=str))
        return

    for item in content:
        if isinstance(item, dict) and item.get("type") == "text":
            text = str(item.get("text", ""))
            console.print(text, markup=False, highlight=False, soft_wrap=True)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
