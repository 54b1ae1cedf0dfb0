"""``example-mcp tools`` — inspect and invoke the registered tools."""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.markup import escape

from example_mcp.cli_commands._output import (
    console,
    print_tool_result,
    print_tools_json,
    print_tools_table,
)


@click.group()
def tools() -> None:
    """Inspect and invoke tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the raw tools/list payload.")
def list_tools(as_json: bool) -> None:
    """List every registered tool in declaration order."""
    from example_mcp.tools import build_default_registry

    registry = build_default_registry()
    if as_json:
        print_tools_json(registry.list())
        return
    print_tools_table(registry.list())


@tools.command("call")
@click.argument("name")
@click.option(
    "--args",
    "raw_arguments",
    default="{}",
    show_default=True,
    help="Tool arguments as a JSON object.",
)
def call(name: str, raw_arguments: str) -> None:
    """Invoke tool NAME once through the dispatcher and print its result."""
    from example_mcp.protocol.dispatcher import MessageDispatcher
    from example_mcp.tools import build_default_registry

    try:
        arguments = json.loads(raw_arguments)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--args") from exc

    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments},
    }
    dispatcher = MessageDispatcher(build_default_registry())
    line = asyncio.run(dispatcher.handle_line(json.dumps(request)))
    response = json.loads(line) if line else {}

    if "error" in response:
        error = response["error"]
        message = escape(str(error["message"]))
        console.print(
            f"[red]Error {error['code']}:[/red] {message}", highlight=False, soft_wrap=True
        )
        sys.exit(1)

    print_tool_result(response.get("result"))
