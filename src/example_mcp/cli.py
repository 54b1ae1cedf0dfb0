"""example-mcp CLI entrypoint."""

from __future__ import annotations

import click

from example_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="example-mcp")
def main() -> None:
    """example-mcp — a minimal MCP tool server over stdio."""


# Register subcommands
from example_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
