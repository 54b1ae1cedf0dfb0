"""``example-mcp serve`` — run the server on stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

from example_mcp.cli_commands._output import err_console
from example_mcp.config import ConfigError, ConfigLoader, LoggingSettings

logger = logging.getLogger(__name__)

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(settings: LoggingSettings) -> None:
    """Route all log records to stderr at the configured level."""
    logging.basicConfig(
        level=settings.level,
        format=settings.format,
        stream=sys.stderr,
        force=True,
    )


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="EXAMPLE_MCP_CONFIG",
    default=None,
    help="YAML configuration file.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LEVELS, case_sensitive=False),
    envvar="EXAMPLE_MCP_LOG_LEVEL",
    default=None,
    help="Override the configured log level.",
)
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(config_path: Path | None, log_level: str | None, telemetry: bool) -> None:
    """Serve JSON-RPC requests, one JSON document per line, over stdio."""
    from example_mcp.protocol.dispatcher import MessageDispatcher
    from example_mcp.protocol.transport import StdioServer
    from example_mcp.tools import build_default_registry

    try:
        config = ConfigLoader(config_path).load()
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if log_level:
        config.logging.level = log_level.upper()  # type: ignore[assignment]
    if telemetry:
        config.telemetry.enabled = True

    configure_logging(config.logging)

    if config.telemetry.enabled:
        from example_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                service_name=config.server.name,
                export_to_console=config.telemetry.export_to_console,
                otlp_endpoint=config.telemetry.otlp_endpoint,
            )
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    dispatcher = MessageDispatcher(build_default_registry(), server_info=config.server)
    server = StdioServer(
        dispatcher,
        max_line_bytes=config.transport.max_line_bytes,
        shutdown_grace=config.transport.shutdown_grace_seconds,
    )

    try:
        asyncio.run(server.serve(install_signal_handlers=True))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Server terminated by an unhandled error")
        sys.exit(1)
