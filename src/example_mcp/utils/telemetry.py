"""OpenTelemetry tracing helpers for the example MCP server.

Provides a thin wrapper around the OpenTelemetry API so the dispatcher can
call ``get_tracer()`` without caring whether the SDK is installed.  When the
SDK is *not* configured the API returns no-op implementations.

Usage::

    from example_mcp.utils.telemetry import SPAN_DISPATCH, get_tracer, record_request

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span(SPAN_DISPATCH) as span:
        record_request(span, "tools/list", 1)

To activate real tracing, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install example-mcp-server[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_RPC_METHOD = "mcp.rpc.method"
ATTR_RPC_REQUEST_ID = "mcp.rpc.request_id"
ATTR_RPC_ERROR_CODE = "mcp.rpc.error_code"
ATTR_TOOL_NAME = "mcp.tool.name"
ATTR_PROTOCOL_VERSION = "mcp.protocol_version"

_INSTRUMENTATION_NAME = "example_mcp"

SPAN_DISPATCH = "jsonrpc.dispatch"
SPAN_TOOL_CALL = "mcp.tool.call"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*.

    If the OpenTelemetry SDK has not been configured the returned tracer
    is a no-op.
    """
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def record_request(span: trace.Span, method: str, request_id: Any) -> None:
    """Tag a dispatch span with the routed method and, when present, the request id."""
    span.set_attribute(ATTR_RPC_METHOD, method)
    if request_id is not None:
        span.set_attribute(ATTR_RPC_REQUEST_ID, str(request_id))


def record_error(
    span: trace.Span,
    code: int,
    message: str,
    *,
    protocol_version: Any = None,
) -> None:
    """Mark a dispatch span as failed with the JSON-RPC error it answered with.

    *protocol_version* is recorded for rejected handshakes so the offending
    client version shows up next to the error code.
    """
    span.set_attribute(ATTR_RPC_ERROR_CODE, code)
    if protocol_version is not None:
        span.set_attribute(ATTR_PROTOCOL_VERSION, str(protocol_version))
    span.set_status(trace.Status(trace.StatusCode.ERROR, message))


def configure_telemetry(
    *,
    service_name: str = "example-mcp-server",
    export_to_console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Configure OpenTelemetry tracing (requires ``example-mcp-server[otel]``).

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, export spans as JSON to stderr.  Stdout is reserved for
        protocol traffic.
    otlp_endpoint:
        If set, export spans via OTLP/gRPC to this endpoint.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install example-mcp-server[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    """Attach the console exporter, writing to stderr."""
    import sys

    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    provider.add_span_processor(processor_cls(ConsoleSpanExporter(out=sys.stderr)))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    """Attach the OTLP gRPC exporter."""
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install example-mcp-server[otel]"
        )
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
