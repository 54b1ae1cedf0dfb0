"""Tool layer — registry, validation and the built-in tool bodies."""

from example_mcp.tools.builtin import build_default_registry
from example_mcp.tools.registry import ToolImplementation, ToolRegistry
from example_mcp.tools.validator import validate_tool_call

__all__ = [
    "ToolImplementation",
    "ToolRegistry",
    "build_default_registry",
    "validate_tool_call",
]
