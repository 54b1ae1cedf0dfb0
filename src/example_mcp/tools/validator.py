"""Shallow tool-call validation: tool existence and required-field presence."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from example_mcp.protocol.errors import (
    InvalidArgumentsError,
    MissingParameterError,
    ToolNotFoundError,
)

if TYPE_CHECKING:
    from example_mcp.protocol.models import ToolDescriptor
    from example_mcp.tools.registry import ToolRegistry


def validate_tool_call(registry: ToolRegistry, name: str, arguments: Any) -> ToolDescriptor:
    """Return the descriptor for *name* if *arguments* carry every required field.

    Only the first missing field is reported.  Argument types, value ranges
    and ``additionalProperties`` are not checked.

    Raises:
        ToolNotFoundError: If no tool named *name* is registered.
        InvalidArgumentsError: If *arguments* is not a mapping.
        MissingParameterError: If a required field is absent.
    """
    descriptor = registry.find(name)
    if descriptor is None:
        raise ToolNotFoundError(name)

    if not isinstance(arguments, Mapping):
        raise InvalidArgumentsError()

    for field in descriptor.input_schema.required_fields:
        if field not in arguments:
            raise MissingParameterError(field)

    return descriptor
