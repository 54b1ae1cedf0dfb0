"""ToolRegistry — the static table of tool descriptors and implementations."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, Union

from example_mcp.protocol.models import ToolDescriptor

ToolImplementation = Callable[[dict[str, Any]], Union[Awaitable[Any], Any]]


class ToolRegistry:
    """Immutable name-keyed table pairing each descriptor with its implementation.

    Built once at startup and only read afterwards.  Lookups signal absence by
    returning ``None`` rather than raising.

    Usage::

        registry = ToolRegistry(descriptors, {"echo": echo, ...})

        registry.list()                    # declaration order
        registry.find("echo")              # ToolDescriptor | None
        registry.get_implementation("echo")
    """

    def __init__(
        self,
        descriptors: Iterable[ToolDescriptor],
        implementations: Mapping[str, ToolImplementation],
    ) -> None:
        ordered = tuple(descriptors)
        by_name: dict[str, ToolDescriptor] = {}
        for descriptor in ordered:
            if descriptor.name in by_name:
                msg = f"Duplicate tool name: {descriptor.name}"
                raise ValueError(msg)
            by_name[descriptor.name] = descriptor

        missing = [name for name in by_name if name not in implementations]
        orphans = [name for name in implementations if name not in by_name]
        if missing or orphans:
            msg = (
                "Tool descriptors and implementations must match one-to-one "
                f"(missing implementations: {missing}, undeclared implementations: {orphans})"
            )
            raise ValueError(msg)

        self._descriptors = ordered
        self._by_name = MappingProxyType(by_name)
        self._implementations = MappingProxyType(dict(implementations))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return self.find(name) is not None

    def list(self) -> tuple[ToolDescriptor, ...]:
        """Return every descriptor in declaration order."""
        return self._descriptors

    def find(self, name: object) -> ToolDescriptor | None:
        if not isinstance(name, str):
            return None
        return self._by_name.get(name)

    def get_implementation(self, name: object) -> ToolImplementation | None:
        if not isinstance(name, str):
            return None
        return self._implementations.get(name)
