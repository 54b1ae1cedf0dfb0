"""Tests for ToolRegistry."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from example_mcp.protocol.models import ToolDescriptor
from example_mcp.tools import ToolRegistry


def _descriptor(name: str) -> ToolDescriptor:
    return ToolDescriptor(name=name, description=f"{name} tool")


class TestToolRegistry:
    def test_list_keeps_declaration_order(self) -> None:
        names = ["zeta", "alpha", "mid"]
        registry = ToolRegistry(
            [_descriptor(n) for n in names], {n: AsyncMock() for n in names}
        )
        assert [d.name for d in registry.list()] == names
        assert len(registry) == 3

    def test_find(self) -> None:
        registry = ToolRegistry([_descriptor("a")], {"a": AsyncMock()})
        found = registry.find("a")
        assert found is not None
        assert found.name == "a"

    def test_find_absent_returns_none(self) -> None:
        registry = ToolRegistry([_descriptor("a")], {"a": AsyncMock()})
        assert registry.find("b") is None
        assert "b" not in registry

    def test_find_non_string_returns_none(self) -> None:
        registry = ToolRegistry([_descriptor("a")], {"a": AsyncMock()})
        assert registry.find(["a"]) is None
        assert registry.get_implementation(42) is None

    def test_get_implementation(self) -> None:
        impl = AsyncMock()
        registry = ToolRegistry([_descriptor("a")], {"a": impl})
        assert registry.get_implementation("a") is impl
        assert registry.get_implementation("missing") is None

    def test_duplicate_names_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate tool name: a"):
            ToolRegistry([_descriptor("a"), _descriptor("a")], {"a": AsyncMock()})

    def test_descriptor_without_implementation_rejected(self) -> None:
        with pytest.raises(ValueError, match="missing implementations: \\['b'\\]"):
            ToolRegistry([_descriptor("a"), _descriptor("b")], {"a": AsyncMock()})

    def test_implementation_without_descriptor_rejected(self) -> None:
        with pytest.raises(ValueError, match="undeclared implementations: \\['x'\\]"):
            ToolRegistry([_descriptor("a")], {"a": AsyncMock(), "x": AsyncMock()})

    def test_is_read_only(self) -> None:
        impls = {"a": AsyncMock()}
        registry = ToolRegistry([_descriptor("a")], impls)
        impls["b"] = AsyncMock()
        assert registry.get_implementation("b") is None
        with pytest.raises(TypeError):
            registry._implementations["c"] = AsyncMock()  # type: ignore[index]
