"""Tests for JSON-RPC response framing."""

from __future__ import annotations

import json

import pytest

from example_mcp.protocol import framer
from example_mcp.protocol.models import CallToolResult


class TestSuccess:
    def test_single_newline_terminated_line(self) -> None:
        line = framer.success(1, {"ok": True})
        assert line.endswith("\n")
        assert "\n" not in line[:-1]
        assert json.loads(line) == {"jsonrpc": "2.0", "id": 1, "result": {"ok": True}}

    def test_compact_separators(self) -> None:
        assert framer.success("a", {"k": [1, 2]}) == '{"jsonrpc":"2.0","id":"a","result":{"k":[1,2]}}\n'

    def test_null_id_is_kept(self) -> None:
        assert json.loads(framer.success(None, {}))["id"] is None

    def test_non_ascii_is_escaped(self) -> None:
        line = framer.success(1, {"text": "héllo"})
        assert line.isascii()
        assert json.loads(line)["result"]["text"] == "héllo"

    def test_lone_surrogate_is_escaped(self) -> None:
        line = framer.success("\ud800", {"text": "\ud800"})
        assert "\\ud800" in line
        line.encode("utf-8")

    def test_embedded_newlines_are_escaped(self) -> None:
        line = framer.success(1, {"text": "a\nb"})
        assert line.count("\n") == 1

    def test_pydantic_models_are_dumped(self) -> None:
        line = framer.success(1, CallToolResult.from_text("hi"))
        assert json.loads(line)["result"] == {"content": [{"type": "text", "text": "hi"}]}

    def test_nan_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            framer.success(1, {"x": float("nan")})

    def test_unserializable_is_rejected(self) -> None:
        with pytest.raises(TypeError, match="not JSON serializable"):
            framer.success(1, {"x": object()})


class TestError:
    def test_without_data(self) -> None:
        payload = json.loads(framer.error(3, -32601, "Method not found: x"))
        assert payload == {
            "jsonrpc": "2.0",
            "id": 3,
            "error": {"code": -32601, "message": "Method not found: x"},
        }

    def test_with_data(self) -> None:
        payload = json.loads(framer.error(None, -32603, "boom", {"detail": 1}))
        assert payload["error"]["data"] == {"detail": 1}
        assert payload["id"] is None

    def test_has_no_result_key(self) -> None:
        assert "result" not in json.loads(framer.error(1, -32700, "Parse error"))
