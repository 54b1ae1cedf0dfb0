"""Tests for ``example-mcp tools`` CLI commands."""

from __future__ import annotations

import json

from click.testing import CliRunner

from example_mcp.cli import main


class TestToolsList:
    def test_table(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list"])
        assert result.exit_code == 0
        for name in ("get_time", "echo", "add_numbers"):
            assert name in result.output

    def test_json(self) -> None:
        result = CliRunner().invoke(main, ["tools", "list", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [tool["name"] for tool in payload["tools"]] == ["get_time", "echo", "add_numbers"]


class TestToolsCall:
    def test_echo(self) -> None:
        result = CliRunner().invoke(
            main, ["tools", "call", "echo", "--args", '{"message": "hi", "prefix": "> "}']
        )
        assert result.exit_code == 0
        assert "> hi" in result.output

    def test_add_numbers(self) -> None:
        result = CliRunner().invoke(
            main, ["tools", "call", "add_numbers", "--args", '{"a": 2, "b": 3}']
        )
        assert result.exit_code == 0
        assert "2 + 3 = 5" in result.output

    def test_missing_argument_exits_nonzero(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "echo"])
        assert result.exit_code == 1
        assert "-32603" in result.output
        assert "Missing required parameter: message" in result.output

    def test_unknown_tool(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "nonexistent_tool"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_json_arguments(self) -> None:
        result = CliRunner().invoke(main, ["tools", "call", "echo", "--args", "{oops"])
        assert result.exit_code == 2
        assert "not valid JSON" in result.output
