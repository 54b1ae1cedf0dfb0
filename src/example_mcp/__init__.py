"""Example MCP server — a minimal tool server speaking JSON-RPC over stdio."""

from __future__ import annotations

__version__ = "1.0.0"
