"""Response framing — JSON-RPC envelopes as newline-terminated wire lines."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from example_mcp.protocol.models import JsonRpcError, JsonRpcResponse


def _encode_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(payload: dict[str, Any]) -> str:
    """Serialize *payload* as one compact JSON line.

    Non-ASCII text is written as ``\\uXXXX`` escapes, so the line is plain
    ASCII and encodes under any output encoding, lone surrogates included.

    Raises:
        TypeError: If the payload holds a value JSON cannot represent.
        ValueError: If the payload holds ``NaN`` or an infinity.
    """
    text = json.dumps(
        payload,
        separators=(",", ":"),
        allow_nan=False,
        default=_encode_default,
    )
    return text + "\n"


def success(request_id: Any, result: Any) -> str:
    """Frame a success envelope for *request_id*."""
    return encode(JsonRpcResponse(id=request_id, result=result).to_wire())


def error(request_id: Any, code: int, message: str, data: Any = None) -> str:
    """Frame an error envelope; ``data`` is left out entirely when ``None``."""
    err = JsonRpcError(code=code, message=message, data=data)
    return encode(JsonRpcResponse(id=request_id, error=err).to_wire())
