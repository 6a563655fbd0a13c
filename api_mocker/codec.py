from __future__ import annotations

import json
from typing import Any

import httpx
from pydantic import ValidationError

from api_mocker.errors import DecodeError
from api_mocker.models import ExpectedRequest, ResultSet


def encode_request(req: ExpectedRequest | None) -> bytes:
    """Compact JSON body for POST /mocks; a missing request encodes as null."""
    payload = req.to_wire() if req is not None else None
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def decode_response(response: httpx.Response) -> ResultSet:
    try:
        return ResultSet.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise DecodeError(str(exc)) from exc


def json_response(response: httpx.Response) -> str:
    """
    Response body re-indented with tabs for error messages.
    Bodies that are not JSON are returned as-is; bytes that are not UTF-8
    come out as backslash escapes rather than replacement characters.
    """
    raw = response.content.decode("utf-8", errors="backslashreplace")
    try:
        data = json.loads(raw)
    except ValueError:
        return raw
    return _indent(data)


def json_string(data: Any) -> str:
    if isinstance(data, list):
        data = [item.to_wire() if hasattr(item, "to_wire") else item for item in data]
    elif hasattr(data, "to_wire"):
        data = data.to_wire()
    return _indent(data)


def _indent(data: Any) -> str:
    return json.dumps(data, indent="\t", ensure_ascii=False)
