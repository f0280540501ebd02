"""
Response shaping for tool results.

Tool payloads go through three steps to keep them small for the model:

1. Field selection (`pick_fields`) with dot-notation for nested paths.
2. Null stripping (`strip_empty`): null values and objects left empty are
   dropped; lists keep their length.
3. Compact JSON serialization.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from mcp.types import CallToolResult, TextContent


class _Absent:
    """Marker for a value removed by `strip_empty`."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def pick_fields(data: Any, fields: Sequence[str]) -> Any:
    """
    Keep only `fields` from a dict (or from every dict in a list).

    Dot-notation selects nested properties; several paths under the same
    parent are merged into one object:

        pick_fields(invoice, ["uuid", "sender.business_name", "sender.business_vat_number_code"])
        # {"uuid": ..., "sender": {"business_name": ..., "business_vat_number_code": ...}}

    Missing properties are skipped. Scalars and None are returned unchanged.
    """
    if data is None:
        return data

    if isinstance(data, list):
        return [pick_fields(item, fields) for item in data]

    if not isinstance(data, dict):
        return data

    # top-level key -> nested paths under it, or None to keep the whole value
    selected: Dict[str, Optional[List[str]]] = {}
    for field in fields:
        top, dot, rest = field.partition(".")
        if top not in data:
            continue
        if not dot:
            selected[top] = None
        elif top not in selected:
            selected[top] = [rest]
        elif selected[top] is not None:
            selected[top].append(rest)

    return {
        key: data[key] if rests is None else pick_fields(data[key], rests)
        for key, rests in selected.items()
    }


def strip_empty(data: Any) -> Any:
    """
    Recursively drop None values and dicts that end up empty.

    Returns ABSENT when nothing is left. Lists are never shortened: an element
    that strips away is kept as None and serializes as JSON null.
    """
    if data is None:
        return ABSENT

    if isinstance(data, list):
        stripped = (strip_empty(item) for item in data)
        return [None if item is ABSENT else item for item in stripped]

    if isinstance(data, dict):
        result: Dict[str, Any] = {}
        for key, value in data.items():
            stripped = strip_empty(value)
            if stripped is not ABSENT:
                result[key] = stripped
        return result if result else ABSENT

    return data


def compact_json(data: Any) -> str:
    return json.dumps(
        data, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )


def text_response(text: str) -> CallToolResult:
    """Wrap already-rendered text (XML, HTML, base64) as a tool result."""
    return CallToolResult(content=[TextContent(type="text", text=text)])


def format_response(
    data: Any, fields: Optional[List[str]] = None
) -> CallToolResult:
    """
    Render `data` as a compact JSON tool result.

    Fields are picked before stripping so that parents emptied by the
    selection are removed too. An entirely empty payload renders as `null`.
    """
    processed = data
    if fields:
        processed = pick_fields(processed, fields)
    processed = strip_empty(processed)
    if processed is ABSENT:
        processed = None
    return text_response(compact_json(processed))


def error_response(error: Any) -> CallToolResult:
    if isinstance(error, BaseException):
        message = str(error) or type(error).__name__
    else:
        message = str(error)
    return CallToolResult(
        content=[TextContent(type="text", text=message)],
        isError=True,
    )


__all__ = [
    "ABSENT",
    "pick_fields",
    "strip_empty",
    "compact_json",
    "text_response",
    "format_response",
    "error_response",
]
