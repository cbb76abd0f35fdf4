"""Response formatting: JSON or TOON notation.

JSON is the canonical structured output (orjson, two-space indent, member
order as inserted). TOON is a compact indentation-based notation that reads
well in an agent transcript:

    key: PROJ-1
    labels: [backend, urgent]
    description: |
      first line
      second line
    subtasks:
      - key: PROJ-2
        status: Open

Null object members are omitted; null list items render as ``null``.
Formatting is a pure function of the value and the selected format.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import orjson
from pydantic import BaseModel

INDENT = "  "
NULL = "null"


class ResponseFormat(StrEnum):
    JSON = "json"
    TOON = "toon"


def to_plain(value: Any) -> Any:
    """Models -> dicts (camelCase, absent members dropped); containers copied."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def format_response(value: Any, fmt: ResponseFormat = ResponseFormat.JSON) -> str:
    """Render a shaped value in the selected format."""
    if fmt is ResponseFormat.TOON:
        return to_toon(value)
    return to_json(value)


def to_json(value: Any) -> str:
    return orjson.dumps(to_plain(value), option=orjson.OPT_INDENT_2).decode()


# ─────────────────────────────────────────────────────────────────────────────
# TOON notation
# ─────────────────────────────────────────────────────────────────────────────


def to_toon(value: Any) -> str:
    plain = to_plain(value)
    if isinstance(plain, (dict, list)):
        return "\n".join(_block(plain, 0)) if plain else _empty(plain)
    if _is_multiline(plain):
        return plain
    return _scalar(plain)


def _scalar(v: Any) -> str:
    if v is None:
        return NULL
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


def _is_multiline(v: Any) -> bool:
    return isinstance(v, str) and "\n" in v


def _is_inline(v: Any) -> bool:
    return not isinstance(v, (dict, list)) and not _is_multiline(v)


def _empty(v: dict | list) -> str:
    return "{}" if isinstance(v, dict) else "[]"


def _inline_list(items: list) -> str:
    return "[" + ", ".join(_scalar(i) for i in items) + "]"


def _text_block(text: str, depth: int) -> list[str]:
    pad = INDENT * depth
    return [f"{pad}{line}" for line in text.split("\n")]


def _block(value: dict | list, depth: int) -> list[str]:
    return _object(value, depth) if isinstance(value, dict) else _list(value, depth)


def _object(obj: dict, depth: int) -> list[str]:
    pad = INDENT * depth
    lines: list[str] = []
    for key, v in obj.items():
        if v is None:
            continue
        lines.extend(_member(f"{pad}{key}:", v, depth))
    return lines


def _member(head: str, v: Any, depth: int) -> list[str]:
    """``head`` followed by v, either on the same line or as a nested block."""
    if _is_multiline(v):
        return [f"{head} |", *_text_block(v, depth + 1)]
    if _is_inline(v):
        return [f"{head} {_scalar(v)}"]
    if not v:
        return [f"{head} {_empty(v)}"]
    if isinstance(v, list) and all(_is_inline(i) for i in v):
        return [f"{head} {_inline_list(v)}"]
    return [head, *_block(v, depth + 1)]


def _list(items: list, depth: int) -> list[str]:
    if all(_is_inline(i) for i in items):
        return [f"{INDENT * depth}{_inline_list(items)}"]
    pad = INDENT * depth
    lines: list[str] = []
    for item in items:
        if isinstance(item, (dict, list)) and item and not (
            isinstance(item, list) and all(_is_inline(i) for i in item)
        ):
            # First line of the nested block shares the dash line
            nested = _block(item, depth + 1)
            if not nested:
                lines.append(f"{pad}- {{}}")
                continue
            lines.append(f"{pad}- {nested[0].lstrip()}")
            lines.extend(nested[1:])
        else:
            lines.extend(_member(f"{pad}-", item, depth))
    return lines
