"""Helpers shared by every observation tool.

Tool arguments arrive as loosely-typed JSON values.  The coercion helpers
here read them leniently: strings are accepted for integers, any scalar for
strings, and an integer that does not parse falls back to its default rather
than failing the call.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from cassini_mcp.data.models import Observation
from cassini_mcp.protocol.errors import MissingParameterError

T = TypeVar("T")

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000
DEFAULT_OFFSET = 0

LIMIT_SCHEMA: dict[str, Any] = {
    "type": "integer",
    "description": f"Maximum number of results to return (default: {DEFAULT_LIMIT}, max: {MAX_LIMIT})",
    "minimum": 1,
    "maximum": MAX_LIMIT,
}
OFFSET_SCHEMA: dict[str, Any] = {
    "type": "integer",
    "description": "Number of results to skip for pagination (default: 0)",
    "minimum": 0,
}

# ---------------------------------------------------------------------------
# Argument coercion
# ---------------------------------------------------------------------------


def as_string(value: Any) -> str:
    """Return the textual form of a JSON value."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def require_string(arguments: dict[str, Any], key: str) -> str:
    """Return ``arguments[key]`` as a string.

    Raises:
        MissingParameterError: If *key* is absent or ``null``.
    """
    value = arguments.get(key)
    if value is None:
        raise MissingParameterError(key)
    return as_string(value)


def optional_string(arguments: dict[str, Any], key: str) -> str | None:
    """Return ``arguments[key]`` as a string, or ``None`` if absent."""
    value = arguments.get(key)
    return None if value is None else as_string(value)


def int_or_default(arguments: dict[str, Any], key: str, default: int) -> int:
    """Return ``arguments[key]`` as an int, or *default*.

    Numbers are truncated toward zero; strings are parsed with ``int()``.
    Anything that does not yield an integer gives *default* without raising.
    """
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return default
    try:
        return int(as_string(value))
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Pagination and projection
# ---------------------------------------------------------------------------


def clamp_limit(limit: int) -> int:
    """Bound a requested page size to ``[1, MAX_LIMIT]``."""
    return min(max(limit, 1), MAX_LIMIT)


def page_window(arguments: dict[str, Any]) -> tuple[int, int]:
    """Read ``limit`` and ``offset`` from *arguments*; the limit is clamped."""
    limit = clamp_limit(int_or_default(arguments, "limit", DEFAULT_LIMIT))
    offset = int_or_default(arguments, "offset", DEFAULT_OFFSET)
    return limit, offset


def paginate(items: list[T], offset: int, limit: int) -> list[T]:
    """Skip *offset* items then take *limit*; a negative offset skips nothing."""
    start = max(offset, 0)
    return items[start : start + limit]


def summarize(observations: list[Observation]) -> list[dict[str, Any]]:
    """Project observations onto the list-row field set."""
    return [o.summary() for o in observations]
