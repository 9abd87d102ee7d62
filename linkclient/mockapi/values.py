"""Typed accessors over records decoded from JSON.

Records are plain ``dict`` objects with whatever the server sent.  These
helpers return the caller's default whenever a key is missing *or* holds a
value of the wrong type, so a ``null`` or a number never leaks into code that
expects a string.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def get_str(record: Mapping[str, Any], key: str, default: str = "") -> str:
    value = record.get(key)
    if isinstance(value, str):
        return value
    return default


def truncate(text: str, limit: int = 100) -> str:
    """Cut *text* to *limit* characters, marking the cut with ``...``."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
