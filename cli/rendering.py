"""Utilities for rendering fetched records as list views in the CLI."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from linkclient.mockapi.values import get_str, truncate


def format_datetime(value: str) -> str:
    """Render an ISO timestamp as ``d/m/yyyy h:mm``; unparseable input is returned as-is."""
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return f"{dt.day}/{dt.month}/{dt.year} {dt.hour}:{dt.minute:02d}"


def item_title(item: Dict[str, Any], kind: str) -> str:
    if kind == "messages":
        return get_str(item, "subject", "No Subject")
    if kind == "events":
        return get_str(item, "title", "No Title")
    if kind == "accounts":
        return get_str(item, "gmail_address", "No Email")
    return "Unknown"


def item_subtitle(item: Dict[str, Any], kind: str) -> str:
    if kind == "messages":
        return truncate(get_str(item, "snippet", "No Snippet"))
    if kind == "events":
        return truncate(get_str(item, "description", "No Description"))
    if kind == "accounts":
        return "Gmail Account"
    return "Unknown"


def item_trailing(item: Dict[str, Any], kind: str) -> str:
    if kind == "messages":
        sender = get_str(item, "sender", "Unknown Sender")
        recipient = get_str(item, "recipient")
        return f"From: {sender}" + (f" → {recipient}" if recipient else "")
    if kind == "events":
        location = get_str(item, "location")
        if location:
            return f"📍 {location}"
        start = get_str(item, "start_utc")
        if start:
            return f"🕒 {format_datetime(start)}"
        return "📅 Event"
    if kind == "accounts":
        return "📧 Gmail"
    return "Unknown"


def render_records(title: str, records: List[Dict[str, Any]], kind: str) -> str:
    """Render *records* as a titled list, one three-line entry per record.

    Args:
        title: Heading shown above the list.
        records: Records in the order the server returned them.
        kind: Resource name (``messages``, ``events`` or ``accounts``); picks
            which fields are shown.

    Returns:
        The list view as a single string.
    """
    lines = [f"{title} ({len(records)} items)"]
    for item in records:
        lines.append(f"  • {item_title(item, kind)}")
        subtitle = item_subtitle(item, kind)
        if subtitle:
            lines.append(f"    {subtitle}")
        lines.append(f"    {item_trailing(item, kind)}")
    return "\n".join(lines)
