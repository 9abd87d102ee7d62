"""Tests for the CLI list-view rendering."""

from __future__ import annotations

from cli.rendering import (
    format_datetime,
    item_subtitle,
    item_title,
    item_trailing,
    render_records,
)


class TestMessages:
    def test_fields(self) -> None:
        item = {"subject": "Lunch?", "snippet": "Are you free", "sender": "a@x.io", "recipient": "b@x.io"}
        assert item_title(item, "messages") == "Lunch?"
        assert item_subtitle(item, "messages") == "Are you free"
        assert item_trailing(item, "messages") == "From: a@x.io → b@x.io"

    def test_defaults(self) -> None:
        assert item_title({}, "messages") == "No Subject"
        assert item_subtitle({}, "messages") == "No Snippet"
        assert item_trailing({}, "messages") == "From: Unknown Sender"

    def test_long_snippet_is_truncated(self) -> None:
        subtitle = item_subtitle({"snippet": "y" * 150}, "messages")
        assert subtitle == "y" * 100 + "..."


class TestEvents:
    def test_location_wins(self) -> None:
        item = {"title": "Standup", "location": "Room 4", "start_utc": "2025-01-02T09:05:00Z"}
        assert item_trailing(item, "events") == "📍 Room 4"

    def test_start_time_when_no_location(self) -> None:
        item = {"title": "Standup", "start_utc": "2025-01-02T09:05:00Z"}
        assert item_trailing(item, "events") == "🕒 2/1/2025 9:05"

    def test_no_time_or_location(self) -> None:
        assert item_trailing({"title": "x"}, "events") == "📅 Event"
        assert item_title({}, "events") == "No Title"


def test_format_datetime_passthrough_on_garbage() -> None:
    assert format_datetime("next tuesday") == "next tuesday"


def test_accounts() -> None:
    item = {"gmail_address": "me@gmail.com"}
    assert item_title(item, "accounts") == "me@gmail.com"
    assert item_subtitle(item, "accounts") == "Gmail Account"
    assert item_trailing(item, "accounts") == "📧 Gmail"


def test_render_records_header_and_entries() -> None:
    text = render_records(
        "Email Messages",
        [{"subject": "One"}, {"subject": "Two"}],
        "messages",
    )
    lines = text.splitlines()
    assert lines[0] == "Email Messages (2 items)"
    assert "  • One" in lines
    assert "  • Two" in lines
    assert lines.index("  • One") < lines.index("  • Two")


def test_render_records_empty() -> None:
    assert render_records("User Accounts", [], "accounts") == "User Accounts (0 items)"


def test_non_string_fields_fall_back_to_defaults() -> None:
    item = {"subject": 42, "snippet": None, "sender": ["a@x.io"], "recipient": 7}
    assert item_title(item, "messages") == "No Subject"
    assert item_subtitle(item, "messages") == "No Snippet"
    assert item_trailing(item, "messages") == "From: Unknown Sender"
