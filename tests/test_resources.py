"""Tests for the resource catalogue and the concurrent fetch helper."""

from __future__ import annotations

import httpx
import pytest
import respx

from linkclient.mockapi.models import FailureKind, Success
from linkclient.mockapi.resources import (
    UnknownResourceError,
    fetch_many,
    get_accounts,
    get_calendar_events,
    get_email_messages,
    known_endpoints,
    message_url,
    resource_request,
)

_BASE = "https://mock.example.com"


async def _no_sleep(delay: float) -> None:
    return None


@pytest.fixture(autouse=True)
def mock_base(monkeypatch):
    monkeypatch.setattr("linkclient.mockapi.resources.settings.mock_server_url", _BASE + "/")


class TestResourceRequest:
    def test_messages(self) -> None:
        req = resource_request("messages")
        assert req.url == f"{_BASE}/db/email/messages"
        assert req.expected_key == "items"
        assert req.label == "email messages"

    def test_events(self) -> None:
        req = resource_request("events")
        assert req.url == f"{_BASE}/db/calendar/events"
        assert req.expected_key == "items"

    def test_accounts(self) -> None:
        req = resource_request("accounts")
        assert req.url == f"{_BASE}/accounts"
        assert req.expected_key == "accounts"

    def test_explicit_base_url(self) -> None:
        req = resource_request("accounts", base_url="http://localhost:8000/")
        assert req.url == "http://localhost:8000/accounts"

    def test_unknown_name(self) -> None:
        with pytest.raises(UnknownResourceError):
            resource_request("contacts")


def test_known_endpoints() -> None:
    assert known_endpoints() == ["/db/email/messages", "/db/calendar/events", "/accounts"]


def test_message_url_by_id_type() -> None:
    assert message_url(5) == f"{_BASE}/db/email/messages/5"
    assert message_url("abc") == f"{_BASE}/emails/abc"


async def test_get_accounts_uses_accounts_envelope() -> None:
    with respx.mock:
        respx.get(f"{_BASE}/accounts").mock(
            return_value=httpx.Response(
                200, json={"accounts": [{"gmail_address": "a@example.com"}]}
            )
        )
        outcome = await get_accounts("tok", sleep=_no_sleep)

    assert isinstance(outcome, Success)
    assert outcome.records == [{"gmail_address": "a@example.com"}]


async def test_fetch_many_keeps_order_and_isolates_failures() -> None:
    with respx.mock:
        respx.get(f"{_BASE}/db/calendar/events").mock(
            return_value=httpx.Response(200, json=[{"title": "Standup"}])
        )
        respx.get(f"{_BASE}/db/email/messages").mock(return_value=httpx.Response(401))
        outcomes = await fetch_many(["events", "messages"], "tok", sleep=_no_sleep)

    assert list(outcomes) == ["events", "messages"]
    assert outcomes["events"].records == [{"title": "Standup"}]
    assert outcomes["messages"].kind is FailureKind.UNAUTHORIZED


async def test_get_email_messages_uses_items_envelope() -> None:
    with respx.mock:
        route = respx.get(f"{_BASE}/db/email/messages").mock(
            return_value=httpx.Response(200, json={"items": [{"subject": "Hi"}]})
        )
        outcome = await get_email_messages("tok", sleep=_no_sleep)

    assert isinstance(outcome, Success)
    assert outcome.records == [{"subject": "Hi"}]
    assert route.calls.last.request.headers["Authorization"] == "Bearer tok"


async def test_get_calendar_events_accepts_bare_list() -> None:
    with respx.mock:
        respx.get(f"{_BASE}/db/calendar/events").mock(
            return_value=httpx.Response(200, json=[{"title": "Standup"}, {"title": "Review"}])
        )
        outcome = await get_calendar_events("tok", sleep=_no_sleep)

    assert isinstance(outcome, Success)
    assert [r["title"] for r in outcome.records] == ["Standup", "Review"]


async def test_shortcuts_require_token() -> None:
    outcome = await get_calendar_events(None, sleep=_no_sleep)
    assert outcome.kind is FailureKind.MISSING_TOKEN
