"""The resources the mock server exposes, and shortcuts to fetch them."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable

import httpx

from linkclient.config import settings
from linkclient.mockapi.fetcher import fetch
from linkclient.mockapi.models import FetchOutcome, ResourceRequest


@dataclass(frozen=True)
class Resource:
    name: str
    path: str
    expected_key: str
    label: str
    title: str


RESOURCES: dict[str, Resource] = {
    r.name: r
    for r in (
        Resource("messages", "/db/email/messages", "items", "email messages", "Email Messages"),
        Resource("events", "/db/calendar/events", "items", "calendar events", "Calendar Events"),
        Resource("accounts", "/accounts", "accounts", "user accounts", "User Accounts"),
    )
}


class UnknownResourceError(KeyError):
    """Raised for a resource name that is not in :data:`RESOURCES`."""


def get_resource(name: str) -> Resource:
    try:
        return RESOURCES[name]
    except KeyError:
        known = ", ".join(RESOURCES)
        raise UnknownResourceError(f"unknown resource {name!r} (known: {known})") from None


def resource_request(name: str, base_url: str | None = None) -> ResourceRequest:
    """Build the :class:`ResourceRequest` for resource *name*."""
    resource = get_resource(name)
    base = (base_url or settings.base_url).rstrip("/")
    return ResourceRequest(
        url=f"{base}{resource.path}",
        expected_key=resource.expected_key,
        label=resource.label,
    )


def known_endpoints() -> list[str]:
    return [r.path for r in RESOURCES.values()]


def message_url(message_id: int | str, base_url: str | None = None) -> str:
    """URL of a single email.

    Numeric ids live under the message collection; string ids use the
    legacy ``/emails`` route.
    """
    base = (base_url or settings.base_url).rstrip("/")
    if isinstance(message_id, int):
        return f"{base}/db/email/messages/{message_id}"
    return f"{base}/emails/{message_id}"


async def get_email_messages(token: str | None, **kwargs) -> FetchOutcome:
    return await fetch(resource_request("messages"), token, **kwargs)


async def get_calendar_events(token: str | None, **kwargs) -> FetchOutcome:
    return await fetch(resource_request("events"), token, **kwargs)


async def get_accounts(token: str | None, **kwargs) -> FetchOutcome:
    return await fetch(resource_request("accounts"), token, **kwargs)


async def fetch_many(
    names: Iterable[str],
    token: str | None,
    *,
    client: httpx.AsyncClient | None = None,
    base_url: str | None = None,
    **kwargs,
) -> dict[str, FetchOutcome]:
    """Fetch several resources concurrently, keyed by name in request order."""
    requests = {name: resource_request(name, base_url) for name in names}
    outcomes = await asyncio.gather(
        *(fetch(req, token, client=client, **kwargs) for req in requests.values())
    )
    return dict(zip(requests, outcomes))
