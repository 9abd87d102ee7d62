"""Authorized GETs against the mock data server.

:func:`fetch` is the workhorse: it attaches the bearer token, retries
transient failures with a linearly growing delay and normalises whatever JSON
shape the server returns into a list of records.  Every failure comes back as
a :class:`~linkclient.mockapi.models.Failure` value; nothing is raised to the
caller except cancellation.

The probes (:func:`probe_connection`, :func:`probe_authorization`) and
:func:`fetch_record` are single-shot and never retry.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable

import httpx

from linkclient.config import settings
from linkclient.mockapi.models import (
    AuthProbeResult,
    Failure,
    FailureKind,
    FetchOutcome,
    ResourceRequest,
    Success,
)
from linkclient.mockapi.normalize import MalformedBodyError, normalize_body

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]

_JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Statuses that another attempt will not fix.
_AUTH_REJECTED = frozenset({401, 403})

_NO_TOKEN_DETAIL = "No Firebase ID token available. Please sign in first."


def _headers(token: str | None) -> dict[str, str]:
    headers = dict(_JSON_HEADERS)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


@asynccontextmanager
async def _client_scope(
    client: httpx.AsyncClient | None, timeout: float
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client* untouched, or a short-lived client that is closed on exit."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned


@dataclass
class _Transient:
    """A failed attempt that may succeed if repeated."""

    detail: str
    status_code: int | None = None


def _status_failure(response: httpx.Response) -> Failure | _Transient | None:
    """Classify *response* by status; ``None`` means HTTP 200."""
    status = response.status_code
    if status in _AUTH_REJECTED:
        return Failure(
            FailureKind.UNAUTHORIZED,
            f"server rejected the token (HTTP {status})",
            status_code=status,
        )
    if status != 200:
        return _Transient(f"HTTP {status}", status_code=status)
    return None


async def _attempt(
    client: httpx.AsyncClient,
    request: ResourceRequest,
    token: str,
    timeout: float,
) -> Success | Failure | _Transient:
    """Run one GET for *request* and classify the result."""
    try:
        response = await client.get(request.url, headers=_headers(token), timeout=timeout)
    except httpx.HTTPError as exc:
        return _Transient(f"{type(exc).__name__}: {exc}")

    failure = _status_failure(response)
    if failure is not None:
        return failure

    try:
        data = response.json()
    except ValueError as exc:
        return Failure(
            FailureKind.MALFORMED_BODY,
            f"response body is not JSON: {exc}",
            status_code=response.status_code,
        )
    try:
        records = normalize_body(data, request.expected_key)
    except MalformedBodyError as exc:
        return Failure(
            FailureKind.MALFORMED_BODY, str(exc), status_code=response.status_code
        )
    return Success(records)


async def fetch(
    request: ResourceRequest,
    token: str | None,
    *,
    client: httpx.AsyncClient | None = None,
    sleep: SleepFn = asyncio.sleep,
    max_attempts: int | None = None,
    timeout: float | None = None,
) -> FetchOutcome:
    """GET *request* with *token* and return its records.

    Up to ``max_attempts`` attempts are made (default
    ``settings.fetch_max_attempts``).  Transport errors, statuses other than 200
    and 401/403, and unexpected exceptions are retried; the wait before
    attempt *n + 1* is ``n * settings.retry_delay_step`` seconds, awaited via
    *sleep*.  A rejected token or a malformed body ends the call at once.

    Args:
        request: What to fetch.
        token: Bearer token.  ``None`` or ``""`` fails with
            ``MISSING_TOKEN`` before any request is sent.
        client: Optional shared client.  It is used as-is and not closed.
        sleep: Coroutine used for the back-off delay.
        max_attempts: Override for the number of attempts.
        timeout: Per-attempt timeout in seconds (default
            ``settings.fetch_timeout``).
    """
    if not token:
        logger.warning("[mockapi] no token for %s; request not sent.", request.label)
        return Failure(FailureKind.MISSING_TOKEN, _NO_TOKEN_DETAIL, attempts=0)

    if max_attempts is None:
        max_attempts = settings.fetch_max_attempts
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    if timeout is None:
        timeout = settings.fetch_timeout

    async with _client_scope(client, timeout) as http:
        attempt = 0
        while True:
            attempt += 1
            logger.info(
                "[mockapi] fetching %s (attempt %d/%d) …",
                request.label, attempt, max_attempts,
            )
            try:
                outcome = await _attempt(http, request, token, timeout)
            except Exception as exc:
                outcome = _Transient(f"unexpected error: {exc!r}")

            if isinstance(outcome, Success):
                outcome.attempts = attempt
                logger.info(
                    "[mockapi] ✓ %s: %d item(s).", request.label, len(outcome.records)
                )
                return outcome
            if isinstance(outcome, Failure):
                outcome.attempts = attempt
                logger.warning(
                    "[mockapi] %s failed (%s): %s",
                    request.label, outcome.kind.value, outcome.detail,
                )
                return outcome

            logger.warning(
                "[mockapi] %s attempt %d/%d failed: %s",
                request.label, attempt, max_attempts, outcome.detail,
            )
            if attempt >= max_attempts:
                logger.warning("[mockapi] max retries reached for %s.", request.label)
                return Failure(
                    FailureKind.EXHAUSTED,
                    f"failed to fetch {request.label} after {attempt} attempt(s): "
                    f"{outcome.detail}",
                    status_code=outcome.status_code,
                    attempts=attempt,
                )

            delay = attempt * settings.retry_delay_step
            logger.debug("[mockapi] retrying %s in %.0fs …", request.label, delay)
            await sleep(delay)


async def fetch_record(
    url: str,
    token: str | None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> FetchOutcome:
    """GET a single record at *url*.

    One attempt, no retry: a transient failure uses up the whole attempt
    allowance and is reported as ``EXHAUSTED`` with ``attempts=1``.
    """
    if not token:
        return Failure(FailureKind.MISSING_TOKEN, _NO_TOKEN_DETAIL, attempts=0)
    if timeout is None:
        timeout = settings.fetch_timeout

    try:
        async with _client_scope(client, timeout) as http:
            response = await http.get(url, headers=_headers(token), timeout=timeout)
    except httpx.HTTPError as exc:
        return Failure(FailureKind.EXHAUSTED, f"{type(exc).__name__}: {exc}", attempts=1)

    failure = _status_failure(response)
    if isinstance(failure, _Transient):
        return Failure(
            FailureKind.EXHAUSTED,
            f"single attempt failed: {failure.detail}",
            status_code=failure.status_code,
            attempts=1,
        )
    if failure is not None:
        failure.attempts = 1
        return failure

    try:
        data = response.json()
    except ValueError as exc:
        return Failure(
            FailureKind.MALFORMED_BODY,
            f"response body is not JSON: {exc}",
            status_code=response.status_code,
            attempts=1,
        )
    if not isinstance(data, dict):
        return Failure(
            FailureKind.MALFORMED_BODY,
            f"expected an object, got {type(data).__name__}",
            status_code=response.status_code,
            attempts=1,
        )
    return Success([data], attempts=1)


async def probe_connection(
    base_url: str | None = None,
    token: str | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> bool:
    """Return ``True`` if the server at *base_url* answers with a status < 500."""
    url = base_url or settings.base_url
    timeout = settings.probe_timeout
    try:
        async with _client_scope(client, timeout) as http:
            response = await http.get(url, headers=_headers(token), timeout=timeout)
    except httpx.HTTPError as exc:
        logger.warning("[probe] connection test failed: %s", exc)
        return False

    logger.info("[probe] connection test response: %d", response.status_code)
    return response.status_code < 500


async def probe_authorization(
    token: str | None,
    *,
    api_key: str | None = None,
    url: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> AuthProbeResult:
    """Check whether the verification backend accepts *token*.

    Sends the bearer token together with the backend's ``X-API-Key`` to the
    accounts endpoint and explains the status code in plain words.
    """
    if not token:
        return AuthProbeResult(
            success=False,
            status_code=0,
            message=_NO_TOKEN_DETAIL,
            error="No authentication token",
        )

    target = url or f"{settings.base_url}/accounts"
    headers = _headers(token)
    key = api_key if api_key is not None else settings.fastapi_api_key
    if key:
        headers["X-API-Key"] = key
    timeout = settings.probe_timeout

    try:
        async with _client_scope(client, timeout) as http:
            response = await http.get(target, headers=headers, timeout=timeout)
    except httpx.HTTPError as exc:
        logger.warning("[probe] authorization test error: %s", exc)
        return AuthProbeResult(
            success=False,
            status_code=None,
            message="Network error during authorization test.",
            error=str(exc) or type(exc).__name__,
        )

    status = response.status_code
    logger.info("[probe] authorization test response: %d", status)
    if status == 200:
        try:
            data = response.json()
        except ValueError:
            data = response.text
        return AuthProbeResult(
            success=True,
            status_code=status,
            message="Authorization successful! Backend accepted the token.",
            data=data,
        )
    if status == 401:
        return AuthProbeResult(
            success=False,
            status_code=status,
            message="Backend rejected the token (401 Unauthorized).",
            error="Unauthorized - Invalid or expired token",
        )
    if status == 500:
        return AuthProbeResult(
            success=False,
            status_code=status,
            message="Backend server error (500). The server may be having issues.",
            error="Internal Server Error - Server may be down or misconfigured",
        )
    return AuthProbeResult(
        success=False,
        status_code=status,
        message="Unexpected response from backend.",
        error=f"Status code: {status}",
    )
