"""Infinity Link CLI — fetch and inspect mock-server data.

Usage:
    python cli/main.py --help

Commands:
    messages / events / accounts → list views of each resource
    message <id>                 → a single email
    probe                        → connectivity check
    auth-check                   → authorization check against the verification backend
    endpoints                    → known endpoint paths
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkclient.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
import logging
from typing import Optional

import typer

from cli.rendering import render_records
from linkclient.config import settings
from linkclient.mockapi import (
    Failure,
    fetch_record,
    known_endpoints,
    message_url,
    probe_authorization,
    probe_connection,
)
from linkclient.mockapi.resources import (
    get_accounts,
    get_calendar_events,
    get_email_messages,
    get_resource,
)

app = typer.Typer(
    name="linkclient",
    help="Infinity Link mock-server client.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(
        None, "--token", help="Firebase ID token (defaults to FIREBASE_ID_TOKEN)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Infinity Link mock-server client."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"token": token if token is not None else settings.id_token}


_FETCHERS = {
    "messages": get_email_messages,
    "events": get_calendar_events,
    "accounts": get_accounts,
}


def _fail(outcome: Failure) -> None:
    typer.echo(f"❌ Error ({outcome.kind.value}): {outcome.detail}", err=True)
    raise typer.Exit(code=1)


def _show_resource(ctx: typer.Context, name: str, as_json: bool) -> None:
    resource = get_resource(name)
    outcome = asyncio.run(_FETCHERS[name](ctx.obj["token"]))
    if isinstance(outcome, Failure):
        _fail(outcome)
    if as_json:
        typer.echo(json.dumps(outcome.records, indent=2))
        return
    typer.echo(render_records(resource.title, outcome.records, name))


# ---------------------------------------------------------------------------
# Resource list views
# ---------------------------------------------------------------------------
@app.command("messages")
def messages(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw records as JSON."),
) -> None:
    """List email messages."""
    _show_resource(ctx, "messages", as_json)


@app.command("events")
def events(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw records as JSON."),
) -> None:
    """List calendar events."""
    _show_resource(ctx, "events", as_json)


@app.command("accounts")
def accounts(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw records as JSON."),
) -> None:
    """List user accounts."""
    _show_resource(ctx, "accounts", as_json)


@app.command("message")
def message(
    ctx: typer.Context,
    message_id: str = typer.Argument(..., help="Numeric or string message id."),
) -> None:
    """Show a single email by id."""
    key: int | str
    try:
        key = int(message_id)
    except ValueError:
        key = message_id
    outcome = asyncio.run(fetch_record(message_url(key), ctx.obj["token"]))
    if isinstance(outcome, Failure):
        _fail(outcome)
    typer.echo(json.dumps(outcome.records[0], indent=2))


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------
@app.command("probe")
def probe(ctx: typer.Context) -> None:
    """Check that the mock server is reachable."""
    typer.echo(f"[probe] Testing connection to {settings.base_url} …")
    if asyncio.run(probe_connection(token=ctx.obj["token"] or None)):
        typer.echo("✅ Server reachable.")
        return
    typer.echo("❌ Server unreachable.", err=True)
    raise typer.Exit(code=1)


@app.command("auth-check")
def auth_check(ctx: typer.Context) -> None:
    """Check whether the verification backend accepts the token."""
    result = asyncio.run(probe_authorization(ctx.obj["token"]))
    status = result.status_code if result.status_code is not None else "-"
    if result.success:
        typer.echo(f"✅ [{status}] {result.message}")
        return
    typer.echo(f"❌ [{status}] {result.message}", err=True)
    if result.error:
        typer.echo(f"   {result.error}", err=True)
    raise typer.Exit(code=1)


@app.command("endpoints")
def endpoints() -> None:
    """List the endpoints this client knows about."""
    for path in known_endpoints():
        typer.echo(f"  {path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
