"""Castline CLI — talk to a running Castline backend.

Usage:
    castline create-account me@example.com --role Host   # prompts for password
    castline login me@example.com                        # prints a token
    castline podcasts                                    # list all podcasts
    castline podcast 3                                   # one podcast + episodes
    castline episodes 3                                  # episodes of podcast 3
    castline call createPodcast -i '{"title": "T", "category": "C"}'

Private operations need a token: pass --token or set CASTLINE_TOKEN.
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
from typing import Optional

import click
import httpx

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"
TOKEN_HEADER = "x-jwt"


def _api_url() -> str:
    return os.environ.get("CASTLINE_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Castline backend."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def call_operation(
    operation: str,
    input: Optional[dict] = None,
    token: Optional[str] = None,
) -> dict:
    """POST one operation and return its envelope.

    Transport faults (e.g. "Forbidden resource") raise click.ClickException.
    """
    headers = {TOKEN_HEADER: token} if token else {}
    async with _client() as c:
        r = await c.post(
            "/api/v1/operations",
            json={"operation": operation, "input": input or {}},
            headers=headers,
        )
        r.raise_for_status()
        body = r.json()

    if body.get("errors"):
        raise click.ClickException(body["errors"][0]["message"])
    return body["data"][operation]


def _call(operation: str, input: Optional[dict] = None, token: Optional[str] = None) -> dict:
    """Run an operation and exit non-zero on ``ok: false``."""
    try:
        result = asyncio.run(call_operation(operation, input, token))
    except httpx.HTTPError as e:
        raise click.ClickException(f"Backend not reachable at {_api_url()}: {e}")
    if not result["ok"]:
        click.secho(f"Error: {result['error']}", fg="red", err=True)
        sys.exit(1)
    return result


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "—"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


PODCAST_COLUMNS = [("ID", "id", 6), ("TITLE", "title", 40), ("CATEGORY", "category", 20),
                   ("RATING", "rating", 6), ("OWNER", "ownerId", 6)]
EPISODE_COLUMNS = [("ID", "id", 6), ("TITLE", "title", 40), ("CATEGORY", "category", 20)]

token_option = click.option(
    "--token", envvar="CASTLINE_TOKEN", help="Session token (or set CASTLINE_TOKEN)"
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="castline")
def main():
    """Castline — browse and manage the podcast catalogue."""


@main.command("create-account")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.option("--role", type=click.Choice(["Listener", "Host"]), default="Listener",
              show_default=True)
def create_account(email: str, password: str, role: str):
    """Register a new account."""
    _call("createAccount", {"email": email, "password": password, "role": role})
    click.secho(f"Account created for {email}", fg="green")


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True)
def login(email: str, password: str):
    """Log in and print a session token."""
    result = _call("login", {"email": email, "password": password})
    click.echo(result["token"])


@main.command()
def podcasts():
    """List every podcast."""
    result = _call("getAllPodcasts")
    if not result["podcasts"]:
        click.echo("No podcasts yet.")
        return
    _print_table(result["podcasts"], PODCAST_COLUMNS)


@main.command()
@click.argument("podcast_id", type=int)
def podcast(podcast_id: int):
    """Show one podcast and its episodes."""
    p = _call("getPodcast", {"id": podcast_id})["podcast"]
    click.secho(f"#{p['id']} {p['title']}", bold=True)
    click.echo(f"  Category: {p['category']}")
    click.echo(f"  Rating:   {p['rating']}")
    click.echo(f"  Owner:    {p['ownerId']}")
    click.echo()
    if p["episodes"]:
        _print_table(p["episodes"], EPISODE_COLUMNS)
    else:
        click.echo("No episodes.")


@main.command()
@click.argument("podcast_id", type=int)
def episodes(podcast_id: int):
    """List the episodes of a podcast."""
    result = _call("getEpisodes", {"podcastId": podcast_id})
    _print_table(result["episodes"], EPISODE_COLUMNS)


@main.command()
@click.argument("operation")
@click.option("--input", "-i", "raw_input", default="{}", help="Operation input as JSON")
@token_option
def call(operation: str, raw_input: str, token: Optional[str]):
    """Run any operation and print its result as JSON."""
    try:
        data = json.loads(raw_input)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--input")
    result = _call(operation, data, token)
    click.echo(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
