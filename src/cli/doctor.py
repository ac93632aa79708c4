"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_producer import HTTPProducer
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import ResxHTTPError
from core.domain.timestamp_mode import TimestampMode

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(producer: HTTPProducer, url: str) -> tuple[bool, str]:
    try:
        resource = await producer.open(url)
    except ResxHTTPError as exc:
        return False, exc.reason
    return True, f"{resource.content.type}, {len(resource.content.data)} bytes"


@app.command()
def run(
    url: str = typer.Option("https://example.com", "--url", help="URL used for the connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="resx-http Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Timestamp mode", "OK", settings.timestamp.label())
    if settings.access is None:
        table.add_row("Access policy", "OPTIONAL", "No callback set -> all requests allowed")
    else:
        name = getattr(settings.access, "__qualname__", repr(settings.access))
        table.add_row("Access policy", "OK", name)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User-Agent", "OK", settings.user_agent)

    # Connectivity (pasa por el access gate como cualquier petición)
    ok_http, detail_http = asyncio.run(_check_http(HTTPProducer(settings), url))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup-timestamp")
def setup_timestamp(
    mode: TimestampMode = typer.Argument(..., help="Default timestamp mode (server/client)."),
) -> None:
    """Persist the default timestamp mode in the user config .env."""

    env_path = write_user_env_vars({"RESX_HTTP_TIMESTAMP": mode.value})
    _console.print(f"[green]Saved timestamp mode '{mode.value}' to:[/green] {env_path}")
