"""CLI de resx-http (Typer + Rich).

Comandos:
- `fetch`: abre una URL con el producer HTTP y muestra el recurso.
- `alike`: compara dos referencias sin tocar la red.
- `doctor`: diagnósticos de entorno/configuración.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_producer import HTTPProducer
from adapters.json_exporter import export_resource_json
from cli import doctor
from cli.ui_components import build_headers_table, build_resource_table, print_banner
from core.config import AppSettings
from core.domain.errors import InvalidReferenceError, ResxHTTPError, UnsuccessfulResponseError
from core.domain.timestamp_mode import TimestampMode

app = typer.Typer(no_args_is_help=True, help="Fetch HTTP references as resources.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_producer(settings: AppSettings) -> HTTPProducer:
    return HTTPProducer(settings)


def _parse_headers(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(f"invalid header {raw!r}, expected 'Name: value'")
        headers[name.strip()] = value.strip()
    return headers


@app.command()
def fetch(
    url: str = typer.Argument(..., help="http(s) URL to open."),
    method: str = typer.Option("GET", "--method", "-X", help="HTTP method."),
    header: Optional[List[str]] = typer.Option(None, "--header", "-H", help="Extra header 'Name: value'."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Request body (UTF-8)."),
    follow_redirects: bool = typer.Option(False, "--follow-redirects", "-L", help="Follow redirects."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.0, help="Request timeout (seconds)."),
    timestamp: Optional[TimestampMode] = typer.Option(None, "--timestamp", help="Timestamp mode for this call."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write content bytes to this file."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write resource metadata as JSON."),
    show_headers: bool = typer.Option(False, "--show-headers", help="Print the response headers."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Open URL and print the resulting resource."""

    _configure_logging(verbose)
    settings = AppSettings()
    producer = _build_producer(settings)

    options: list[tuple[str, Any]] = []
    if follow_redirects:
        options.append(("follow_redirects", True))
    if timeout is not None:
        options.append(("timeout", timeout))

    opts: dict[str, Any] = {"method": method, "headers": _parse_headers(header or []), "options": options}
    if data is not None:
        opts["body"] = data.encode("utf-8")
    if timestamp is not None:
        opts["timestamp"] = timestamp

    try:
        resource = asyncio.run(producer.open(url, **opts))
    except UnsuccessfulResponseError as exc:
        _console.print(f"[red]Error:[/red] {exc.reason} ({url})")
        raise typer.Exit(code=1) from exc
    except InvalidReferenceError as exc:
        _console.print(f"[red]Error:[/red] {exc.reason}")
        raise typer.Exit(code=2) from exc
    except ResxHTTPError as exc:
        _console.print(f"[red]Error:[/red] {exc.reason}")
        raise typer.Exit(code=1) from exc

    if verbose:
        print_banner(_console)
    _console.print(build_resource_table(resource))
    if show_headers:
        _console.print(build_headers_table(resource.reference.headers))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(resource.content.data)
        _console.print(f"[green]Content written to:[/green] {output}")
    if json_path is not None:
        export_resource_json(resource=resource, output_path=json_path)
        _console.print(f"[green]Metadata written to:[/green] {json_path}")


@app.command()
def alike(
    a: str = typer.Argument(..., help="First URL."),
    b: str = typer.Argument(..., help="Second URL."),
) -> None:
    """Check whether two references would produce the same request."""

    producer = _build_producer(AppSettings())
    if producer.alike(a, b):
        _console.print("[green]alike[/green]")
        return
    _console.print("[yellow]different[/yellow]")
    raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
