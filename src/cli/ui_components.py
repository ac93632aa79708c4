"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Resource


def print_banner(console: Console) -> None:
    title = Text("resx-http", style="bold cyan")
    subtitle = Text("HTTP references • Resources • Integrity", style="dim")
    console.print(Panel(Text.assemble(title, "\n", subtitle), border_style="cyan", padding=(0, 2)))


def build_resource_table(resource: Resource) -> Table:
    """Tabla Rich con la petición enviada, el contenido y la integridad."""

    request = resource.reference.request
    table = Table(title="Resource", show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Method", request.method or "-")
    table.add_row("URL", request.url)
    table.add_row("Content-Type", resource.content.type)
    table.add_row("Size", f"{len(resource.content.data)} bytes")
    table.add_row("Timestamp", resource.integrity.timestamp.isoformat())
    table.add_row("Checksum", resource.integrity.checksum or "-")
    if request.options:
        table.add_row("Options", ", ".join(f"{k}={v!r}" for k, v in request.options))
    return table


def build_headers_table(headers: dict[str, str]) -> Table:
    table = Table(title="Response headers")
    table.add_column("Header", style="magenta", no_wrap=True)
    table.add_column("Value", style="dim")
    for name in sorted(headers):
        table.add_row(name, headers[name])
    return table
