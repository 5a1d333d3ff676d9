"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from recurly_v2.core.domain.money import Money
from recurly_v2.resources.base import Resource


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("recurly-v2", style="bold cyan")
    subtitle = Text("Cuentas • Suscripciones • Facturación", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _format_value(value: Any) -> str:
    if isinstance(value, Money):
        return ", ".join(f"{currency} {cents / 100:.2f}" for currency, cents in value.root.items())
    if isinstance(value, Resource):
        ident = getattr(value, value.identifier, None)
        return f"<{value.nodename}{f' {ident}' if ident else ''}>"
    if isinstance(value, list):
        return f"[{len(value)} items]"
    return str(value)


def build_resource_table(record: Resource) -> Table:
    """Tabla atributo -> valor para un recurso (omite los campos vacíos)."""

    table = Table(title=f"{type(record).__name__} {getattr(record, record.identifier, '') or ''}".strip())
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name in type(record).model_fields:
        if name in ("href", "links") or name in record.sensitive:
            continue
        value = getattr(record, name)
        if value is None:
            continue
        table.add_row(name, _format_value(value))
    return table


def build_links_table(record: Resource) -> Table | None:
    """Relaciones y acciones publicadas por el servidor (`<a name=...>` y hrefs)."""

    if not record.links:
        return None
    table = Table(title="Links")
    table.add_column("Name", style="magenta", no_wrap=True)
    table.add_column("Method", style="yellow")
    table.add_column("URL", style="dim")
    for name, link in sorted(record.links.items()):
        table.add_row(name, link.method or "GET", link.href)
    return table
