"""CLI principal (Typer).

Por qué Typer:
- Subcomandos declarativos (`doctor`, `show`) con ayuda autogenerada.
- Rich se encarga del render; aquí solo se orquesta.
"""

from __future__ import annotations

import typer
from rich.console import Console

import recurly_v2.resources  # noqa: F401  (registra todas las clases por nombre)
from recurly_v2.cli import doctor
from recurly_v2.cli.ui_components import build_links_table, build_resource_table, print_banner
from recurly_v2.core import config
from recurly_v2.core.errors import NotFoundError, RecurlyError
from recurly_v2.resources.base import resource_class

app = typer.Typer(no_args_is_help=True, help="Cliente de línea de comandos para la API v2 de Recurly.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def _main(
    subdomain: str | None = typer.Option(None, "--subdomain", help="Subdominio (override de RECURLY_SUBDOMAIN)."),
    api_key: str | None = typer.Option(None, "--api-key", help="API key (override de RECURLY_API_KEY)."),
    banner: bool = typer.Option(False, "--banner", help="Muestra el banner."),
) -> None:
    overrides = {key: value for key, value in {"subdomain": subdomain, "api_key": api_key}.items() if value}
    if overrides:
        config.configure(**overrides)
    if banner:
        print_banner(_console)


@app.command()
def show(
    resource: str = typer.Argument(..., help="Recurso: account, plan, subscription, invoice, dunning_campaign..."),
    identifier: str = typer.Argument(..., help="Identificador (account_code, plan_code, uuid, número...)."),
) -> None:
    """Descarga un registro y muestra sus atributos."""

    try:
        cls = resource_class(resource)
    except LookupError:
        raise typer.BadParameter(f"unknown resource {resource!r}", param_hint="RESOURCE") from None

    try:
        record = cls.find(identifier)
    except NotImplementedError as exc:
        raise typer.BadParameter(str(exc), param_hint="RESOURCE") from None
    except NotFoundError:
        _console.print(f"[red]Not found:[/red] {resource} {identifier}")
        raise typer.Exit(code=1) from None
    except RecurlyError as exc:
        _console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=2) from None

    _console.print(build_resource_table(record))
    links = build_links_table(record)
    if links is not None:
        _console.print(links)
