"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.core import config
from recurly_v2.core.config import get_user_env_file, write_user_env_vars
from recurly_v2.core.errors import ConfigurationError, RecurlyError
from recurly_v2.core.log import DEBUG_ENV_VAR, insecure_debug_enabled

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api() -> tuple[bool, str]:
    """HEAD sobre `accounts`: valida credenciales y subdominio sin traer datos."""

    try:
        response = ApiClient().head("accounts", per_page=1)
    except ConfigurationError as exc:
        return False, str(exc)
    except RecurlyError as exc:
        return False, f"{type(exc).__name__}: {exc}"
    total = response.headers.get("x-records", "?")
    return True, f"HTTP {response.status_code} ({total} accounts)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = config.get_settings()
    resolved = config.current()

    table = Table(title="Recurly v2 Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if resolved.api_key:
        table.add_row("API key", "OK", f"...{resolved.api_key[-4:]}")
    else:
        table.add_row("API key", "FAIL", "Set RECURLY_API_KEY or run `recurly-v2 doctor setup`")
    table.add_row("Subdomain", "OK", f"{resolved.subdomain}.{settings.api_domain}")
    table.add_row("Default currency", "OK", resolved.default_currency)
    table.add_row("API version", "OK", settings.api_version)
    table.add_row("Format", "OK", settings.content_format)
    if insecure_debug_enabled():
        table.add_row("Debug logging", "WARN", f"{DEBUG_ENV_VAR}=true (may leak PII)")
    else:
        table.add_row("Debug logging", "OK", "disabled")

    # Connectivity
    ok_api = False
    if resolved.api_key:
        ok_api, detail_api = _check_api()
        table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API connectivity", "SKIP", "No API key")

    _console.print(table)

    if not ok_api:
        _console.print(f"\n[yellow]Note:[/yellow] user config is read from {get_user_env_file()}")
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    subdomain = typer.prompt("Subdomain", default=config.subdomain(), show_default=True).strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    currency = typer.prompt("Default currency", default=config.default_currency(), show_default=True).strip()

    if not subdomain or not api_key:
        raise typer.BadParameter("subdomain and API key are required")
    if len(currency) != 3:
        raise typer.BadParameter("currency must be a 3-letter ISO code")

    env_path = write_user_env_vars(
        {
            "RECURLY_SUBDOMAIN": subdomain,
            "RECURLY_API_KEY": api_key,
            "RECURLY_DEFAULT_CURRENCY": currency.upper(),
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
