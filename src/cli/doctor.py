"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings, write_user_env_vars
from core.domain.common import authorization_header

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        with build_client(settings, base_url=url) as client:
            response = client.get("/1/services", params={"limit": "1"}, headers=_auth_headers(settings))
        return response.status_code < 500, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


def _auth_headers(settings: AppSettings) -> dict[str, str]:
    if not settings.jwt:
        return {}
    return {"Authorization": authorization_header(settings.jwt)}


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="IVCAP Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    if settings.jwt:
        table.add_row("JWT", "OK", f"{len(settings.jwt)} chars")
    else:
        table.add_row("JWT", "MISSING", "Run `ivcap doctor login` or set IVCAP_JWT")

    ok_http, detail_http = _check_http(settings, settings.base_url)
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="login")
def login() -> None:
    """Store the deployment URL and access token in the user config .env."""

    settings = AppSettings()
    base_url = typer.prompt("IVCAP base URL", default=settings.base_url, show_default=True).strip()
    jwt = typer.prompt("Access token (JWT)", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not jwt:
        raise typer.BadParameter("base URL and token are required")

    env_path = write_user_env_vars({"IVCAP_BASE_URL": base_url, "IVCAP_JWT": jwt})
    _console.print(f"[green]Saved login to:[/green] {env_path}")
