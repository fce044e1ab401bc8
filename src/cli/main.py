"""CLI raíz (`ivcap`).

Por qué un callback global:
- `--url`, `--jwt`, `--json` y `--verbose` valen para todos los servicios;
  se resuelven una vez (flags > env/.env) y viajan en `ctx.obj`.
"""

from __future__ import annotations

from typing import Optional

import typer

from cli import artifact, aspect, doctor, metadata, package, service
from cli.state import CliState, console
from cli.ui_components import print_banner
from core.config import AppSettings
from core.logging import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    help="Command line client for the IVCAP core API.",
    pretty_exceptions_show_locals=False,
)
app.add_typer(artifact.app, name="artifact")
app.add_typer(aspect.app, name="aspect")
app.add_typer(metadata.app, name="metadata")
app.add_typer(package.app, name="package")
app.add_typer(service.app, name="service")
app.add_typer(doctor.app, name="doctor")


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(None, "--url", help="API base URL (overrides IVCAP_BASE_URL)."),
    jwt: Optional[str] = typer.Option(None, "--jwt", help="Access token (overrides IVCAP_JWT)."),
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON instead of tables."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and responses."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level, json_format=settings.log_json)
    ctx.obj = CliState(
        settings=settings,
        base_url=(url or settings.base_url).rstrip("/"),
        jwt=jwt or settings.jwt,
        json_output=json_output,
    )


@app.command()
def banner() -> None:
    """Print the welcome banner."""

    print_banner(console)


def run() -> None:
    app()
