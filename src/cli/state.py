"""Estado compartido de la CLI (opciones globales) y helpers de salida."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Sequence

import httpx
import typer
from rich.console import Console

from adapters.http_client import build_client
from adapters.json_exporter import export_result_json, result_to_json
from cli.ui_components import build_error_panel, build_list_table, build_record_table
from core.config import AppSettings
from core.domain.common import WireModel
from core.domain.errors import IvcapError

console = Console()


@dataclass
class CliState:
    settings: AppSettings
    base_url: str
    jwt: str | None = None
    json_output: bool = False

    def require_jwt(self) -> str:
        if not self.jwt:
            raise typer.BadParameter("missing JWT: pass --jwt or set IVCAP_JWT (see `ivcap doctor login`)")
        return self.jwt

    @contextmanager
    def http(self) -> Iterator[httpx.Client]:
        with build_client(self.settings, base_url=self.base_url) as client:
            yield client


def get_state(ctx: typer.Context) -> CliState:
    root = ctx.find_root()
    if not isinstance(root.obj, CliState):
        settings = AppSettings()
        root.obj = CliState(settings=settings, base_url=settings.base_url, jwt=settings.jwt)
    return root.obj


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Convierte errores del cliente en un panel Rich + exit code 1."""

    try:
        yield
    except IvcapError as exc:
        console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc


def emit_record(state: CliState, result: WireModel, *, title: str, output: Path | None = None) -> None:
    if output is not None:
        path = export_result_json(result=result, output_path=output)
        console.print(f"[green]Saved:[/green] {path}")
        return
    if state.json_output:
        typer.echo(result_to_json(result), nl=False)
        return
    console.print(build_record_table(title, result))


def emit_list(
    state: CliState,
    result: WireModel,
    *,
    title: str,
    rows: Sequence[WireModel | dict[str, Any]],
    columns: Sequence[str],
    output: Path | None = None,
) -> None:
    if output is not None or state.json_output:
        emit_record(state, result, title=title, output=output)
        return
    console.print(build_list_table(title, columns, rows))
    links = result.to_wire().get("links")
    if isinstance(links, dict) and links.get("next"):
        console.print(f"[dim]next page:[/dim] {links['next']}")


def emit_message(state: CliState, message: str, **data: Any) -> None:
    if state.json_output:
        typer.echo(result_to_json({"message": message, **data}), nl=False)
        return
    console.print(f"[green]{message}[/green]")
