"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en todos los servicios.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.common import WireModel
from core.domain.errors import InvalidResponseError, IvcapError, ServiceError


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("IVCAP", style="bold cyan")
    subtitle = Text("artifacts • aspects • metadata • packages • services", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, WireModel):
        return str(value.to_wire())
    return str(value)


def build_list_table(title: str, columns: Sequence[str], rows: Iterable[WireModel | dict[str, Any]]) -> Table:
    """Tabla de un listado: una fila por item, columnas = claves del API."""

    table = Table(title=title)
    for i, column in enumerate(columns):
        table.add_column(column, style="cyan" if i == 0 else "white", no_wrap=i == 0)
    for row in rows:
        data = row.to_wire() if isinstance(row, WireModel) else row
        table.add_row(*(_cell(data.get(column)) for column in columns))
    return table


def build_record_table(title: str, record: WireModel) -> Table:
    """Tabla clave/valor para un único recurso."""

    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in record.to_wire().items():
        table.add_row(key, _cell(value))
    return table


def build_error_panel(error: IvcapError) -> Panel:
    """Panel rojo con el tipo de error y sus detalles."""

    body = Text()
    if isinstance(error, ServiceError):
        title = Text(f"{error.goa_name} ({error.status_code})", style="bold red")
        body.append(error.message + "\n")
        if error.id:
            body.append(f"id: {error.id}\n", style="dim")
        if error.name:
            body.append(f"parameter: {error.name}\n", style="dim")
        if error.value:
            body.append(f"value: {error.value}\n", style="dim")
    elif isinstance(error, InvalidResponseError):
        title = Text(f"unexpected status {error.status_code}", style="bold red")
        body.append(f"{error.service}.{error.method}\n")
        if error.body:
            body.append(error.body, style="dim")
    else:
        title = Text(type(error).__name__, style="bold red")
        body.append(str(error))
    return Panel(body, title=title, border_style="red")
