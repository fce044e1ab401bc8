"""Comandos `ivcap service ...`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from adapters.rest import ServiceClient
from cli.payloads import (
    build_service_create_payload,
    build_service_delete_payload,
    build_service_list_payload,
    build_service_read_payload,
    build_service_update_payload,
)
from cli.state import emit_list, emit_message, emit_record, get_state, reporting_errors

app = typer.Typer(no_args_is_help=True, help="Register, inspect and remove services.")

LIST_COLUMNS = ("id", "name", "description")


@app.command("list")
def list_services(
    ctx: typer.Context,
    limit: str = typer.Option("10", "--limit"),
    page: str = typer.Option("", "--page"),
    filter_: str = typer.Option("", "--filter"),
    order_by: str = typer.Option("", "--order-by"),
    order_desc: str = typer.Option("false", "--order-desc"),
    at_time: str = typer.Option("", "--at-time"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """List services."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_service_list_payload(limit, page, filter_, order_by, order_desc, at_time, state.require_jwt())
        with state.http() as http:
            result = ServiceClient(http).list(payload)
    emit_list(state, result, title="Services", rows=result.services or [], columns=LIST_COLUMNS, output=output)


@app.command("create")
def create_service(
    ctx: typer.Context,
    body: str = typer.Option(..., "--body", help="Service description as JSON, or @file."),
) -> None:
    """Register a new service."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_service_create_payload(body, state.require_jwt())
        with state.http() as http:
            result = ServiceClient(http).create_service(payload)
    emit_record(state, result, title="Created service")


@app.command("read")
def read_service(
    ctx: typer.Context,
    id: str = typer.Option(..., "--id"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Show a service."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_service_read_payload(id, state.require_jwt())
        with state.http() as http:
            result = ServiceClient(http).read(payload)
    emit_record(state, result, title=f"Service {id}", output=output)


@app.command("update")
def update_service(
    ctx: typer.Context,
    id: str = typer.Option(..., "--id"),
    body: str = typer.Option(..., "--body", help="Service description as JSON, or @file."),
    force_create: str = typer.Option("", "--force-create", help="Create if missing (BOOL)."),
) -> None:
    """Update a service description."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_service_update_payload(id, body, force_create, state.require_jwt())
        with state.http() as http:
            result = ServiceClient(http).update(payload)
    emit_record(state, result, title=f"Updated service {id}")


@app.command("delete")
def delete_service(ctx: typer.Context, id: str = typer.Option(..., "--id")) -> None:
    """Delete a service."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_service_delete_payload(id, state.require_jwt())
        with state.http() as http:
            ServiceClient(http).delete(payload)
    emit_message(state, f"Deleted service {id}", id=id)
