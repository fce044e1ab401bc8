"""Comandos `ivcap aspect ...`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from adapters.rest import AspectClient
from cli.payloads import (
    build_aspect_create_payload,
    build_aspect_list_payload,
    build_aspect_read_payload,
    build_aspect_retract_payload,
    build_aspect_update_payload,
)
from cli.state import emit_list, emit_message, emit_record, get_state, reporting_errors

app = typer.Typer(no_args_is_help=True, help="Assert, query and retract aspects of entities.")

LIST_COLUMNS = ("id", "entity", "schema", "content-type")


@app.command("read")
def read_aspect(
    ctx: typer.Context,
    id: str = typer.Option(..., "--id", help="Aspect ID."),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Show an aspect."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_aspect_read_payload(id, state.require_jwt())
        with state.http() as http:
            result = AspectClient(http).read(payload)
    emit_record(state, result, title=f"Aspect {id}", output=output)


@app.command("list")
def list_aspects(
    ctx: typer.Context,
    entity: str = typer.Option("", "--entity", help="Entity the aspects belong to."),
    schema: str = typer.Option("", "--schema", help="Schema (prefix) of the aspects."),
    aspect_path: str = typer.Option("", "--aspect-path", help="Return only this path of the content."),
    at_time: str = typer.Option("", "--at-time"),
    limit: str = typer.Option("10", "--limit"),
    filter_: str = typer.Option("", "--filter"),
    order_by: str = typer.Option("", "--order-by"),
    order_desc: str = typer.Option("false", "--order-desc"),
    page: str = typer.Option("", "--page"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """List aspects matching entity/schema."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_aspect_list_payload(
            entity, schema, aspect_path, at_time, limit, filter_, order_by, order_desc, page, state.require_jwt()
        )
        with state.http() as http:
            result = AspectClient(http).list(payload)
    emit_list(state, result, title="Aspects", rows=result.items or [], columns=LIST_COLUMNS, output=output)


@app.command("create")
def create_aspect(
    ctx: typer.Context,
    entity: str = typer.Option(..., "--entity"),
    schema: str = typer.Option(..., "--schema"),
    content: str = typer.Option(..., "--content", help="JSON content, or @file."),
    content_type: str = typer.Option("application/json", "--content-type"),
    policy: str = typer.Option("", "--policy"),
) -> None:
    """Assert a new aspect for an entity."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_aspect_create_payload(entity, schema, content, content_type, policy, state.require_jwt())
        with state.http() as http:
            result = AspectClient(http).create(payload)
    emit_record(state, result, title="Created aspect")


@app.command("update")
def update_aspect(
    ctx: typer.Context,
    id: str = typer.Option(..., "--id"),
    entity: str = typer.Option(..., "--entity"),
    schema: str = typer.Option(..., "--schema"),
    content: str = typer.Option(..., "--content", help="JSON content, or @file."),
    content_type: str = typer.Option("application/json", "--content-type"),
) -> None:
    """Replace an aspect's content."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_aspect_update_payload(id, entity, schema, content, content_type, state.require_jwt())
        with state.http() as http:
            result = AspectClient(http).update(payload)
    emit_record(state, result, title="Updated aspect")


@app.command("retract")
def retract_aspect(ctx: typer.Context, id: str = typer.Option(..., "--id")) -> None:
    """Retract an aspect."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_aspect_retract_payload(id, state.require_jwt())
        with state.http() as http:
            AspectClient(http).retract(payload)
    emit_message(state, f"Retracted aspect {id}", id=id)
