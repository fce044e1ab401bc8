"""Comandos `ivcap metadata ...`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from adapters.rest import MetadataClient
from cli.payloads import (
    build_metadata_add_payload,
    build_metadata_list_payload,
    build_metadata_read_payload,
    build_metadata_revoke_payload,
    build_metadata_update_one_payload,
    build_metadata_update_record_payload,
)
from cli.state import emit_list, emit_message, emit_record, get_state, reporting_errors

app = typer.Typer(no_args_is_help=True, help="Attach, query and revoke metadata records.")

LIST_COLUMNS = ("record-id", "entity", "schema", "aspect-context")


@app.command("read")
def read_record(
    ctx: typer.Context,
    id: str = typer.Option(..., "--id", help="Record ID."),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Show a metadata record."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_metadata_read_payload(id, state.require_jwt())
        with state.http() as http:
            result = MetadataClient(http).read(payload)
    emit_record(state, result, title=f"Metadata {id}", output=output)


@app.command("list")
def list_records(
    ctx: typer.Context,
    entity_id: str = typer.Option("", "--entity-id"),
    schema: str = typer.Option("", "--schema"),
    aspect_path: str = typer.Option("", "--aspect-path"),
    at_time: str = typer.Option("", "--at-time"),
    limit: str = typer.Option("10", "--limit"),
    filter_: str = typer.Option("", "--filter"),
    order_by: str = typer.Option("", "--order-by"),
    order_desc: str = typer.Option("false", "--order-desc"),
    page: str = typer.Option("", "--page"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """List metadata records."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_metadata_list_payload(
            entity_id, schema, aspect_path, at_time, limit, filter_, order_by, order_desc, page, state.require_jwt()
        )
        with state.http() as http:
            result = MetadataClient(http).list(payload)
    emit_list(state, result, title="Metadata", rows=result.records or [], columns=LIST_COLUMNS, output=output)


@app.command("add")
def add_record(
    ctx: typer.Context,
    entity_id: str = typer.Option(..., "--entity-id"),
    schema: str = typer.Option(..., "--schema"),
    aspect: str = typer.Option(..., "--aspect", help="JSON aspect, or @file."),
    content_type: str = typer.Option("application/json", "--content-type"),
    policy_id: str = typer.Option("", "--policy-id"),
) -> None:
    """Attach a metadata record to an entity."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_metadata_add_payload(entity_id, schema, aspect, content_type, policy_id, state.require_jwt())
        with state.http() as http:
            result = MetadataClient(http).add(payload)
    emit_record(state, result, title="Added metadata")


@app.command("update-one")
def update_one(
    ctx: typer.Context,
    entity_id: str = typer.Option(..., "--entity-id"),
    schema: str = typer.Option(..., "--schema"),
    aspect: str = typer.Option(..., "--aspect", help="JSON aspect, or @file."),
    content_type: str = typer.Option("application/json", "--content-type"),
    policy_id: str = typer.Option("", "--policy-id"),
) -> None:
    """Replace the single record of a schema for an entity."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_metadata_update_one_payload(
            entity_id, schema, aspect, content_type, policy_id, state.require_jwt()
        )
        with state.http() as http:
            result = MetadataClient(http).update_one(payload)
    emit_record(state, result, title="Updated metadata")


@app.command("update-record")
def update_record(
    ctx: typer.Context,
    id: str = typer.Option(..., "--id"),
    aspect: str = typer.Option(..., "--aspect", help="JSON aspect, or @file."),
    entity_id: str = typer.Option("", "--entity-id"),
    schema: str = typer.Option("", "--schema"),
    content_type: str = typer.Option("application/json", "--content-type"),
    policy_id: str = typer.Option("", "--policy-id"),
) -> None:
    """Replace a record by ID."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_metadata_update_record_payload(
            id, entity_id, schema, aspect, content_type, policy_id, state.require_jwt()
        )
        with state.http() as http:
            result = MetadataClient(http).update_record(payload)
    emit_record(state, result, title="Updated metadata")


@app.command("revoke")
def revoke_record(ctx: typer.Context, id: str = typer.Option(..., "--id")) -> None:
    """Revoke a metadata record."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_metadata_revoke_payload(id, state.require_jwt())
        with state.http() as http:
            MetadataClient(http).revoke(payload)
    emit_message(state, f"Revoked record {id}", id=id)
