"""Comandos `ivcap artifact ...`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from adapters.rest import ArtifactClient
from cli.payloads import (
    build_artifact_list_payload,
    build_artifact_read_payload,
    build_artifact_upload_payload,
)
from cli.state import emit_list, emit_record, get_state, reporting_errors

app = typer.Typer(no_args_is_help=True, help="List, inspect and upload artifacts.")

LIST_COLUMNS = ("id", "name", "status", "size", "mime-type")


@app.command("list")
def list_artifacts(
    ctx: typer.Context,
    limit: str = typer.Option("10", "--limit", help="Max items per page (1..50)."),
    page: str = typer.Option("", "--page", help="Page token from a previous listing."),
    filter_: str = typer.Option("", "--filter", help="Filter expression."),
    order_by: str = typer.Option("", "--order-by", help="Property to order by."),
    order_desc: str = typer.Option("false", "--order-desc", help="Descending order (BOOL)."),
    at_time: str = typer.Option("", "--at-time", help="State at this date-time (RFC 3339)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write JSON result to this file."),
) -> None:
    """List artifacts."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_artifact_list_payload(limit, page, filter_, order_by, order_desc, at_time, state.require_jwt())
        with state.http() as http:
            result = ArtifactClient(http).list(payload)
    emit_list(state, result, title="Artifacts", rows=result.artifacts or [], columns=LIST_COLUMNS, output=output)


@app.command("read")
def read_artifact(
    ctx: typer.Context,
    id: str = typer.Option(..., "--id", help="Artifact ID."),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Show an artifact's status."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_artifact_read_payload(id, state.require_jwt())
        with state.http() as http:
            result = ArtifactClient(http).read(payload)
    emit_record(state, result, title=f"Artifact {id}", output=output)


@app.command("upload")
def upload_artifact(
    ctx: typer.Context,
    file: Path = typer.Option(..., "--file", "-f", exists=True, dir_okay=False, readable=True, help="File to upload."),
    content_type: str = typer.Option("", "--content-type", help="Content-Type of the upload."),
    content_encoding: str = typer.Option("", "--content-encoding"),
    content_length: str = typer.Option("", "--content-length", help="Defaults to the file size."),
    name: str = typer.Option("", "--name", help="Human friendly name."),
    collection: str = typer.Option("", "--collection", help="Collection to add the artifact to."),
    policy: str = typer.Option("", "--policy"),
    x_content_type: str = typer.Option("", "--x-content-type"),
    x_content_length: str = typer.Option("", "--x-content-length"),
    upload_length: str = typer.Option("", "--upload-length", help="Expected size (TUS)."),
    tus_resumable: str = typer.Option("", "--tus-resumable", help="TUS protocol version."),
) -> None:
    """Upload a file as a new artifact (streamed)."""

    state = get_state(ctx)
    if content_length == "":
        content_length = str(file.stat().st_size)
    with reporting_errors():
        payload = build_artifact_upload_payload(
            state.require_jwt(),
            content_type,
            content_encoding,
            content_length,
            name,
            collection,
            policy,
            x_content_type,
            x_content_length,
            upload_length,
            tus_resumable,
        )
        with state.http() as http, file.open("rb") as body:
            result = ArtifactClient(http).upload(payload, body)
    emit_record(state, result, title="Uploaded artifact")
