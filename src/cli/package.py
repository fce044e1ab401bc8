"""Comandos `ivcap package ...` (imágenes docker de servicios)."""

from __future__ import annotations

from pathlib import Path

import typer

from adapters.rest import PackageClient
from cli.payloads import (
    build_package_list_payload,
    build_package_pull_payload,
    build_package_push_payload,
    build_package_remove_payload,
    build_package_status_payload,
)
from cli.state import console, emit_message, emit_record, get_state, reporting_errors
from core.domain.errors import IvcapError

app = typer.Typer(no_args_is_help=True, help="Push, pull and manage service packages (docker images).")


@app.command("list")
def list_packages(
    ctx: typer.Context,
    tag: str = typer.Option("", "--tag", help="Docker image tag."),
    limit: str = typer.Option("", "--limit"),
    page: str = typer.Option("", "--page"),
) -> None:
    """List image tags under the account."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_package_list_payload(tag, limit, page, state.require_jwt())
        with state.http() as http:
            result = PackageClient(http).list(payload)
    if state.json_output:
        emit_record(state, result, title="Packages")
        return
    for item in result.items:
        console.print(item)
    for link in result.links:
        console.print(f"[dim]{link.rel}:[/dim] {link.href}")


@app.command("pull")
def pull_package(
    ctx: typer.Context,
    ref: str = typer.Option(..., "--ref", help="Image tag or layer digest."),
    type_: str = typer.Option(..., "--type", help="manifest, config or layer."),
    offset: str = typer.Option("", "--offset", help="Offset of the layer chunk."),
    output: Path = typer.Option(..., "--output", "-o", help="File to write the pulled bytes to."),
) -> None:
    """Download a manifest, config or layer (chunk)."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_package_pull_payload(ref, type_, offset, state.require_jwt())
        with state.http() as http:
            result, body = PackageClient(http).pull(payload)
            try:
                output.parent.mkdir(parents=True, exist_ok=True)
                with output.open("wb") as fh:
                    for chunk in body.iter_bytes():
                        fh.write(chunk)
            except IvcapError:
                # No dejar un fichero truncado.
                output.unlink(missing_ok=True)
                raise
            finally:
                body.close()
    emit_message(state, f"Pulled {result.available} of {result.total} bytes into {output}", **result.to_wire())


@app.command("push")
def push_package(
    ctx: typer.Context,
    tag: str = typer.Option(..., "--tag"),
    type_: str = typer.Option(..., "--type", help="manifest, config or layer."),
    digest: str = typer.Option(..., "--digest"),
    file: Path = typer.Option(..., "--file", "-f", exists=True, dir_okay=False, readable=True),
    force: str = typer.Option("", "--force", help="Override existing (BOOL)."),
    start: str = typer.Option("", "--start", help="Start of the layer chunk."),
    end: str = typer.Option("", "--end", help="End of the layer chunk."),
    total: str = typer.Option("", "--total", help="Total size of the layer."),
) -> None:
    """Upload a manifest, config or layer (chunk)."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_package_push_payload(tag, force, type_, digest, start, end, total, state.require_jwt())
        with state.http() as http, file.open("rb") as body:
            result = PackageClient(http).push(payload, body)
    emit_record(state, result, title="Pushed")


@app.command("status")
def push_status(
    ctx: typer.Context,
    tag: str = typer.Option(..., "--tag"),
    digest: str = typer.Option(..., "--digest"),
) -> None:
    """Check the push status of a layer."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_package_status_payload(tag, digest, state.require_jwt())
        with state.http() as http:
            result = PackageClient(http).status(payload)
    emit_record(state, result, title=f"Push status {digest}")


@app.command("remove")
def remove_package(ctx: typer.Context, tag: str = typer.Option(..., "--tag")) -> None:
    """Remove an image tag."""

    state = get_state(ctx)
    with reporting_errors():
        payload = build_package_remove_payload(tag, state.require_jwt())
        with state.http() as http:
            PackageClient(http).remove(payload)
    emit_message(state, f"Removed {tag}", tag=tag)
