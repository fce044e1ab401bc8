"""Cliente REST del servicio `artifact`.

Upload sigue el convenio TUS: los headers `Upload-Length`/`Tus-Resumable`
viajan en la petición, y la respuesta 201 devuelve `Location`,
`Tus-Resumable` y `Upload-Offset`, que se fusionan en el resultado.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.rest.base import (
    NOT_FOUND_ERRORS,
    STANDARD_ERRORS,
    RestClient,
    path_segment,
    query_params,
    set_header,
)
from core.domain.artifact import (
    ArtifactListRT,
    ArtifactStatusRT,
    ListPayload,
    ReadPayload,
    UploadPayload,
)
from core.domain.errors import ResponseValidationError
from core.interfaces.services import ByteStream


def list_artifact_path() -> str:
    return "/1/artifacts"


def upload_artifact_path() -> str:
    return "/1/artifacts"


def read_artifact_path(id: str) -> str:
    return f"/1/artifacts/{path_segment(id)}"


def upload_headers(payload: UploadPayload) -> dict[str, str]:
    headers: dict[str, str] = {}
    set_header(headers, "Content-Type", payload.content_type)
    set_header(headers, "Content-Encoding", payload.content_encoding)
    set_header(headers, "Content-Length", payload.content_length)
    set_header(headers, "X-Name", payload.name)
    set_header(headers, "X-Collection", payload.collection)
    set_header(headers, "X-Policy", payload.policy)
    set_header(headers, "X-Content-Type", payload.x_content_type)
    set_header(headers, "X-Content-Length", payload.x_content_length)
    set_header(headers, "Upload-Length", payload.upload_length)
    set_header(headers, "Tus-Resumable", payload.tus_resumable)
    return headers


def tus_response_fields(response: httpx.Response) -> dict[str, Any]:
    """Campos TUS del resultado tomados de los headers de la respuesta 201."""

    fields: dict[str, Any] = {}
    location = response.headers.get("Location")
    if location:
        fields["location"] = location
    resumable = response.headers.get("Tus-Resumable")
    if resumable:
        fields["tus-resumable"] = resumable
    offset = response.headers.get("Upload-Offset")
    if offset:
        try:
            fields["tus-offset"] = int(offset)
        except ValueError as exc:
            raise ResponseValidationError(
                "artifact", "upload", f"invalid value for tusOffset, must be INT but got {offset!r}"
            ) from exc
    return fields


class ArtifactClient(RestClient):
    service_name = "artifact"

    def list(self, payload: ListPayload) -> ArtifactListRT:
        params = query_params(
            limit=payload.limit,
            page=payload.page,
            filter=payload.filter,
            order_by=payload.order_by,
            order_desc=payload.order_desc,
            at_time=payload.at_time,
        )
        response = self._send("list", "GET", list_artifact_path(), jwt=payload.jwt, params=params)
        return self._decode("list", response, ArtifactListRT, errors=STANDARD_ERRORS)

    def read(self, payload: ReadPayload) -> ArtifactStatusRT:
        response = self._send("read", "GET", read_artifact_path(payload.id), jwt=payload.jwt)
        return self._decode("read", response, ArtifactStatusRT, errors=NOT_FOUND_ERRORS)

    def upload(self, payload: UploadPayload, body: ByteStream) -> ArtifactStatusRT:
        response = self._send(
            "upload",
            "POST",
            upload_artifact_path(),
            jwt=payload.jwt,
            headers=upload_headers(payload),
            content=body,
        )
        if response.status_code != 201:
            self._raise_error("upload", response, STANDARD_ERRORS)
        return self._decode(
            "upload",
            response,
            ArtifactStatusRT,
            errors=STANDARD_ERRORS,
            expect=201,
            extra=tus_response_fields(response),
        )
