"""Cliente REST del servicio `package` (push/pull estilo Docker Registry v2).

Notas del protocolo:
- `push` sube un manifest, config o chunk de layer; el rango va en
  `start`/`end`/`total` y el body es el stream crudo.
- `pull` devuelve el body en streaming; los headers `Total` y `Available`
  indican el tamaño del layer y cuánto trae esta respuesta. El caller debe
  cerrar el body.
- Ningún endpoint declara 404: un 404 es una respuesta inválida.
"""

from __future__ import annotations

from typing import Iterator

import httpx

from adapters.rest.base import STANDARD_ERRORS, RestClient, query_params, with_errors
from core.domain.errors import (
    BadRequestError,
    RequestError,
    ResourceAlreadyCreatedError,
    ResponseValidationError,
    ServiceNotAvailableError,
)
from core.domain.package import (
    ListPayload,
    ListResult,
    PullPayload,
    PullResultT,
    PushPayload,
    PushResult,
    PushStatusT,
    RemovePayload,
    StatusPayload,
)
from core.interfaces.services import ByteStream

# En este servicio un 400 siempre es bad-request (sin header goa-error).
PACKAGE_ERRORS = with_errors(STANDARD_ERRORS, BadRequestError, ServiceNotAvailableError)
PUSH_ERRORS = with_errors(PACKAGE_ERRORS, ResourceAlreadyCreatedError)


def list_package_path() -> str:
    return "/1/pkgs/list"


def pull_package_path() -> str:
    return "/1/pkgs/pull"


def push_package_path() -> str:
    return "/1/pkgs/push"


def status_package_path() -> str:
    return "/1/pkgs/status"


def remove_package_path() -> str:
    return "/1/pkgs"


def _int_header(response: httpx.Response, name: str) -> int:
    raw = response.headers.get(name)
    if raw is None:
        raise ResponseValidationError("package", "pull", f"missing required header {name!r}")
    try:
        return int(raw)
    except ValueError as exc:
        raise ResponseValidationError("package", "pull", f"header {name!r} must be an integer, got {raw!r}") from exc


class PullBody:
    """Body en streaming de un pull.

    Los fallos de red a mitad de la descarga se relanzan como `RequestError`.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    def iter_bytes(self, chunk_size: int | None = None) -> Iterator[bytes]:
        try:
            yield from self._response.iter_bytes(chunk_size)
        except httpx.HTTPError as exc:
            raise RequestError("package", "pull", f"download interrupted: {exc}") from exc

    def close(self) -> None:
        self._response.close()


class PackageClient(RestClient):
    service_name = "package"

    def list(self, payload: ListPayload) -> ListResult:
        params = query_params(tag=payload.tag, page=payload.page, limit=payload.limit)
        response = self._send("list", "GET", list_package_path(), jwt=payload.jwt, params=params)
        return self._decode("list", response, ListResult, errors=PACKAGE_ERRORS)

    def pull(self, payload: PullPayload) -> tuple[PullResultT, PullBody]:
        """Devuelve los headers parseados y el body abierto (usar `iter_bytes()` y `close()`)."""

        params = query_params(ref=payload.ref, type=payload.type, offset=payload.offset)
        response = self._send("pull", "GET", pull_package_path(), jwt=payload.jwt, params=params, stream=True)
        if response.status_code != 200:
            self._raise_error("pull", response, PACKAGE_ERRORS)
        try:
            result = PullResultT(total=_int_header(response, "Total"), available=_int_header(response, "Available"))
        except ResponseValidationError:
            response.close()
            raise
        return result, PullBody(response)

    def push(self, payload: PushPayload, body: ByteStream) -> PushResult:
        params = query_params(
            tag=payload.tag,
            force=payload.force,
            type=payload.type,
            digest=payload.digest,
            total=payload.total,
            start=payload.start,
            end=payload.end,
        )
        response = self._send(
            "push",
            "POST",
            push_package_path(),
            jwt=payload.jwt,
            params=params,
            headers={"Content-Type": "application/octet-stream"},
            content=body,
        )
        return self._decode("push", response, PushResult, errors=PUSH_ERRORS, expect=201)

    def status(self, payload: StatusPayload) -> PushStatusT:
        params = query_params(tag=payload.tag, digest=payload.digest)
        response = self._send("status", "GET", status_package_path(), jwt=payload.jwt, params=params)
        return self._decode("status", response, PushStatusT, errors=PACKAGE_ERRORS)

    def remove(self, payload: RemovePayload) -> None:
        response = self._send(
            "remove",
            "DELETE",
            remove_package_path(),
            jwt=payload.jwt,
            params=query_params(tag=payload.tag),
        )
        self._expect_empty("remove", response, errors=PACKAGE_ERRORS)
