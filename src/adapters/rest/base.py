"""Base común de los clientes REST.

Por qué una base:
- Todos los endpoints repiten el mismo patrón: header `Authorization`,
  envío síncrono, switch por status code y body de error tipado.
- Las tablas `ErrorMap` declaran, por endpoint, qué status mapea a qué error.
  Un 400 puede depender además del header `goa-error`.
"""

from __future__ import annotations

import time
from typing import Any, ClassVar, Mapping, NoReturn, TypeVar, Union
from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from core.domain.common import WireModel, authorization_header
from core.domain.errors import (
    BadRequestError,
    DecodingError,
    InvalidCredentialsError,
    InvalidParameterError,
    InvalidResponseError,
    InvalidScopesError,
    MethodNotImplementedError,
    RequestError,
    ResourceNotFoundError,
    ResponseValidationError,
    ServiceError,
    UnauthorizedError,
)
from core.domain.views import project, validate_view

log = structlog.get_logger()

M = TypeVar("M", bound=WireModel)

ErrorSpec = Union[type[ServiceError], Mapping[str, type[ServiceError]]]
ErrorMap = Mapping[int, ErrorSpec]

STANDARD_ERRORS: ErrorMap = {
    400: {"bad-request": BadRequestError, "invalid-credential": InvalidCredentialsError},
    401: UnauthorizedError,
    403: InvalidScopesError,
    422: InvalidParameterError,
    501: MethodNotImplementedError,
}


def with_errors(base: ErrorMap, *extra: type[ServiceError]) -> ErrorMap:
    """Copia `base` agregando errores indexados por su `status_code`."""

    merged = dict(base)
    for error in extra:
        merged[error.status_code] = error
    return merged


NOT_FOUND_ERRORS = with_errors(STANDARD_ERRORS, ResourceNotFoundError)


def query_params(**values: Any) -> dict[str, str]:
    """Query string con las claves del API; omite `None` y serializa bool como `true`/`false`."""

    params: dict[str, str] = {}
    for key, value in values.items():
        if value is None:
            continue
        wire_key = key.replace("_", "-")
        if isinstance(value, bool):
            params[wire_key] = "true" if value else "false"
        else:
            params[wire_key] = str(value)
    return params


def path_segment(value: str) -> str:
    """Escapa un ID para usarlo como un único segmento del path (`?`, `#`, `/` incluidos)."""

    return quote(value, safe="")


def set_header(headers: dict[str, str], name: str, value: Any) -> None:
    if value is not None:
        headers[name] = str(value)


class RestClient:
    """Cliente de un servicio: envía requests y decodifica respuestas por status."""

    service_name: ClassVar[str] = ""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def _send(
        self,
        method_name: str,
        verb: str,
        path: str,
        *,
        jwt: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        content: Any = None,
        stream: bool = False,
    ) -> httpx.Response:
        request_headers = dict(headers or {})
        request_headers["Authorization"] = authorization_header(jwt)
        request = self._client.build_request(
            verb,
            path,
            params=params or None,
            headers=request_headers,
            json=json,
            content=content,
        )
        log.debug(
            "sending request",
            service=self.service_name,
            method=method_name,
            verb=verb,
            url=str(request.url),
        )
        started = time.perf_counter()
        try:
            response = self._client.send(request, stream=stream)
        except httpx.HTTPError as exc:
            raise RequestError(self.service_name, method_name, str(exc)) from exc
        log.debug(
            "received response",
            service=self.service_name,
            method=method_name,
            status=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response

    def _json(self, method_name: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise DecodingError(self.service_name, method_name, f"invalid JSON body: {exc}") from exc

    def _raise_error(self, method_name: str, response: httpx.Response, errors: ErrorMap) -> NoReturn:
        response.read()
        response.close()
        status = response.status_code
        spec = errors.get(status)
        if isinstance(spec, Mapping):
            spec = spec.get(response.headers.get("goa-error", ""))
        if spec is None:
            raise InvalidResponseError(self.service_name, method_name, status, response.text)
        if not spec.has_body:
            raise spec()
        body = self._json(method_name, response)
        try:
            error = spec.from_body(body)
        except ValueError as exc:
            raise ResponseValidationError(self.service_name, method_name, str(exc)) from exc
        raise error

    def _decode(
        self,
        method_name: str,
        response: httpx.Response,
        model: type[M],
        *,
        errors: ErrorMap,
        expect: int = 200,
        extra: Mapping[str, Any] | None = None,
    ) -> M:
        """Decodifica el body de éxito en `model` y lo proyecta a la vista del header `goa-view`."""

        if response.status_code != expect:
            self._raise_error(method_name, response, errors)
        data = self._json(method_name, response)
        if extra:
            if not isinstance(data, dict):
                raise ResponseValidationError(self.service_name, method_name, "expected JSON object body")
            data = {**data, **extra}
        try:
            result = model.model_validate(data)
        except ValidationError as exc:
            raise ResponseValidationError(self.service_name, method_name, str(exc)) from exc
        view = response.headers.get("goa-view") or None
        viewed = project(result, view, service=self.service_name, method=method_name)
        validate_view(viewed, view, service=self.service_name, method=method_name)
        return viewed

    def _expect_empty(
        self,
        method_name: str,
        response: httpx.Response,
        *,
        errors: ErrorMap,
        expect: int = 204,
    ) -> None:
        if response.status_code != expect:
            self._raise_error(method_name, response, errors)
