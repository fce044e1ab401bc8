"""Errores tipados del API.

Por qué una jerarquía propia:
- Cada endpoint declara un conjunto cerrado de errores, cada uno ligado a un
  status HTTP y a una forma de body. La CLI y los callers hacen `except` por tipo.
- Separa errores del servicio (respuesta válida con status de error) de fallos
  de transporte (conexión, JSON roto, status inesperado).
"""

from __future__ import annotations

from typing import Any, ClassVar

from core.domain.common import validate_uuid


class IvcapError(Exception):
    """Raíz de todos los errores del cliente."""


class ServiceError(IvcapError):
    """Error declarado por el API (status + nombre goa + body opcional).

    Subclases fijan `goa_name`, `status_code`, `default_message` y si la
    respuesta trae body (`has_body`).
    """

    goa_name: ClassVar[str] = "error"
    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "Request failed."
    has_body: ClassVar[bool] = True
    required_fields: ClassVar[tuple[str, ...]] = ("message",)
    uuid_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        message: str | None = None,
        *,
        id: str | None = None,
        name: str | None = None,
        value: str | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.id = id
        self.name = name
        self.value = value
        super().__init__(self.message)

    @classmethod
    def from_body(cls, body: Any) -> ServiceError:
        """Construye el error desde el body JSON ya decodificado.

        Lanza `ValueError` si falta un campo requerido o el tipo no es el esperado.
        """

        if not cls.has_body:
            return cls()
        if not isinstance(body, dict):
            raise ValueError(f"{cls.goa_name}: expected JSON object body")
        missing = [f for f in cls.required_fields if body.get(f) is None]
        if missing:
            raise ValueError(f"{cls.goa_name}: missing required field(s) {', '.join(missing)}")
        kwargs: dict[str, str | None] = {}
        for key in ("message", "id", "name", "value"):
            raw = body.get(key)
            if raw is not None and not isinstance(raw, str):
                raise ValueError(f"{cls.goa_name}: field {key!r} must be a string")
            if raw is not None and key in cls.uuid_fields:
                validate_uuid(f"body.{key}", raw)
            kwargs[key] = raw
        message = kwargs.pop("message")
        return cls(message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"error": self.goa_name, "status": self.status_code, "message": self.message}
        for key in ("id", "name", "value"):
            val = getattr(self, key)
            if val is not None:
                data[key] = val
        return data


class BadRequestError(ServiceError):
    goa_name = "bad-request"
    status_code = 400
    default_message = "Bad arguments supplied."


class InvalidCredentialsError(ServiceError):
    goa_name = "invalid-credential"
    status_code = 400
    default_message = "Provided credential is not valid."
    has_body = False
    required_fields = ()


class InvalidParameterError(ServiceError):
    """El parámetro `name` tiene un valor inválido (`value`)."""

    goa_name = "invalid-parameter"
    status_code = 422
    default_message = "Invalid parameter value."
    required_fields = ("message", "name")


class InvalidScopesError(ServiceError):
    goa_name = "invalid-scopes"
    status_code = 403
    default_message = "Caller not authorized to access required scope."
    uuid_fields = ("id",)


class MethodNotImplementedError(ServiceError):
    goa_name = "not-implemented"
    status_code = 501
    default_message = "Method is not yet implemented."


class ResourceNotFoundError(ServiceError):
    goa_name = "not-found"
    status_code = 404
    default_message = "Resource not found."
    required_fields = ("id", "message")


class UnauthorizedError(ServiceError):
    goa_name = "not-authorized"
    status_code = 401
    default_message = "Unauthorized access to resource"
    has_body = False
    required_fields = ()


class ServiceNotAvailableError(ServiceError):
    goa_name = "not-available"
    status_code = 503
    default_message = "Service necessary to fulfil the request is currently not available."
    has_body = False
    required_fields = ()


class ResourceAlreadyCreatedError(ServiceError):
    goa_name = "already-created"
    status_code = 409
    default_message = "Resource already exists."
    required_fields = ("id", "message")


class UnsupportedContentTypeError(ServiceError):
    goa_name = "unsupported-content-type"
    status_code = 415
    default_message = "Unsupported content type."


class TransportError(IvcapError):
    """Fallo al hablar con el API fuera del contrato de errores declarado."""

    def __init__(self, service: str, method: str, detail: str) -> None:
        self.service = service
        self.method = method
        self.detail = detail
        super().__init__(f"{service}.{method}: {detail}")


class RequestError(TransportError):
    """No se pudo enviar la petición (DNS, conexión, timeout)."""


class DecodingError(TransportError):
    """El body no es JSON decodificable."""


class ResponseValidationError(TransportError):
    """Body o headers decodificados pero inválidos (campos requeridos, formato)."""


class InvalidViewError(TransportError):
    """Nombre de vista desconocido para el tipo de resultado."""


class InvalidResponseError(TransportError):
    """Status (o header `goa-error`) que el endpoint no declara."""

    def __init__(self, service: str, method: str, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(service, method, f"invalid response status {status_code}: {body}")


class InvalidPayloadError(IvcapError, ValueError):
    """Flags de CLI que no se pueden convertir al payload tipado."""
