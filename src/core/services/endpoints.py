"""Endpoints seguros por servicio.

Cada endpoint:
1. Construye el `JWTScheme` con los scopes que exige el método.
2. Llama al autorizador inyectado con el JWT del payload.
3. Reenvía al método del servicio y devuelve su resultado sin tocarlo.

Si la autorización falla, el servicio nunca se invoca.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

import structlog

from core.domain.errors import InvalidCredentialsError, ServiceError, UnauthorizedError
from core.domain.security import READ_SCOPE, WRITE_SCOPE, JWTScheme
from core.interfaces.auth import Auther
from core.interfaces.services import (
    ArtifactService,
    AspectService,
    MetadataService,
    PackageService,
    ServiceService,
)

log = structlog.get_logger()

Endpoint = Callable[..., Any]
Middleware = Callable[[Endpoint], Endpoint]

_READ = (READ_SCOPE,)
_WRITE = (WRITE_SCOPE,)

METHOD_SCOPES: dict[str, dict[str, tuple[str, ...]]] = {
    "artifact": {"list": _READ, "read": _READ, "upload": _WRITE},
    "aspect": {"read": _READ, "list": _READ, "create": _WRITE, "update": _WRITE, "retract": _WRITE},
    "metadata": {
        "read": _READ,
        "list": _READ,
        "add": _WRITE,
        "update_one": _WRITE,
        "update_record": _WRITE,
        "revoke": _WRITE,
    },
    "package": {"list": _READ, "pull": _READ, "push": _WRITE, "status": _READ, "remove": _WRITE},
    "service": {"list": _READ, "create_service": _WRITE, "read": _READ, "update": _WRITE, "delete": _WRITE},
}


class StaticScopeAuther:
    """Autorizador con un conjunto fijo de scopes concedidos.

    Útil para un servicio local o tests: no verifica la firma del token,
    solo que exista (y opcionalmente que esté en `tokens`) y que los scopes
    concedidos cubran los requeridos.
    """

    def __init__(self, granted_scopes: Iterable[str], *, tokens: Iterable[str] | None = None) -> None:
        self._granted = frozenset(granted_scopes)
        self._tokens = frozenset(tokens) if tokens is not None else None

    def jwt_auth(self, token: str, scheme: JWTScheme) -> None:
        if not token:
            raise UnauthorizedError()
        if self._tokens is not None and token not in self._tokens:
            raise InvalidCredentialsError()
        scheme.validate(self._granted)


def secure_endpoint(service_name: str, method_name: str, method: Endpoint, auther: Auther) -> Endpoint:
    """Envuelve `method` con la comprobación JWT de `METHOD_SCOPES`."""

    scheme = JWTScheme(required_scopes=METHOD_SCOPES[service_name][method_name])

    def endpoint(payload: Any, *args: Any) -> Any:
        try:
            auther.jwt_auth(payload.jwt, scheme)
        except ServiceError as exc:
            log.info(
                "authorization denied",
                service=service_name,
                method=method_name,
                error=exc.goa_name,
            )
            raise
        return method(payload, *args)

    endpoint.__name__ = method_name
    endpoint.__qualname__ = f"{service_name}.{method_name}"
    return endpoint


class Endpoints:
    """Endpoints de un servicio, accesibles como atributos (`eps.list(payload)`)."""

    def __init__(self, service_name: str, service: Any, auther: Auther) -> None:
        if service_name not in METHOD_SCOPES:
            raise ValueError(f"unknown service {service_name!r}")
        self.service_name = service_name
        self._endpoints: dict[str, Endpoint] = {
            name: secure_endpoint(service_name, name, getattr(service, name), auther)
            for name in METHOD_SCOPES[service_name]
        }

    def __getattr__(self, name: str) -> Endpoint:
        endpoints = self.__dict__.get("_endpoints", {})
        try:
            return endpoints[name]
        except KeyError:
            raise AttributeError(f"{self.service_name!r} has no endpoint {name!r}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._endpoints)

    def use(self, middleware: Middleware) -> None:
        """Aplica `middleware` a todos los endpoints (orden de registro = capa interna primero)."""

        self._endpoints = {name: middleware(ep) for name, ep in self._endpoints.items()}


def new_artifact_endpoints(service: ArtifactService, auther: Auther) -> Endpoints:
    return Endpoints("artifact", service, auther)


def new_aspect_endpoints(service: AspectService, auther: Auther) -> Endpoints:
    return Endpoints("aspect", service, auther)


def new_metadata_endpoints(service: MetadataService, auther: Auther) -> Endpoints:
    return Endpoints("metadata", service, auther)


def new_package_endpoints(service: PackageService, auther: Auther) -> Endpoints:
    return Endpoints("package", service, auther)


def new_service_endpoints(service: ServiceService, auther: Auther) -> Endpoints:
    return Endpoints("service", service, auther)
