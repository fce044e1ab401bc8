"""Contrato del autorizador JWT que usan los endpoints."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.security import JWTScheme


@runtime_checkable
class Auther(Protocol):
    """Implementa la autorización para el esquema JWT.

    Reglas de diseño:
    - Devuelve `None` si el token es válido para `scheme.required_scopes`.
    - Para denegar lanza un `ServiceError` (`UnauthorizedError`, `InvalidScopesError`, ...).
    """

    def jwt_auth(self, token: str, scheme: JWTScheme) -> None:
        ...
