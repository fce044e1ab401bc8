"""Esquema de seguridad JWT del API.

Todas las operaciones usan el esquema `jwt` con dos scopes posibles:
lectura (`consumer:read`) y escritura (`consumer:write`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from core.domain.errors import InvalidScopesError

READ_SCOPE = "consumer:read"
WRITE_SCOPE = "consumer:write"
SCOPES: tuple[str, ...] = (READ_SCOPE, WRITE_SCOPE)


@dataclass(frozen=True)
class JWTScheme:
    """Esquema JWT que el endpoint pasa al autorizador."""

    name: str = "jwt"
    scopes: tuple[str, ...] = SCOPES
    required_scopes: tuple[str, ...] = field(default_factory=tuple)

    def validate(self, granted: Iterable[str]) -> None:
        """Lanza `InvalidScopesError` si falta algún scope requerido."""

        have = set(granted)
        missing = [scope for scope in self.required_scopes if scope not in have]
        if missing:
            raise InvalidScopesError(f"missing scopes: {', '.join(missing)}")
