"""Proyección de resultados por vista.

Por qué:
- El API puede devolver un mismo tipo con distintos subconjuntos de campos
  (vista `default` vs `tiny`), indicado por el header `goa-view`.
- Cada tipo declara sus vistas en `__views__`: qué campos conserva y cuáles
  son obligatorios en esa vista. Todo lo demás queda en `None`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from core.domain.errors import InvalidViewError, ResponseValidationError

if TYPE_CHECKING:
    from core.domain.common import WireModel

DEFAULT_VIEW = "default"

M = TypeVar("M", bound="WireModel")


@dataclass(frozen=True)
class View:
    """Whitelist de campos (None = todos) y campos requeridos de una vista."""

    fields: tuple[str, ...] | None = None
    required: tuple[str, ...] = field(default_factory=tuple)


def views_of(model: type[WireModel]) -> dict[str, View]:
    return getattr(model, "__views__", None) or {DEFAULT_VIEW: View()}


def project(result: M, view: str | None = None, *, service: str = "", method: str = "") -> M:
    """Copia en un nuevo resultado solo los campos de la vista `view`."""

    name = view or DEFAULT_VIEW
    available = views_of(type(result))
    spec = available.get(name)
    if spec is None:
        raise InvalidViewError(
            service,
            method,
            f"view must be one of {sorted(available)} but got {name!r}",
        )
    if spec.fields is None:
        return result.model_copy(deep=True)
    copied = result.model_copy(deep=True)
    return type(result).model_validate({key: getattr(copied, key) for key in spec.fields})


def validate_view(result: WireModel, view: str | None = None, *, service: str = "", method: str = "") -> None:
    """Verifica que los campos requeridos por la vista estén presentes."""

    name = view or DEFAULT_VIEW
    spec = views_of(type(result)).get(name)
    if spec is None:
        raise InvalidViewError(service, method, f"unknown view {name!r}")
    missing = [key for key in spec.required if getattr(result, key) is None]
    if missing:
        raise ResponseValidationError(
            service,
            method,
            f"missing required field(s) for view {name!r}: {', '.join(missing)}",
        )
