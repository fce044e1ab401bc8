"""Tipos de wire compartidos por todos los servicios.

Por qué un módulo común:
- `SelfT`, `NavT`, `RefT`, `LinkT` se repiten en cada respuesta del API.
- Las claves JSON usan kebab-case (`mime-type`, `at-time`); los modelos las
  mapean con alias y exponen nombres Python en snake_case.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime
from functools import partial
from typing import Annotated, Any

from pydantic import AfterValidator, AnyUrl, BaseModel, Field, TypeAdapter, ValidationError
from pydantic.config import ConfigDict

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


class WireModel(BaseModel):
    """Base de todos los DTOs: alias kebab-case y claves desconocidas ignoradas."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Serializa con las claves del API y sin campos vacíos."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DescribedByT(WireModel):
    href: str | None = Field(default=None, description="URL del documento que describe el recurso.")
    type: str | None = Field(default=None, description="Mime type del documento.")


class SelfT(WireModel):
    self_: str | None = Field(default=None, alias="self", description="URL canónica del recurso.")
    described_by: DescribedByT | None = Field(default=None, alias="describedBy")


class NavT(WireModel):
    """Links de navegación de un listado paginado."""

    self_: str | None = Field(default=None, alias="self")
    first: str | None = None
    next: str | None = None


class RefT(WireModel):
    id: str | None = None
    links: SelfT | None = None


class LinkT(WireModel):
    rel: str = Field(..., description="Tipo de relación.")
    type: str = Field(..., description="Mime type.")
    href: str = Field(..., description="Web link.")


def authorization_header(jwt: str) -> str:
    """Valor del header `Authorization` para un token.

    Un token sin espacios se envía como `Bearer <jwt>`; si ya trae esquema
    (p.ej. `Bearer abc` o `Basic xyz`) se envía tal cual.
    """

    if " " not in jwt:
        return "Bearer " + jwt
    return jwt


_DATE_TIME = TypeAdapter(datetime)
_URI = TypeAdapter(AnyUrl)
_UUID = TypeAdapter(uuid.UUID)


def validate_date_time(name: str, value: str) -> str:
    """RFC 3339 estricto; pydantic aceptaría también timestamps y fechas sin hora."""

    if not _RFC3339.match(value):
        raise ValueError(f"{name} must be formatted as a date-time but got value {value!r}")
    try:
        _DATE_TIME.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"{name} must be formatted as a date-time but got value {value!r}") from exc
    return value


def validate_uri(name: str, value: str) -> str:
    try:
        _URI.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"{name} must be formatted as a uri but got value {value!r}") from exc
    return value


def validate_uuid(name: str, value: str) -> str:
    try:
        _UUID.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"{name} must be formatted as a uuid but got value {value!r}") from exc
    return value


# Tipos anotados para los campos con formato del API.
AtTime = Annotated[str, AfterValidator(partial(validate_date_time, "at-time"))]
ReferenceUri = Annotated[str, AfterValidator(partial(validate_uri, "uri"))]
BannerUri = Annotated[str, AfterValidator(partial(validate_uri, "banner"))]
