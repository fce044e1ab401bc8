"""Modelos del servicio `package` (imágenes docker de servicios).

El flujo push/pull/status sigue la semántica del Docker Registry API v2:
manifest, config o layer, con chunks por rango de bytes (`start`/`end`/`total`).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator

from core.domain.common import LinkT, WireModel

PackageObjectType = Literal["manifest", "config", "layer"]


class ListPayload(WireModel):
    jwt: str
    tag: str | None = Field(default=None, description="Tag de la imagen docker.")
    limit: int | None = Field(default=None, ge=1, description="Máximo de repositorios (cada uno con varios tags).")
    page: str | None = None


class ListResult(WireModel):
    items: list[str] = Field(..., description="Tags de imágenes.")
    links: list[LinkT] = Field(..., description="Links de navegación.")


class PullPayload(WireModel):
    jwt: str
    ref: str = Field(..., min_length=1, description="Tag de la imagen o digest del layer.")
    type: PackageObjectType
    offset: int | None = Field(default=None, ge=0, description="Offset del chunk del layer.")


class PullResultT(WireModel):
    """Headers de un pull: tamaño total del layer y bytes disponibles en esta respuesta."""

    total: int
    available: int


class PushPayload(WireModel):
    jwt: str
    tag: str = Field(..., min_length=1)
    force: bool | None = Field(default=None, description="Sobrescribir si ya existe.")
    type: PackageObjectType
    digest: str = Field(..., min_length=1)
    start: int | None = Field(default=None, ge=0, description="Inicio del chunk.")
    end: int | None = Field(default=None, ge=0, description="Fin del chunk.")
    total: int | None = Field(default=None, ge=0, description="Tamaño total del layer.")

    @model_validator(mode="after")
    def _check_range(self) -> PushPayload:
        if self.start is not None and self.end is not None and self.end < self.start:
            raise ValueError("end must not be smaller than start")
        if self.total is not None and self.end is not None and self.end > self.total:
            raise ValueError("end must not exceed total")
        return self


class PushResult(WireModel):
    digest: str = Field(..., description="Digest o tag subido.")
    exists: bool = Field(..., description="El layer ya existía.")


class StatusPayload(WireModel):
    jwt: str
    tag: str = Field(..., min_length=1)
    digest: str = Field(..., min_length=1)


class PushStatusT(WireModel):
    status: str
    message: str


class RemovePayload(WireModel):
    jwt: str
    tag: str = Field(..., min_length=1)
