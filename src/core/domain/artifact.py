"""Modelos del servicio `artifact` (Pydantic v2).

Nota:
- Los payloads usan nombres Python; los resultados mapean las claves del API
  (`mime-type`, `tus-offset`, ...) con alias.
- `tus_*` y `location` no vienen en el body: se rellenan desde headers TUS.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field

from core.domain.common import AtTime, NavT, RefT, SelfT, WireModel
from core.domain.views import View

ArtifactStatus = Literal["pending", "partial", "ready", "error", "unknown"]


class ListPayload(WireModel):
    """Parámetros de `artifact list` (y de `service list`, que comparte forma)."""

    jwt: str = Field(..., description="JWT usado para autenticación.")
    limit: int = Field(default=10, ge=1, le=50, description="Máximo de items por página.")
    page: str | None = Field(
        default=None,
        description="Token de página de un listado previo; si se da, se ignora todo salvo `limit`.",
    )
    filter: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    at_time: AtTime | None = Field(default=None, description="Estado de los recursos en ese instante.")


class ReadPayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1, description="ID del artifact.")


class UploadPayload(WireModel):
    """Headers de un upload (TUS incluido). Todos opcionales salvo el JWT."""

    jwt: str
    content_type: str | None = Field(default=None, description="Tipo del contenido subido.")
    content_encoding: str | None = None
    content_length: int | None = Field(default=None, ge=0)
    name: str | None = Field(default=None, description="Nombre legible; no sobrescribe otro con el mismo nombre.")
    collection: str | None = Field(default=None, description="Colección a la que se agrega el artifact.")
    policy: str | None = Field(default=None, description="Política de acceso del artifact.")
    x_content_type: str | None = Field(default=None, description="Tipo para la creación inicial vacía (TUS).")
    x_content_length: int | None = Field(default=None, ge=0)
    upload_length: int | None = Field(default=None, ge=0, description="Tamaño esperado (TUS).")
    tus_resumable: str | None = Field(default=None, description="Versión del protocolo TUS.")


class ArtifactListItem(WireModel):
    id: str | None = None
    name: str | None = None
    status: str | None = None
    size: int | None = None
    mime_type: str | None = Field(default=None, alias="mime-type")
    links: SelfT | None = None


class ArtifactListRT(WireModel):
    __views__: ClassVar[dict[str, View]] = {"default": View(required=("artifacts", "links"))}

    artifacts: list[ArtifactListItem] | None = None
    at_time: str | None = Field(default=None, alias="at-time")
    links: NavT | None = None


class ArtifactStatusRT(WireModel):
    """Estado de un artifact (read/upload)."""

    __views__: ClassVar[dict[str, View]] = {"default": View(required=("id", "status"))}

    id: str | None = None
    name: str | None = None
    status: ArtifactStatus | None = None
    mime_type: str | None = Field(default=None, alias="mime-type")
    size: int | None = None
    cache_of: str | None = Field(default=None, alias="cache-of")
    etag: str | None = None
    created_at: str | None = Field(default=None, alias="created-at")
    last_modified_at: str | None = Field(default=None, alias="last-modified-at")
    policy: RefT | None = None
    account: RefT | None = None
    data: SelfT | None = None
    links: SelfT | None = None
    location: str | None = None
    tus_resumable: str | None = Field(default=None, alias="tus-resumable")
    tus_offset: int | None = Field(default=None, alias="tus-offset")
