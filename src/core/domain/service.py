"""Modelos del servicio `service` (descripciones de servicios ejecutables).

Por qué tantos submodelos:
- `ServiceDescriptionT` es el body de create/update y anida workflow,
  parámetros y referencias; validarlo aquí evita round trips con 400/422.
- `ServiceStatusRT` tiene dos vistas: `default` (todo) y `tiny` (name + links).
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from core.domain.artifact import ListPayload as ArtifactListPayload
from core.domain.common import BannerUri, NavT, RefT, ReferenceUri, SelfT, WireModel
from core.domain.views import View


class ParameterT(WireModel):
    name: str | None = None
    value: str | None = None


class ReferenceT(WireModel):
    title: str | None = None
    uri: ReferenceUri | None = None


class ResourceMemoryT(WireModel):
    """Request/limit de un recurso (memoria, CPU, disco efímero)."""

    request: str | None = Field(default=None, description="Mínimo solicitado.")
    limit: str | None = Field(default=None, description="Máximo permitido.")


class BasicWorkflowOptsT(WireModel):
    image: str = Field(..., description="Imagen de contenedor.")
    command: list[str] = Field(..., description="Comando a ejecutar.")
    memory: ResourceMemoryT | None = None
    cpu: ResourceMemoryT | None = None
    ephemeral_storage: ResourceMemoryT | None = Field(default=None, alias="ephemeral-storage")


class WorkflowT(WireModel):
    type: str | None = Field(default=None, description="Tipo de workflow (basic, argo, ...).")
    basic: BasicWorkflowOptsT | None = None
    argo: Any = None
    opts: Any = None


class ParameterOptT(WireModel):
    value: str | None = None
    description: str | None = None


class ParameterDefT(WireModel):
    name: str
    label: str | None = None
    type: str
    description: str | None = None
    unit: str | None = None
    constant: bool | None = None
    optional: bool | None = None
    default: str | None = None
    options: list[ParameterOptT] | None = None
    unary: bool | None = None


class ServiceDescriptionT(WireModel):
    provider_ref: str | None = Field(default=None, alias="provider-ref")
    provider_id: str | None = Field(default=None, alias="provider-id")
    description: str
    metadata: list[ParameterT] | None = None
    references: list[ReferenceT] | None = None
    banner: BannerUri | None = None
    workflow: WorkflowT
    policy_id: str | None = Field(default=None, alias="policy-id")
    name: str
    tags: list[str] | None = None
    parameters: list[ParameterDefT]


ListPayload = ArtifactListPayload


class CreateServicePayload(WireModel):
    jwt: str
    services: ServiceDescriptionT


class ReadPayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1)


class UpdatePayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1)
    force_create: bool | None = Field(default=None, description="Crear el servicio si no existe.")
    services: ServiceDescriptionT


class DeletePayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1)


class ServiceListItem(WireModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    provider: RefT | None = None
    links: SelfT | None = None


class ServiceListRT(WireModel):
    __views__: ClassVar[dict[str, View]] = {"default": View(required=("services", "links"))}

    services: list[ServiceListItem] | None = None
    at_time: str | None = Field(default=None, alias="at-time")
    links: NavT | None = None


class ServiceStatusRT(WireModel):
    __views__: ClassVar[dict[str, View]] = {
        "default": View(required=("id", "links")),
        "tiny": View(fields=("name", "links"), required=("links",)),
    }

    id: str | None = None
    provider_ref: str | None = Field(default=None, alias="provider-ref")
    description: str | None = None
    status: str | None = None
    metadata: list[ParameterT] | None = None
    provider: RefT | None = None
    account: RefT | None = None
    links: SelfT | None = None
    name: str | None = None
    tags: list[str] | None = None
    parameters: list[ParameterDefT] | None = None


EXAMPLE_SERVICE_DESCRIPTION: dict[str, Any] = {
    "name": "Fire risk for Lot2",
    "description": "This service calculates fire risk for a given area.",
    "provider-ref": "service_foo",
    "banner": "http://example.com/banner.png",
    "tags": ["tag1", "tag2"],
    "metadata": [{"name": "Location", "value": "Canberra"}],
    "references": [{"title": "Documentation", "uri": "http://example.com/doc"}],
    "workflow": {
        "type": "basic",
        "basic": {
            "image": "alpine",
            "command": ["/bin/sh", "-c", "echo $PATH"],
            "cpu": {"request": "10m", "limit": "100m"},
            "memory": {"request": "10Mi", "limit": "100Mi"},
        },
    },
    "parameters": [
        {"name": "region", "label": "Region", "type": "string", "description": "Region to analyse"},
        {"name": "threshold", "type": "float", "default": "0.5", "optional": True},
    ],
}
