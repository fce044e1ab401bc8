"""Modelos del servicio `aspect`."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from core.domain.common import AtTime, LinkT, WireModel
from core.domain.views import View


class ReadPayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1, description="ID del aspect.")


class ListPayload(WireModel):
    jwt: str
    entity: str | None = Field(default=None, description="Entidad a la que pertenecen los aspects.")
    schema_: str | None = Field(default=None, alias="schema", description="Schema (prefijo) de los aspects.")
    aspect_path: str | None = Field(
        default=None,
        description="Path dentro del contenido a devolver en vez del aspect completo.",
    )
    at_time: AtTime | None = None
    limit: int = Field(default=10, ge=1, le=50)
    filter: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    page: str | None = None


class CreatePayload(WireModel):
    jwt: str
    entity: str = Field(..., min_length=1)
    schema_: str = Field(..., min_length=1, alias="schema")
    content: Any = Field(..., description="Contenido del aspect (JSON arbitrario).")
    content_type: str = Field(default="application/json")
    policy: str | None = None


class UpdatePayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1)
    entity: str = Field(..., min_length=1)
    schema_: str = Field(..., min_length=1, alias="schema")
    content: Any
    content_type: str = Field(default="application/json")


class RetractPayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1)


class AspectRT(WireModel):
    __views__: ClassVar[dict[str, View]] = {
        "default": View(required=("id", "entity", "schema_", "content", "content_type", "valid_from", "asserter")),
    }

    id: str | None = None
    entity: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    content: Any = None
    content_type: str | None = Field(default=None, alias="content-type")
    valid_from: str | None = Field(default=None, alias="valid-from")
    valid_to: str | None = Field(default=None, alias="valid-to")
    asserter: str | None = None
    retracter: str | None = None
    links: list[LinkT] | None = None


class AspectListItemRT(WireModel):
    id: str
    entity: str
    schema_: str = Field(..., alias="schema")
    content: Any = None
    content_type: str | None = Field(default=None, alias="content-type")


class AspectListRT(WireModel):
    __views__: ClassVar[dict[str, View]] = {"default": View(required=("items", "at_time", "links"))}

    items: list[AspectListItemRT] | None = None
    entity: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    aspect_path: str | None = Field(default=None, alias="aspect-path")
    at_time: str | None = Field(default=None, alias="at-time")
    links: list[LinkT] | None = None


class AspectIDRT(WireModel):
    id: str = Field(..., description="ID del aspect creado/actualizado.")
