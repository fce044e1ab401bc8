"""Modelos del servicio `metadata` (registros aspect asociados a una entidad)."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from core.domain.common import AtTime, NavT, WireModel
from core.domain.views import View


class ReadPayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1, description="ID del registro.")


class ListPayload(WireModel):
    jwt: str
    entity_id: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    aspect_path: str | None = None
    at_time: AtTime | None = None
    limit: int = Field(default=10, ge=1, le=50)
    filter: str | None = None
    order_by: str | None = None
    order_desc: bool = False
    page: str | None = None


class AddPayload(WireModel):
    jwt: str
    entity_id: str = Field(..., min_length=1, description="Entidad a la que se asocia el registro.")
    schema_: str = Field(..., min_length=1, alias="schema")
    aspect: Any = Field(..., description="Aspect (JSON) a registrar.")
    content_type: str = Field(default="application/json")
    policy_id: str | None = None


class UpdateOnePayload(WireModel):
    """Reemplaza el único registro `schema` de `entity_id`."""

    jwt: str
    entity_id: str = Field(..., min_length=1)
    schema_: str = Field(..., min_length=1, alias="schema")
    aspect: Any
    content_type: str = Field(default="application/json")
    policy_id: str | None = None


class UpdateRecordPayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1)
    entity_id: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    aspect: Any
    content_type: str = Field(default="application/json")
    policy_id: str | None = None


class RevokePayload(WireModel):
    jwt: str
    id: str = Field(..., min_length=1)


class MetadataRecordRT(WireModel):
    __views__: ClassVar[dict[str, View]] = {"default": View(required=("record_id", "entity", "schema_", "aspect"))}

    record_id: str | None = Field(default=None, alias="record-id")
    entity: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    aspect: Any = None
    valid_from: str | None = Field(default=None, alias="valid-from")
    valid_to: str | None = Field(default=None, alias="valid-to")
    asserter: str | None = None
    revoker: str | None = None


class MetadataListItemRT(WireModel):
    record_id: str | None = Field(default=None, alias="record-id")
    entity: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    aspect: Any = None
    aspect_context: str | None = Field(default=None, alias="aspect-context")


class MetadataListRT(WireModel):
    __views__: ClassVar[dict[str, View]] = {"default": View(required=("records", "links"))}

    records: list[MetadataListItemRT] | None = None
    entity_id: str | None = Field(default=None, alias="entity-id")
    schema_: str | None = Field(default=None, alias="schema")
    aspect_path: str | None = Field(default=None, alias="aspect-path")
    at_time: str | None = Field(default=None, alias="at-time")
    links: NavT | None = None


class AddMetaRT(WireModel):
    record_id: str = Field(..., alias="record-id")
