"""Cliente REST del servicio `metadata`."""

from __future__ import annotations

from adapters.rest.base import NOT_FOUND_ERRORS, STANDARD_ERRORS, RestClient, path_segment, query_params
from core.domain.metadata import (
    AddMetaRT,
    AddPayload,
    ListPayload,
    MetadataListRT,
    MetadataRecordRT,
    ReadPayload,
    RevokePayload,
    UpdateOnePayload,
    UpdateRecordPayload,
)


def metadata_path() -> str:
    return "/1/metadata"


def metadata_id_path(id: str) -> str:
    return f"/1/metadata/{path_segment(id)}"


class MetadataClient(RestClient):
    service_name = "metadata"

    def read(self, payload: ReadPayload) -> MetadataRecordRT:
        response = self._send("read", "GET", metadata_id_path(payload.id), jwt=payload.jwt)
        return self._decode("read", response, MetadataRecordRT, errors=NOT_FOUND_ERRORS)

    def list(self, payload: ListPayload) -> MetadataListRT:
        params = query_params(
            entity_id=payload.entity_id,
            schema=payload.schema_,
            aspect_path=payload.aspect_path,
            at_time=payload.at_time,
            limit=payload.limit,
            filter=payload.filter,
            order_by=payload.order_by,
            order_desc=payload.order_desc,
            page=payload.page,
        )
        response = self._send("list", "GET", metadata_path(), jwt=payload.jwt, params=params)
        return self._decode("list", response, MetadataListRT, errors=STANDARD_ERRORS)

    def add(self, payload: AddPayload) -> AddMetaRT:
        params = query_params(entity_id=payload.entity_id, schema=payload.schema_, policy_id=payload.policy_id)
        response = self._send(
            "add",
            "POST",
            metadata_path(),
            jwt=payload.jwt,
            params=params,
            headers={"Content-Type": payload.content_type},
            json=payload.aspect,
        )
        return self._decode("add", response, AddMetaRT, errors=STANDARD_ERRORS)

    def update_one(self, payload: UpdateOnePayload) -> AddMetaRT:
        params = query_params(entity_id=payload.entity_id, schema=payload.schema_, policy_id=payload.policy_id)
        response = self._send(
            "update_one",
            "PUT",
            metadata_path(),
            jwt=payload.jwt,
            params=params,
            headers={"Content-Type": payload.content_type},
            json=payload.aspect,
        )
        return self._decode("update_one", response, AddMetaRT, errors=STANDARD_ERRORS)

    def update_record(self, payload: UpdateRecordPayload) -> AddMetaRT:
        params = query_params(entity_id=payload.entity_id, schema=payload.schema_, policy_id=payload.policy_id)
        response = self._send(
            "update_record",
            "PUT",
            metadata_id_path(payload.id),
            jwt=payload.jwt,
            params=params,
            headers={"Content-Type": payload.content_type},
            json=payload.aspect,
        )
        return self._decode("update_record", response, AddMetaRT, errors=NOT_FOUND_ERRORS)

    def revoke(self, payload: RevokePayload) -> None:
        response = self._send("revoke", "DELETE", metadata_id_path(payload.id), jwt=payload.jwt)
        self._expect_empty("revoke", response, errors=NOT_FOUND_ERRORS)
