"""Cliente REST del servicio `aspect`."""

from __future__ import annotations

from adapters.rest.base import (
    NOT_FOUND_ERRORS,
    STANDARD_ERRORS,
    RestClient,
    path_segment,
    query_params,
    with_errors,
)
from core.domain.aspect import (
    AspectIDRT,
    AspectListRT,
    AspectRT,
    CreatePayload,
    ListPayload,
    ReadPayload,
    RetractPayload,
    UpdatePayload,
)
from core.domain.errors import UnsupportedContentTypeError

LIST_ERRORS = with_errors(STANDARD_ERRORS, UnsupportedContentTypeError)


def aspect_path() -> str:
    return "/1/aspect"


def aspect_id_path(id: str) -> str:
    return f"/1/aspect/{path_segment(id)}"


class AspectClient(RestClient):
    service_name = "aspect"

    def read(self, payload: ReadPayload) -> AspectRT:
        response = self._send("read", "GET", aspect_id_path(payload.id), jwt=payload.jwt)
        return self._decode("read", response, AspectRT, errors=NOT_FOUND_ERRORS)

    def list(self, payload: ListPayload) -> AspectListRT:
        params = query_params(
            entity=payload.entity,
            schema=payload.schema_,
            at_time=payload.at_time,
            limit=payload.limit,
            filter=payload.filter,
            order_by=payload.order_by,
            order_desc=payload.order_desc,
            page=payload.page,
        )
        body = {"aspect-path": payload.aspect_path} if payload.aspect_path is not None else None
        response = self._send("list", "GET", aspect_path(), jwt=payload.jwt, params=params, json=body)
        return self._decode("list", response, AspectListRT, errors=LIST_ERRORS)

    def create(self, payload: CreatePayload) -> AspectIDRT:
        params = query_params(entity=payload.entity, schema=payload.schema_, policy=payload.policy)
        response = self._send(
            "create",
            "POST",
            aspect_path(),
            jwt=payload.jwt,
            params=params,
            headers={"Content-Type": payload.content_type},
            json=payload.content,
        )
        return self._decode("create", response, AspectIDRT, errors=STANDARD_ERRORS, expect=201)

    def update(self, payload: UpdatePayload) -> AspectIDRT:
        params = query_params(entity=payload.entity, schema=payload.schema_)
        response = self._send(
            "update",
            "PUT",
            aspect_id_path(payload.id),
            jwt=payload.jwt,
            params=params,
            headers={"Content-Type": payload.content_type},
            json=payload.content,
        )
        return self._decode("update", response, AspectIDRT, errors=NOT_FOUND_ERRORS)

    def retract(self, payload: RetractPayload) -> None:
        response = self._send("retract", "DELETE", aspect_id_path(payload.id), jwt=payload.jwt)
        self._expect_empty("retract", response, errors=NOT_FOUND_ERRORS)
