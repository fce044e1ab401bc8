"""Cliente REST del servicio `service`.

create/read/update devuelven `ServiceStatusRT` proyectado a la vista que
indique el header `goa-view` (`default` o `tiny`).
"""

from __future__ import annotations

from adapters.rest.base import NOT_FOUND_ERRORS, STANDARD_ERRORS, RestClient, path_segment, query_params
from core.domain.service import (
    CreateServicePayload,
    DeletePayload,
    ListPayload,
    ReadPayload,
    ServiceListRT,
    ServiceStatusRT,
    UpdatePayload,
)


def list_service_path() -> str:
    return "/1/services"


def create_service_service_path() -> str:
    return "/1/services"


def service_id_path(id: str) -> str:
    return f"/1/services/{path_segment(id)}"


class ServiceClient(RestClient):
    service_name = "service"

    def list(self, payload: ListPayload) -> ServiceListRT:
        params = query_params(
            limit=payload.limit,
            page=payload.page,
            filter=payload.filter,
            order_by=payload.order_by,
            order_desc=payload.order_desc,
            at_time=payload.at_time,
        )
        response = self._send("list", "GET", list_service_path(), jwt=payload.jwt, params=params)
        return self._decode("list", response, ServiceListRT, errors=STANDARD_ERRORS)

    def create_service(self, payload: CreateServicePayload) -> ServiceStatusRT:
        response = self._send(
            "create_service",
            "POST",
            create_service_service_path(),
            jwt=payload.jwt,
            json=payload.services.to_wire(),
        )
        return self._decode("create_service", response, ServiceStatusRT, errors=STANDARD_ERRORS, expect=201)

    def read(self, payload: ReadPayload) -> ServiceStatusRT:
        response = self._send("read", "GET", service_id_path(payload.id), jwt=payload.jwt)
        return self._decode("read", response, ServiceStatusRT, errors=NOT_FOUND_ERRORS)

    def update(self, payload: UpdatePayload) -> ServiceStatusRT:
        response = self._send(
            "update",
            "PUT",
            service_id_path(payload.id),
            jwt=payload.jwt,
            params=query_params(force_create=payload.force_create),
            json=payload.services.to_wire(),
        )
        return self._decode("update", response, ServiceStatusRT, errors=NOT_FOUND_ERRORS)

    def delete(self, payload: DeletePayload) -> None:
        response = self._send("delete", "DELETE", service_id_path(payload.id), jwt=payload.jwt)
        self._expect_empty("delete", response, errors=NOT_FOUND_ERRORS)
