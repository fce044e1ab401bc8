"""Builders de payloads desde flags de CLI.

Por qué separar builders de comandos:
- Los flags llegan como strings; aquí se convierten a tipos (int, bool,
  date-time, JSON) con mensajes de error estables, sin depender de typer.
- Los comandos solo juntan flags y llaman al cliente: los builders se testean aislados.

Convención: string vacío = flag no dado.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

from core.domain import artifact, aspect, metadata, package, service
from core.domain.common import WireModel, validate_date_time
from core.domain.errors import InvalidPayloadError
from core.domain.service import EXAMPLE_SERVICE_DESCRIPTION

M = TypeVar("M", bound=WireModel)

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

EXAMPLE_ASPECT = {"$schema": "urn:example:schema:simple-name", "name": "Fred"}


def _optional(raw: str) -> str | None:
    return raw if raw != "" else None


def parse_int(raw: str, name: str) -> int | None:
    if raw == "":
        return None
    try:
        return int(raw, 10)
    except ValueError:
        raise InvalidPayloadError(f"invalid value for {name}, must be INT") from None


def parse_bool(raw: str, name: str) -> bool | None:
    if raw == "":
        return None
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise InvalidPayloadError(f"invalid value for {name}, must be BOOL")


def parse_limit(raw: str, *, minimum: int = 1, maximum: int = 50) -> int | None:
    limit = parse_int(raw, "limit")
    if limit is None:
        return None
    if limit < minimum:
        raise InvalidPayloadError(f"limit must be greater or equal than {minimum} but got value {limit}")
    if limit > maximum:
        raise InvalidPayloadError(f"limit must be lesser or equal than {maximum} but got value {limit}")
    return limit


def parse_date_time(raw: str, name: str) -> str | None:
    if raw == "":
        return None
    try:
        return validate_date_time(name, raw)
    except ValueError as exc:
        raise InvalidPayloadError(str(exc)) from None


def parse_json(raw: str, name: str, example: Any) -> Any:
    """JSON inline o `@ruta` a un fichero; el error incluye un ejemplo válido."""

    text = raw
    if raw.startswith("@"):
        try:
            text = Path(raw[1:]).read_text(encoding="utf-8")
        except OSError as exc:
            raise InvalidPayloadError(f"cannot read {name} from {raw[1:]!r}: {exc}") from None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        sample = json.dumps(example, indent=2)
        raise InvalidPayloadError(
            f"invalid JSON for {name}, \nerror: {exc}, \nexample of valid JSON:\n{sample}"
        ) from None


def _build(model: type[M], **values: Any) -> M:
    """Crea el payload descartando flags vacíos; errores de validación -> `InvalidPayloadError`."""

    try:
        return model.model_validate({k: v for k, v in values.items() if v is not None})
    except ValidationError as exc:
        raise InvalidPayloadError(str(exc)) from None


# artifact


def build_artifact_list_payload(
    limit: str, page: str, filter: str, order_by: str, order_desc: str, at_time: str, jwt: str
) -> artifact.ListPayload:
    return _build(
        artifact.ListPayload,
        limit=parse_limit(limit),
        page=_optional(page),
        filter=_optional(filter),
        order_by=_optional(order_by),
        order_desc=parse_bool(order_desc, "orderDesc"),
        at_time=parse_date_time(at_time, "at-time"),
        jwt=jwt,
    )


def build_artifact_read_payload(id: str, jwt: str) -> artifact.ReadPayload:
    return _build(artifact.ReadPayload, id=id, jwt=jwt)


def build_artifact_upload_payload(
    jwt: str,
    content_type: str = "",
    content_encoding: str = "",
    content_length: str = "",
    name: str = "",
    collection: str = "",
    policy: str = "",
    x_content_type: str = "",
    x_content_length: str = "",
    upload_length: str = "",
    tus_resumable: str = "",
) -> artifact.UploadPayload:
    return _build(
        artifact.UploadPayload,
        jwt=jwt,
        content_type=_optional(content_type),
        content_encoding=_optional(content_encoding),
        content_length=parse_int(content_length, "contentLength"),
        name=_optional(name),
        collection=_optional(collection),
        policy=_optional(policy),
        x_content_type=_optional(x_content_type),
        x_content_length=parse_int(x_content_length, "xContentLength"),
        upload_length=parse_int(upload_length, "uploadLength"),
        tus_resumable=_optional(tus_resumable),
    )


# aspect


def build_aspect_read_payload(id: str, jwt: str) -> aspect.ReadPayload:
    return _build(aspect.ReadPayload, id=id, jwt=jwt)


def build_aspect_list_payload(
    entity: str,
    schema: str,
    aspect_path: str,
    at_time: str,
    limit: str,
    filter: str,
    order_by: str,
    order_desc: str,
    page: str,
    jwt: str,
) -> aspect.ListPayload:
    return _build(
        aspect.ListPayload,
        entity=_optional(entity),
        schema=_optional(schema),
        aspect_path=_optional(aspect_path),
        at_time=parse_date_time(at_time, "at-time"),
        limit=parse_limit(limit),
        filter=_optional(filter),
        order_by=_optional(order_by),
        order_desc=parse_bool(order_desc, "orderDesc"),
        page=_optional(page),
        jwt=jwt,
    )


def build_aspect_create_payload(
    entity: str, schema: str, content: str, content_type: str, policy: str, jwt: str
) -> aspect.CreatePayload:
    return _build(
        aspect.CreatePayload,
        entity=entity,
        schema=schema,
        content=parse_json(content, "content", EXAMPLE_ASPECT),
        content_type=_optional(content_type),
        policy=_optional(policy),
        jwt=jwt,
    )


def build_aspect_update_payload(
    id: str, entity: str, schema: str, content: str, content_type: str, jwt: str
) -> aspect.UpdatePayload:
    return _build(
        aspect.UpdatePayload,
        id=id,
        entity=entity,
        schema=schema,
        content=parse_json(content, "content", EXAMPLE_ASPECT),
        content_type=_optional(content_type),
        jwt=jwt,
    )


def build_aspect_retract_payload(id: str, jwt: str) -> aspect.RetractPayload:
    return _build(aspect.RetractPayload, id=id, jwt=jwt)


# metadata


def build_metadata_read_payload(id: str, jwt: str) -> metadata.ReadPayload:
    return _build(metadata.ReadPayload, id=id, jwt=jwt)


def build_metadata_list_payload(
    entity_id: str,
    schema: str,
    aspect_path: str,
    at_time: str,
    limit: str,
    filter: str,
    order_by: str,
    order_desc: str,
    page: str,
    jwt: str,
) -> metadata.ListPayload:
    return _build(
        metadata.ListPayload,
        entity_id=_optional(entity_id),
        schema=_optional(schema),
        aspect_path=_optional(aspect_path),
        at_time=parse_date_time(at_time, "at-time"),
        limit=parse_limit(limit),
        filter=_optional(filter),
        order_by=_optional(order_by),
        order_desc=parse_bool(order_desc, "orderDesc"),
        page=_optional(page),
        jwt=jwt,
    )


def build_metadata_add_payload(
    entity_id: str, schema: str, aspect: str, content_type: str, policy_id: str, jwt: str
) -> metadata.AddPayload:
    return _build(
        metadata.AddPayload,
        entity_id=entity_id,
        schema=schema,
        aspect=parse_json(aspect, "aspect", EXAMPLE_ASPECT),
        content_type=_optional(content_type),
        policy_id=_optional(policy_id),
        jwt=jwt,
    )


def build_metadata_update_one_payload(
    entity_id: str, schema: str, aspect: str, content_type: str, policy_id: str, jwt: str
) -> metadata.UpdateOnePayload:
    return _build(
        metadata.UpdateOnePayload,
        entity_id=entity_id,
        schema=schema,
        aspect=parse_json(aspect, "aspect", EXAMPLE_ASPECT),
        content_type=_optional(content_type),
        policy_id=_optional(policy_id),
        jwt=jwt,
    )


def build_metadata_update_record_payload(
    id: str, entity_id: str, schema: str, aspect: str, content_type: str, policy_id: str, jwt: str
) -> metadata.UpdateRecordPayload:
    return _build(
        metadata.UpdateRecordPayload,
        id=id,
        entity_id=_optional(entity_id),
        schema=_optional(schema),
        aspect=parse_json(aspect, "aspect", EXAMPLE_ASPECT),
        content_type=_optional(content_type),
        policy_id=_optional(policy_id),
        jwt=jwt,
    )


def build_metadata_revoke_payload(id: str, jwt: str) -> metadata.RevokePayload:
    return _build(metadata.RevokePayload, id=id, jwt=jwt)


# package


def build_package_list_payload(tag: str, limit: str, page: str, jwt: str) -> package.ListPayload:
    return _build(
        package.ListPayload,
        tag=_optional(tag),
        limit=parse_int(limit, "limit"),
        page=_optional(page),
        jwt=jwt,
    )


def build_package_pull_payload(ref: str, type: str, offset: str, jwt: str) -> package.PullPayload:
    return _build(package.PullPayload, ref=ref, type=type, offset=parse_int(offset, "offset"), jwt=jwt)


def build_package_push_payload(
    tag: str, force: str, type: str, digest: str, start: str, end: str, total: str, jwt: str
) -> package.PushPayload:
    return _build(
        package.PushPayload,
        tag=tag,
        force=parse_bool(force, "force"),
        type=type,
        digest=digest,
        start=parse_int(start, "start"),
        end=parse_int(end, "end"),
        total=parse_int(total, "total"),
        jwt=jwt,
    )


def build_package_status_payload(tag: str, digest: str, jwt: str) -> package.StatusPayload:
    return _build(package.StatusPayload, tag=tag, digest=digest, jwt=jwt)


def build_package_remove_payload(tag: str, jwt: str) -> package.RemovePayload:
    return _build(package.RemovePayload, tag=tag, jwt=jwt)


# service


def build_service_list_payload(
    limit: str, page: str, filter: str, order_by: str, order_desc: str, at_time: str, jwt: str
) -> service.ListPayload:
    return build_artifact_list_payload(limit, page, filter, order_by, order_desc, at_time, jwt)


def _service_description(body: str) -> dict[str, Any]:
    data = parse_json(body, "body", EXAMPLE_SERVICE_DESCRIPTION)
    if not isinstance(data, dict):
        sample = json.dumps(EXAMPLE_SERVICE_DESCRIPTION, indent=2)
        raise InvalidPayloadError(f"invalid JSON for body, must be an object, \nexample of valid JSON:\n{sample}")
    return data


def build_service_create_payload(body: str, jwt: str) -> service.CreateServicePayload:
    return _build(service.CreateServicePayload, services=_service_description(body), jwt=jwt)


def build_service_read_payload(id: str, jwt: str) -> service.ReadPayload:
    return _build(service.ReadPayload, id=id, jwt=jwt)


def build_service_update_payload(id: str, body: str, force_create: str, jwt: str) -> service.UpdatePayload:
    return _build(
        service.UpdatePayload,
        id=id,
        services=_service_description(body),
        force_create=parse_bool(force_create, "forceCreate"),
        jwt=jwt,
    )


def build_service_delete_payload(id: str, jwt: str) -> service.DeletePayload:
    return _build(service.DeletePayload, id=id, jwt=jwt)
