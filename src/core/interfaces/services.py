"""Contratos de los servicios del API.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El cliente HTTP, un fake en tests o una implementación local son
  intercambiables detrás de los endpoints.

Los métodos con stream reciben el body como iterable de bytes o file-like;
`PackageService.pull` devuelve el resultado y el body abierto.
"""

from __future__ import annotations

from typing import IO, Iterable, Protocol, Union, runtime_checkable

from core.domain import artifact, aspect, metadata, package, service

ByteStream = Union[bytes, IO[bytes], Iterable[bytes]]


@runtime_checkable
class ReadableBody(Protocol):
    """Body de respuesta en streaming (p.ej. `httpx.Response`)."""

    def iter_bytes(self, chunk_size: int | None = None) -> Iterable[bytes]: ...

    def close(self) -> None: ...


@runtime_checkable
class ArtifactService(Protocol):
    def list(self, payload: artifact.ListPayload) -> artifact.ArtifactListRT: ...

    def read(self, payload: artifact.ReadPayload) -> artifact.ArtifactStatusRT: ...

    def upload(self, payload: artifact.UploadPayload, body: ByteStream) -> artifact.ArtifactStatusRT: ...


@runtime_checkable
class AspectService(Protocol):
    def read(self, payload: aspect.ReadPayload) -> aspect.AspectRT: ...

    def list(self, payload: aspect.ListPayload) -> aspect.AspectListRT: ...

    def create(self, payload: aspect.CreatePayload) -> aspect.AspectIDRT: ...

    def update(self, payload: aspect.UpdatePayload) -> aspect.AspectIDRT: ...

    def retract(self, payload: aspect.RetractPayload) -> None: ...


@runtime_checkable
class MetadataService(Protocol):
    def read(self, payload: metadata.ReadPayload) -> metadata.MetadataRecordRT: ...

    def list(self, payload: metadata.ListPayload) -> metadata.MetadataListRT: ...

    def add(self, payload: metadata.AddPayload) -> metadata.AddMetaRT: ...

    def update_one(self, payload: metadata.UpdateOnePayload) -> metadata.AddMetaRT: ...

    def update_record(self, payload: metadata.UpdateRecordPayload) -> metadata.AddMetaRT: ...

    def revoke(self, payload: metadata.RevokePayload) -> None: ...


@runtime_checkable
class PackageService(Protocol):
    def list(self, payload: package.ListPayload) -> package.ListResult: ...

    def pull(self, payload: package.PullPayload) -> tuple[package.PullResultT, ReadableBody]: ...

    def push(self, payload: package.PushPayload, body: ByteStream) -> package.PushResult: ...

    def status(self, payload: package.StatusPayload) -> package.PushStatusT: ...

    def remove(self, payload: package.RemovePayload) -> None: ...


@runtime_checkable
class ServiceService(Protocol):
    def list(self, payload: service.ListPayload) -> service.ServiceListRT: ...

    def create_service(self, payload: service.CreateServicePayload) -> service.ServiceStatusRT: ...

    def read(self, payload: service.ReadPayload) -> service.ServiceStatusRT: ...

    def update(self, payload: service.UpdatePayload) -> service.ServiceStatusRT: ...

    def delete(self, payload: service.DeletePayload) -> None: ...
