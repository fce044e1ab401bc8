"""Clientes REST por servicio (httpx síncrono).

Cada cliente implementa el Protocol de `core.interfaces.services`.
"""

from adapters.rest.artifact import ArtifactClient
from adapters.rest.aspect import AspectClient
from adapters.rest.metadata import MetadataClient
from adapters.rest.package import PackageClient
from adapters.rest.service import ServiceClient

__all__ = [
    "ArtifactClient",
    "AspectClient",
    "MetadataClient",
    "PackageClient",
    "ServiceClient",
]
