"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts y headers para todos los clientes de servicio.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_client(
    settings: AppSettings | None = None,
    *,
    base_url: str | None = None,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono apuntando al API.

    Por qué un builder:
    - Un único lugar para timeouts/User-Agent; cada llamada es un round trip bloqueante.
    - El caller decide el ciclo de vida (usar como context manager).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=(base_url or settings.base_url).rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )
