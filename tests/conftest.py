"""Fixtures compartidas: transporte httpx simulado y reset de structlog."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest
import structlog

BASE_URL = "https://api.ivcap.test"
JWT = "eyJhbGciOiJIUzI1NiJ9.e30.sig"

Handler = Callable[[httpx.Request], httpx.Response]


class Recorder:
    """Guarda las requests recibidas por el `MockTransport`."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_response(status: int, body: Any = None, headers: dict[str, str] | None = None) -> httpx.Response:
    content = b"" if body is None else json.dumps(body).encode("utf-8")
    all_headers = {"Content-Type": "application/json"}
    all_headers.update(headers or {})
    return httpx.Response(status, content=content, headers=all_headers)


@pytest.fixture
def mock_http() -> Callable[[Handler], tuple[httpx.Client, Recorder]]:
    clients: list[httpx.Client] = []

    def factory(handler: Handler) -> tuple[httpx.Client, Recorder]:
        recorder = Recorder(handler)
        client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield factory
    for client in clients:
        client.close()


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Evita que un `.env` del usuario o del proyecto cambie los defaults."""

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    for key in ("IVCAP_BASE_URL", "IVCAP_JWT", "IVCAP_LOG_LEVEL", "IVCAP_LOG_JSON"):
        monkeypatch.delenv(key, raising=False)
