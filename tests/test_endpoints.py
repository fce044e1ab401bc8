"""Tests de endpoints: inyección del scope JWT y reenvío al servicio."""

from __future__ import annotations

import pytest

from core.domain import artifact, package
from core.domain.errors import InvalidCredentialsError, InvalidScopesError, UnauthorizedError
from core.domain.security import READ_SCOPE, WRITE_SCOPE, JWTScheme
from core.services.endpoints import (
    METHOD_SCOPES,
    Endpoints,
    StaticScopeAuther,
    new_artifact_endpoints,
    new_package_endpoints,
)


class RecordingAuther:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, JWTScheme]] = []
        self.error = error

    def jwt_auth(self, token: str, scheme: JWTScheme) -> None:
        self.calls.append((token, scheme))
        if self.error is not None:
            raise self.error


class FakeArtifacts:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []

    def list(self, payload):
        self.calls.append(("list", (payload,)))
        return artifact.ArtifactListRT(artifacts=[], links={})

    def read(self, payload):
        self.calls.append(("read", (payload,)))
        return artifact.ArtifactStatusRT(id=payload.id, status="ready")

    def upload(self, payload, body):
        self.calls.append(("upload", (payload, body)))
        return artifact.ArtifactStatusRT(id="new", status="pending")


class FakePackages:
    def list(self, payload):
        return package.ListResult(items=["a:latest"])

    def pull(self, payload):
        return package.PullResultT(total=4, available=4), b"data"

    def push(self, payload, body):
        return package.PushResult(digest=payload.digest, exists=False)

    def status(self, payload):
        return package.PushStatusT(status="done", message="ok")

    def remove(self, payload):
        return None


class TestScopeTable:
    def test_reads_need_read_scope_and_writes_need_write_scope(self):
        for service_name, methods in METHOD_SCOPES.items():
            for method, scopes in methods.items():
                if method in {"list", "read", "pull", "status"}:
                    assert scopes == (READ_SCOPE,), (service_name, method)
                else:
                    assert scopes == (WRITE_SCOPE,), (service_name, method)


class TestEndpoints:
    def test_scheme_passed_to_auther(self):
        auther = RecordingAuther()
        svc = FakeArtifacts()
        eps = new_artifact_endpoints(svc, auther)

        result = eps.read(artifact.ReadPayload(jwt="tok", id="a1"))

        assert result.id == "a1"
        token, scheme = auther.calls[0]
        assert token == "tok"
        assert scheme.name == "jwt"
        assert scheme.scopes == (READ_SCOPE, WRITE_SCOPE)
        assert scheme.required_scopes == (READ_SCOPE,)

    def test_stream_body_is_forwarded(self):
        svc = FakeArtifacts()
        eps = new_artifact_endpoints(svc, RecordingAuther())

        result = eps.upload(artifact.UploadPayload(jwt="tok", name="x"), b"payload")

        assert result.id == "new"
        assert svc.calls == [("upload", (artifact.UploadPayload(jwt="tok", name="x"), b"payload"))]

    def test_auth_failure_short_circuits(self):
        svc = FakeArtifacts()
        eps = new_artifact_endpoints(svc, RecordingAuther(InvalidScopesError()))

        with pytest.raises(InvalidScopesError):
            eps.list(artifact.ListPayload(jwt="tok"))
        assert svc.calls == []

    def test_pull_returns_result_and_body(self):
        eps = new_package_endpoints(FakePackages(), StaticScopeAuther([READ_SCOPE]))
        result, body = eps.pull(package.PullPayload(jwt="tok", ref="sha256:1", type="layer"))
        assert result.total == 4
        assert body == b"data"

    def test_middleware_wraps_every_endpoint(self):
        seen: list[str] = []

        def middleware(endpoint):
            def wrapped(payload, *args):
                seen.append(endpoint.__name__)
                return endpoint(payload, *args)

            return wrapped

        eps = new_package_endpoints(FakePackages(), StaticScopeAuther([READ_SCOPE, WRITE_SCOPE]))
        eps.use(middleware)
        eps.status(package.StatusPayload(jwt="tok", tag="t", digest="d"))
        eps.remove(package.RemovePayload(jwt="tok", tag="t"))

        assert seen == ["status", "remove"]
        assert sorted(eps) == ["list", "pull", "push", "remove", "status"]

    def test_unknown_service_or_endpoint(self):
        with pytest.raises(ValueError):
            Endpoints("order", object(), RecordingAuther())
        eps = new_package_endpoints(FakePackages(), RecordingAuther())
        with pytest.raises(AttributeError):
            eps.patch


class TestStaticScopeAuther:
    def test_missing_scope(self):
        eps = new_package_endpoints(FakePackages(), StaticScopeAuther([READ_SCOPE]))
        with pytest.raises(InvalidScopesError, match="consumer:write"):
            eps.remove(package.RemovePayload(jwt="tok", tag="t"))

    def test_empty_token(self):
        auther = StaticScopeAuther([READ_SCOPE])
        with pytest.raises(UnauthorizedError):
            auther.jwt_auth("", JWTScheme(required_scopes=(READ_SCOPE,)))

    def test_unknown_token(self):
        auther = StaticScopeAuther([READ_SCOPE], tokens=["good"])
        with pytest.raises(InvalidCredentialsError):
            auther.jwt_auth("bad", JWTScheme(required_scopes=(READ_SCOPE,)))
        auther.jwt_auth("good", JWTScheme(required_scopes=(READ_SCOPE,)))
