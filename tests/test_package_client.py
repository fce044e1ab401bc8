"""Tests del cliente REST `package` (push/pull de imágenes)."""

from __future__ import annotations

import httpx
import pytest
from conftest import JWT, json_response

from adapters.rest import PackageClient
from core.domain.errors import (
    BadRequestError,
    InvalidResponseError,
    RequestError,
    ResourceAlreadyCreatedError,
    ResponseValidationError,
    ServiceNotAvailableError,
)
from core.domain.package import ListPayload, PullPayload, PushPayload, RemovePayload, StatusPayload


class _BrokenStream(httpx.SyncByteStream):
    """Entrega un chunk y luego corta la conexión."""

    def __iter__(self):
        yield b"abc"
        raise httpx.ReadError("connection reset")


class TestList:
    def test_list(self, mock_http):
        body = {"items": ["alpine:1", "alpine:2"], "links": [{"rel": "next", "type": "application/json", "href": "h"}]}
        http, rec = mock_http(lambda req: json_response(200, body))
        result = PackageClient(http).list(ListPayload(jwt=JWT, tag="alpine"))
        assert rec.last.url.path == "/1/pkgs/list"
        assert dict(rec.last.url.params) == {"tag": "alpine"}
        assert result.items == ["alpine:1", "alpine:2"]
        assert result.links[0].rel == "next"

    @pytest.mark.parametrize("body", [{}, {"items": ["alpine:1"]}, {"links": []}])
    def test_missing_required_fields(self, mock_http, body):
        http, _ = mock_http(lambda req: json_response(200, body))
        with pytest.raises(ResponseValidationError):
            PackageClient(http).list(ListPayload(jwt=JWT))

    def test_400_without_goa_error_header(self, mock_http):
        http, _ = mock_http(lambda req: json_response(400, {"message": "bad tag"}))
        with pytest.raises(BadRequestError, match="bad tag"):
            PackageClient(http).list(ListPayload(jwt=JWT))

    def test_service_unavailable(self, mock_http):
        http, _ = mock_http(lambda req: httpx.Response(503))
        with pytest.raises(ServiceNotAvailableError):
            PackageClient(http).list(ListPayload(jwt=JWT))


class TestPull:
    def test_streams_body_with_size_headers(self, mock_http):
        http, rec = mock_http(
            lambda req: httpx.Response(200, content=b"layer-bytes", headers={"Total": "100", "Available": "11"})
        )
        result, body = PackageClient(http).pull(PullPayload(jwt=JWT, ref="sha256:abc", type="layer", offset=0))
        try:
            data = b"".join(body.iter_bytes())
        finally:
            body.close()

        assert dict(rec.last.url.params) == {"ref": "sha256:abc", "type": "layer", "offset": "0"}
        assert (result.total, result.available) == (100, 11)
        assert data == b"layer-bytes"

    def test_missing_total_header(self, mock_http):
        http, _ = mock_http(lambda req: httpx.Response(200, content=b"x", headers={"Available": "1"}))
        with pytest.raises(ResponseValidationError, match="Total"):
            PackageClient(http).pull(PullPayload(jwt=JWT, ref="r", type="manifest"))

    def test_404_is_not_declared(self, mock_http):
        http, _ = mock_http(lambda req: json_response(404, {"id": "r", "message": "unknown ref"}))
        with pytest.raises(InvalidResponseError) as info:
            PackageClient(http).pull(PullPayload(jwt=JWT, ref="r", type="config"))
        assert info.value.status_code == 404

    def test_interrupted_download(self, mock_http):
        http, _ = mock_http(
            lambda req: httpx.Response(200, headers={"Total": "6", "Available": "6"}, stream=_BrokenStream())
        )
        _, body = PackageClient(http).pull(PullPayload(jwt=JWT, ref="sha256:abc", type="layer"))
        received = []
        try:
            with pytest.raises(RequestError, match="package.pull"):
                for chunk in body.iter_bytes():
                    received.append(chunk)
        finally:
            body.close()
        assert received == [b"abc"]


class TestPush:
    def test_push_chunk(self, mock_http):
        http, rec = mock_http(lambda req: json_response(201, {"digest": "sha256:abc", "exists": False}))
        payload = PushPayload(jwt=JWT, tag="alpine:1", type="layer", digest="sha256:abc", start=0, end=3, total=10)

        result = PackageClient(http).push(payload, b"abcd")

        req = rec.last
        assert req.method == "POST"
        assert req.url.path == "/1/pkgs/push"
        assert req.headers["Content-Type"] == "application/octet-stream"
        assert req.content == b"abcd"
        assert req.url.params["start"] == "0"
        assert req.url.params["total"] == "10"
        assert "force" not in req.url.params
        assert result.exists is False

    def test_already_exists(self, mock_http):
        http, _ = mock_http(lambda req: json_response(409, {"id": "d", "message": "layer exists"}))
        payload = PushPayload(jwt=JWT, tag="t", type="manifest", digest="d")
        with pytest.raises(ResourceAlreadyCreatedError):
            PackageClient(http).push(payload, b"{}")

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            PushPayload(jwt=JWT, tag="t", type="layer", digest="d", start=5, end=2)
        with pytest.raises(ValueError):
            PushPayload(jwt=JWT, tag="t", type="layer", digest="d", start=0, end=20, total=10)


class TestStatusAndRemove:
    def test_status(self, mock_http):
        http, rec = mock_http(lambda req: json_response(200, {"status": "done", "message": "ok"}))
        result = PackageClient(http).status(StatusPayload(jwt=JWT, tag="t", digest="d"))
        assert rec.last.url.path == "/1/pkgs/status"
        assert result.status == "done"

    def test_remove(self, mock_http):
        http, rec = mock_http(lambda req: httpx.Response(204))
        PackageClient(http).remove(RemovePayload(jwt=JWT, tag="alpine:1"))
        assert rec.last.method == "DELETE"
        assert rec.last.url.path == "/1/pkgs"
        assert rec.last.url.params["tag"] == "alpine:1"

    def test_status_404_is_not_declared(self, mock_http):
        http, _ = mock_http(lambda req: json_response(404, {"id": "t", "message": "unknown tag"}))
        with pytest.raises(InvalidResponseError):
            PackageClient(http).status(StatusPayload(jwt=JWT, tag="t", digest="d"))

    def test_remove_404_is_not_declared(self, mock_http):
        http, _ = mock_http(lambda req: json_response(404, {"id": "t", "message": "unknown tag"}))
        with pytest.raises(InvalidResponseError):
            PackageClient(http).remove(RemovePayload(jwt=JWT, tag="t"))
