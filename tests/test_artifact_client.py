"""Tests del cliente REST `artifact` contra un `httpx.MockTransport`."""

from __future__ import annotations

import httpx
import pytest
from conftest import JWT, json_response

from adapters.rest import ArtifactClient
from adapters.rest.aspect import aspect_id_path
from adapters.rest.metadata import metadata_id_path
from adapters.rest.service import service_id_path
from core.domain.artifact import ListPayload, ReadPayload, UploadPayload
from core.domain.errors import (
    BadRequestError,
    DecodingError,
    InvalidCredentialsError,
    InvalidParameterError,
    InvalidResponseError,
    InvalidScopesError,
    MethodNotImplementedError,
    RequestError,
    ResourceNotFoundError,
    ResponseValidationError,
    UnauthorizedError,
)

STATUS_BODY = {
    "id": "urn:ivcap:artifact:1",
    "name": "data.csv",
    "status": "ready",
    "mime-type": "text/csv",
    "size": 12,
    "policy": {"id": "urn:ivcap:policy:1", "links": {"self": "https://x/p"}},
    "data": {"self": "https://x/blob"},
    "links": {"self": "https://x/a/1"},
}


class TestList:
    def test_query_and_auth_header(self, mock_http):
        body = {
            "artifacts": [{"id": "a1", "name": "n", "status": "ready", "size": 3, "mime-type": "text/plain"}],
            "at-time": "2024-01-01T00:00:00Z",
            "links": {"self": "https://x/1", "first": "https://x/1", "next": "https://x/2"},
        }
        http, rec = mock_http(lambda req: json_response(200, body))

        result = ArtifactClient(http).list(
            ListPayload(jwt=JWT, limit=5, filter="name~='x'", order_by="name", order_desc=True)
        )

        req = rec.last
        assert req.method == "GET"
        assert req.url.path == "/1/artifacts"
        assert req.headers["Authorization"] == f"Bearer {JWT}"
        assert dict(req.url.params) == {
            "limit": "5",
            "filter": "name~='x'",
            "order-by": "name",
            "order-desc": "true",
        }
        assert result.artifacts[0].mime_type == "text/plain"
        assert result.links.next == "https://x/2"
        assert result.at_time == "2024-01-01T00:00:00Z"

    def test_missing_required_list_fields(self, mock_http):
        http, _ = mock_http(lambda req: json_response(200, {"at-time": "2024-01-01T00:00:00Z"}))
        with pytest.raises(ResponseValidationError, match="artifacts"):
            ArtifactClient(http).list(ListPayload(jwt=JWT))

    @pytest.mark.parametrize(
        "status,headers,body,error",
        [
            (400, {"goa-error": "bad-request"}, {"message": "bad"}, BadRequestError),
            (400, {"goa-error": "invalid-credential"}, None, InvalidCredentialsError),
            (401, {}, None, UnauthorizedError),
            (403, {}, {"message": "no scope"}, InvalidScopesError),
            (422, {}, {"message": "m", "name": "limit", "value": "0"}, InvalidParameterError),
            (501, {}, {"message": "later"}, MethodNotImplementedError),
        ],
    )
    def test_error_table(self, mock_http, status, headers, body, error):
        http, _ = mock_http(lambda req: json_response(status, body, headers))
        with pytest.raises(error):
            ArtifactClient(http).list(ListPayload(jwt=JWT))

    def test_invalid_scopes_body_with_bad_id(self, mock_http):
        http, _ = mock_http(lambda req: json_response(403, {"id": "not-a-uuid", "message": "no scope"}))
        with pytest.raises(ResponseValidationError, match="uuid"):
            ArtifactClient(http).list(ListPayload(jwt=JWT))

    def test_unknown_goa_error_on_400(self, mock_http):
        http, _ = mock_http(lambda req: httpx.Response(400, text="odd", headers={"goa-error": "mystery"}))
        with pytest.raises(InvalidResponseError) as info:
            ArtifactClient(http).list(ListPayload(jwt=JWT))
        assert info.value.status_code == 400
        assert info.value.body == "odd"

    def test_undeclared_status(self, mock_http):
        http, _ = mock_http(lambda req: httpx.Response(418, text="teapot"))
        with pytest.raises(InvalidResponseError, match="418"):
            ArtifactClient(http).list(ListPayload(jwt=JWT))

    def test_404_is_not_declared_for_list(self, mock_http):
        http, _ = mock_http(lambda req: json_response(404, {"id": "x", "message": "m"}))
        with pytest.raises(InvalidResponseError):
            ArtifactClient(http).list(ListPayload(jwt=JWT))


class TestRead:
    def test_read(self, mock_http):
        http, rec = mock_http(lambda req: json_response(200, STATUS_BODY))
        result = ArtifactClient(http).read(ReadPayload(jwt="Bearer abc", id="urn:ivcap:artifact:1"))
        assert rec.last.url.path == "/1/artifacts/urn:ivcap:artifact:1"
        assert rec.last.headers["Authorization"] == "Bearer abc"
        assert result.status == "ready"
        assert result.policy.links.self_ == "https://x/p"

    @pytest.mark.parametrize(
        "artifact_id,raw_path",
        [
            ("a?b=1", b"/1/artifacts/a%3Fb%3D1"),
            ("a#frag", b"/1/artifacts/a%23frag"),
            ("../services/s1", b"/1/artifacts/..%2Fservices%2Fs1"),
        ],
    )
    def test_id_is_escaped_as_one_path_segment(self, mock_http, artifact_id, raw_path):
        http, rec = mock_http(lambda req: json_response(200, STATUS_BODY))
        ArtifactClient(http).read(ReadPayload(jwt=JWT, id=artifact_id))
        assert rec.last.url.raw_path == raw_path
        assert rec.last.url.query == b""

    def test_not_found(self, mock_http):
        http, _ = mock_http(lambda req: json_response(404, {"id": "a9", "message": "no such artifact"}))
        with pytest.raises(ResourceNotFoundError) as info:
            ArtifactClient(http).read(ReadPayload(jwt=JWT, id="a9"))
        assert info.value.id == "a9"
        assert str(info.value) == "no such artifact"

    def test_error_body_missing_required_field(self, mock_http):
        http, _ = mock_http(lambda req: json_response(404, {"message": "no id"}))
        with pytest.raises(ResponseValidationError):
            ArtifactClient(http).read(ReadPayload(jwt=JWT, id="a9"))

    def test_invalid_status_enum(self, mock_http):
        http, _ = mock_http(lambda req: json_response(200, {**STATUS_BODY, "status": "weird"}))
        with pytest.raises(ResponseValidationError):
            ArtifactClient(http).read(ReadPayload(jwt=JWT, id="a1"))

    def test_broken_json(self, mock_http):
        http, _ = mock_http(lambda req: httpx.Response(200, text="{not json"))
        with pytest.raises(DecodingError):
            ArtifactClient(http).read(ReadPayload(jwt=JWT, id="a1"))

    def test_connection_error(self, mock_http):
        def boom(req):
            raise httpx.ConnectError("refused", request=req)

        http, _ = mock_http(boom)
        with pytest.raises(RequestError, match="artifact.read"):
            ArtifactClient(http).read(ReadPayload(jwt=JWT, id="a1"))


class TestUpload:
    def test_headers_body_and_tus_fields(self, mock_http):
        def handler(req):
            return json_response(
                201,
                {"id": "a2", "status": "partial"},
                {"Location": "https://x/1/artifacts/a2", "Tus-Resumable": "1.0.0", "Upload-Offset": "4"},
            )

        http, rec = mock_http(handler)
        payload = UploadPayload(
            jwt=JWT,
            content_type="text/plain",
            content_length=4,
            name="notes",
            collection="c1",
            upload_length=10,
            tus_resumable="1.0.0",
        )

        result = ArtifactClient(http).upload(payload, b"abcd")

        req = rec.last
        assert req.method == "POST"
        assert req.url.path == "/1/artifacts"
        assert req.content == b"abcd"
        assert req.headers["Content-Type"] == "text/plain"
        assert req.headers["X-Name"] == "notes"
        assert req.headers["X-Collection"] == "c1"
        assert req.headers["Upload-Length"] == "10"
        assert req.headers["Tus-Resumable"] == "1.0.0"
        assert "X-Content-Type" not in req.headers
        assert result.location == "https://x/1/artifacts/a2"
        assert result.tus_resumable == "1.0.0"
        assert result.tus_offset == 4
        assert result.status == "partial"

    def test_streams_file_objects(self, mock_http, tmp_path):
        path = tmp_path / "blob.bin"
        path.write_bytes(b"0123456789")
        http, rec = mock_http(lambda req: json_response(201, {"id": "a3", "status": "ready"}))

        with path.open("rb") as fh:
            ArtifactClient(http).upload(UploadPayload(jwt=JWT), fh)

        assert rec.last.content == b"0123456789"

    def test_invalid_upload_offset(self, mock_http):
        http, _ = mock_http(
            lambda req: json_response(201, {"id": "a2", "status": "partial"}, {"Upload-Offset": "four"})
        )
        with pytest.raises(ResponseValidationError, match="tusOffset"):
            ArtifactClient(http).upload(UploadPayload(jwt=JWT), b"")

    def test_upload_error(self, mock_http):
        http, _ = mock_http(lambda req: json_response(400, {"message": "bad"}, {"goa-error": "bad-request"}))
        with pytest.raises(BadRequestError, match="bad"):
            ArtifactClient(http).upload(UploadPayload(jwt=JWT), b"x")


class TestIdPaths:
    @pytest.mark.parametrize(
        "build,expected",
        [
            (aspect_id_path, "/1/aspect/x%2Fy%3Fz"),
            (metadata_id_path, "/1/metadata/x%2Fy%3Fz"),
            (service_id_path, "/1/services/x%2Fy%3Fz"),
        ],
    )
    def test_other_services_escape_ids(self, build, expected):
        assert build("x/y?z") == expected
