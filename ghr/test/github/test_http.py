"""Tests for ghr.github.http - GitHub HTTP boundary."""

from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from email.message import Message

import pytest

from ghr.core.result import Err, Ok
from ghr.github import http as http_mod
from ghr.github.http import ApiError, GitHubHttp, MockGitHubHttp, RealGitHubHttp


# =============================================================================
# ApiError tests
# =============================================================================


class TestApiError:
    def test_str_with_status(self) -> None:
        error = ApiError(url="https://api.github.com/x", status=500, message="Internal Error")
        assert str(error) == "HTTP 500: Internal Error (https://api.github.com/x)"

    def test_str_without_status(self) -> None:
        error = ApiError(url="https://api.github.com/x", status=0, message="Request timed out")
        assert str(error) == "Request timed out (https://api.github.com/x)"

    def test_not_found(self) -> None:
        assert ApiError(url="u", status=404, message="").is_not_found
        assert not ApiError(url="u", status=422, message="").is_not_found

    def test_is_frozen(self) -> None:
        error = ApiError(url="u", status=404, message="Not Found")
        with pytest.raises(AttributeError):
            error.status = 500  # type: ignore[misc]


# =============================================================================
# MockGitHubHttp tests
# =============================================================================


class TestMockGitHubHttp:
    def test_isinstance_check(self) -> None:
        assert isinstance(MockGitHubHttp(), GitHubHttp)

    def test_request_json_success(self) -> None:
        http = MockGitHubHttp()
        http.set_json("GET", "repos/o/r/releases", [{"id": 1}])

        result = http.request_json("GET", "repos/o/r/releases")

        assert result == Ok([{"id": 1}])
        assert http.calls[0].url == "https://api.github.com/repos/o/r/releases"

    def test_unknown_url_is_404(self) -> None:
        result = MockGitHubHttp().request_json("GET", "repos/o/r/releases/tags/v9")
        assert isinstance(result, Err)
        assert result.error.status == 404

    def test_queued_responses(self) -> None:
        http = MockGitHubHttp()
        http.set_json("GET", "user", [{"n": 1}, {"n": 2}], queue=True)

        assert http.request_json("GET", "user") == Ok({"n": 1})
        assert http.request_json("GET", "user") == Ok({"n": 2})
        # The last response repeats.
        assert http.request_json("GET", "user") == Ok({"n": 2})

    def test_records_payload(self) -> None:
        http = MockGitHubHttp()
        http.set_json("POST", "repos/o/r/releases", {"id": 1})
        http.request_json("post", "repos/o/r/releases", {"tag_name": "v1"})
        assert http.calls_for("POST")[0].payload == {"tag_name": "v1"}

    def test_upload_synthesizes_asset(self) -> None:
        http = MockGitHubHttp()
        result = http.upload(
            "https://uploads.github.com/repos/o/r/releases/1/assets?name=a.zip&label=A",
            io.BytesIO(b"abc"),
            content_type="application/zip",
            content_length=3,
        )

        assert isinstance(result, Ok)
        assert result.value["name"] == "a.zip"  # type: ignore[index]
        assert result.value["size"] == 3  # type: ignore[index]
        upload = http.uploads[0]
        assert upload.name == "a.zip"
        assert upload.label == "A"
        assert upload.data == b"abc"

    def test_upload_registered_error(self) -> None:
        http = MockGitHubHttp()
        err = ApiError(url="u", status=422, message="{}")
        http.set_upload("a.zip", err)

        result = http.upload(
            "https://uploads.github.com/x?name=a.zip",
            io.BytesIO(b""),
            content_type="application/zip",
            content_length=0,
        )

        assert result == Err(err)


# =============================================================================
# RealGitHubHttp tests (urlopen patched)
# =============================================================================


class _FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class TestRealGitHubHttp:
    def test_url_for(self) -> None:
        client = RealGitHubHttp(api_url="https://ghe.example.com/api/v3/")
        assert client.url_for("repos/o/r") == "https://ghe.example.com/api/v3/repos/o/r"
        assert client.url_for("https://uploads.example.com/x") == "https://uploads.example.com/x"

    def test_request_json_sends_headers_and_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, urllib.request.Request] = {}

        def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object):
            del timeout, context
            seen["req"] = req
            return _FakeResponse(b'{"id": 7}')

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)
        client = RealGitHubHttp(token="secret")

        result = client.request_json("post", "repos/o/r/releases", {"tag_name": "v1"})

        assert result == Ok({"id": 7})
        req = seen["req"]
        assert req.get_method() == "POST"
        assert req.full_url == "https://api.github.com/repos/o/r/releases"
        assert req.get_header("Authorization") == "Bearer secret"
        assert req.get_header("Content-type") == "application/json"
        assert json.loads(req.data) == {"tag_name": "v1"}  # type: ignore[arg-type]

    def test_empty_body_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object):
            return _FakeResponse(b"")

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)
        assert RealGitHubHttp().request_json("DELETE", "repos/o/r/releases/1") == Ok(None)

    def test_http_error_keeps_body(self, monkeypatch: pytest.MonkeyPatch) -> None:
        body = b'{"message": "Validation Failed", "errors": [{"resource": "ReleaseAsset", "code": "already_exists", "field": "name"}]}'

        def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object):
            raise urllib.error.HTTPError(
                req.full_url, 422, "Unprocessable Entity", Message(), io.BytesIO(body)
            )

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)

        result = RealGitHubHttp().upload(
            "https://uploads.github.com/x?name=a.zip",
            io.BytesIO(b"abc"),
            content_type="application/zip",
            content_length=3,
        )

        assert isinstance(result, Err)
        assert result.error.status == 422
        assert result.error.message == body.decode()
        assert result.error.is_duplicate_asset

    def test_upload_sets_length_and_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: dict[str, urllib.request.Request] = {}

        def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object):
            seen["req"] = req
            return _FakeResponse(b'{"id": 1, "name": "a.zip"}')

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)
        RealGitHubHttp().upload(
            "https://uploads.github.com/x?name=a.zip",
            io.BytesIO(b"abc"),
            content_type="application/zip",
            content_length=3,
        )

        req = seen["req"]
        assert req.get_header("Content-type") == "application/zip"
        assert req.get_header("Content-length") == "3"

    def test_network_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object):
            raise urllib.error.URLError("Connection refused")

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)
        result = RealGitHubHttp().request_json("GET", "user")

        assert isinstance(result, Err)
        assert result.error.status == 0
        assert result.error.message == "Connection refused"

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object):
            raise TimeoutError()

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)
        result = RealGitHubHttp().request_json("GET", "user")

        assert isinstance(result, Err)
        assert result.error.message == "Request timed out"
        assert not result.error.is_duplicate_asset

    def test_invalid_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object):
            return _FakeResponse(b"<html>")

        monkeypatch.setattr(http_mod.urllib.request, "urlopen", fake_urlopen)
        result = RealGitHubHttp().request_json("GET", "user")

        assert isinstance(result, Err)
        assert "JSON parse error" in result.error.message
