"""HTTP boundary for the GitHub REST API.

This module provides:
- GitHubHttp: Protocol for API calls and asset uploads (injectable for tests)
- RealGitHubHttp: Real implementation using urllib
- MockGitHubHttp: In-memory implementation for testing
- ApiError: Structured error returned by both
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass
from typing import IO, Protocol, runtime_checkable

from ghr.core.config import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from ghr.core.result import Err, Ok, Result
from ghr.github.duplicates import is_duplicate_asset_error

__all__ = [
    "ApiError",
    "GitHubHttp",
    "MockGitHubHttp",
    "RealGitHubHttp",
    "RecordedCall",
    "RecordedUpload",
]

API_VERSION = "2022-11-28"


@dataclass(frozen=True, slots=True)
class ApiError:
    """GitHub API error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Raw response body when the server sent one, else a reason
    """

    url: str
    status: int
    message: str

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @property
    def is_duplicate_asset(self) -> bool:
        """True if GitHub rejected an upload because the asset name is taken."""
        return is_duplicate_asset_error(self)

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class GitHubHttp(Protocol):
    """Protocol for GitHub API operations.

    Paths are relative to the API root (``repos/o/r/releases``); absolute
    URLs are used as-is.
    """

    def request_json(
        self,
        method: str,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> Result[object, ApiError]:
        """Send a JSON request.

        Returns:
            Ok with the decoded body (None for empty bodies), or Err with ApiError
        """
        ...

    def upload(
        self,
        url: str,
        stream: IO[bytes],
        *,
        content_type: str,
        content_length: int,
    ) -> Result[object, ApiError]:
        """POST raw bytes read from ``stream`` to an uploads URL.

        Returns:
            Ok with the decoded asset payload, or Err with ApiError
        """
        ...


def _decode_body(url: str, raw: bytes) -> Result[object, ApiError]:
    if not raw.strip():
        return Ok(None)
    try:
        return Ok(json.loads(raw.decode("utf-8")))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(ApiError(url=url, status=0, message=f"JSON parse error: {e}"))


class RealGitHubHttp:
    """GitHub client using urllib.

    Handles:
    - HTTPS with system certificates
    - Bearer token and API version headers
    - Streaming request bodies for asset uploads
    - Timeout handling
    """

    def __init__(
        self,
        *,
        api_url: str = DEFAULT_API_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.api_url}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _send(self, req: urllib.request.Request) -> Result[object, ApiError]:
        url = req.full_url
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace").strip()
            return Err(ApiError(url=url, status=e.code, message=body or str(e.reason)))
        except urllib.error.URLError as e:
            return Err(ApiError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(ApiError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(ApiError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(ApiError(url=url, status=0, message=str(e)))

        return _decode_body(url, raw)

    def request_json(
        self,
        method: str,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> Result[object, ApiError]:
        headers = self._headers()
        data: bytes | None = None
        if payload is not None:
            data = json.dumps(dict(payload)).encode("utf-8")
            headers["Content-Type"] = "application/json"

        req = urllib.request.Request(
            self.url_for(path),
            data=data,
            headers=headers,
            method=method.upper(),
        )
        return self._send(req)

    def upload(
        self,
        url: str,
        stream: IO[bytes],
        *,
        content_type: str,
        content_length: int,
    ) -> Result[object, ApiError]:
        headers = self._headers()
        headers["Content-Type"] = content_type
        # http.client streams file objects block by block when the length is known.
        headers["Content-Length"] = str(content_length)

        req = urllib.request.Request(url, data=stream, headers=headers, method="POST")
        return self._send(req)


@dataclass(frozen=True, slots=True)
class RecordedCall:
    method: str
    url: str
    payload: dict[str, object] | None


@dataclass(frozen=True, slots=True)
class RecordedUpload:
    url: str
    name: str
    label: str | None
    content_type: str
    content_length: int
    data: bytes


class MockGitHubHttp:
    """In-memory GitHub client for testing.

    JSON responses are registered per (method, path). Registering a list
    queues responses that are served in order. Uploads succeed with a
    synthesized asset payload unless a response is registered for the
    asset name.

    Usage:
        http = MockGitHubHttp()
        http.set_json("GET", "repos/o/r/releases", [{"id": 1, "tag_name": "v1"}])
        http.set_upload("b.zip", ApiError(url="...", status=422, message="..."))
    """

    def __init__(self, api_url: str = DEFAULT_API_URL) -> None:
        self.api_url = api_url.rstrip("/")
        self._json_responses: dict[tuple[str, str], list[object | ApiError]] = {}
        self._upload_responses: dict[str, list[object | ApiError]] = {}
        self.calls: list[RecordedCall] = []
        self.uploads: list[RecordedUpload] = []
        self._next_asset_id = 1

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.api_url}/{path.lstrip('/')}"

    def set_json(
        self,
        method: str,
        path: str,
        response: object | ApiError | list[object | ApiError],
        *,
        queue: bool = False,
    ) -> None:
        """Register the response for a request.

        With ``queue=True`` and a list, each element answers one call.
        """
        key = (method.upper(), self.url_for(path))
        if queue and isinstance(response, list):
            self._json_responses[key] = list(response)
        else:
            self._json_responses[key] = [response]

    def set_upload(self, name: str, response: object | ApiError) -> None:
        """Register the upload response for an asset name."""
        self._upload_responses.setdefault(name, []).append(response)

    def calls_for(self, method: str) -> list[RecordedCall]:
        return [c for c in self.calls if c.method == method.upper()]

    def request_json(
        self,
        method: str,
        path: str,
        payload: Mapping[str, object] | None = None,
    ) -> Result[object, ApiError]:
        method = method.upper()
        url = self.url_for(path)
        self.calls.append(
            RecordedCall(method=method, url=url, payload=None if payload is None else dict(payload))
        )

        responses = self._json_responses.get((method, url))
        if not responses:
            return Err(ApiError(url=url, status=404, message='{"message": "Not Found"}'))

        response = responses.pop(0) if len(responses) > 1 else responses[0]
        if isinstance(response, ApiError):
            return Err(response)
        return Ok(response)

    def upload(
        self,
        url: str,
        stream: IO[bytes],
        *,
        content_type: str,
        content_length: int,
    ) -> Result[object, ApiError]:
        query = urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)
        name = query.get("name", [""])[0]
        label = query.get("label", [None])[0]
        data = stream.read()
        self.uploads.append(
            RecordedUpload(
                url=url,
                name=name,
                label=label,
                content_type=content_type,
                content_length=content_length,
                data=data,
            )
        )

        queued = self._upload_responses.get(name)
        if queued:
            response = queued.pop(0) if len(queued) > 1 else queued[0]
            if isinstance(response, ApiError):
                return Err(response)
            return Ok(response)

        asset_id = self._next_asset_id
        self._next_asset_id += 1
        return Ok(
            {
                "id": asset_id,
                "name": name,
                "label": label,
                "size": len(data),
                "content_type": content_type,
                "state": "uploaded",
                "browser_download_url": f"https://github.com/download/{name}",
            }
        )
