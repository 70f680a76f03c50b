"""Upload a single file as a release asset."""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlencode

from ghr.core.result import Err, Ok, Result
from ghr.github.http import GitHubHttp
from ghr.release.errors import AssetError
from ghr.release.model import ReleaseAsset

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "AssetUploadRequest",
    "asset_upload_url",
    "content_type_for",
    "upload_asset",
]

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# mimetypes reports compression separately from the inner type.
_ENCODING_CONTENT_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}


@dataclass(frozen=True, slots=True)
class AssetUploadRequest:
    path: str
    upload_url: str
    label: str | None = None


def content_type_for(name: str) -> str:
    """Guess a MIME type from the file extension.

    A compressed file is typed by its compression: ``app.tar.gz`` is
    ``application/gzip``, not the tar type underneath.
    """
    mime, encoding = mimetypes.guess_type(name)
    if encoding is not None:
        return _ENCODING_CONTENT_TYPES.get(encoding, DEFAULT_CONTENT_TYPE)
    return mime or DEFAULT_CONTENT_TYPE


def asset_upload_url(upload_url: str, name: str, label: str | None = None) -> str:
    """Expand a release ``upload_url`` template for one asset.

    GitHub returns ``.../assets{?name,label}``; the template suffix is
    replaced by a concrete query string.
    """
    base = upload_url.split("{", 1)[0]
    params = {"name": name}
    if label:
        params["label"] = label
    return f"{base}?{urlencode(params)}"


def upload_asset(
    http: GitHubHttp,
    path: str | Path,
    upload_url: str,
    *,
    label: str | None = None,
) -> Result[ReleaseAsset, AssetError]:
    """Stream one file to a release's upload endpoint.

    Returns:
        Ok with the created asset, or Err with AssetError. API errors are
        passed through unchanged; deciding whether one is a duplicate is the
        caller's job.
    """
    path_str = str(path)
    name = os.path.basename(path_str)
    content_type = content_type_for(name)

    try:
        size = os.stat(path_str).st_size
        with open(path_str, "rb") as stream:
            result = http.upload(
                asset_upload_url(upload_url, name, label),
                stream,
                content_type=content_type,
                content_length=size,
            )
    except OSError as e:
        return Err(AssetError(kind="filesystem", path=path_str, message=f"{e.strerror or e}"))

    if isinstance(result, Err):
        api_error = result.error
        return Err(AssetError(kind="api", path=path_str, message=api_error.message, api=api_error))

    asset = ReleaseAsset.from_payload(result.value)
    if asset is None:
        # The upload went through; keep what we know about it.
        return Ok(ReleaseAsset(id=0, name=name, size=size, content_type=content_type, label=label))
    return Ok(asset)
