from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ghr.core.structured import StrDict, as_str_dict, get_bool, get_int, get_str


@dataclass(frozen=True, slots=True)
class Release:
    """A GitHub release as returned by the releases API."""

    id: int
    name: str | None
    tag: str
    upload_url: str
    draft: bool
    prerelease: bool
    html_url: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.tag

    @classmethod
    def from_payload(cls, obj: object) -> Release | None:
        """Parse an API payload; None if required fields are missing."""
        data = as_str_dict(obj)
        if data is None:
            return None

        release_id = get_int(data, "id")
        tag = get_str(data, "tag_name")
        if release_id is None or tag is None:
            return None

        return cls(
            id=release_id,
            # Name is compared verbatim when filtering; do not strip it.
            name=data["name"] if isinstance(data.get("name"), str) else None,
            tag=tag,
            upload_url=get_str(data, "upload_url") or "",
            draft=get_bool(data, "draft"),
            prerelease=get_bool(data, "prerelease"),
            html_url=get_str(data, "html_url"),
        )


@dataclass(frozen=True, slots=True)
class ReleaseAsset:
    """Metadata for an asset attached to a release."""

    id: int
    name: str
    size: int
    content_type: str | None = None
    label: str | None = None
    state: str | None = None
    browser_download_url: str | None = None

    @classmethod
    def from_payload(cls, obj: object) -> ReleaseAsset | None:
        data = as_str_dict(obj)
        if data is None:
            return None

        asset_id = get_int(data, "id")
        name = get_str(data, "name")
        if asset_id is None or name is None:
            return None

        return cls(
            id=asset_id,
            name=name,
            size=get_int(data, "size") or 0,
            content_type=get_str(data, "content_type"),
            label=get_str(data, "label"),
            state=get_str(data, "state"),
            browser_download_url=get_str(data, "browser_download_url"),
        )


@dataclass(frozen=True, slots=True)
class ReleaseQuery:
    """Filter for listing or finding releases.

    With neither ``draft`` nor ``prerelease`` set, drafts and prereleases are
    excluded. ``all`` disables every filter.
    """

    owner: str
    repo: str
    name: str | None = None
    tag: str | None = None
    draft: bool = False
    prerelease: bool = False
    all: bool = False

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Inputs for creating or editing a release.

    ``update`` makes create look for an existing release (by name/tag) and
    edit it instead. ``rename`` is the new name for that release.
    """

    owner: str
    repo: str
    tag: str
    name: str | None = None
    commit: str | None = None
    # None leaves the flag unchanged on edit.
    draft: bool | None = None
    prerelease: bool | None = None
    body: str | None = None
    update: bool = False
    rename: str | None = None

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    def as_query(self) -> ReleaseQuery:
        return ReleaseQuery(
            owner=self.owner,
            repo=self.repo,
            name=self.name,
            tag=self.tag,
            draft=bool(self.draft),
            prerelease=bool(self.prerelease),
        )

    def payload(self, *, name: str | None) -> StrDict:
        """Build the JSON body for the create/edit endpoints."""
        out: StrDict = {"tag_name": self.tag}
        if name is not None:
            out["name"] = name
        if self.commit is not None:
            out["target_commitish"] = self.commit
        if self.body is not None:
            out["body"] = self.body
        if self.draft is not None:
            out["draft"] = self.draft
        if self.prerelease is not None:
            out["prerelease"] = self.prerelease
        return out


AssetStatus = Literal["uploaded", "skipped"]
