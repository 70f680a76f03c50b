"""Release lookup and lifecycle operations.

Each function is a thin wrapper over one or two API calls. Nothing is cached:
every call fetches the current state from GitHub.
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import quote

from ghr.core.result import Err, Ok, Result
from ghr.core.structured import as_obj_list
from ghr.github.http import ApiError, GitHubHttp
from ghr.release.errors import ReleaseError
from ghr.release.model import Release, ReleaseQuery, ReleaseRequest

__all__ = [
    "RELEASES_PER_PAGE",
    "create_release",
    "delete_release",
    "edit_release",
    "filter_releases",
    "find_release",
    "get_release",
    "list_releases",
    "upload_target",
]

RELEASES_PER_PAGE = 100


def _api_error(err: ApiError, *, message: str) -> ReleaseError:
    if err.is_not_found:
        return ReleaseError(kind="not_found", message=message, hint=err.message, api=err)
    return ReleaseError(kind="api", message=message, hint=str(err), api=err)


def _parse_release(obj: object, *, what: str) -> Result[Release, ReleaseError]:
    release = Release.from_payload(obj)
    if release is None:
        return Err(
            ReleaseError(kind="invalid_response", message=f"unexpected release payload: {what}")
        )
    return Ok(release)


def _matches(release: Release, query: ReleaseQuery) -> bool:
    if query.name is not None and release.name != query.name:
        return False
    if query.tag is not None and release.tag != query.tag:
        return False

    if query.draft and query.prerelease:
        return release.draft or release.prerelease
    if query.draft:
        return release.draft and not release.prerelease
    if query.prerelease:
        return release.prerelease
    return not (release.draft or release.prerelease)


def filter_releases(releases: Iterable[Release], query: ReleaseQuery) -> list[Release]:
    """Apply a query's name/tag/draft/prerelease filter, keeping order."""
    if query.all:
        return list(releases)
    return [r for r in releases if _matches(r, query)]


def list_releases(http: GitHubHttp, query: ReleaseQuery) -> Result[list[Release], ReleaseError]:
    """List the first page of releases for a repo, filtered by ``query``."""
    result = http.request_json(
        "GET", f"repos/{query.slug}/releases?per_page={RELEASES_PER_PAGE}"
    )
    if isinstance(result, Err):
        # A 404 here means the repo is unreachable, not that no release matched.
        err = result.error
        return Err(
            ReleaseError(
                kind="api",
                message=f"failed to list releases: {query.slug}",
                hint=str(err),
                api=err,
            )
        )

    raw = as_obj_list(result.value)
    if raw is None:
        return Err(
            ReleaseError(
                kind="invalid_response",
                message=f"unexpected releases payload: {query.slug}",
            )
        )

    releases: list[Release] = []
    for item in raw:
        release = Release.from_payload(item)
        if release is not None:
            releases.append(release)

    return Ok(filter_releases(releases, query))


def _describe(release: Release) -> str:
    return f"  {release.display_name} (tag: {release.tag}, id: {release.id})"


def find_release(http: GitHubHttp, query: ReleaseQuery) -> Result[Release, ReleaseError]:
    """Find exactly one release matching ``query``.

    Zero matches is ``not_found``; more than one is ``ambiguous`` and carries
    every candidate.
    """
    listed = list_releases(http, query)
    if isinstance(listed, Err):
        return listed

    releases = listed.value
    if len(releases) > 1:
        lines = "\n".join(_describe(r) for r in releases)
        return Err(
            ReleaseError(
                kind="ambiguous",
                message=f"Ambiguous releases:\n{lines}",
                hint="narrow the match with --name/--tag/--draft/--prerelease",
                candidates=tuple(releases),
            )
        )

    if not releases:
        return Err(ReleaseError(kind="not_found", message="No matching releases found"))

    return Ok(releases[0])


def get_release(
    http: GitHubHttp, *, owner: str, repo: str, tag: str
) -> Result[Release, ReleaseError]:
    """Fetch a release by tag name."""
    result = http.request_json("GET", f"repos/{owner}/{repo}/releases/tags/{quote(tag, safe='')}")
    if isinstance(result, Err):
        return Err(_api_error(result.error, message=f"release not found for tag {tag}"))
    return _parse_release(result.value, what=f"{owner}/{repo}@{tag}")


def _post_release(http: GitHubHttp, request: ReleaseRequest) -> Result[Release, ReleaseError]:
    result = http.request_json(
        "POST",
        f"repos/{request.slug}/releases",
        request.payload(name=request.rename or request.name),
    )
    if isinstance(result, Err):
        return Err(_api_error(result.error, message=f"failed to create release {request.tag}"))
    return _parse_release(result.value, what=request.tag)


def _patch_release(
    http: GitHubHttp, request: ReleaseRequest, *, release_id: int, name: str | None
) -> Result[Release, ReleaseError]:
    result = http.request_json(
        "PATCH",
        f"repos/{request.slug}/releases/{release_id}",
        request.payload(name=name),
    )
    if isinstance(result, Err):
        return Err(_api_error(result.error, message=f"failed to edit release {release_id}"))
    return _parse_release(result.value, what=str(release_id))


def create_release(http: GitHubHttp, request: ReleaseRequest) -> Result[Release, ReleaseError]:
    """Create a release, or update the matching one when ``request.update``.

    An update whose target does not exist falls back to creating, except
    when renaming: then it fails with ``not_found`` and nothing is created.
    """
    if not request.update:
        return _post_release(http, request)

    found = find_release(http, request.as_query())
    if isinstance(found, Err):
        if found.error.kind != "not_found":
            return found
        if request.rename:
            return Err(
                ReleaseError(
                    kind="not_found",
                    message=f'Couldn\'t find release "{request.name}" to rename',
                )
            )
        return _post_release(http, request)

    return _patch_release(
        http,
        request,
        release_id=found.value.id,
        name=request.rename or request.name,
    )


def edit_release(http: GitHubHttp, request: ReleaseRequest) -> Result[Release, ReleaseError]:
    """Edit the release that carries ``request.tag``."""
    found = get_release(http, owner=request.owner, repo=request.repo, tag=request.tag)
    if isinstance(found, Err):
        return found
    return _patch_release(http, request, release_id=found.value.id, name=request.name)


def delete_release(
    http: GitHubHttp, *, owner: str, repo: str, tag: str
) -> Result[Release, ReleaseError]:
    """Delete the release that carries ``tag``. Returns the deleted release."""
    found = get_release(http, owner=owner, repo=repo, tag=tag)
    if isinstance(found, Err):
        return found

    release = found.value
    result = http.request_json("DELETE", f"repos/{owner}/{repo}/releases/{release.id}")
    if isinstance(result, Err):
        return Err(_api_error(result.error, message=f"failed to delete release {tag}"))
    return Ok(release)


def upload_target(release: Release) -> Result[str, ReleaseError]:
    """Return the upload endpoint the asset pipeline should post to."""
    if not release.upload_url:
        return Err(
            ReleaseError(
                kind="invalid_response",
                message=f"release {release.tag} has no upload_url",
            )
        )
    return Ok(release.upload_url)
