from __future__ import annotations

import typer

from ghr.cli.commands._helpers import exit_on_error, print_release
from ghr.cli.context import build_context
from ghr.output.console import Style
from ghr.release.model import ReleaseQuery, ReleaseRequest
from ghr.release.resolver import (
    create_release,
    delete_release,
    edit_release,
    find_release,
    get_release,
    list_releases,
)

OWNER_OPTION = typer.Option(None, "--owner", help="Repository owner (overrides ghr.toml)")
REPO_OPTION = typer.Option(None, "--repo", help="Repository name (overrides ghr.toml)")


def list_cmd(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    name: str | None = typer.Option(None, "--name", help="Match release name"),
    tag: str | None = typer.Option(None, "--tag", help="Match tag name"),
    draft: bool = typer.Option(False, "--draft", help="Match draft releases"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Match prereleases"),
    all_: bool = typer.Option(False, "--all", help="List every release, ignoring filters"),
) -> None:
    """List releases (published, non-prerelease by default)."""
    ctx = build_context(owner=owner, repo=repo)
    query = ReleaseQuery(
        owner=ctx.owner,
        repo=ctx.repo,
        name=name,
        tag=tag,
        draft=draft,
        prerelease=prerelease,
        all=all_,
    )
    releases = exit_on_error(list_releases(ctx.http, query), ctx.console)
    if not releases:
        ctx.console.print("no matching releases", Style.DIM)
        return
    for release in releases:
        print_release(release, ctx.console)


def find_cmd(
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    name: str | None = typer.Option(None, "--name", help="Match release name"),
    tag: str | None = typer.Option(None, "--tag", help="Match tag name"),
    draft: bool = typer.Option(False, "--draft", help="Match draft releases"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Match prereleases"),
) -> None:
    """Find exactly one release; fails if none or several match."""
    ctx = build_context(owner=owner, repo=repo)
    query = ReleaseQuery(
        owner=ctx.owner,
        repo=ctx.repo,
        name=name,
        tag=tag,
        draft=draft,
        prerelease=prerelease,
    )
    release = exit_on_error(find_release(ctx.http, query), ctx.console)
    print_release(release, ctx.console)


def get_cmd(
    tag: str = typer.Argument(..., help="Tag of the release"),
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
) -> None:
    """Show the release for a tag."""
    ctx = build_context(owner=owner, repo=repo)
    release = exit_on_error(
        get_release(ctx.http, owner=ctx.owner, repo=ctx.repo, tag=tag), ctx.console
    )
    print_release(release, ctx.console)


def create_cmd(
    tag: str = typer.Option(..., "--tag", help="Tag name for the release"),
    name: str | None = typer.Option(None, "--name", help="Release name"),
    commit: str | None = typer.Option(None, "--commit", help="Target commitish for a new tag"),
    body: str | None = typer.Option(None, "--body", help="Release notes"),
    draft: bool = typer.Option(False, "--draft", help="Create as draft"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Mark as prerelease"),
    update: bool = typer.Option(
        False, "--update", help="Edit the matching release instead of creating a new one"
    ),
    rename: str | None = typer.Option(
        None, "--rename", help="New name for the release found with --update"
    ),
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
) -> None:
    """Create a release, or update an existing one with --update."""
    ctx = build_context(owner=owner, repo=repo)
    request = ReleaseRequest(
        owner=ctx.owner,
        repo=ctx.repo,
        tag=tag,
        name=name,
        commit=commit,
        draft=draft,
        prerelease=prerelease,
        body=body,
        update=update,
        rename=rename,
    )
    release = exit_on_error(create_release(ctx.http, request), ctx.console)
    ctx.console.success(f"release {release.display_name} ready (id: {release.id})")
    print_release(release, ctx.console)


def edit_cmd(
    tag: str = typer.Option(..., "--tag", help="Tag of the release to edit"),
    name: str | None = typer.Option(None, "--name", help="New release name"),
    commit: str | None = typer.Option(None, "--commit", help="Target commitish"),
    body: str | None = typer.Option(None, "--body", help="Release notes"),
    draft: bool | None = typer.Option(
        None, "--draft/--no-draft", help="Mark as draft, or publish (default: unchanged)"
    ),
    prerelease: bool | None = typer.Option(
        None, "--prerelease/--no-prerelease", help="Set or clear prerelease (default: unchanged)"
    ),
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
) -> None:
    """Edit the release for a tag."""
    ctx = build_context(owner=owner, repo=repo)
    request = ReleaseRequest(
        owner=ctx.owner,
        repo=ctx.repo,
        tag=tag,
        name=name,
        commit=commit,
        draft=draft,
        prerelease=prerelease,
        body=body,
    )
    release = exit_on_error(edit_release(ctx.http, request), ctx.console)
    ctx.console.success(f"release {release.display_name} updated")


def delete_cmd(
    tag: str = typer.Argument(..., help="Tag of the release to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
) -> None:
    """Delete the release for a tag (the git tag itself is kept)."""
    ctx = build_context(owner=owner, repo=repo)
    if not yes:
        typer.confirm(f"Delete release {tag} from {ctx.owner}/{ctx.repo}?", abort=True)
    release = exit_on_error(
        delete_release(ctx.http, owner=ctx.owner, repo=ctx.repo, tag=tag), ctx.console
    )
    ctx.console.success(f"deleted release {release.display_name} (id: {release.id})")
