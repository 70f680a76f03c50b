from __future__ import annotations

from pathlib import Path

import typer

from ghr.cli.commands._helpers import exit_on_error, exit_with_code
from ghr.cli.context import build_context
from ghr.core.errors import ErrorCode
from ghr.core.result import Err
from ghr.output.console import ConsoleProtocol, Style
from ghr.release.model import ReleaseQuery
from ghr.release.pipeline import (
    AssetSkipped,
    AssetUploaded,
    UploadEvent,
    UploadFailure,
    UploadStarted,
    upload_assets,
)
from ghr.release.resolver import find_release, get_release, upload_target


def console_listener(console: ConsoleProtocol):
    """Build an event listener that reports upload progress."""

    def on_event(event: UploadEvent) -> None:
        match event:
            case UploadStarted(path=path):
                console.print(f"upload: {path}", Style.DIM)
            case AssetUploaded(path=path, asset=asset):
                console.success(f"{path} ({asset.size} bytes)")
            case AssetSkipped(path=path):
                console.warning(f"{path} already exists, skipped")

    return on_event


def failure_exit_code(failure: UploadFailure) -> ErrorCode:
    if failure.error is not None and failure.error.kind == "filesystem":
        return ErrorCode.IO_ERROR
    if failure.reason == "cancelled":
        return ErrorCode.USER_ERROR
    return ErrorCode.NETWORK_ERROR


def upload(
    files: list[Path] = typer.Argument(..., help="Files to attach, uploaded in order"),
    tag: str | None = typer.Option(None, "--tag", help="Tag of the target release"),
    name: str | None = typer.Option(None, "--name", help="Find the release by name"),
    draft: bool = typer.Option(False, "--draft", help="Target a draft release"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Target a prerelease"),
    label: str | None = typer.Option(None, "--label", help="Display label for the assets"),
    skip: bool = typer.Option(
        True, "--skip/--no-skip", help="Skip files whose asset name already exists"
    ),
    owner: str | None = typer.Option(None, "--owner", help="Repository owner"),
    repo: str | None = typer.Option(None, "--repo", help="Repository name"),
) -> None:
    """Upload files as assets of a release, one at a time."""
    ctx = build_context(owner=owner, repo=repo)

    # Published releases are reachable by tag; drafts only show up in the list.
    if tag is not None and name is None and not draft:
        found = get_release(ctx.http, owner=ctx.owner, repo=ctx.repo, tag=tag)
    else:
        found = find_release(
            ctx.http,
            ReleaseQuery(
                owner=ctx.owner,
                repo=ctx.repo,
                name=name,
                tag=tag,
                draft=draft,
                prerelease=prerelease,
            ),
        )
    release = exit_on_error(found, ctx.console)
    target = exit_on_error(upload_target(release), ctx.console)

    ctx.console.header(f"Uploading {len(files)} file(s) to {release.display_name}")
    session = upload_assets(ctx.http, target, files, skip_duplicates=skip, label=label)
    session.add_listener(console_listener(ctx.console))

    result = session.run()
    if isinstance(result, Err):
        failure = result.error
        ctx.console.error(failure.message)
        ctx.console.print(
            f"{len(failure.completed)} of {len(files)} file(s) handled before the failure",
            Style.DIM,
        )
        exit_with_code(failure_exit_code(failure))

    outcomes = result.value
    skipped = sum(1 for o in outcomes if o.status == "skipped")
    ctx.console.success(f"{len(outcomes) - skipped} uploaded, {skipped} skipped")
