"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from ghr.core.errors import ErrorCode
from ghr.core.result import Err, Result
from ghr.output.console import Style

if TYPE_CHECKING:
    from ghr.output.console import ConsoleProtocol
    from ghr.release.errors import ReleaseError
    from ghr.release.model import Release


def release_error_code(error: ReleaseError) -> ErrorCode:
    if error.kind in {"not_found", "ambiguous"}:
        return ErrorCode.USER_ERROR
    return ErrorCode.NETWORK_ERROR


def exit_on_error[T](
    result: Result[T, ReleaseError],
    console: ConsoleProtocol,
) -> T:
    """Return the value of an Ok result, or print the error and exit.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    if isinstance(result, Err):
        error = result.error
        console.error(error.message)
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(release_error_code(error)))
    return result.value


def exit_with_code(code: ErrorCode) -> NoReturn:
    raise typer.Exit(code=int(code))


def print_release(release: Release, console: ConsoleProtocol) -> None:
    flags = [f for f, on in (("draft", release.draft), ("prerelease", release.prerelease)) if on]
    suffix = f" [{', '.join(flags)}]" if flags else ""
    console.print(f"{release.display_name} (tag: {release.tag}, id: {release.id}){suffix}")
    if release.html_url:
        console.print(f"  {release.html_url}", Style.DIM)
