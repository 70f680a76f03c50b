from __future__ import annotations

import os
from pathlib import Path

import typer

from ghr import __version__
from ghr.cli.commands.release_cmd import (
    create_cmd,
    delete_cmd,
    edit_cmd,
    find_cmd,
    get_cmd,
    list_cmd,
)
from ghr.cli.commands.upload_cmd import upload
from ghr.cli.context import CONFIG_ENV
from ghr.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("list")(list_cmd)
app.command("find")(find_cmd)
app.command("get")(get_cmd)
app.command("create")(create_cmd)
app.command("edit")(edit_cmd)
app.command("delete")(delete_cmd)
app.command()(upload)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to ghr.toml (default: ./ghr.toml)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        os.environ[CONFIG_ENV] = str(path)


def main() -> None:
    app()
