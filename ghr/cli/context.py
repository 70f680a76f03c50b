from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from ghr.core.config import CONFIG_FILENAME, Config, load_config_or_default, resolve_token
from ghr.core.errors import ErrorCode
from ghr.core.result import Err
from ghr.github.http import GitHubHttp, RealGitHubHttp
from ghr.output.console import ConsoleProtocol, RichConsole

CONFIG_ENV = "GHR_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    http: GitHubHttp
    console: ConsoleProtocol
    owner: str
    repo: str


def config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return Path.cwd() / CONFIG_FILENAME


def build_context(*, owner: str | None, repo: str | None) -> CLIContext:
    config_result = load_config_or_default(config_path())
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config = config_result.value.with_repo(owner, repo)
    if config.owner is None or config.repo is None:
        typer.echo(
            "error: repository not set (use --owner/--repo or [github] owner/repo in ghr.toml)",
            err=True,
        )
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    http = RealGitHubHttp(
        api_url=config.api_url,
        token=resolve_token(config),
        timeout=config.timeout,
        user_agent=config.user_agent,
    )

    return CLIContext(
        config=config,
        http=http,
        console=RichConsole(),
        owner=config.owner,
        repo=config.repo,
    )
