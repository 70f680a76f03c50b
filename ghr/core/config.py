"""Typed configuration loading.

Configuration lives in ``ghr.toml`` under a ``[github]`` table. Every key is
optional; a missing file means defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "CONFIG_FILENAME",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "load_config",
    "load_config_or_default",
    "resolve_token",
]

CONFIG_FILENAME = "ghr.toml"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
FALLBACK_TOKEN_ENV = "GH_TOKEN"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_USER_AGENT = "ghr/0.1.0"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """GitHub connection settings and repository defaults."""

    api_url: str = DEFAULT_API_URL
    owner: str | None = None
    repo: str | None = None
    token_env: str = DEFAULT_TOKEN_ENV
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from parsed TOML."""
        github: StrDict = get_table(data, "github") or {}

        timeout = get_float(github, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"github.timeout must be positive, got {timeout}")

        return cls(
            api_url=(get_str(github, "api_url") or DEFAULT_API_URL).rstrip("/"),
            owner=get_str(github, "owner"),
            repo=get_str(github, "repo"),
            token_env=get_str(github, "token_env") or DEFAULT_TOKEN_ENV,
            timeout=timeout or DEFAULT_TIMEOUT_SECONDS,
            user_agent=get_str(github, "user_agent") or DEFAULT_USER_AGENT,
        )

    def with_repo(self, owner: str | None, repo: str | None) -> Config:
        """Return a copy with command-line owner/repo overrides applied."""
        return replace(self, owner=owner or self.owner, repo=repo or self.repo)


def resolve_token(config: Config, environ: Mapping[str, str] | None = None) -> str | None:
    """Read the API token from the configured env var, then ``GH_TOKEN``."""
    env = os.environ if environ is None else environ
    for name in (config.token_env, FALLBACK_TOKEN_ENV):
        value = env.get(name, "").strip()
        if value:
            return value
    return None


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to ghr.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)
